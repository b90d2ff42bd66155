"""
Unit tests for the command-line entry point.
"""

import json
from unittest.mock import AsyncMock, patch

import pytest

import cli_scrape_poi
from scrape_gmaps.gmaps_errors import NavigationFailed
from scrape_gmaps.gmaps_models import AboutRecord, PoiRecord

URL = "https://www.google.com/maps/place/Joe's+Car+Wash"


@pytest.fixture
def scraper_cls():
    with patch("cli_scrape_poi.GmapsPoiScraper") as cls:
        yield cls


def test_missing_url_is_usage_error(scraper_cls, capsys):
    assert cli_scrape_poi.main([]) == 2
    assert "input url is required" in capsys.readouterr().err
    scraper_cls.assert_not_called()


def test_prints_record_as_json(scraper_cls, capsys):
    record = PoiRecord(url=URL, title="Joe's Car Wash", avg_rating=4.6)
    scraper_cls.return_value.scrape_poi = AsyncMock(return_value=record)

    assert cli_scrape_poi.main(["--url", URL]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["title"] == "Joe's Car Wash"
    assert payload["avgRating"] == 4.6
    scraper_cls.return_value.scrape_poi.assert_awaited_once_with(URL)


def test_about_only_writes_output_file(scraper_cls, tmp_path):
    scraper_cls.return_value.scrape_about = AsyncMock(
        return_value=AboutRecord(url=URL, about={"Payments": ["Credit cards"]})
    )
    output = tmp_path / "about.json"

    assert cli_scrape_poi.main(["--url", URL, "--about-only", "--output", str(output)]) == 0
    assert json.loads(output.read_text(encoding="utf-8")) == {"about": {"Payments": ["Credit cards"]}}


def test_headed_and_attempts_reach_config(scraper_cls):
    scraper_cls.return_value.scrape_poi = AsyncMock(return_value=PoiRecord(url=URL))

    cli_scrape_poi.main(["--url", URL, "--headed", "--max-attempts", "5"])

    config = scraper_cls.call_args.kwargs["config"]
    assert config.playwright.headless is False
    assert config.navigation.max_attempts == 5


def test_scrape_failure_exits_nonzero(scraper_cls, capsys):
    scraper_cls.return_value.scrape_poi = AsyncMock(
        side_effect=NavigationFailed(URL, 3, TimeoutError("Timeout 60000ms exceeded"))
    )

    assert cli_scrape_poi.main(["--url", URL]) == 1
    assert "Error:" in capsys.readouterr().err
