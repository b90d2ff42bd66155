import pytest

from scrape_gmaps.gmaps_url import extract_place_name, normalize_listing_url, skipped_steps


def test_normalize_listing_url_place_name_and_graph_id():
    raw = "https://maps.google.com/place/My Cafe/data=!3m1!4b1!16s/g/1abcde?hl=en"
    assert normalize_listing_url(raw) == (
        "https://maps.google.com/place/My+Cafe/data=!3m1!4b1!16s%2Fg%2F1abcde?hl=en"
    )


@pytest.mark.parametrize("url", [
    "https://example.com/",
    "https://www.google.com/maps/search/car+wash?hl=en",
    "https://www.google.com/maps/@47.6,-122.3,14z",
    "not a url at all",
])
def test_urls_without_place_or_data_are_unchanged(url):
    assert normalize_listing_url(url) == url


def test_only_place_segment_gets_plus_signs():
    raw = "https://www.google.com/maps/place/Joe's Car Wash/@47.6,-122.3,17z/extra path"
    assert normalize_listing_url(raw) == (
        "https://www.google.com/maps/place/Joe's+Car+Wash/@47.6,-122.3,17z/extra path"
    )


def test_data_token_without_place_segment():
    raw = "https://www.google.com/maps/data=!4m2!16s/g/11abc"
    assert normalize_listing_url(raw) == "https://www.google.com/maps/data=!4m2!16s%2Fg%2F11abc"


def test_only_graph_id_token_is_escaped():
    raw = "https://www.google.com/maps/place/Cafe/data=!3m1!1s0x0:0x1!8m2!3d1.5!4d-2.5"
    assert normalize_listing_url(raw) == raw


def test_query_string_is_preserved_verbatim():
    raw = "https://www.google.com/maps/place/A B/data=!1s/g/1?authuser=0&hl=en&q=a b"
    assert normalize_listing_url(raw).endswith("?authuser=0&hl=en&q=a b")


def test_double_normalization_escapes_second_graph_id():
    raw = "https://maps.google.com/place/X/data=!16s/g/1a!17s/g/2b"
    once = normalize_listing_url(raw)
    assert once == "https://maps.google.com/place/X/data=!16s%2Fg%2F1a!17s/g/2b"
    assert normalize_listing_url(once) == "https://maps.google.com/place/X/data=!16s%2Fg%2F1a!17s%2Fg%2F2b"


def test_skipped_steps():
    assert skipped_steps("https://example.com/") == ["place_name", "data_token"]
    assert skipped_steps("https://maps.google.com/place/X") == ["data_token"]
    assert skipped_steps("https://maps.google.com/place/X/data=!1") == []


def test_extract_place_name():
    assert extract_place_name("https://maps.google.com/place/My+Cafe/data=!1?hl=en") == "My Cafe"
    assert extract_place_name("https://maps.google.com/place/Caf%C3%A9%20Roma/") == "Café Roma"
    assert extract_place_name("https://example.com/") is None
