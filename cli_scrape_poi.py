#!/usr/bin/env python3
"""
CLI wrapper for the Google Maps POI scraper - runs as standalone subprocess.
Prints the scraped record as JSON.
"""

import sys
import json
import asyncio
import argparse
from pathlib import Path

from scrape_gmaps import GmapsConfig, GmapsPoiScraper, GmapsScraperError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Scrape a Google Maps listing page')
    parser.add_argument('--url', help='Google Maps listing URL')
    parser.add_argument('--about-only', action='store_true', help='Only scrape the About tab')
    parser.add_argument('--output', help='Write JSON to this file instead of stdout')
    parser.add_argument('--headed', action='store_true', help='Show the browser window')
    parser.add_argument('--max-attempts', type=int, help='Navigation attempts before giving up')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if not args.url:
        print("Error: input url is required", file=sys.stderr)
        return 2

    config = GmapsConfig.from_env()
    if args.headed:
        config.playwright.headless = False
    if args.max_attempts:
        config.navigation.max_attempts = args.max_attempts

    if not config.validate():
        print(f"Error: invalid configuration: {config.summary()}", file=sys.stderr)
        return 2

    scraper = GmapsPoiScraper(config=config)

    try:
        if args.about_only:
            record = asyncio.run(scraper.scrape_about(args.url))
        else:
            record = asyncio.run(scraper.scrape_poi(args.url))
    except GmapsScraperError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    payload = json.dumps(record.to_dict(), indent=2, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(payload + "\n", encoding="utf-8")
        print(f"Saved record to {args.output}")
    else:
        print(payload)

    return 0


if __name__ == '__main__':
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nCancelled by user", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        print(f"FATAL ERROR: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        sys.exit(1)
