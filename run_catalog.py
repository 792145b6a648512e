#!/usr/bin/env python
"""CLI script to browse the catalog from the command line.

Usage:
    python run_catalog.py home [--details]
    python run_catalog.py search "minecraft"
    python run_catalog.py app https://apkmody.com/games/minecraft
    python run_catalog.py downloads https://apkmody.com/games/minecraft/download
    python run_catalog.py final-link https://apkmody.com/games/minecraft/download/0
"""

import argparse
import json
import sys

# Fix encoding for Windows console
if sys.platform == 'win32':
    try:
        sys.stdout.reconfigure(encoding='utf-8')
        sys.stderr.reconfigure(encoding='utf-8')
    except (AttributeError, ValueError):
        import io
        sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8', errors='replace')
        sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8', errors='replace')

from tqdm import tqdm
from scraper.catalog_browser import CatalogBrowser
from utils.logger import setup_logging


def _print_json(data):
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _home(browser, args):
    listing = browser.load_homepage()
    if not listing.order:
        print("[ERROR] No sections found on the home page", file=sys.stderr)
        return 1

    data = listing.to_dict()
    if args.details:
        entries = [entry for _, section in listing.ordered_sections() for entry in section]
        details = {}
        for entry in tqdm(entries, desc="App details", unit="app"):
            detail = browser.load_app(entry.url)
            if detail is not None:
                details[entry.url] = detail.to_dict()
        data['details'] = details

    _print_json(data)
    return 0


def _search(browser, args):
    results = browser.search(args.query)
    _print_json([entry.to_dict() for entry in results])
    return 0 if results else 1


def _app(browser, args):
    detail, reviews = browser.load_app_with_reviews(args.url)
    if detail is None:
        print(f"[ERROR] Could not load {args.url}", file=sys.stderr)
        return 1
    _print_json({'app': detail.to_dict(), 'reviews': [review.to_dict() for review in reviews]})
    return 0


def _downloads(browser, args):
    links = browser.load_download_links(args.url)
    _print_json([link.to_dict() for link in links])
    return 0 if links else 1


def _final_link(browser, args):
    final_url = browser.resolve_final_link(args.url)
    if not final_url:
        print("[ERROR] No download link found", file=sys.stderr)
        return 1
    print(final_url)
    return 0


def build_parser():
    """Argument parser with one subcommand per view."""
    parser = argparse.ArgumentParser(description='Browse the mod APK catalog')
    subparsers = parser.add_subparsers(dest='command', required=True)

    home = subparsers.add_parser('home', help='Home page sections')
    home.add_argument('--details', action='store_true',
                      help='Also fetch the detail page of every listed app')
    home.set_defaults(handler=_home)

    search = subparsers.add_parser('search', help='Search apps')
    search.add_argument('query')
    search.set_defaults(handler=_search)

    for name, handler, help_text in [
        ('app', _app, 'App details and reviews'),
        ('downloads', _downloads, 'Download links of a distribution page'),
        ('final-link', _final_link, 'Direct file URL of a download page'),
    ]:
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument('url')
        sub.set_defaults(handler=handler)

    return parser


def main(argv=None):
    """Run the catalog CLI."""
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        return args.handler(CatalogBrowser(), args)
    except KeyboardInterrupt:
        print("\n\n[WARNING] Interrupted by user")
        return 1


if __name__ == '__main__':
    sys.exit(main())
