"""
Tests for catalog extraction (home page sections and search results).
"""

import sys
import unittest
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from models.catalog_entry import CatalogListing
from scraper.catalog_extractor import (LISTING_MODE, SEARCH_MODE, extract_catalog, extract_listing,
                                       extract_search_results)
from utils.html_tree import parse_html
from html_fixtures import HOME_PAGE, SEARCH_PAGE, listing_item, listing_page, listing_section


class TestListingExtraction(unittest.TestCase):
    """Test listing mode."""

    def setUp(self):
        """Set up test fixtures."""
        self.listing = extract_listing(parse_html(HOME_PAGE))

    def test_only_titled_sections_with_items(self):
        """Sections without a heading or without items are skipped."""
        self.assertEqual(self.listing.order, ['Popular Games', 'New Apps'])
        self.assertEqual(set(self.listing.sections), {'Popular Games', 'New Apps'})

    def test_entry_fields(self):
        """Test per-item title, url, icon and rating."""
        game_a, game_b = self.listing.sections['Popular Games']
        self.assertEqual(game_a.title, 'Game A')
        self.assertEqual(game_a.url, 'https://apkmody.com/games/game-a')
        self.assertEqual(game_a.icon, 'https://apkmody.com/a.png')
        self.assertEqual(game_a.rating, 4)
        self.assertEqual(game_b.icon, '')
        self.assertEqual(game_b.rating, 2)
        self.assertIsNone(game_a.subtitle)

    def test_card_items(self):
        """Card-style items are found and rated from .card-rating."""
        (app_c,) = self.listing.sections['New Apps']
        self.assertEqual(app_c.title, 'App C')
        self.assertEqual(app_c.rating, 5)

    def test_missing_title_falls_back(self):
        """An item without a heading is still extracted."""
        page = listing_page([listing_section('Games', [
            '<article class="flex-item"><a class="app" href="https://apkmody.com/x"></a></article>'
        ])])
        (entry,) = extract_listing(parse_html(page)).sections['Games']
        self.assertEqual(entry.title, 'Unknown')
        self.assertEqual(entry.rating, 0)

    def test_n_sections_give_n_groups(self):
        """N distinct titled sections yield N non-empty groups in document order."""
        headings = [f'Section {i}' for i in range(12)]
        page = listing_page([
            listing_section(h, [listing_item(f'{h} app', f'https://apkmody.com/{i}')])
            for i, h in enumerate(headings)
        ])
        listing = extract_listing(parse_html(page), max_workers=4)
        self.assertEqual(listing.order, headings)
        self.assertEqual(len(listing), 12)
        for heading, entries in listing.ordered_sections():
            self.assertTrue(entries)
            self.assertEqual(entries[0].title, f'{heading} app')

    def test_duplicate_heading_later_section_wins(self):
        """The section later in the document replaces an earlier one with the same heading."""
        page = listing_page([
            listing_section('Hot', [listing_item('First', 'https://apkmody.com/1')]),
            listing_section('Other', [listing_item('Middle', 'https://apkmody.com/2')]),
            listing_section('Hot', [listing_item('Second', 'https://apkmody.com/3')]),
        ])
        listing = extract_listing(parse_html(page))
        self.assertEqual([e.title for e in listing.sections['Hot']], ['Second'])
        self.assertEqual(listing.order, ['Other', 'Hot'])

    def test_relative_links_resolved_with_base_url(self):
        """Relative hrefs are resolved against the document URL when given."""
        page = listing_page([listing_section('Games', [listing_item('Rel', '/games/rel', '/rel.png')])])
        (entry,) = extract_listing(parse_html(page), base_url='https://apkmody.com/').sections['Games']
        self.assertEqual(entry.url, 'https://apkmody.com/games/rel')
        self.assertEqual(entry.icon, 'https://apkmody.com/rel.png')

    def test_empty_document(self):
        """A document without sections gives an empty listing."""
        listing = extract_listing(parse_html('<html><body><p>Maintenance</p></body></html>'))
        self.assertEqual(listing.order, [])
        self.assertEqual(listing.sections, {})

    def test_to_dict_follows_document_order(self):
        """Serialized sections follow the order list."""
        data = self.listing.to_dict()
        self.assertEqual([s['title'] for s in data['sections']], ['Popular Games', 'New Apps'])
        self.assertEqual(data['sections'][0]['apps'][0]['title'], 'Game A')


class TestSearchExtraction(unittest.TestCase):
    """Test search-results mode."""

    def setUp(self):
        """Set up test fixtures."""
        self.results = extract_search_results(parse_html(SEARCH_PAGE))

    def test_results_in_document_order(self):
        """Test that every result link is returned in order."""
        self.assertEqual(len(self.results), 2)
        self.assertEqual(self.results[0].url, 'https://apkmody.com/games/minecraft')
        self.assertEqual(self.results[1].url, 'https://apkmody.com/apps/untitled')

    def test_result_fields(self):
        """Test title trimming, subtitle whitespace collapsing and rating."""
        first = self.results[0]
        self.assertEqual(first.title, 'Minecraft')
        self.assertEqual(first.subtitle, 'v1.20.50 MOD, Unlocked')
        self.assertEqual(first.icon, 'https://apkmody.com/mc.png')
        self.assertEqual(first.rating, 2)

    def test_result_fallbacks(self):
        """A bare result link degrades to fallbacks."""
        second = self.results[1]
        self.assertEqual(second.title, 'Unknown Title')
        self.assertEqual(second.subtitle, '')
        self.assertEqual(second.icon, '')
        self.assertEqual(second.rating, 0)


class TestExtractCatalog(unittest.TestCase):
    """Test mode dispatch."""

    def test_modes(self):
        """Listing mode returns a CatalogListing, search mode a list."""
        self.assertIsInstance(extract_catalog(parse_html(HOME_PAGE), LISTING_MODE), CatalogListing)
        self.assertIsInstance(extract_catalog(parse_html(SEARCH_PAGE), SEARCH_MODE), list)

    def test_unknown_mode(self):
        """An unknown mode is a programming error."""
        with self.assertRaises(ValueError):
            extract_catalog(parse_html(HOME_PAGE), 'grid')

    def test_rating_bounded(self):
        """Ratings stay within 0..5 even with extra star markup."""
        page = listing_page([listing_section('Games', [
            '<article class="flex-item"><a class="app" href="https://apkmody.com/x">'
            '<h3>Many</h3><span class="app-rating">'
            + '<span class="star active"></span>' * 9 +
            '</span></a></article>'
        ])])
        (entry,) = extract_listing(parse_html(page)).sections['Games']
        self.assertEqual(entry.rating, 5)


if __name__ == '__main__':
    unittest.main()
