"""Catalog extraction from listing pages (home page sections) and search results."""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Tuple
from config import settings
from models.catalog_entry import CatalogEntry, CatalogListing
from utils.html_tree import (absolute_url, bounded_rating, collapse_whitespace, count_nodes,
                             node_attr, select_text)
from utils.logger import get_logger

logger = get_logger('scraper')

LISTING_MODE = 'listing'
SEARCH_MODE = 'search'

SECTION_SELECTOR = 'main#primary > section'
SECTION_ITEM_SELECTOR = 'article.flex-item a.app, div.flex-item article.card a'
SEARCH_ITEM_SELECTOR = 'main#primary section div.flex-container article.flex-item a.app'


def _listing_entry(item, base_url: Optional[str] = None) -> CatalogEntry:
    """Build an entry from one item link of a home page section."""
    rating_container = item.select_one('.app-rating, .card-rating')
    return CatalogEntry(
        title=select_text(item, 'h3', 'Unknown'),
        url=absolute_url(node_attr(item, 'href'), base_url),
        icon=absolute_url(node_attr(item.select_one('img'), 'src'), base_url),
        rating=bounded_rating(count_nodes(rating_container, '.star.active')),
    )


def _search_entry(item, base_url: Optional[str] = None) -> CatalogEntry:
    """Build an entry from one search result link."""
    return CatalogEntry(
        title=select_text(item, 'h2.font-size__normal', 'Unknown Title'),
        url=absolute_url(node_attr(item, 'href'), base_url),
        icon=absolute_url(node_attr(item.select_one('img'), 'src'), base_url),
        subtitle=collapse_whitespace(select_text(item, '.app-sub-text')),
        rating=bounded_rating(count_nodes(item, '.app-rating .star.active')),
    )


def _extract_section(index: int, section,
                     base_url: Optional[str] = None) -> Optional[Tuple[int, str, List[CatalogEntry]]]:
    """
    Extract one home page section.

    Returns:
        (document index, heading, entries), or None if the section has no
        heading or no items
    """
    heading = section.select_one('h2')
    items = section.select(SECTION_ITEM_SELECTOR)
    if heading is None or not items:
        return None

    title = heading.get_text().strip()
    return index, title, [_listing_entry(item, base_url) for item in items]


def extract_listing(tree, base_url: Optional[str] = None,
                    max_workers: Optional[int] = None) -> CatalogListing:
    """
    Extract every titled section of a listing document.

    Sections are extracted in parallel and stored as they complete. When two
    sections share a heading, the one later in the document wins.

    Args:
        tree: Parsed listing document
        base_url: Document URL for resolving relative links
        max_workers: Thread count (default: MAX_SECTION_WORKERS)

    Returns:
        CatalogListing with headings in document order
    """
    sections = tree.select(SECTION_SELECTOR)
    listing = CatalogListing()
    if not sections:
        logger.debug("Listing document has no sections")
        return listing

    winners: Dict[str, int] = {}
    workers = max(1, max_workers or settings.MAX_SECTION_WORKERS)

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(_extract_section, idx, section, base_url)
                   for idx, section in enumerate(sections)]

        for future in as_completed(futures):
            result = future.result()
            if result is None:
                continue
            index, title, entries = result
            if title in winners and winners[title] > index:
                continue
            winners[title] = index
            listing.sections[title] = entries

    listing.order = sorted(winners, key=winners.get)
    logger.info(f"Extracted {len(listing.order)} sections from listing document")
    return listing


def extract_search_results(tree, base_url: Optional[str] = None) -> List[CatalogEntry]:
    """Extract search result entries in document order."""
    results = [_search_entry(item, base_url) for item in tree.select(SEARCH_ITEM_SELECTOR)]
    logger.info(f"Extracted {len(results)} search results")
    return results


def extract_catalog(tree, mode: str = LISTING_MODE, base_url: Optional[str] = None):
    """
    Extract catalog entries from a listing or search-results document.

    Args:
        tree: Parsed document
        mode: LISTING_MODE or SEARCH_MODE
        base_url: Document URL for resolving relative links

    Returns:
        CatalogListing in listing mode, list of CatalogEntry in search mode

    Raises:
        ValueError: If mode is unknown
    """
    if mode == LISTING_MODE:
        return extract_listing(tree, base_url=base_url)
    if mode == SEARCH_MODE:
        return extract_search_results(tree, base_url=base_url)
    raise ValueError(f"Unknown catalog mode: {mode!r}")
