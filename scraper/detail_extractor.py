"""Detail extraction for a single app page."""

from functools import reduce
from typing import Dict, List, Optional, Tuple
from models.app_detail import AppDetail, DOWNLOAD_URL_SENTINEL
from scraper.endpoint_decoder import ENDPOINT_ATTRIBUTE, decode_endpoint
from utils.html_tree import (absolute_url, bounded_rating, count_nodes, inner_html, node_attr,
                             node_text, select_text)
from utils.logger import get_logger

logger = get_logger('scraper')

# Labels with a dedicated AppDetail field; never repeated in `details`
RESERVED_LABELS = frozenset([
    'MOD Features', 'Rating Score', 'Version', 'Size', 'Requires', 'Google Play ID',
])

NOT_AVAILABLE = 'N/A'


def find_table_data(tree, label: str, get_href: bool = False,
                    base_url: Optional[str] = None) -> Optional[str]:
    """
    Look up a value in the app-info table by its header label.

    The header match is exact after trimming, ignoring case. The value is the
    cell right after the header.

    Args:
        tree: Parsed app page
        label: Header text to look for
        get_href: Prefer the target of a link inside the value cell
        base_url: Document URL for resolving a relative link target

    Returns:
        Cell text (or link target), None if the label or value is missing
    """
    wanted = label.strip().lower()
    header = next(
        (th for th in tree.select('#app-info th') if th.get_text().strip().lower() == wanted),
        None
    )
    if header is None:
        return None

    cell = header.find_next_sibling()
    if cell is None:
        return None

    if get_href:
        anchor = cell.select_one('a')
        if anchor is not None:
            href = node_attr(anchor, 'href')
            return absolute_url(href, base_url) if href else None
    return node_text(cell) or None


def _carry_label(state: Tuple[Optional[str], List[Tuple[str, str]]], row):
    """Fold step: (pending label, emitted pairs) x row -> new state."""
    pending, pairs = state
    header = row.select_one('th')
    cell = row.select_one('td')

    if header is not None and cell is not None:
        return None, pairs + [(node_text(header), inner_html(cell))]
    if header is not None:
        return node_text(header) or None, pairs
    if cell is not None and pending:
        return None, pairs + [(pending, inner_html(cell))]
    return pending, pairs


def extract_attribute_table(tree) -> Dict[str, str]:
    """
    Collect the free-form rows of the app-info table.

    A header-only row labels the next data-only row. Reserved labels are
    skipped and later rows overwrite earlier ones with the same label.

    Returns:
        Ordered mapping of label -> cell inner HTML
    """
    _, pairs = reduce(_carry_label, tree.select('#app-info table tr'), (None, []))

    details = {}
    for label, value in pairs:
        if label and value and label not in RESERVED_LABELS:
            details[label] = value
    return details


def extract_screenshots(tree, base_url: Optional[str] = None) -> List[str]:
    """Full-resolution screenshot URLs in page order."""
    screenshots = []
    for link in tree.select('.screenshots a.screenshot'):
        url = node_attr(link, 'data-src') or node_attr(link, 'href')
        if url:
            screenshots.append(absolute_url(url, base_url))
    return screenshots


def extract_download_url(tree) -> str:
    """Decoded target of the main download button, or '#' when unavailable."""
    button = tree.select_one('#main-download-button')
    if button is None:
        return DOWNLOAD_URL_SENTINEL
    return decode_endpoint(node_attr(button, ENDPOINT_ATTRIBUTE) or None) or DOWNLOAD_URL_SENTINEL


def extract_detail(tree, base_url: Optional[str] = None) -> AppDetail:
    """
    Extract the detail record of an app page.

    Every missing node falls back to a placeholder; this never raises for an
    incomplete page.

    Args:
        tree: Parsed app page
        base_url: Document URL for resolving relative links

    Returns:
        AppDetail instance
    """
    # A cell without a link holds the bare package id, kept as text
    play_store_url = find_table_data(tree, 'Google Play ID', get_href=True, base_url=base_url)

    detail = AppDetail(
        title=select_text(tree, 'h1.font-size__medium strong', 'App'),
        publisher=select_text(tree, '.app.app__large .app-name span a', 'Unknown'),
        icon=absolute_url(node_attr(tree.select_one('.app.app__large .app-icon img'), 'src'), base_url),
        mod_feature=find_table_data(tree, 'MOD Features') or 'Standard Version',
        rating=bounded_rating(count_nodes(tree, '#app-info .rating .star.active')),
        version=find_table_data(tree, 'Version') or NOT_AVAILABLE,
        size=find_table_data(tree, 'Size') or NOT_AVAILABLE,
        requires=find_table_data(tree, 'Requires') or NOT_AVAILABLE,
        screenshots=extract_screenshots(tree, base_url),
        about=select_text(tree, '.main-entry-content > p', 'No description available.'),
        download_url=extract_download_url(tree),
        play_store_url=play_store_url,
        details=extract_attribute_table(tree),
    )

    logger.debug(f"Extracted detail for {detail.title!r}: {len(detail.details)} extra attributes")
    return detail
