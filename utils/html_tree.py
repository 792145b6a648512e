"""Parse-tree construction and query helpers shared by the extractors."""

import re
from typing import Optional
from urllib.parse import urljoin, urlparse
from bs4 import BeautifulSoup, FeatureNotFound
from bs4.element import Tag
from utils.logger import get_logger

logger = get_logger('scraper')

MAX_RATING = 5

_WHITESPACE_RE = re.compile(r'\s+')


def parse_html(html_text: Optional[str]) -> BeautifulSoup:
    """
    Build a parse tree from raw HTML text.

    Uses the lxml builder when available and falls back to html.parser.

    Args:
        html_text: Raw HTML (None is treated as an empty document)

    Returns:
        BeautifulSoup tree
    """
    try:
        return BeautifulSoup(html_text or '', 'lxml')
    except FeatureNotFound:
        logger.warning("lxml parser not available, falling back to html.parser")
        return BeautifulSoup(html_text or '', 'html.parser')


def node_text(node: Optional[Tag], default: str = '') -> str:
    """Trimmed text content of a node, or `default` if the node is missing or blank."""
    if node is None:
        return default
    return node.get_text().strip() or default


def select_text(root, selector: str, default: str = '') -> str:
    """Trimmed text of the first descendant matching `selector`."""
    return node_text(root.select_one(selector), default)


def node_attr(node: Optional[Tag], name: str, default: str = '') -> str:
    """Attribute value of a node as a string, or `default` if missing or empty."""
    if node is None:
        return default
    value = node.get(name)
    if isinstance(value, list):
        # Multi-valued attributes such as class come back as lists
        value = ' '.join(value)
    return value or default


def inner_html(node: Optional[Tag]) -> str:
    """Markup of the node's children, without the node's own tag."""
    if node is None:
        return ''
    return node.decode_contents()


def collapse_whitespace(text: str) -> str:
    """Trim and collapse every run of whitespace to a single space."""
    return _WHITESPACE_RE.sub(' ', text.strip())


def absolute_url(href: Optional[str], base_url: Optional[str] = None) -> str:
    """
    Resolve a link target the way a browser resolves `a.href`.

    Args:
        href: Raw attribute value
        base_url: Document URL; without it the value is returned as-is

    Returns:
        Resolved URL, or empty string when there is no target
    """
    if not href:
        return ''
    href = href.strip()
    if base_url:
        try:
            return urljoin(base_url, href)
        except ValueError:
            return href
    return href


def hostname_of(url: Optional[str]) -> Optional[str]:
    """
    Hostname of an absolute http(s) URL.

    Returns:
        Lower-cased hostname, or None for relative, non-http or malformed URLs
    """
    if not url:
        return None
    try:
        parsed = urlparse(url)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            return None
        return parsed.hostname
    except ValueError:
        return None


def count_nodes(root, selector: str) -> int:
    """Number of descendants matching `selector` (0 when root is missing)."""
    if root is None:
        return 0
    return len(root.select(selector))


def bounded_rating(value: int) -> int:
    """Clamp a star count into the 0..5 range."""
    return max(0, min(MAX_RATING, int(value)))
