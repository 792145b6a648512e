"""Download link extraction, ad filtering and ranking for distribution pages."""

import re
from dataclasses import dataclass
from functools import cmp_to_key
from itertools import zip_longest
from typing import List, Optional
from bs4.element import Tag
from config import settings
from models.download_link import DownloadLinkCandidate
from utils.html_tree import absolute_url, hostname_of, node_attr, node_text
from utils.logger import get_logger

logger = get_logger('scraper')

CANDIDATE_SELECTOR = '.download-list > details, .download-list > a.clickable'

VERSION_RE = re.compile(r'v(\d+\.[\d.]+)')
MOD_MARKERS = ('mod', 'unlocked', 'premium')


@dataclass(frozen=True)
class SimpleLink:
    """A plain anchor: the link itself carries label, tags and target."""

    node: Tag

    def primary_link(self, base_url=None) -> str:
        return absolute_url(node_attr(self.node, 'href'), base_url)

    def label_region(self) -> Tag:
        return self.node

    def download_href(self, base_url=None) -> str:
        return self.primary_link(base_url)


@dataclass(frozen=True)
class ExpandableLink:
    """A <details> block: the summary carries label and tags, the body a button link."""

    node: Tag

    def primary_link(self, base_url=None) -> str:
        href = node_attr(self.node.select_one('a.button'), 'href')
        if not href:
            href = node_attr(self.node.select_one('a[href]'), 'href')
        return absolute_url(href, base_url)

    def label_region(self) -> Optional[Tag]:
        return self.node.select_one('summary')

    def download_href(self, base_url=None) -> str:
        return absolute_url(node_attr(self.node.select_one('a.button.button__blue'), 'href'), base_url)


def _as_variant(node: Tag):
    """Decide the link shape once, by tag name."""
    if node.name == 'details':
        return ExpandableLink(node)
    return SimpleLink(node)


def is_trusted_link(url: Optional[str], trusted_hostname: Optional[str] = None) -> bool:
    """True if `url` is an absolute http(s) URL on the trusted source host."""
    trusted = (trusted_hostname or settings.TRUSTED_HOSTNAME).lower()
    return hostname_of(url) == trusted


def classify(tags_text: str):
    """
    Classify a candidate from its tag text.

    Returns:
        (is_mod, is_original); the flags are independent
    """
    text = tags_text.lower()
    is_mod = any(marker in text for marker in MOD_MARKERS)
    is_original = 'original' in text or (not is_mod and 'apk' in text)
    return is_mod, is_original


def parse_version(title: str) -> Optional[str]:
    """First 'v1.2.3'-style version in a title, without the leading 'v'."""
    match = VERSION_RE.search(title)
    return match.group(1) if match else None


def compare_candidates(a: DownloadLinkCandidate, b: DownloadLinkCandidate) -> int:
    """Mod builds first, then higher versions first; 0 keeps the original order."""
    if a.is_mod != b.is_mod:
        return -1 if a.is_mod else 1

    if a.version and b.version:
        for a_num, b_num in zip_longest(a.version_parts(), b.version_parts(), fillvalue=0):
            if a_num != b_num:
                return b_num - a_num

    return 0


def rank_candidates(candidates: List[DownloadLinkCandidate]) -> List[DownloadLinkCandidate]:
    """Stable sort of candidates by compare_candidates."""
    return sorted(candidates, key=cmp_to_key(compare_candidates))


def _build_candidate(variant, base_url=None, trusted_hostname=None) -> Optional[DownloadLinkCandidate]:
    primary = variant.primary_link(base_url)
    if not is_trusted_link(primary, trusted_hostname):
        # Ad or broken link
        logger.debug(f"Dropped untrusted download link: {primary[:120]!r}")
        return None

    region = variant.label_region()
    if region is None:
        return None

    title = node_text(region.select_one('.color__blue'))
    description = node_text(region.select_one('.color__gray'))
    href = variant.download_href(base_url)

    if not title or not description or not href:
        logger.debug(f"Dropped incomplete download candidate: {title!r}")
        return None
    if not is_trusted_link(href, trusted_hostname):
        logger.debug(f"Dropped candidate with untrusted button target: {href[:120]!r}")
        return None

    is_mod, is_original = classify(description)
    return DownloadLinkCandidate(
        title=title,
        description=description,
        href=href,
        version=parse_version(title),
        is_mod=is_mod,
        is_original=is_original,
    )


def extract_download_links(tree, base_url: Optional[str] = None,
                           trusted_hostname: Optional[str] = None) -> List[DownloadLinkCandidate]:
    """
    Extract the download candidates of a distribution page.

    Links that do not point at the trusted source host are treated as ads and
    dropped silently.

    Args:
        tree: Parsed distribution page
        base_url: Document URL for resolving relative links
        trusted_hostname: Override for TRUSTED_HOSTNAME

    Returns:
        Candidates, mod builds first then by descending version
    """
    candidates = []
    for node in tree.select(CANDIDATE_SELECTOR):
        candidate = _build_candidate(_as_variant(node), base_url, trusted_hostname)
        if candidate is not None:
            candidates.append(candidate)

    ranked = rank_candidates(candidates)
    logger.info(f"Extracted {len(ranked)} download links")
    return ranked
