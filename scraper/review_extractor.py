"""Review extraction from a store reviews page."""

import re
from typing import List, Optional
from models.review import DevReply, Review
from utils.html_tree import absolute_url, bounded_rating, node_attr, select_text
from utils.logger import get_logger

logger = get_logger('scraper')

REVIEW_BLOCK_SELECTOR = 'div[data-g-id="reviews"] .EGFGHd'

RATED_RE = re.compile(r'Rated (\d)')


def parse_rating_label(label: str) -> int:
    """Star count from an aria-label such as 'Rated 4 stars out of five stars'."""
    match = RATED_RE.search(label or '')
    return bounded_rating(int(match.group(1))) if match else 0


def _dev_reply(block) -> Optional[DevReply]:
    reply = block.select_one('.ocpBU')
    if reply is None:
        return None
    return DevReply(
        author=select_text(reply, '.I6j64d', 'Developer'),
        text=select_text(reply, '.ras4vb'),
    )


def _review(block, base_url: Optional[str] = None) -> Optional[Review]:
    text = select_text(block, '.h3YV2d')
    if not text:
        return None

    return Review(
        author=select_text(block, '.X5PpBb', 'Unknown User'),
        author_img=absolute_url(node_attr(block.select_one('.abYEib'), 'src'), base_url),
        date=select_text(block, '.bp9Aid'),
        rating=parse_rating_label(node_attr(block.select_one('.iXRFPc'), 'aria-label')),
        text=text,
        helpful=select_text(block, '.AJTPZc') or None,
        dev_reply=_dev_reply(block),
    )


def extract_reviews(tree, base_url: Optional[str] = None) -> List[Review]:
    """
    Extract reviews in document order.

    Blocks without body text are skipped.

    Args:
        tree: Parsed reviews page
        base_url: Document URL for resolving relative image links

    Returns:
        List of Review instances
    """
    reviews = []
    blocks = tree.select(REVIEW_BLOCK_SELECTOR)
    for block in blocks:
        review = _review(block, base_url)
        if review is not None:
            reviews.append(review)

    skipped = len(blocks) - len(reviews)
    if skipped:
        logger.debug(f"Skipped {skipped} review blocks without text")
    logger.info(f"Extracted {len(reviews)} reviews")
    return reviews
