"""Decoding of base64-obfuscated download endpoints embedded in page attributes."""

import base64
import binascii
import re
from typing import Optional
from utils.html_tree import node_attr
from utils.logger import get_logger

logger = get_logger('scraper')

ENDPOINT_ATTRIBUTE = 'data-href'

_ASCII_WHITESPACE_RE = re.compile(r'[\t\n\f\r ]+')


def encode_endpoint(value: str) -> str:
    """Base64-encode a URL (or any string) the way the source site does."""
    return base64.b64encode(value.encode('utf-8')).decode('ascii')


def decode_endpoint(payload: Optional[str]) -> Optional[str]:
    """
    Decode a base64 endpoint payload.

    Whitespace is ignored and missing '=' padding is tolerated, like the
    browser's atob(). Never raises.

    Args:
        payload: Encoded value read from the page

    Returns:
        Decoded string, or None if the payload is missing or malformed
    """
    if payload is None:
        return None

    cleaned = _ASCII_WHITESPACE_RE.sub('', payload)
    remainder = len(cleaned) % 4
    if remainder == 1:
        logger.debug(f"Malformed endpoint payload (bad length): {payload[:60]!r}")
        return None
    if remainder:
        cleaned += '=' * (4 - remainder)

    try:
        return base64.b64decode(cleaned, validate=True).decode('utf-8')
    except (binascii.Error, ValueError):
        # UnicodeDecodeError is a ValueError
        logger.debug(f"Malformed endpoint payload: {payload[:60]!r}")
        return None


def extract_final_download_url(tree) -> Optional[str]:
    """
    Resolve a distribution page into the direct file URL.

    The page carries the encoded file URL on `#d-button`, or on
    `#main-download-button` for older layouts.

    Returns:
        Direct file URL, or None if the page has no decodable control
    """
    control = tree.select_one('#d-button')
    if control is None:
        control = tree.select_one(f'#main-download-button[{ENDPOINT_ATTRIBUTE}]')
    if control is None:
        logger.debug("No download control found on distribution page")
        return None

    payload = node_attr(control, ENDPOINT_ATTRIBUTE)
    if not payload:
        return None
    return decode_endpoint(payload) or None
