"""
Tests for endpoint payload decoding and final download link resolution.
"""

import sys
import unittest
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from scraper.endpoint_decoder import decode_endpoint, encode_endpoint, extract_final_download_url
from utils.html_tree import parse_html
from html_fixtures import encoded


class TestDecodeEndpoint(unittest.TestCase):
    """Test decode_endpoint."""

    def test_round_trip(self):
        """Decoding an encoded string returns the original."""
        for value in ['https://apkmody.com/file.apk?token=a+b/c', '', 'ünïcödé ✓', 'x' * 1000]:
            self.assertEqual(decode_endpoint(encode_endpoint(value)), value)

    def test_missing_payload(self):
        self.assertIsNone(decode_endpoint(None))

    def test_malformed_payload(self):
        """Characters outside the alphabet or a bad length give None."""
        self.assertIsNone(decode_endpoint('not base64!'))
        self.assertIsNone(decode_endpoint('abcde'))
        self.assertIsNone(decode_endpoint('ab=c'))

    def test_non_utf8_payload(self):
        """Bytes that are not UTF-8 text give None."""
        self.assertIsNone(decode_endpoint('/w=='))

    def test_tolerates_whitespace_and_missing_padding(self):
        """Like atob, whitespace is ignored and padding optional."""
        self.assertEqual(decode_endpoint('aHR0cHM6\nLy9h'), 'https://a')
        self.assertEqual(decode_endpoint('YWI'), 'ab')


class TestFinalDownloadUrl(unittest.TestCase):
    """Test extract_final_download_url."""

    def test_d_button(self):
        page = f'<a id="d-button" data-href="{encoded("https://files.example.com/app.apk")}">Go</a>'
        self.assertEqual(extract_final_download_url(parse_html(page)), 'https://files.example.com/app.apk')

    def test_falls_back_to_main_download_button(self):
        page = f'<a id="main-download-button" data-href="{encoded("https://files.example.com/b.apk")}">Go</a>'
        self.assertEqual(extract_final_download_url(parse_html(page)), 'https://files.example.com/b.apk')

    def test_d_button_without_payload(self):
        """A d-button without payload does not fall through to the other control."""
        page = (f'<a id="d-button">Go</a>'
                f'<a id="main-download-button" data-href="{encoded("https://files.example.com/b.apk")}">Go</a>')
        self.assertIsNone(extract_final_download_url(parse_html(page)))

    def test_main_button_requires_payload(self):
        self.assertIsNone(extract_final_download_url(parse_html('<a id="main-download-button">Go</a>')))

    def test_no_control(self):
        self.assertIsNone(extract_final_download_url(parse_html('<p>Expired</p>')))

    def test_malformed_payload(self):
        self.assertIsNone(extract_final_download_url(parse_html('<a id="d-button" data-href="@@@@">Go</a>')))


if __name__ == '__main__':
    unittest.main()
