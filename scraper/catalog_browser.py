"""Fetch-parse-extract pipeline for each catalog view."""

from typing import List, Optional, Tuple
from models.app_detail import AppDetail
from models.catalog_entry import CatalogEntry, CatalogListing
from models.download_link import DownloadLinkCandidate
from models.review import Review
from scraper.catalog_extractor import extract_listing, extract_search_results
from scraper.detail_extractor import extract_detail
from scraper.download_link_extractor import extract_download_links
from scraper.endpoint_decoder import extract_final_download_url
from scraper.proxy_client import FetchError, ProxyClient, home_url, search_url
from scraper.review_extractor import extract_reviews
from utils.logger import get_logger

logger = get_logger('scraper')


class CatalogBrowser:
    """Loads the data behind each view of the catalog from the source site."""

    def __init__(self, client: Optional[ProxyClient] = None):
        """
        Initialize catalog browser.

        Args:
            client: ProxyClient instance
        """
        self.client = client or ProxyClient()

    def load_homepage(self) -> CatalogListing:
        """Home page sections; empty listing if the page cannot be fetched."""
        url = home_url()
        try:
            tree = self.client.fetch_tree(url)
        except FetchError as e:
            logger.error(f"Error loading homepage: {str(e)}")
            return CatalogListing()
        return extract_listing(tree, base_url=url)

    def search(self, query: str) -> List[CatalogEntry]:
        """Search results for `query`; a blank query returns [] without fetching."""
        if not query or not query.strip():
            return []

        url = search_url(query.strip())
        try:
            tree = self.client.fetch_tree(url)
        except FetchError as e:
            logger.error(f"Error searching apps for {query!r}: {str(e)}")
            return []
        return extract_search_results(tree, base_url=url)

    def load_app(self, url: str) -> Optional[AppDetail]:
        """Detail record of an app page, or None if it cannot be fetched."""
        try:
            tree = self.client.fetch_tree(url)
        except FetchError as e:
            logger.error(f"Error loading app page: {str(e)}")
            return None
        return extract_detail(tree, base_url=url)

    def load_reviews(self, play_store_url: str) -> List[Review]:
        """Reviews from the store page linked on an app page."""
        try:
            tree = self.client.fetch_tree(play_store_url)
        except FetchError as e:
            logger.error(f"Error loading reviews: {str(e)}")
            return []
        return extract_reviews(tree, base_url=play_store_url)

    def load_app_with_reviews(self, url: str) -> Tuple[Optional[AppDetail], List[Review]]:
        """
        Detail record plus its reviews.

        Reviews are only fetched when the app page links a store page.

        Returns:
            (detail or None, reviews)
        """
        detail = self.load_app(url)
        if detail is None or not detail.play_store_url:
            return detail, []
        return detail, self.load_reviews(detail.play_store_url)

    def load_download_links(self, url: str) -> List[DownloadLinkCandidate]:
        """Ranked download candidates of a distribution page."""
        try:
            tree = self.client.fetch_tree(url)
        except FetchError as e:
            logger.error(f"Error loading download links: {str(e)}")
            return []
        return extract_download_links(tree, base_url=url)

    def resolve_final_link(self, url: str) -> Optional[str]:
        """Direct file URL behind a chosen candidate's page, or None."""
        try:
            tree = self.client.fetch_tree(url)
        except FetchError as e:
            logger.error(f"Error fetching final download link: {str(e)}")
            return None

        final_url = extract_final_download_url(tree)
        if final_url:
            logger.info(f"Resolved final download link for {url}")
        else:
            logger.warning(f"No final download link found on {url}")
        return final_url
