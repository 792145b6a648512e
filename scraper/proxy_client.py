"""Client for fetching source-site pages through the content proxy."""

import time
from typing import Optional
from urllib.parse import quote
import requests
from config import settings
from utils.html_tree import parse_html
from utils.rate_limiter import RateLimiter
from utils.logger import get_logger


class FetchError(Exception):
    """A page could not be fetched through the proxy."""

    def __init__(self, url, message, status_code=None):
        super().__init__(f"{message} ({url})")
        self.url = url
        self.status_code = status_code


def home_url() -> str:
    """URL of the source site's home page."""
    return settings.SOURCE_BASE_URL


def search_url(query: str) -> str:
    """URL of the source site's search results for `query`."""
    return f"{settings.SOURCE_BASE_URL}?s={quote(query, safe='')}"


class ProxyClient:
    """Fetches raw HTML for a target URL via the content proxy."""

    def __init__(self, proxy_url=None, session: Optional[requests.Session] = None,
                 delay=None, max_retries=None, timeout=None, logger_name='fetch'):
        """
        Initialize the proxy client.

        Args:
            proxy_url: Proxy endpoint (default: settings.PROXY_URL)
            session: Optional requests.Session to reuse
            delay: Minimum delay between requests (default: SCRAPER_REQUEST_DELAY)
            max_retries: Retry attempts on 429/5xx/connection errors
            timeout: Request timeout in seconds
            logger_name: Name of the logger to use (default: 'fetch')
        """
        self.logger = get_logger(logger_name)
        self.proxy_url = proxy_url or settings.PROXY_URL
        self.max_retries = settings.MAX_RETRY_ATTEMPTS if max_retries is None else max_retries
        self.timeout = timeout or settings.REQUEST_TIMEOUT

        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': settings.USER_AGENT,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
        })

        self.rate_limiter = RateLimiter(
            delay=settings.SCRAPER_REQUEST_DELAY if delay is None else delay
        )

    def _make_request(self, url, retry_count=0):
        """
        Make a proxied GET with retry logic and rate limiting.

        Args:
            url: Target page URL
            retry_count: Current retry attempt

        Returns:
            Response body as text

        Raises:
            FetchError: On failure after retries
        """
        self.rate_limiter.wait_if_needed()

        try:
            response = self.session.get(self.proxy_url, params={'url': url}, timeout=self.timeout)
            self.rate_limiter.adaptive_delay(response.status_code)
            response.raise_for_status()

            if response.encoding is None or response.encoding.lower() not in ['utf-8', 'utf8']:
                response.encoding = 'utf-8'
            return response.text

        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else 0

            if (status_code == 429 or status_code >= 500) and retry_count < self.max_retries:
                wait_time = 2 ** retry_count
                self.logger.warning(f"HTTP {status_code} from proxy, retrying in {wait_time}s... "
                                    f"(attempt {retry_count + 1}/{self.max_retries})")
                time.sleep(wait_time)
                return self._make_request(url, retry_count + 1)

            self.logger.error(f"HTTP error for {url}: {str(e)}")
            raise FetchError(url, f"HTTP {status_code} from proxy", status_code=status_code) from e

        except requests.exceptions.RequestException as e:
            if retry_count < self.max_retries:
                wait_time = 2 ** retry_count
                self.logger.warning(f"Request error, retrying in {wait_time}s... "
                                    f"(attempt {retry_count + 1}/{self.max_retries})")
                time.sleep(wait_time)
                return self._make_request(url, retry_count + 1)

            self.logger.error(f"Request failed for {url}: {str(e)}")
            raise FetchError(url, f"Request failed: {e.__class__.__name__}") from e

    def fetch_document(self, url: str) -> str:
        """
        Fetch the raw HTML of a page.

        Raises:
            FetchError: On network or proxy failure
        """
        self.logger.info(f"Fetching {url}")
        html_text = self._make_request(url)
        self.logger.debug(f"Fetched {len(html_text)} characters from {url}")
        return html_text

    def fetch_tree(self, url: str):
        """Fetch a page and parse it into a BeautifulSoup tree."""
        return parse_html(self.fetch_document(url))
