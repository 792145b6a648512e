"""Configuration management using environment variables."""

import os
from urllib.parse import urlparse
from decouple import config

# Base directories
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
LOGS_DIR = config('LOGS_DIR', default=os.path.join(BASE_DIR, 'logs'))

# Source site and content proxy
# Every page is fetched through the proxy as PROXY_URL?url=<target>
SOURCE_BASE_URL = config('SOURCE_BASE_URL', default='https://apkmody.com/')
TRUSTED_HOSTNAME = config('TRUSTED_HOSTNAME', default='apkmody.com')
PROXY_URL = config('PROXY_URL', default='https://vlyx-scrapping.vercel.app/api/index')

# Scraper Settings
REQUEST_TIMEOUT = config('REQUEST_TIMEOUT', default=30, cast=int)
SCRAPER_REQUEST_DELAY = config('SCRAPER_REQUEST_DELAY', default=0.5, cast=float)
MAX_RETRY_ATTEMPTS = config('MAX_RETRY_ATTEMPTS', default=3, cast=int)
MAX_SECTION_WORKERS = config('MAX_SECTION_WORKERS', default=4, cast=int)
USER_AGENT = config(
    'USER_AGENT',
    default='Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
            '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)

# Flask Settings
FLASK_DEBUG = config('FLASK_DEBUG', default=False, cast=bool)
FLASK_PORT = config('FLASK_PORT', default=5000, cast=int)

# Logging Settings
LOG_LEVEL = config('LOG_LEVEL', default='INFO')


def validate_settings():
    """
    Check the source/proxy settings for obvious misconfiguration.

    Returns:
        List of human-readable problems (empty if everything looks fine)
    """
    problems = []

    proxy = urlparse(PROXY_URL)
    if proxy.scheme not in ('http', 'https') or not proxy.netloc:
        problems.append(f"PROXY_URL must be an absolute http(s) URL, got: {PROXY_URL!r}")

    if not TRUSTED_HOSTNAME:
        problems.append("TRUSTED_HOSTNAME is empty - every download link would be filtered out")
    elif urlparse(SOURCE_BASE_URL).hostname != TRUSTED_HOSTNAME.lower():
        problems.append(
            f"TRUSTED_HOSTNAME ({TRUSTED_HOSTNAME}) does not match the host of SOURCE_BASE_URL ({SOURCE_BASE_URL})"
        )

    return problems
