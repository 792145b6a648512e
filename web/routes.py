"""Flask routes for the JSON API."""

from flask import jsonify, request
from scraper.catalog_browser import CatalogBrowser
from scraper.download_link_extractor import is_trusted_link
from utils.logger import get_logger

logger = get_logger('web')


def _safe_error_message(e: Exception) -> str:  # noqa: ARG001 - e intentionally unused
    """Return a safe error message that doesn't expose internal details.

    Detailed errors are logged separately.
    """
    return "An internal error occurred. Please try again later."


def _sanitize_for_log(value: str, max_length: int = 200) -> str:
    """Sanitize user input for safe logging to prevent log injection.

    Args:
        value: The user-provided value to sanitize
        max_length: Maximum length of the output (default 200)

    Returns:
        A sanitized string safe for logging
    """
    if value is None:
        return '<None>'
    if not isinstance(value, str):
        value = str(value)
    sanitized = value.replace('\n', '\\n').replace('\r', '\\r')
    sanitized = ''.join(char if ord(char) >= 32 or char == '\t' else f'\\x{ord(char):02x}' for char in sanitized)
    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length] + '...[truncated]'
    return sanitized


def _required_arg(name):
    """Trimmed query parameter, or None if missing/blank."""
    value = request.args.get(name, '').strip()
    return value or None


def _bad_request(message):
    return jsonify({'success': False, 'error': message}), 400


def register_routes(app, browser=None):
    """Register all Flask routes."""

    browser = browser or CatalogBrowser()

    def _source_url_or_error():
        """The `url` parameter if it points at the source site, else an error response."""
        url = _required_arg('url')
        if not url:
            return None, _bad_request('Missing url parameter')
        if not is_trusted_link(url):
            logger.warning(f"Rejected untrusted url: {_sanitize_for_log(url)}")
            return None, _bad_request('url must point at the source site')
        return url, None

    @app.route('/api/health')
    def api_health():
        """Liveness check."""
        return jsonify({'success': True})

    @app.route('/api/home')
    def api_home():
        """Home page sections in document order."""
        try:
            listing = browser.load_homepage()
            return jsonify({'success': True, **listing.to_dict()})
        except Exception as e:
            logger.error(f"API error loading homepage: {str(e)}")
            return jsonify({'success': False, 'error': _safe_error_message(e)}), 500

    @app.route('/api/search')
    def api_search():
        """Search results for ?q=."""
        query = _required_arg('q')
        if not query:
            return _bad_request('Missing q parameter')

        try:
            results = browser.search(query)
            return jsonify({
                'success': True,
                'count': len(results),
                'apps': [entry.to_dict() for entry in results]
            })
        except Exception as e:
            logger.error(f"API error searching {_sanitize_for_log(query)}: {str(e)}")
            return jsonify({'success': False, 'error': _safe_error_message(e)}), 500

    @app.route('/api/app')
    def api_app():
        """App detail plus reviews for ?url=."""
        url, error = _source_url_or_error()
        if error:
            return error

        try:
            detail, reviews = browser.load_app_with_reviews(url)
            if detail is None:
                return jsonify({'success': False, 'error': 'App page could not be loaded'}), 502
            return jsonify({
                'success': True,
                'app': detail.to_dict(),
                'reviews': [review.to_dict() for review in reviews]
            })
        except Exception as e:
            logger.error(f"API error loading app {_sanitize_for_log(url)}: {str(e)}")
            return jsonify({'success': False, 'error': _safe_error_message(e)}), 500

    @app.route('/api/reviews')
    def api_reviews():
        """Reviews from a store page given by ?url=."""
        url = _required_arg('url')
        if not url:
            return _bad_request('Missing url parameter')

        try:
            reviews = browser.load_reviews(url)
            return jsonify({
                'success': True,
                'count': len(reviews),
                'reviews': [review.to_dict() for review in reviews]
            })
        except Exception as e:
            logger.error(f"API error loading reviews {_sanitize_for_log(url)}: {str(e)}")
            return jsonify({'success': False, 'error': _safe_error_message(e)}), 500

    @app.route('/api/downloads')
    def api_downloads():
        """Ranked download links of the distribution page given by ?url=."""
        url, error = _source_url_or_error()
        if error:
            return error

        try:
            links = browser.load_download_links(url)
            return jsonify({
                'success': True,
                'count': len(links),
                'links': [link.to_dict() for link in links]
            })
        except Exception as e:
            logger.error(f"API error loading downloads {_sanitize_for_log(url)}: {str(e)}")
            return jsonify({'success': False, 'error': _safe_error_message(e)}), 500

    @app.route('/api/final-link')
    def api_final_link():
        """Direct file URL behind the page given by ?url=."""
        url, error = _source_url_or_error()
        if error:
            return error

        try:
            final_url = browser.resolve_final_link(url)
            if not final_url:
                return jsonify({'success': False, 'error': 'No download link found'}), 404
            return jsonify({'success': True, 'url': final_url})
        except Exception as e:
            logger.error(f"API error resolving final link {_sanitize_for_log(url)}: {str(e)}")
            return jsonify({'success': False, 'error': _safe_error_message(e)}), 500
