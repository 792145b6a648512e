"""Main Flask application entry point."""

import sys
from flask import Flask
from config import settings
from web.routes import register_routes
from utils.logger import setup_logging, get_logger

logger = get_logger('web')


def create_app(browser=None):
    """
    Create and configure the Flask application.

    Args:
        browser: Optional CatalogBrowser (tests pass a stub)
    """
    app = Flask(__name__)
    app.config['DEBUG'] = settings.FLASK_DEBUG
    app.json.sort_keys = False

    @app.after_request
    def set_security_headers(response):
        """Add security headers to all responses."""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        return response

    register_routes(app, browser=browser)
    return app


if __name__ == '__main__':
    setup_logging()

    problems = settings.validate_settings()
    if problems:
        print("\n⚠️  CONFIGURATION WARNINGS:", file=sys.stderr)
        for problem in problems:
            print(f"   - {problem}", file=sys.stderr)
            logger.warning(problem)
        print()

    app = create_app()

    print("=" * 60)
    print("Mod APK Catalog - JSON API")
    print("=" * 60)
    print(f"📍 Server: http://localhost:{settings.FLASK_PORT}")
    print(f"🔧 Debug mode: {settings.FLASK_DEBUG}")
    print(f"🌐 Source: {settings.SOURCE_BASE_URL} via {settings.PROXY_URL}")
    print("=" * 60)

    app.run(
        host='0.0.0.0',
        port=settings.FLASK_PORT,
        debug=settings.FLASK_DEBUG,
        use_reloader=False
    )
