"""
Testing Notes - articles on component testing, published from markdown
"""
import os
import sys

import click
from flask import Flask, request

from config import get_config
from extensions import csrf, limiter
from services import BlogService, ContentLoader, report_load_result
from utils.logger import setup_logger


def set_security_headers(response):
    """Apply security headers to all responses."""
    response.headers['X-Content-Type-Options'] = 'nosniff'
    response.headers['X-Frame-Options'] = 'SAMEORIGIN'
    response.headers['X-XSS-Protection'] = '1; mode=block'

    if request.is_secure:
        response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

    response.headers['Content-Security-Policy'] = (
        "default-src 'self'; "
        "script-src 'self'; "
        "style-src 'self' 'unsafe-inline'; "
        "img-src 'self' data: https:; "
        "connect-src 'self'; "
        "frame-ancestors 'self'; "
        "base-uri 'self'; "
        "form-action 'self'"
    )

    response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
    response.headers['Permissions-Policy'] = 'geolocation=(), microphone=(), camera=()'

    return response


def create_blog_service(app):
    """Build the content loader and blog service from app config."""
    loader = ContentLoader(app.config['CONTENT_DIR'], pattern=app.config['ARTICLE_PATTERN'])
    return BlogService(
        loader,
        attachments_url=app.config['ATTACHMENTS_URL'],
        include_drafts=app.config['INCLUDE_DRAFTS'],
        words_per_minute=app.config['WORDS_PER_MINUTE']
    )


def create_app(config_class=None):
    """
    Application factory.

    Args:
        config_class: Config class to use; defaults to the one named by FLASK_ENV

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)
    app.config.from_object(config_class or get_config())

    setup_logger(app)
    csrf.init_app(app)
    limiter.init_app(app)
    app.after_request(set_security_headers)

    blog_service = create_blog_service(app)
    app.extensions['blog_service'] = blog_service

    from routes import main_bp, blog_bp
    app.register_blueprint(main_bp)
    app.register_blueprint(blog_bp)

    @app.cli.command('check-content')
    def check_content():
        """Load every article and report the files that fail to parse."""
        result = blog_service.load()
        code = report_load_result(result, click.echo)
        sys.exit(code)

    startup = blog_service.load()
    app.logger.info(f"Content directory: {app.config['CONTENT_DIR']} - {startup.count} articles")
    for failure in startup.failures:
        app.logger.warning(f"Article failed to load: {failure.message}")

    return app


if __name__ == "__main__":
    app = create_app()
    debug_mode = app.config.get('DEBUG', False)
    env_name = os.environ.get('FLASK_ENV', 'development')

    print("=" * 60)
    print("Testing Notes Starting")
    print(f"Environment: {env_name}")
    print(f"Debug Mode: {debug_mode}")
    print(f"Content: {app.config['CONTENT_DIR']}")
    print("=" * 60)

    host = os.environ.get('FLASK_HOST', '127.0.0.1')
    port = int(os.environ.get('FLASK_PORT', 5000))

    app.run(host=host, port=port, debug=debug_mode)
