"""
Main Routes Blueprint

Handles homepage, about, attachments, and other static pages.
"""

from flask import Blueprint, render_template, current_app, send_from_directory, abort
from werkzeug.exceptions import NotFound

main_bp = Blueprint('main', __name__)


@main_bp.route("/")
def home():
    """Homepage with the latest article and a few recent ones."""
    blog_service = current_app.extensions['blog_service']

    articles = blog_service.get_published_articles()
    latest = blog_service.get_latest_article(articles)
    recent = [
        blog_service.summarize(a)
        for a in articles[1:current_app.config['RECENT_ARTICLES'] + 1]
    ]
    return render_template(
        "index.html",
        latest_article=blog_service.summarize(latest) if latest else None,
        recent_articles=recent,
        tags=blog_service.get_tag_counts(articles)
    )


@main_bp.route("/about")
def about():
    """About page."""
    return render_template("about.html")


@main_bp.route("/attachments/<path:filename>")
def attachment(filename):
    """Serve an article attachment (cover images, embedded screenshots)."""
    try:
        return send_from_directory(current_app.config['ATTACHMENTS_DIR'], filename)
    except NotFound:
        current_app.logger.warning(f"Attachment not found: {filename}")
        abort(404)


@main_bp.app_errorhandler(404)
def page_not_found(e):
    """Custom 404 error page."""
    return render_template("404.html"), 404
