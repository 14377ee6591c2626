"""
Blog Routes Blueprint

Handles article listings, single articles, and tag/category pages.
"""

from flask import Blueprint, render_template, abort, current_app

blog_bp = Blueprint('blog', __name__, url_prefix='/blog')


def _blog_service():
    return current_app.extensions['blog_service']


@blog_bp.route("/")
def blog_home():
    """All published articles, newest first."""
    blog_service = _blog_service()

    articles = blog_service.get_published_articles()
    current_app.logger.info(f"Blog home accessed - {len(articles)} articles")
    return render_template(
        "blog_home.html",
        articles=[blog_service.summarize(a) for a in articles],
        tags=blog_service.get_tag_counts(articles),
        categories=blog_service.get_category_counts(articles)
    )


@blog_bp.route("/<slug>")
def article(slug):
    """Display a single article with navigation."""
    blog_service = _blog_service()

    articles = blog_service.get_published_articles()
    article_data = blog_service.get_article(slug, articles)
    if not article_data:
        current_app.logger.warning(f"Article not found: {slug}")
        abort(404)

    older, newer = blog_service.get_prev_next_articles(article_data, articles)
    current_app.logger.info(f"Article accessed: {slug}")

    return render_template(
        "article.html",
        view=blog_service.enrich_article(article_data),
        older_article=older,
        newer_article=newer
    )


@blog_bp.route("/tag/<path:tag>")
def tag(tag):
    """Articles carrying a tag."""
    blog_service = _blog_service()

    articles = blog_service.get_articles_by_tag(tag)
    if not articles:
        current_app.logger.warning(f"Tag not found: {tag}")
        abort(404)

    return render_template(
        "article_list.html",
        heading=f"Tagged '{tag}'",
        articles=[blog_service.summarize(a) for a in articles]
    )


@blog_bp.route("/category/<path:category>")
def category(category):
    """Articles in a category."""
    blog_service = _blog_service()

    articles = blog_service.get_articles_by_category(category)
    if not articles:
        current_app.logger.warning(f"Category not found: {category}")
        abort(404)

    return render_template(
        "article_list.html",
        heading=category,
        articles=[blog_service.summarize(a) for a in articles]
    )
