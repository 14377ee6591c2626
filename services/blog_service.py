"""
Blog Service - Handles all blog-related business logic

This service sits between the content loader and the routes: it applies the
publication policy, orders and groups articles, and prepares article bodies
for display.
"""

import html
import logging
import re
from collections import Counter
from typing import Dict, List, Optional, Tuple
from urllib.parse import quote

import mistune

from models import Article, ArticleView, LoadResult
from services.content_loader import ContentLoader

logger = logging.getLogger(__name__)

ATTACHMENT_REF = re.compile(r'^\[\[([^\[\]]+)\]\]$')
EMBED_REF = re.compile(r'!\[\[([^\[\]|]+)(?:\|([^\[\]]*))?\]\]')
HEADING = re.compile(r'^(#{2,3})\s+(.+?)\s*#*\s*$')
FENCE = re.compile(r'^\s*(```|~~~)')
TAG = re.compile(r'<[^>]+>')


def slugify(text: str) -> str:
    text = text.lower()
    text = re.sub(r"[^\w\s-]", "", text)
    return re.sub(r"[\s_]+", "-", text).strip("-")


class _AnchorTracker:
    """Hands out unique heading anchors in document order."""

    def __init__(self):
        self.seen = Counter()

    def anchor_for(self, text: str) -> str:
        base = slugify(text) or 'section'
        count = self.seen[base]
        self.seen[base] += 1
        return base if count == 0 else f"{base}-{count}"


class AnchoredHeadingRenderer(mistune.HTMLRenderer):
    """HTML renderer that gives level 2 and 3 headings an id for the TOC."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.anchors = _AnchorTracker()

    def heading(self, text, level, **attrs):
        if level not in (2, 3):
            return super().heading(text, level, **attrs)
        plain = html.unescape(TAG.sub('', text))
        anchor = self.anchors.anchor_for(plain)
        return f'<h{level} id="{anchor}">{text}</h{level}>\n'


class BlogService:
    """Service for publishing articles loaded from the content directory."""

    def __init__(self, loader: ContentLoader, attachments_url: str = '/attachments',
                 include_drafts: bool = False, words_per_minute: int = 200):
        """
        Initialize the blog service.

        Args:
            loader: ContentLoader pointed at the articles directory
            attachments_url: URL prefix attachment references resolve under
            include_drafts: Whether `draft: true` articles are listed
            words_per_minute: Reading speed used for reading time
        """
        self.loader = loader
        self.attachments_url = attachments_url.rstrip('/')
        self.include_drafts = include_drafts
        self.words_per_minute = words_per_minute

    def load(self) -> LoadResult:
        """Load every article from disk."""
        return self.loader.load_all()

    def is_published(self, article: Article) -> bool:
        """A missing draft flag counts as published."""
        return self.include_drafts or not article.is_draft

    def get_published_articles(self, result: Optional[LoadResult] = None) -> List[Article]:
        """
        Published articles, newest first.

        Undated articles go last, ordered by title.
        """
        if result is None:
            result = self.load()
        published = [a for a in result.articles if self.is_published(a)]
        dated = sorted(
            (a for a in published if a.date is not None),
            key=lambda a: (a.date, a.slug),
            reverse=True
        )
        undated = sorted(
            (a for a in published if a.date is None),
            key=lambda a: a.display_title.lower()
        )
        return dated + undated

    def get_article(self, slug: str, articles: Optional[List[Article]] = None) -> Optional[Article]:
        """Find a published article by slug."""
        if articles is None:
            articles = self.get_published_articles()
        return next((a for a in articles if a.slug == slug), None)

    def get_articles_by_tag(self, tag: str, articles: Optional[List[Article]] = None) -> List[Article]:
        """Published articles carrying `tag` (case-insensitive)."""
        if articles is None:
            articles = self.get_published_articles()
        wanted = tag.lower()
        return [a for a in articles if wanted in {t.lower() for t in a.tags or ()}]

    def get_articles_by_category(self, category: str,
                                 articles: Optional[List[Article]] = None) -> List[Article]:
        """Published articles in `category` (case-insensitive)."""
        if articles is None:
            articles = self.get_published_articles()
        wanted = category.lower()
        return [a for a in articles if wanted in {c.lower() for c in a.categories or ()}]

    def get_tag_counts(self, articles: Optional[List[Article]] = None) -> List[Tuple[str, int]]:
        """Tag vocabulary with article counts, most used first."""
        if articles is None:
            articles = self.get_published_articles()
        counts = Counter(t for a in articles for t in a.tags or ())
        return sorted(counts.items(), key=lambda item: (-item[1], item[0].lower()))

    def get_category_counts(self, articles: Optional[List[Article]] = None) -> List[Tuple[str, int]]:
        """Category vocabulary with article counts, most used first."""
        if articles is None:
            articles = self.get_published_articles()
        counts = Counter(c for a in articles for c in a.categories or ())
        return sorted(counts.items(), key=lambda item: (-item[1], item[0].lower()))

    def get_latest_article(self, articles: Optional[List[Article]] = None) -> Optional[Article]:
        """Get the most recent published article."""
        if articles is None:
            articles = self.get_published_articles()
        return articles[0] if articles else None

    def get_prev_next_articles(self, article: Article,
                               articles: Optional[List[Article]] = None
                               ) -> Tuple[Optional[Article], Optional[Article]]:
        """
        Get older and newer neighbours for navigation.

        Args:
            article: The article being displayed
            articles: Published articles, newest first

        Returns:
            Tuple of (older_article, newer_article), either can be None
        """
        if articles is None:
            articles = self.get_published_articles()
        slugs = [a.slug for a in articles]
        if article.slug not in slugs:
            return None, None

        index = slugs.index(article.slug)
        older = articles[index + 1] if index + 1 < len(articles) else None
        newer = articles[index - 1] if index > 0 else None
        return older, newer

    def calculate_reading_time(self, text: str) -> int:
        """
        Calculate estimated reading time based on word count.

        Args:
            text: Article content

        Returns:
            Estimated reading time in minutes (minimum 1)
        """
        words = len(text.split())
        return max(1, round(words / self.words_per_minute))

    def get_excerpt(self, text: str, sentence_count: int = 2) -> str:
        """
        Extract an excerpt from the prose of a markdown body.

        Headings, code blocks, images and list markers are skipped.

        Args:
            text: Markdown body
            sentence_count: Number of sentences to include

        Returns:
            Excerpt string (max 200 characters)
        """
        prose = ' '.join(self._prose_lines(text))
        sentences = re.split(r'(?<=[.!?])\s+', prose.strip())
        excerpt = ' '.join(sentences[:sentence_count])
        return (excerpt[:197] + '...') if len(excerpt) > 200 else excerpt

    def resolve_image(self, ref: Optional[str]) -> Optional[str]:
        """
        Turn an image reference into a URL.

        `[[attachments/x.png]]` resolves under the attachments URL; absolute
        URLs and site paths pass through unchanged.
        """
        if not ref:
            return None
        ref = ref.strip()
        match = ATTACHMENT_REF.match(ref)
        if match:
            return f"{self.attachments_url}/{quote(match.group(1).strip())}"
        if re.match(r'^(https?:)?//', ref) or ref.startswith('/'):
            return ref
        return f"{self.attachments_url}/{quote(ref)}"

    def render_body(self, text: str) -> str:
        """Render a markdown body to HTML, expanding `![[file]]` embeds first."""
        def embed(match):
            target = match.group(1).strip()
            alt = (match.group(2) or target).strip()
            return f"![{alt}]({self.attachments_url}/{quote(target)})"

        markdown = mistune.create_markdown(
            renderer=AnchoredHeadingRenderer(escape=False),
            plugins=['strikethrough', 'table']
        )
        return markdown(EMBED_REF.sub(embed, text))

    def get_table_of_contents(self, text: str) -> List[Dict]:
        """
        Level 2 and 3 headings with the anchors `render_body` assigns.

        Returns:
            List of {"level", "title", "anchor"} dicts in document order
        """
        toc = []
        anchors = _AnchorTracker()
        in_fence = False
        for line in text.splitlines():
            if FENCE.match(line):
                in_fence = not in_fence
                continue
            if in_fence:
                continue
            match = HEADING.match(line)
            if match:
                title = self._strip_inline_markdown(match.group(2))
                toc.append({
                    "level": len(match.group(1)),
                    "title": title,
                    "anchor": anchors.anchor_for(title)
                })
        return toc

    def enrich_article(self, article: Article) -> ArticleView:
        """
        Populate display data for an article.

        Args:
            article: Loaded article

        Returns:
            ArticleView with rendered HTML, reading time, excerpt and TOC
        """
        return ArticleView(
            article=article,
            html=self.render_body(article.body),
            excerpt=self.get_excerpt(article.body),
            reading_time=self.calculate_reading_time(article.body),
            cover_image_url=self.resolve_image(article.image),
            toc=self.get_table_of_contents(article.body)
        )

    def summarize(self, article: Article) -> ArticleView:
        """Listing data only; skips rendering the body."""
        return ArticleView(
            article=article,
            excerpt=self.get_excerpt(article.body),
            reading_time=self.calculate_reading_time(article.body),
            cover_image_url=self.resolve_image(article.image)
        )

    def _prose_lines(self, text: str) -> List[str]:
        lines = []
        in_fence = False
        for line in text.splitlines():
            if FENCE.match(line):
                in_fence = not in_fence
                continue
            stripped = line.strip()
            if in_fence or not stripped:
                continue
            if stripped.startswith(('#', '![', '|', '<', '---')):
                continue
            stripped = re.sub(r'^([-*+]|\d+\.|>)\s+', '', stripped)
            lines.append(self._strip_inline_markdown(stripped))
        return lines

    @staticmethod
    def _strip_inline_markdown(text: str) -> str:
        text = re.sub(r'!?\[([^\]]*)\]\([^)]*\)', r'\1', text)
        text = re.sub(r'\[\[([^\]|]+)(?:\|([^\]]*))?\]\]', lambda m: m.group(2) or m.group(1), text)
        text = re.sub(r'(\*\*|__|`)', '', text)
        return text.strip()
