"""
Article models produced by the content loader.
"""
from dataclasses import dataclass, field
from datetime import date as date_type
from typing import Any, Dict, FrozenSet, List, Optional


@dataclass(frozen=True)
class Article:
    """
    One markdown article and its front-matter.

    Metadata fields are None when the key was absent from the file; the
    loader applies no defaults. ``fields_present`` lists the source keys
    that were actually written.
    """
    source: str
    slug: str
    body: str = ''

    title: Optional[str] = None
    date: Optional[date_type] = None
    categories: Optional[FrozenSet[str]] = None
    tags: Optional[FrozenSet[str]] = None
    image: Optional[str] = None
    image_og: Optional[bool] = None
    hide_cover_image: Optional[bool] = None
    hide_toc: Optional[bool] = None
    target_keyword: Optional[str] = None
    draft: Optional[bool] = None

    fields_present: FrozenSet[str] = frozenset()
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def is_draft(self) -> bool:
        """Only an explicit `draft: true` marks an article as a draft."""
        return self.draft is True

    @property
    def display_title(self) -> str:
        """Title for listings, falling back to the slug."""
        return self.title or self.slug.replace('-', ' ').title()

    @property
    def formatted_date(self) -> str:
        """Return human-readable date."""
        if self.date is None:
            return ''
        return self.date.strftime("%B %d, %Y")

    @property
    def sorted_tags(self) -> List[str]:
        return sorted(self.tags or ())

    @property
    def sorted_categories(self) -> List[str]:
        return sorted(self.categories or ())

    def has_field(self, key: str) -> bool:
        """True when `key` (source spelling, e.g. ``hideTOC``) was in the front-matter."""
        return key in self.fields_present


@dataclass
class ArticleView:
    """Article plus the display data the templates need."""
    article: Article
    html: str = ''
    excerpt: str = ''
    reading_time: int = 0
    cover_image_url: Optional[str] = None
    toc: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def show_cover_image(self) -> bool:
        return bool(self.cover_image_url) and self.article.hide_cover_image is not True

    @property
    def show_toc(self) -> bool:
        return bool(self.toc) and self.article.hide_toc is not True


@dataclass(frozen=True)
class LoadFailure:
    """A file that could not be loaded, with the error that stopped it."""
    source: str
    error: Exception

    @property
    def message(self) -> str:
        return str(self.error)


@dataclass
class LoadResult:
    """Outcome of loading a whole content directory."""
    articles: List[Article] = field(default_factory=list)
    failures: List[LoadFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def count(self) -> int:
        """Number of successfully loaded articles."""
        return len(self.articles)

    def get_article_by_slug(self, slug: str) -> Optional[Article]:
        """Find article by slug."""
        return next((a for a in self.articles if a.slug == slug), None)
