"""
Models package for Testing Notes.

Provides the data models produced by the content loader.
"""
from .article import Article, ArticleView, LoadFailure, LoadResult

__all__ = [
    'Article',
    'ArticleView',
    'LoadFailure',
    'LoadResult',
]
