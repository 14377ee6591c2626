"""
Services Package - Business Logic Layer

This package contains the content loader and the service classes built on
it, keeping route handlers thin and focused on HTTP concerns.
"""

from .content_loader import ContentLoader, ParseError, report_load_result
from .blog_service import BlogService
from . import front_matter

__all__ = ['ContentLoader', 'ParseError', 'report_load_result', 'BlogService', 'front_matter']
