"""
Routes Package - Blueprint Registration

This package organizes Flask routes into modular blueprints.
"""

from .main import main_bp
from .blog import blog_bp

__all__ = ['main_bp', 'blog_bp']
