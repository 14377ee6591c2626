"""
Validation Schemas Package

Contains Pydantic models for validating article front-matter.
"""

from .front_matter import FrontMatterSchema

__all__ = ['FrontMatterSchema']
