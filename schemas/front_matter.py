"""
Front-matter Validation Schema

Pydantic model describing the metadata block at the top of each article.
Keys use the camelCase spelling found in the source files; attribute names
are snake_case.
"""

import datetime as dt
from typing import Any, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator


class FrontMatterSchema(BaseModel):
    """
    Validation schema for an article's front-matter.

    Every field is optional. A key that is missing from the file stays None
    and is left out of ``model_fields_set``.
    """
    model_config = ConfigDict(
        extra='allow',
        frozen=True,
    )

    title: Optional[str] = None
    date: Optional[dt.date] = None
    categories: Optional[FrozenSet[str]] = None
    tags: Optional[FrozenSet[str]] = None
    image: Optional[str] = None
    image_og: Optional[StrictBool] = Field(default=None, alias='imageOG')
    hide_cover_image: Optional[StrictBool] = Field(default=None, alias='hideCoverImage')
    hide_toc: Optional[StrictBool] = Field(default=None, alias='hideTOC')
    target_keyword: Optional[str] = Field(default=None, alias='targetKeyword')
    draft: Optional[StrictBool] = None

    @field_validator('title', 'target_keyword', mode='before')
    @classmethod
    def scalar_to_text(cls, v: Any) -> Any:
        """YAML turns `title: 2024` into an int; keep it as text."""
        if v is None:
            return ''
        if isinstance(v, dt.date):
            return v.isoformat()
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator('date', mode='before')
    @classmethod
    def drop_time_component(cls, v: Any) -> Any:
        """Timestamps are truncated to their calendar date."""
        if isinstance(v, dt.datetime):
            return v.date()
        if isinstance(v, str):
            # A quoted timestamp skips the YAML resolver
            try:
                return dt.datetime.fromisoformat(v.strip()).date()
            except ValueError:
                return v.strip()
        return v

    @field_validator('categories', 'tags', mode='before')
    @classmethod
    def normalize_string_set(cls, v: Any) -> Any:
        """Accept a single string or a list; numbers become strings."""
        if v is None:
            return frozenset()
        if isinstance(v, str):
            v = [v]
        if isinstance(v, (list, tuple, set, frozenset)):
            items = []
            for item in v:
                if isinstance(item, (int, float)) and not isinstance(item, bool):
                    item = str(item)
                if isinstance(item, str):
                    item = item.strip()
                items.append(item)
            return items
        return v

    @field_validator('image', mode='before')
    @classmethod
    def fold_attachment_reference(cls, v: Any) -> Any:
        """
        Unquoted `[[path]]` is read by YAML as a nested list.

        Fold ``[['attachments/x.png']]`` back into ``'[[attachments/x.png]]'``.
        """
        if (
            isinstance(v, list) and len(v) == 1
            and isinstance(v[0], list) and len(v[0]) == 1
            and isinstance(v[0][0], str)
        ):
            return f"[[{v[0][0]}]]"
        if v == '':
            return None
        return v
