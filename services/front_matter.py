"""
Front-matter serialisation

Writes an Article back out in the same front-matter shape it was read from.
Only the keys that were present in the source are written.
"""

from typing import Any, Dict

import frontmatter

from models import Article
from services.content_loader import SOURCE_KEYS


def to_front_matter(article: Article) -> Dict[str, Any]:
    """
    Front-matter dict for an article, keyed by source spelling.

    Sets are emitted as sorted lists so the output is stable.
    """
    data = {}
    for name, key in SOURCE_KEYS.items():
        if key not in article.fields_present:
            continue
        value = getattr(article, name)
        if isinstance(value, frozenset):
            value = sorted(value)
        data[key] = value

    for key, value in article.extra.items():
        data[key] = value
    return data


def dumps(article: Article) -> str:
    """Full article text: delimiter, YAML block, delimiter, body."""
    post = frontmatter.Post(article.body)
    post.metadata.update(to_front_matter(article))
    return frontmatter.dumps(post, sort_keys=False)
