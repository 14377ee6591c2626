"""
Content Loader - Parses front-matter markdown articles

Reads a directory of UTF-8 markdown files, each starting with a YAML
front-matter block, and turns them into Article records. A malformed file
fails on its own; the rest of the batch still loads.
"""

import logging
import re
from pathlib import Path
from typing import Iterator, Optional, Tuple, Union

import yaml
from frontmatter import YAMLHandler
from pydantic import ValidationError

from models import Article, LoadFailure, LoadResult
from schemas.front_matter import FrontMatterSchema

logger = logging.getLogger(__name__)

# Attribute name on the schema -> key as written in the file
SOURCE_KEYS = {
    name: (info.alias or name)
    for name, info in FrontMatterSchema.model_fields.items()
}


class ParseError(Exception):
    """Raised when an article's front-matter cannot be parsed."""

    def __init__(self, source: str, message: str, line: Optional[int] = None,
                 field: Optional[str] = None):
        self.source = source
        self.message = message
        self.line = line
        self.field = field
        super().__init__(str(self))

    def __str__(self) -> str:
        location = self.source if self.line is None else f"{self.source}:{self.line}"
        if self.field:
            return f"{location}: {self.field}: {self.message}"
        return f"{location}: {self.message}"


class ContentLoader:
    """Loads Article records from a directory of markdown files."""

    def __init__(self, content_dir: Union[str, Path], pattern: str = "*.md"):
        """
        Initialize the loader.

        Args:
            content_dir: Directory holding the article files
            pattern: Glob pattern selecting article files
        """
        self.content_dir = Path(content_dir)
        self.pattern = pattern
        self.handler = YAMLHandler()

    def parse_text(self, text: str, source: str = "<string>", slug: Optional[str] = None) -> Article:
        """
        Parse one article from an in-memory text blob.

        Args:
            text: Full file text (front-matter plus body)
            source: Identifier used in error messages
            slug: URL identifier; defaults to the stem of `source`

        Returns:
            Parsed Article

        Raises:
            ParseError: If the front-matter is missing or malformed
        """
        text = text.lstrip('\ufeff')

        if not self.handler.detect(text):
            raise ParseError(source, "missing front-matter delimiter on first line", line=1)

        try:
            fm_text, body = self.handler.split(text)
        except ValueError:
            raise ParseError(source, "front-matter is not closed by a delimiter line", line=1)

        # Lines before fm_text; the boundary match can swallow a blank line
        offset = text[:self.handler.FM_BOUNDARY.match(text).end()].count('\n')

        try:
            metadata = self.handler.load(fm_text)
        except yaml.YAMLError as e:
            line = None
            mark = getattr(e, 'problem_mark', None)
            if mark is not None:
                line = offset + mark.line + 1
            problem = getattr(e, 'problem', None) or str(e)
            raise ParseError(source, f"invalid front-matter: {problem}", line=line)
        except ValueError as e:
            # SafeLoader constructors (e.g. timestamps like 2024-02-30) raise plain ValueError
            key, index = self._locate_bad_value(fm_text)
            raise ParseError(
                source,
                f"invalid front-matter value: {e}",
                line=None if index is None else offset + index + 1,
                field=key,
            )

        if metadata is None:
            metadata = {}
        if not isinstance(metadata, dict):
            raise ParseError(source, "front-matter must be a list of key: value pairs", line=2)

        # YAML allows non-string keys (e.g. `2024: x`); the schema does not
        metadata = {str(k): v for k, v in metadata.items()}

        try:
            schema = FrontMatterSchema.model_validate(metadata)
        except ValidationError as e:
            error = e.errors()[0]
            key = str(error['loc'][0]) if error['loc'] else None
            raise ParseError(
                source,
                error['msg'],
                line=self._find_key_line(fm_text, key, offset),
                field=key,
            )

        values = {name: getattr(schema, name) for name in SOURCE_KEYS}
        present = frozenset(SOURCE_KEYS[name] for name in schema.model_fields_set)
        extra = dict(schema.model_extra or {})

        return Article(
            source=source,
            slug=slug or Path(source).stem,
            body=body.strip(),
            fields_present=present | frozenset(extra),
            extra=extra,
            **values,
        )

    def parse_file(self, path: Union[str, Path]) -> Article:
        """
        Read and parse one article file.

        Raises:
            ParseError: If the file can't be read as UTF-8 or is malformed
        """
        path = Path(path)
        source = self._source_name(path)
        try:
            text = path.read_text(encoding='utf-8')
        except UnicodeDecodeError as e:
            raise ParseError(source, f"file is not valid UTF-8 ({e.reason})")
        except OSError as e:
            raise ParseError(source, f"could not read file: {e.strerror or e}")

        return self.parse_text(text, source=source, slug=path.stem)

    def iter_paths(self) -> Iterator[Path]:
        """Article files under the content directory, in a stable order."""
        if not self.content_dir.is_dir():
            logger.warning(f"Content directory not found: {self.content_dir}")
            return
        paths = (p for p in self.content_dir.rglob(self.pattern) if p.is_file())
        yield from sorted(paths, key=lambda p: p.relative_to(self.content_dir).as_posix())

    def iter_articles(self) -> Iterator[Union[Article, LoadFailure]]:
        """
        Lazily parse every article file.

        Yields an Article per good file and a LoadFailure per bad one;
        a failure never stops the iteration.
        """
        for path in self.iter_paths():
            try:
                yield self.parse_file(path)
            except ParseError as e:
                logger.warning(f"Skipping article: {e}")
                yield LoadFailure(source=e.source, error=e)

    def load_all(self) -> LoadResult:
        """Load the whole directory, collecting failures alongside articles."""
        result = LoadResult()
        for item in self.iter_articles():
            if isinstance(item, LoadFailure):
                result.failures.append(item)
            else:
                result.articles.append(item)

        logger.info(
            f"Loaded {result.count} articles from {self.content_dir} "
            f"({len(result.failures)} failed)"
        )
        return result

    def _source_name(self, path: Path) -> str:
        """Path relative to the content directory when possible."""
        try:
            return path.resolve().relative_to(self.content_dir.resolve()).as_posix()
        except ValueError:
            return str(path)

    @staticmethod
    def _find_key_line(fm_text: str, key: Optional[str], offset: int = 0) -> Optional[int]:
        """File line number (1-based) where a top-level key is written."""
        if not key:
            return None
        pattern = re.compile(rf"""^['"]?{re.escape(key)}['"]?\s*:""")
        for index, line in enumerate(fm_text.splitlines()):
            if pattern.match(line):
                return offset + index + 1
        return None

    @staticmethod
    def _locate_bad_value(fm_text: str) -> Tuple[Optional[str], Optional[int]]:
        """
        Find the top-level key whose value fails YAML construction.

        Returns:
            Tuple of (key, 0-based line within fm_text), or (None, None)
        """
        loader = yaml.SafeLoader(fm_text)
        try:
            root = loader.get_single_node()
            if not isinstance(root, yaml.MappingNode):
                return None, None
            for key_node, value_node in root.value:
                try:
                    loader.construct_document(value_node)
                except ValueError:
                    return str(key_node.value), key_node.start_mark.line
        finally:
            loader.dispose()
        return None, None


def report_load_result(result: LoadResult, echo) -> int:
    """Write one line per failed file plus a summary; return the exit code."""
    for failure in result.failures:
        echo(f"FAILED {failure.message}")
    echo(f"{result.count} articles loaded, {len(result.failures)} failed")
    return 0 if result.ok else 1
