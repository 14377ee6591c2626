"""
Pytest Configuration and Fixtures

Provides shared fixtures for testing the content loader, blog service and
Flask application using clean, isolated content directories.
"""

import os
import textwrap

import pytest

# config.py refuses to import without a secret key
os.environ.setdefault('SECRET_KEY', 'test-secret-key-for-pytest')
os.environ['FLASK_ENV'] = 'testing'


def write_article(directory, name, text):
    """Write an article file, dedenting the triple-quoted text."""
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text).lstrip('\n'), encoding='utf-8')
    return path


VALID_ARTICLES = {
    'first-post.md': '''
        ---
        title: "First post"
        date: 2024-01-15
        categories:
          - "Testing"
        tags:
          - "component-testing"
          - "basics"
        image: "[[cover.png]]"
        hideTOC: false
        draft: false
        ---

        First sentence of the first post. Second sentence here. Third one.

        ## Setup

        Some setup text.
        ''',
    'second-post.md': '''
        ---
        title: "Second post"
        date: 2024-02-20
        categories:
          - "Testing"
          - "Tooling"
        tags:
          - "component-testing"
          - "mocks"
        draft: false
        ---

        The second post body.
        ''',
    'third-post.md': '''
        ---
        title: "Third post"
        date: 2024-03-10
        tags:
          - "Mocks"
        ---

        No draft flag at all in this one.
        ''',
    'hidden-draft.md': '''
        ---
        title: "Hidden draft"
        date: 2024-04-01
        draft: true
        ---

        Not ready yet.
        ''',
}


@pytest.fixture
def content_dir(tmp_path):
    """A content directory holding four valid articles (one a draft)."""
    directory = tmp_path / 'articles'
    directory.mkdir()
    for name, text in VALID_ARTICLES.items():
        write_article(directory, name, text)
    return directory


@pytest.fixture
def add_article():
    """Helper for writing extra article files inside a test."""
    return write_article


@pytest.fixture
def attachments_dir(tmp_path):
    """Attachments directory with one small file."""
    directory = tmp_path / 'attachments'
    directory.mkdir()
    (directory / 'cover.png').write_bytes(b'\x89PNG\r\n\x1a\n')
    return directory


@pytest.fixture
def content_loader(content_dir):
    """ContentLoader over the sample content directory."""
    from services import ContentLoader
    return ContentLoader(content_dir)


@pytest.fixture
def string_loader(tmp_path):
    """ContentLoader for parse_text tests; its directory is empty."""
    from services import ContentLoader
    return ContentLoader(tmp_path)


@pytest.fixture
def blog_service(content_loader):
    """BlogService with drafts hidden."""
    from services import BlogService
    return BlogService(content_loader, attachments_url='/attachments')


@pytest.fixture
def sample_article():
    """Sample Article model for testing."""
    from datetime import date
    from models import Article
    return Article(
        source='sample.md',
        slug='sample',
        body='Hello world. This is a sample.',
        title='Sample',
        date=date(2024, 1, 15),
        tags=frozenset({'b', 'a'}),
        draft=False,
        fields_present=frozenset({'title', 'date', 'tags', 'draft'}),
    )


@pytest.fixture
def test_config(content_dir, attachments_dir):
    """Testing config pointed at the temporary content directories."""
    from config import TestingConfig

    class Config(TestingConfig):
        CONTENT_DIR = content_dir
        ATTACHMENTS_DIR = attachments_dir

    return Config


@pytest.fixture
def app(test_config):
    """
    Create and configure a Flask application instance for testing.

    Uses the application factory pattern to create a clean instance
    for each test function.
    """
    from app import create_app
    app = create_app(test_config)

    ctx = app.app_context()
    ctx.push()

    yield app

    ctx.pop()


@pytest.fixture
def client(app):
    """Flask test client for making HTTP requests."""
    return app.test_client()


@pytest.fixture
def runner(app):
    """Flask CLI test runner."""
    return app.test_cli_runner()
