"""
Unit Tests for front-matter schema and serialisation

Tests schemas/front_matter.py validation rules and services/front_matter.py
round-tripping.
"""

from datetime import date

import pytest
from pydantic import ValidationError

from schemas.front_matter import FrontMatterSchema
from services import front_matter


class TestFrontMatterSchema:
    """Test the pydantic front-matter schema directly."""

    def test_aliases_accepted(self):
        """Test: camelCase source keys populate snake_case attributes."""
        schema = FrontMatterSchema.model_validate({'hideTOC': True, 'targetKeyword': 'kw'})

        assert schema.hide_toc is True
        assert schema.target_keyword == 'kw'

    def test_unset_fields_not_in_fields_set(self):
        """Test: only keys given are recorded as set."""
        schema = FrontMatterSchema.model_validate({'title': 'x'})
        assert schema.model_fields_set == {'title'}

    def test_strict_booleans(self):
        """Test: non-boolean tokens are rejected for flags."""
        for value in ('maybe', 'false', 1, 0):
            with pytest.raises(ValidationError):
                FrontMatterSchema.model_validate({'draft': value})

    def test_numeric_title_kept_as_text(self):
        """Test: a numeric title becomes a string."""
        schema = FrontMatterSchema.model_validate({'title': 2024})
        assert schema.title == '2024'

    def test_single_tag_string(self):
        """Test: a bare string is treated as a one-item list."""
        schema = FrontMatterSchema.model_validate({'tags': 'solo'})
        assert schema.tags == frozenset({'solo'})

    def test_empty_tag_list(self):
        """Test: an empty key gives an empty set, not None."""
        schema = FrontMatterSchema.model_validate({'tags': None})
        assert schema.tags == frozenset()

    def test_extra_keys_allowed(self):
        """Test: unknown keys are kept on model_extra."""
        schema = FrontMatterSchema.model_validate({'series': 'Testing 101'})
        assert schema.model_extra == {'series': 'Testing 101'}


    def test_snake_case_key_is_not_an_alias(self):
        """Test: only the camelCase spelling fills a renamed field."""
        schema = FrontMatterSchema.model_validate({'hide_toc': True})

        assert schema.hide_toc is None
        assert 'hide_toc' not in schema.model_fields_set
        assert schema.model_extra == {'hide_toc': True}


class TestToFrontMatter:
    """Test converting articles back to front-matter dicts."""

    def test_only_present_fields(self, sample_article):
        """Test: absent fields are not written."""
        data = front_matter.to_front_matter(sample_article)

        assert set(data) == {'title', 'date', 'tags', 'draft'}
        assert 'hideTOC' not in data

    def test_sets_become_sorted_lists(self, sample_article):
        """Test: tags are emitted in sorted order."""
        data = front_matter.to_front_matter(sample_article)
        assert data['tags'] == ['a', 'b']

    def test_source_key_spelling(self, string_loader):
        """Test: aliased fields are written with their camelCase keys."""
        article = string_loader.parse_text('---\nhideCoverImage: true\ntargetKeyword: ""\n---\n')
        data = front_matter.to_front_matter(article)

        assert data == {'hideCoverImage': True, 'targetKeyword': ''}


class TestRoundTrip:
    """Test parse -> dumps -> parse keeps the same fields."""

    def test_sample_files_round_trip(self, content_loader):
        """Test: every sample file survives a round trip."""
        for article in content_loader.load_all().articles:
            text = front_matter.dumps(article)
            again = content_loader.parse_text(text, source=article.source)

            assert front_matter.to_front_matter(again) == front_matter.to_front_matter(article)
            assert again.body == article.body

    def test_round_trip_keeps_absence(self, string_loader):
        """Test: a missing draft flag stays missing after a round trip."""
        article = string_loader.parse_text('---\ntitle: "Hello"\n---\nWorld')
        again = string_loader.parse_text(front_matter.dumps(article))

        assert again.draft is None
        assert again.fields_present == frozenset({'title'})

    def test_round_trip_attachment_and_extra(self, string_loader):
        """Test: attachment references and unknown keys survive."""
        text = '---\nimage: "[[cover.png]]"\nseries: "Basics"\ndate: 2024-01-02\n---\nBody'
        article = string_loader.parse_text(text)
        again = string_loader.parse_text(front_matter.dumps(article))

        assert again.image == '[[cover.png]]'
        assert again.extra == {'series': 'Basics'}
        assert again.date == date(2024, 1, 2)

    def test_dumps_shape(self, string_loader):
        """Test: output starts and closes with delimiter lines."""
        article = string_loader.parse_text('---\ntitle: "Hello"\ndraft: false\n---\nWorld')
        text = front_matter.dumps(article)
        lines = text.splitlines()

        assert lines[0] == '---'
        assert '---' in lines[1:]
        assert lines[-1] == 'World'

    def test_round_trip_keeps_snake_case_key(self, string_loader):
        """Test: a snake_case key stays an unknown key with its spelling."""
        article = string_loader.parse_text('---\ntitle: x\nhide_toc: true\n---\n')

        assert article.hide_toc is None
        assert article.extra == {'hide_toc': True}

        text = front_matter.dumps(article)
        again = string_loader.parse_text(text)

        assert 'hide_toc: true' in text
        assert 'hideTOC' not in text
        assert again.hide_toc is None
        assert again.extra == {'hide_toc': True}
        assert again.fields_present == frozenset({'title', 'hide_toc'})
