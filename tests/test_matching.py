"""Tests for text normalization and query matching."""

import unicodedata

import pytest

from tab_query.matching import MatchEngine, SearchMethod
from tab_query.models import PinnedTab, SpaceRecord, TopAppTab
from tab_query.utils.text import normalize


class TestNormalize:
    """Tests for title normalization."""

    def test_spacing_dakuten_composes(self):
        """Test that a kana followed by U+309B composes into the voiced kana."""
        assert normalize("\u304b\u309b") == "\u304c"

    def test_spacing_handakuten_composes(self):
        """Test that a kana followed by U+309C composes into the semi-voiced kana."""
        assert normalize("\u306f\u309c") == "\u3071"

    def test_equals_combining_form(self):
        """Test parity with titles already using combining marks."""
        title = "\u30c6\u309b\u30b9\u30c8\u309c\u306f"
        replaced = title.replace("\u309b", "\u3099").replace("\u309c", "\u309a")
        assert normalize(title) == unicodedata.normalize("NFC", replaced)

    def test_decomposed_and_precomposed_equal(self):
        """Test that decomposed and precomposed spellings compare equal."""
        assert normalize("\u304c") == normalize("\u304b\u3099")

    @pytest.mark.parametrize("value", [None, 42, b"bytes", ["a"]])
    def test_non_string_yields_empty(self, value):
        """Test that non-string input never raises."""
        assert normalize(value) == ""


class TestSubstringMatch:
    """Tests for the substring strategy."""

    @pytest.fixture
    def engine(self):
        return MatchEngine(SearchMethod.SUBSTRING)

    def test_title_case_insensitive(self, engine):
        """Test matching part of a title regardless of case."""
        assert engine.matches("hub pr", "GitHub PR #42")

    def test_url_match(self, engine):
        """Test matching on the URL."""
        assert engine.matches("example.com", "Unrelated", ["https://example.com"])

    def test_whole_query_must_be_contiguous(self, engine):
        """Test that substring matching does not split the query."""
        assert not engine.matches("github 42", "GitHub PR #42")

    def test_title_is_normalized(self, engine):
        """Test that a decomposed title matches a composed query."""
        assert engine.matches("\u304c", "\u304b\u309b\u3044\u3069")

    def test_other_fields_not_normalized(self, engine):
        """Test that only the title is Unicode-normalized."""
        assert not engine.matches("\u304c", "Title", ["\u304b\u309b"])

    def test_record_space_title(self, engine):
        """Test that a space tab matches on its space title."""
        record = PinnedTab(title="Docs", url="https://docs", space_index=0, space_title="Work", tab_index=0)
        assert engine.matches_record(record, "work")


class TestTokenizedMatch:
    """Tests for the tokenized strategy."""

    @pytest.fixture
    def engine(self):
        return MatchEngine(SearchMethod.TOKENIZED)

    def test_all_tokens_required(self, engine):
        """Test AND semantics across tokens."""
        assert engine.matches("github 42", "GitHub PR #42")
        assert not engine.matches("github 43", "GitHub PR #42")

    def test_tokens_across_fields(self, engine):
        """Test that each token may match a different field."""
        assert engine.matches("pr example", "GitHub PR", ["https://example.com"])

    def test_token_missing_everywhere(self, engine):
        """Test that a token absent from all fields fails the match."""
        assert not engine.matches("foo bar", "foo", ["https://foo.example"])

    def test_extra_whitespace(self, engine):
        """Test that repeated whitespace does not create empty tokens."""
        assert engine.matches("  git   hub ", "GitHub")

    def test_scenario_git(self, engine):
        """Test that 'git' keeps only the GitHub record."""
        records = [
            TopAppTab(title="GitHub PR #42", url="https://example.org/42", tab_index=0),
            TopAppTab(title="Unrelated", url="https://example.com", tab_index=1),
        ]
        assert [r.title for r in engine.filter_records(records, "git")] == ["GitHub PR #42"]

    def test_space_record_matches_title_only(self, engine):
        """Test that spaces are searched by title."""
        assert engine.matches_record(SpaceRecord(title="Personal", space_index=1), "pers")
        assert not engine.matches_record(SpaceRecord(title="Personal", space_index=1), "work")

    def test_record_kept_for_subtitle_tokens(self, engine):
        """Test that a token found only in a possible subtitle keeps the record."""
        record = PinnedTab(title="Docs", url="https://docs", space_index=0, space_title="Work", tab_index=0)
        assert not engine.matches_record(record, "pinned docs")
        assert engine.matches_record(record, "pinned docs", ["Pinned Tab in 'Work': https://docs"])

    def test_filter_records_with_subtitles(self, engine):
        """Test that the subtitle callable is applied per record."""
        records = [
            TopAppTab(title="Mail", url="https://mail", tab_index=0),
            SpaceRecord(title="Work", space_index=0),
        ]
        kept = engine.filter_records(records, "space", lambda r: ["Space"] if isinstance(r, SpaceRecord) else [])
        assert kept == [records[1]]


class TestMethodSelection:
    """Tests for choosing a strategy."""

    def test_from_string(self):
        """Test that config strings select the strategy."""
        assert MatchEngine("substring").method is SearchMethod.SUBSTRING
        assert MatchEngine("tokenized").method is SearchMethod.TOKENIZED

    def test_unknown_method(self):
        """Test that unknown strategies are rejected."""
        with pytest.raises(ValueError):
            MatchEngine("fuzzy")
