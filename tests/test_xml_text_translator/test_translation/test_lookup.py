"""Tests for table-driven translation and entity tables."""

import pytest

from xml_text_translator.translation.entities import (
    APOS_ESCAPE,
    APOS_UNESCAPE,
    BASIC_ESCAPE,
    BASIC_UNESCAPE,
    invert,
)
from xml_text_translator.translation.lookup import LookupTranslator


class TestEntityTables:
    """Tests for the XML entity tables."""

    def test_basic_escape_entries(self):
        """Test the four markup characters."""
        assert dict(BASIC_ESCAPE) == {
            '"': "&quot;",
            "&": "&amp;",
            "<": "&lt;",
            ">": "&gt;",
        }
        assert dict(APOS_ESCAPE) == {"'": "&apos;"}

    def test_invert(self):
        """Test that unescape tables mirror escape tables."""
        assert dict(BASIC_UNESCAPE)["&amp;"] == "&"
        assert dict(APOS_UNESCAPE) == {"&apos;": "'"}
        assert invert(invert(BASIC_ESCAPE)) == BASIC_ESCAPE


class TestLookupTranslator:
    """Tests for LookupTranslator."""

    def test_basic_escape(self):
        """Test replacing markup characters."""
        translator = LookupTranslator(BASIC_ESCAPE)
        assert translator.translate('a<b & "c">') == "a&lt;b &amp; &quot;c&quot;&gt;"

    def test_longest_match_first(self):
        """Test that longer sequences win over their prefixes."""
        translator = LookupTranslator([("a", "1"), ("ab", "2")])
        assert translator.translate("abac") == "21c"

    def test_candidate_longer_than_remaining_input(self):
        """Test matching near the end of input."""
        translator = LookupTranslator([("a", "1"), ("ab", "2")])
        assert translator.translate("ba") == "b1"

    def test_empty_table(self):
        """Test that an empty table never matches."""
        translator = LookupTranslator([])
        assert len(translator) == 0
        assert translator.translate("abc") == "abc"

    def test_empty_sequence_rejected(self):
        """Test error for empty lookup keys."""
        with pytest.raises(ValueError, match="must not be empty"):
            LookupTranslator([("", "x")])

    def test_surrogate_pair_key_counts_as_one_codepoint(self):
        """Test that a pair key advances past both halves."""
        translator = LookupTranslator([("\ud83d\ude00", ":)")])
        assert translator.translate("x\ud83d\ude00y") == "x:)y"

    def test_removal_mapping(self):
        """Test mapping a sequence to nothing."""
        translator = LookupTranslator([("\x00", "")])
        assert translator.translate("a\x00b\x00") == "ab"
