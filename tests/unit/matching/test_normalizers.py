"""Unit tests for patient_resolver.matching.normalizers module."""

import pytest

from patient_resolver.matching.normalizers import (
    CombinedInput,
    _number_word_pattern,
    collapse_whitespace,
    extract_name_and_room,
    looks_like_room,
    normalize_room,
)


class TestNormalizeRoom:
    """Test spoken and typed room normalization."""

    def test_spoken_and_typed_forms_agree(self):
        """Spoken number words and punctuated digits produce the same token."""
        assert normalize_room("2-A 208") == normalize_room("two a two oh eight")
        assert normalize_room("two A two oh eight") == "2A208"

    def test_strips_separators_and_uppercases(self):
        assert normalize_room("2a-312") == "2A312"
        assert normalize_room(" 4d 101 ") == "4D101"
        assert normalize_room("Room #415!") == "ROOM415"

    def test_homophones_fold_to_digits(self):
        """'to', 'too' and 'for' are treated as digits."""
        assert normalize_room("four oh for") == "404"
        assert normalize_room("to too two") == "222"

    def test_words_replaced_only_on_word_boundaries(self):
        """Number words inside other words are left alone."""
        assert normalize_room("tone") == "TONE"
        assert normalize_room("room to-oh-five") == "ROOM205"

    def test_empty_input(self):
        assert normalize_room("") == ""
        assert normalize_room(None) == ""
        assert normalize_room("  - ") == ""

    def test_custom_vocabulary(self):
        """The number-word vocabulary is configurable data."""
        assert normalize_room("two", {}) == "TWO"
        assert normalize_room("ten oh", {"ten": "10"}) == "10OH"

    def test_vocabulary_patterns_are_reused(self):
        """Repeated calls with one vocabulary compile its pattern once."""
        _number_word_pattern.cache_clear()
        for _ in range(3):
            assert normalize_room("ten oh", {"ten": "10", "oh": "0"}) == "100"
        info = _number_word_pattern.cache_info()
        assert info.misses == 1
        assert info.hits == 2
        assert info.maxsize is not None


class TestLooksLikeRoom:
    """Test the room-shape classifier."""

    @pytest.mark.parametrize("text", ["208", "2A-312", "A3", "12B", "2a312", " 2A 208 ", "B-4"])
    def test_room_shaped(self, text):
        assert looks_like_room(text) is True

    @pytest.mark.parametrize("text", ["Sarah", "Sarah Johnson", "Sarah 208", "2AB3", "", "two oh eight", "-"])
    def test_not_room_shaped(self, text):
        assert looks_like_room(text) is False

    def test_none_input(self):
        assert looks_like_room(None) is False


class TestExtractNameAndRoom:
    """Test splitting of '<name> in <room>' input."""

    def test_simple_combined_input(self):
        assert extract_name_and_room("Sarah in 208") == CombinedInput(name="Sarah", room="208")

    def test_multi_word_name_and_case_insensitive_keyword(self):
        result = extract_name_and_room("Maria Santos IN 2B-415")
        assert result.name == "Maria Santos"
        assert result.room == "2B-415"

    def test_trailing_token_must_be_room_shaped(self):
        assert extract_name_and_room("Sarah in bed") is None

    def test_not_a_combined_phrase(self):
        assert extract_name_and_room("Sarah Johnson") is None
        assert extract_name_and_room("208") is None
        assert extract_name_and_room("in 208") is None

    def test_empty_input(self):
        assert extract_name_and_room("") is None
        assert extract_name_and_room(None) is None


class TestCollapseWhitespace:

    def test_trims_and_collapses(self):
        assert collapse_whitespace("  Sarah \t  in\n208 ") == "Sarah in 208"

    def test_empty(self):
        assert collapse_whitespace("   ") == ""
        assert collapse_whitespace(None) == ""
