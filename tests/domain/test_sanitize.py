"""Unit tests for shopper-input sanitization."""

import pytest

from storefront.domain.sanitize import (
    MAX_IDENTIFIER_LENGTH,
    MAX_NOTES_LENGTH,
    sanitize_identifier,
    sanitize_notes,
    strip_markup,
)


class TestStripMarkup:

    def test_removes_tags_and_trims(self):
        assert strip_markup("  <b>hej</b> ") == "hej"


class TestSanitizeIdentifier:

    @pytest.mark.parametrize("value", ["miniskotvaska", "mini-pouch", "blå", "item_2"])
    def test_accepts_slugs(self, value):
        assert sanitize_identifier(value) == value

    @pytest.mark.parametrize("value", ["", "   ", "a b", "x;drop", "../etc", None, 12])
    def test_rejects_everything_else(self, value):
        assert sanitize_identifier(value) is None

    def test_markup_stripped_before_check(self):
        assert sanitize_identifier("<i>noel</i>") == "noel"

    def test_length_limit(self):
        assert sanitize_identifier("a" * MAX_IDENTIFIER_LENGTH) is not None
        assert sanitize_identifier("a" * (MAX_IDENTIFIER_LENGTH + 1)) is None

    def test_custom_length_limit(self):
        assert sanitize_identifier("cs_test_" + "a" * 100, max_length=255) is not None


class TestSanitizeNotes:

    def test_none_passes_through(self):
        assert sanitize_notes(None) is None

    def test_blank_becomes_none(self):
        assert sanitize_notes("  <br/> ") is None

    def test_markup_stripped(self):
        assert sanitize_notes("Initialer <script>x</script>AB") == "Initialer xAB"

    def test_too_long_rejected(self):
        with pytest.raises(ValueError, match="exceed"):
            sanitize_notes("a" * (MAX_NOTES_LENGTH + 1))

    def test_non_string_rejected(self):
        with pytest.raises(ValueError, match="must be a string"):
            sanitize_notes(42)
