"""Tests for note name display helpers."""

import pytest

from temperament.notation import format_cents, prettify_note_name


class TestPrettifyNoteName:
    """Tests for prettify_note_name."""

    @pytest.mark.parametrize("name, expected", [
        ("C", "C"),
        ("C{sharp}", "C♯"),
        ("E{flat}", "E♭"),
        ("B{natural}", "B♮"),
        ("F{double-sharp}", "F𝄪"),
        ("B{double-flat}", "B𝄫"),
        ("E{flat}{flat}", "E♭♭"),
        ("{sharp}C{sharp}", "♯C♯"),
    ])
    def test_known_tags(self, name, expected):
        assert prettify_note_name(name) == expected

    def test_unknown_tag_kept(self):
        assert prettify_note_name("C{half-sharp}") == "C{half-sharp}"

    def test_symbols_untouched(self):
        assert prettify_note_name("F♯") == "F♯"


class TestFormatCents:
    """Tests for format_cents."""

    def test_positive(self):
        assert format_cents(12.34) == "+12.3¢"

    def test_negative(self):
        assert format_cents(-4) == "-4.0¢"

    def test_zero(self):
        assert format_cents(0) == "+0.0¢"

    def test_tiny_negative_is_zero(self):
        assert format_cents(-0.01) == "+0.0¢"
