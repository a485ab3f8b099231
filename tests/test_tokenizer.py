"""Tests for tokenizer.py — term normalization."""
from __future__ import annotations

from guideline_help.tokenizer import tokenize


class TestTokenize:
    def test_lowercases(self):
        assert tokenize("GRADE Adolopment") == ["grade", "adolopment"]

    def test_punctuation_becomes_separator(self):
        assert tokenize("AGREE-II, e.g. PICO's") == ["agree", "pico"]

    def test_drops_tokens_of_two_chars_or_fewer(self):
        assert tokenize("a an the etd") == ["the", "etd"]

    def test_keeps_numbers_of_three_or_more_digits(self):
        assert tokenize("Form A-12 issued 2017") == ["form", "issued", "2017"]

    def test_keeps_duplicates_in_order(self):
        assert tokenize("adopt adapt adopt") == ["adopt", "adapt", "adopt"]

    def test_empty_and_whitespace(self):
        assert tokenize("") == []
        assert tokenize("   ") == []
        assert tokenize("\n\t") == []

    def test_non_ascii_letters_split_words(self):
        assert tokenize("Schünemann") == ["sch", "nemann"]

    def test_is_repeatable(self):
        text = "Certainty of evidence: moderate."
        assert tokenize(text) == tokenize(text)
