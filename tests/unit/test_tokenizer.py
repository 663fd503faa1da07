"""
Unit tests for the tokenizer.
"""

import pytest
from qsearch.tokenizer import Tokenizer, normalize


class TestTokenizer:
    """Test raw token boundaries (no normalisation)"""

    def test_alphanumeric_run_and_punctuation(self):
        """Alphanumeric runs merge, punctuation is a single-character token"""
        assert list(Tokenizer("abc123 def!")) == ["abc123", "def", "!"]

    def test_whitespace_never_emitted(self):
        """Leading, trailing and repeated whitespace is skipped"""
        assert list(Tokenizer("  \t foo \n\n bar  ")) == ["foo", "bar"]

    def test_empty_input(self):
        """Empty or whitespace-only input yields no tokens"""
        assert list(Tokenizer("")) == []
        assert list(Tokenizer("   \n\t")) == []

    def test_symbols_split_one_by_one(self):
        """Each non-alphanumeric character is its own token"""
        assert list(Tokenizer("a+=b")) == ["a", "+", "=", "b"]
        assert list(Tokenizer("...")) == [".", ".", "."]

    def test_numbers_are_alphanumeric_runs(self):
        """Digits are consumed by the alphanumeric branch"""
        assert list(Tokenizer("15.3 v2")) == ["15", ".", "3", "v2"]

    def test_unicode_letters(self):
        """Non-ASCII letters count as alphanumeric"""
        assert list(Tokenizer("café naïve")) == ["café", "naïve"]

    def test_no_empty_tokens(self):
        """Tokens are never empty"""
        tokens = list(Tokenizer("user@example.com, path/to/file; x"))
        assert tokens
        assert all(tokens)

    def test_single_pass(self):
        """Iterator is exhausted after one pass; rebuild to restart"""
        tokenizer = Tokenizer("one two")
        assert list(tokenizer) == ["one", "two"]
        assert list(tokenizer) == []
        assert list(Tokenizer("one two")) == ["one", "two"]

    def test_next_token_returns_none_when_exhausted(self):
        tokenizer = Tokenizer("x")
        assert tokenizer.next_token() == "x"
        assert tokenizer.next_token() is None


class TestNormalize:
    """Test upper-casing normalisation shared by indexing and querying"""

    def test_word_digits_and_symbol(self):
        assert normalize("abc123 def!") == ["ABC123", "DEF", "!"]

    def test_mixed_case(self):
        assert normalize("How To") == ["HOW", "TO"]

    def test_duplicates_preserved(self):
        assert normalize("cat Cat CAT") == ["CAT", "CAT", "CAT"]

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_blank(self, text):
        assert normalize(text) == []
