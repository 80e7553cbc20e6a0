# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the LMC line tokenizer.
#
# Test coverage includes:
#   - Whitespace splitting (spaces, tabs, mixed)
#   - Comment characters #, / and ; (with and without leading space)
#   - Token locations for diagnostics
#   - Whole-file line iteration
# =============================================================================

import pytest
from lmc.assembler.lexer import Lexer, Token, split_words, strip_comment, tokenize_line
from lmc.errors import SourceLocation


# =============================================================================
# Basic Splitting Tests
# =============================================================================

class TestSplitWords:
    """Test splitting a line into words."""

    def test_empty_line(self):
        """Empty lines should produce no words."""
        assert split_words("") == []

    def test_whitespace_only(self):
        """Lines with only whitespace should produce no words."""
        assert split_words("   \t   ") == []

    def test_single_word(self):
        assert split_words("HLT") == ["HLT"]

    def test_label_mnemonic_parameter(self):
        assert split_words("loop  LDA count") == ["loop", "LDA", "count"]

    def test_tabs_and_spaces(self):
        """Tabs and runs of spaces are equivalent separators."""
        assert split_words("\tloop\t \tBRA  loop  ") == ["loop", "BRA", "loop"]

    def test_trailing_newline(self):
        assert split_words("OUT\r\n") == ["OUT"]

    def test_more_than_three_words(self):
        """The tokenizer does not judge word counts."""
        assert split_words("a b c d e") == ["a", "b", "c", "d", "e"]


# =============================================================================
# Comment Tests
# =============================================================================

class TestComments:
    """Test the three comment introducers."""

    @pytest.mark.parametrize("char", ["#", "/", ";"])
    def test_full_line_comment(self, char):
        """A line starting with a comment character is empty."""
        assert split_words(f"{char} just a comment") == []

    @pytest.mark.parametrize("char", ["#", "/", ";"])
    def test_trailing_comment(self, char):
        assert split_words(f"  LDA x   {char} load x") == ["LDA", "x"]

    @pytest.mark.parametrize("char", ["#", "/", ";"])
    def test_comment_without_space(self, char):
        """The comment character need not follow whitespace."""
        assert split_words(f"LDA x{char}load") == ["LDA", "x"]

    def test_comment_inside_word(self):
        """A comment character in the middle of a word ends the word."""
        assert split_words("ab;cd ef") == ["ab"]

    def test_first_comment_character_wins(self):
        assert split_words("OUT / first ; second # third") == ["OUT"]

    def test_strip_comment(self):
        assert strip_comment("ADD one ; sum") == "ADD one "
        assert strip_comment("no comment") == "no comment"


# =============================================================================
# Token Location Tests
# =============================================================================

class TestTokenizeLine:
    """Test located tokens used for diagnostics."""

    def test_columns_are_one_based(self):
        tokens = tokenize_line("  loop LDA x", 4, "prog.lmc")
        assert [t.text for t in tokens] == ["loop", "LDA", "x"]
        assert [t.column for t in tokens] == [3, 8, 12]
        assert all(t.line == 4 for t in tokens)

    def test_location_property(self):
        token = tokenize_line("OUT", 7, "prog.lmc")[0]
        assert token.location == SourceLocation("prog.lmc", 7, 1)
        assert str(token.location) == "prog.lmc:7:1"

    def test_comment_only_line(self):
        assert tokenize_line("; nothing here", 1) == []

    def test_token_repr(self):
        token = Token("OUT", 3, 3, "demo.lmc")
        assert repr(token) == "Token('OUT', 3:3)"


# =============================================================================
# Whole-Source Tests
# =============================================================================

class TestLexer:
    """Test iterating over a whole source text."""

    def test_line_numbers(self):
        source = "INP\n\n# comment\nOUT\nHLT"
        lines = list(Lexer(source, "t.lmc").lines())
        assert [line.number for line in lines] == [1, 2, 3, 4, 5]
        assert [line.is_empty for line in lines] == [False, True, True, False, False]

    def test_line_text_preserved(self):
        lines = list(Lexer("  LDA x ; note\n").lines())
        assert lines[0].text == "  LDA x ; note"

    def test_crlf_line_endings(self):
        lines = list(Lexer("INP\r\nOUT\r\n").lines())
        assert [[t.text for t in line.tokens] for line in lines] == [["INP"], ["OUT"]]

    def test_old_mac_line_endings(self):
        lines = list(Lexer("INP\rOUT\r").lines())
        assert [line.text for line in lines] == ["INP", "OUT"]

    def test_empty_source(self):
        assert list(Lexer("").lines()) == []

    @pytest.mark.parametrize("sep", ["\f", "\v"])
    def test_form_feed_and_vertical_tab_separate_words(self, sep):
        """\\f and \\v are blanks inside a line, not line breaks."""
        lines = list(Lexer(f"LDA{sep}x\nHLT").lines())
        assert len(lines) == 2
        assert [t.text for t in lines[0].tokens] == ["LDA", "x"]
        assert lines[1].number == 2

    @pytest.mark.parametrize("char", ["\f", "\v", "\x1c", "\x1d", "\x1e", "\x85", "\u2028"])
    def test_only_newlines_count_lines(self, char):
        lines = list(Lexer(f"{char}OUT\nOUT 1").lines())
        assert len(lines) == 2
        assert lines[1].tokens[0].line == 2

    def test_tokenize_flat(self):
        tokens = Lexer("a LDA b\nHLT").tokenize()
        assert [t.text for t in tokens] == ["a", "LDA", "b", "HLT"]
        assert tokens[-1].line == 2

    def test_filename_in_tokens(self):
        tokens = Lexer("OUT", "demo.lmc").tokenize()
        assert tokens[0].filename == "demo.lmc"
