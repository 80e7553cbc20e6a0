"""
LMC Assembly Language Lexer
===========================

Splits assembly source into lines of whitespace-delimited words.

The language is line oriented:

    [label] MNEMONIC [parameter]

There are no operators, strings or punctuation, so a token is simply a
run of non-blank characters. A comment starts at the first ``#``, ``/``
or ``;`` and runs to the end of the line; the comment character does not
need to be preceded by whitespace (``LDA x;load`` yields ``LDA``, ``x``).

Example
-------
>>> from lmc.assembler.lexer import split_words, tokenize_line
>>> split_words("loop  LDA count   ; fetch")
['loop', 'LDA', 'count']
>>> tokenize_line("  OUT", 3, "demo.lmc")
[Token('OUT', 3:3)]
"""

from dataclasses import dataclass
from typing import Iterator
import re

from lmc.errors import SourceLocation


# Characters that start a comment anywhere on a line
COMMENT_CHARS = frozenset("#/;")

# C-locale whitespace; str.split() would also break on Unicode spaces
_WORD = re.compile(r"[^ \t\n\r\f\v]+")

# Only these end a line; \f, \v and Unicode separators stay inside it
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


# =============================================================================
# Token Data Classes
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single word from the source code.

    Attributes:
        text: The word as written
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    text: str
    line: int
    column: int
    filename: str

    def __repr__(self) -> str:
        return f"Token({self.text!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)


@dataclass(frozen=True)
class SourceLine:
    """
    One line of source with its tokens.

    Attributes:
        number: Line number (1-indexed)
        text: Raw line text without the line terminator
        tokens: Words on the line before any comment
    """
    number: int
    text: str
    tokens: tuple[Token, ...]

    @property
    def is_empty(self) -> bool:
        return not self.tokens


# =============================================================================
# Line Tokenizer
# =============================================================================

def strip_comment(line: str) -> str:
    """Return the part of a line before its first comment character."""
    for index, char in enumerate(line):
        if char in COMMENT_CHARS:
            return line[:index]
    return line


def split_words(line: str) -> list[str]:
    """
    Split one line into words, stopping at the first comment character.

    Never raises; a blank or fully commented line gives an empty list.
    """
    return _WORD.findall(strip_comment(line))


def tokenize_line(line: str, line_number: int, filename: str = "<input>") -> list[Token]:
    """
    Split one line into located tokens.

    Args:
        line: Source line text
        line_number: 1-based line number used in diagnostics
        filename: Source file name used in diagnostics

    Returns:
        Tokens in order of appearance
    """
    code = strip_comment(line)
    return [
        Token(match.group(), line_number, match.start() + 1, filename)
        for match in _WORD.finditer(code)
    ]


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes a whole source file, line by line.

    Usage:
        lexer = Lexer(source_text, "count.lmc")
        for line in lexer.lines():
            print(line.number, [t.text for t in line.tokens])

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

    def lines(self) -> Iterator[SourceLine]:
        """Yield every line of the source, including empty ones."""
        texts = _LINE_BREAK.split(self.source)
        if texts[-1] == "":
            # a final line break does not start another line
            texts.pop()
        for number, text in enumerate(texts, start=1):
            tokens = tuple(tokenize_line(text, number, self.filename))
            yield SourceLine(number, text, tokens)

    def tokenize(self) -> list[Token]:
        """Return every token of the source as a flat list."""
        return [token for line in self.lines() for token in line.tokens]
