"""
LMC Toolchain Error Hierarchy
=============================

This module defines the exception hierarchy for the whole toolchain.
All exceptions inherit from LMCError, allowing callers to catch every
toolchain error with a single except clause if desired.

Exception Hierarchy
-------------------
LMCError (base)
├── AssemblerError (assembler-related)
│   ├── AssemblySyntaxError - wrong number of words on a line
│   ├── MissingOperandError - instruction needs a parameter
│   ├── UnexpectedOperandError - instruction takes no parameter
│   ├── ValueRangeError - literal or label offset out of range
│   ├── ProgramTooLongError - more than 100 cells emitted
│   ├── UndefinedSymbolError - reference to undefined label
│   ├── DuplicateSymbolError - label defined multiple times
│   └── AssemblyFailedError - aggregate of all diagnostics
└── EmulatorError (runtime)
    ├── InputFormatError - INP received a non-integer
    └── InputExhaustedError - INP reached end of input

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
            ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class LMCError(Exception):
    """
    Base exception for all toolchain errors.

        try:
            assemble_file("program.lmc")
        except LMCError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed, 0 when unknown)
    """
    filename: str
    line: int
    column: int = 0

    def __str__(self) -> str:
        if self.column > 0:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.filename}:{self.line}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(LMCError):
    """
    Base exception for all assembler diagnostics.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            count.lmc:4:13: error: label "LOOP" was not found
                        BRA LOOP
                            ^
            hint: did you mean 'loop'?
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class AssemblySyntaxError(AssemblerError):
    """
    A line does not have the shape ``[label] MNEMONIC [parameter]``.

    Examples:
        - more than two words after a leading mnemonic
        - a lone word that is not a mnemonic
        - a label not followed by a mnemonic
        - more than one parameter after a label and mnemonic
    """
    pass


class MissingOperandError(AssemblerError):
    """An instruction that needs a parameter (ADD, SUB, STA, ...) has none."""

    def __init__(
        self,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.mnemonic = mnemonic
        super().__init__(
            f"the {mnemonic} instruction requires a parameter (label reference)",
            location=location,
            source_line=source_line,
        )


class UnexpectedOperandError(AssemblerError):
    """An instruction that takes no parameter (HLT, INP, OUT) was given one."""

    def __init__(
        self,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.mnemonic = mnemonic
        super().__init__(
            f"the {mnemonic} instruction does not accept a parameter",
            location=location,
            source_line=source_line,
        )


class ValueRangeError(AssemblerError):
    """
    A number does not fit where it is used.

    Raised for:
    - DAT values outside 0..999
    - numeric operands larger than 999
    - label offsets larger than 99
    - operands that would push an instruction cell past 999
    """
    pass


class ProgramTooLongError(AssemblerError):
    """The program needs more cells than the machine has."""
    pass


class UndefinedSymbolError(AssemblerError):
    """
    Reference to an undefined label.

    Raised during the second pass when a label reference cannot be
    resolved. Similarly-named labels are suggested to help catch typos.
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
        similar_symbols: Optional[list[str]] = None,
    ):
        self.symbol = symbol
        self.similar_symbols = similar_symbols or []

        if not hint and self.similar_symbols:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_symbols[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f'label "{symbol}" was not found',
            location=location,
            hint=hint,
            source_line=source_line,
        )


class DuplicateSymbolError(AssemblerError):
    """
    Label defined more than once.

    The first definition is kept; the hint points back at it.
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.symbol = symbol
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{symbol}' was first defined at {original_location}"

        super().__init__(
            f'duplicate label "{symbol}"',
            location=location,
            hint=hint,
            source_line=source_line,
        )


class AssemblyFailedError(AssemblerError):
    """
    Raised once assembly finishes with one or more diagnostics.

    Attributes:
        errors: Every diagnostic collected during both passes
        report: The formatted report (same text as ``str(error)``)
    """

    def __init__(self, errors: list[AssemblerError], report: str):
        self.errors = list(errors)
        self.report = report
        super().__init__(report)

    def _format_message(self) -> str:
        return self.message


# =============================================================================
# Emulator Exceptions
# =============================================================================

class EmulatorError(LMCError):
    """Base exception for runtime faults."""
    pass


class InputFormatError(EmulatorError):
    """
    The INP instruction received something that is not an integer.

    Attributes:
        text: The offending input token
    """

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"invalid input {text!r}: expected an integer")


class InputExhaustedError(EmulatorError):
    """The INP instruction found no more input."""

    def __init__(self, message: str = "end of input reached while waiting for INP"):
        super().__init__(message)


# =============================================================================
# Error Collection for Multiple Error Reporting
# =============================================================================

class ErrorCollector:
    """
    Collects diagnostics for batch reporting.

    The assembler keeps going after an error so that a single run
    reports every problem in the source.

    Example:
        collector = ErrorCollector()
        collector.add(UndefinedSymbolError("loop"))
        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self):
        self.errors: list[AssemblerError] = []

    def add(self, error: AssemblerError) -> None:
        """Add a diagnostic to the collection."""
        self.errors.append(error)

    def extend(self, errors) -> None:
        """Add several diagnostics, keeping their order."""
        self.errors.extend(errors)

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def error_count(self) -> int:
        """Return the number of collected errors."""
        return len(self.errors)

    def report(self) -> str:
        """
        Format all errors for display.

        Returns:
            One block per error followed by a ``found N errors.`` summary
        """
        lines = [str(error) for error in self.errors]
        error_word = "error" if len(self.errors) == 1 else "errors"
        lines.append(f"found {len(self.errors)} {error_word}.")
        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all collected errors."""
        self.errors.clear()
