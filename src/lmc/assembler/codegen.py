"""
LMC Code Generator
==================

This module turns tokenized source lines into a 100-cell memory image.
It implements a two-pass assembly process:

Pass 1 (Layout)
---------------
- Classify each line as ``MNEMONIC [parameter]`` or
  ``label MNEMONIC [parameter]``
- Bind labels to the current program counter
- Emit the base value of every instruction (opcode x 100) or DAT word
- Record a pending reference for every operand still to be resolved

Pass 1 produces an immutable Draft: the draft cells, the label table,
the pending references and the diagnostics found so far.

Pass 2 (Resolution)
-------------------
``resolve_references`` is a pure function of (draft cells, labels,
references). Each operand is either an unsigned decimal literal or a
label name; its value is added onto the base value of its cell so that
opcode and operand share one three-digit word.

Both passes always run so that one assembly reports every problem. Any
diagnostic fails the whole assembly; a partial image is never returned.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence
import logging
import re

from lmc.errors import (
    AssemblerError,
    AssemblyFailedError,
    AssemblySyntaxError,
    DuplicateSymbolError,
    ErrorCollector,
    MissingOperandError,
    ProgramTooLongError,
    SourceLocation,
    UndefinedSymbolError,
    UnexpectedOperandError,
    ValueRangeError,
)
from lmc.assembler.lexer import SourceLine, Token
from lmc.cpu import (
    INSTRUCTION_TABLE,
    MAX_ADDRESS,
    MAX_VALUE,
    MEMORY_SIZE,
    Mnemonic,
    OperandRule,
    recognize_mnemonic,
)


logger = logging.getLogger(__name__)

_DECIMAL = re.compile(r"[0-9]+")


def is_decimal_literal(text: str) -> bool:
    """True if text is made only of ASCII decimal digits."""
    return _DECIMAL.fullmatch(text) is not None


# =============================================================================
# Assembly Records
# =============================================================================

@dataclass(frozen=True)
class Label:
    """
    Label table entry.

    Attributes:
        name: Label name (case-sensitive)
        address: Cell the label was bound to
        location: Where the label was defined
    """
    name: str
    address: int
    location: SourceLocation


@dataclass(frozen=True)
class PendingReference:
    """
    An operand waiting for pass 2.

    Attributes:
        address: Cell whose base value receives the operand
        token: Literal digits or label name as written
        location: Where the operand appeared
        source_line: Source text of that line, for diagnostics
    """
    address: int
    token: str
    location: SourceLocation
    source_line: Optional[str] = None


@dataclass(frozen=True)
class Draft:
    """
    Result of pass 1.

    Attributes:
        cells: 100 cells holding data words and instruction base values
        length: Number of cells emitted
        labels: Label name -> address
        references: Operands to resolve, in emission order
        errors: Diagnostics found while laying out the program
    """
    cells: tuple[int, ...]
    length: int
    labels: Mapping[str, int]
    references: tuple[PendingReference, ...]
    errors: tuple[AssemblerError, ...]


# =============================================================================
# Pass 2
# =============================================================================

def resolve_references(
    cells: Sequence[int],
    labels: Mapping[str, int],
    references: Iterable[PendingReference],
) -> tuple[tuple[int, ...], list[AssemblerError]]:
    """
    Add every pending operand onto its cell.

    Args:
        cells: Draft cells from pass 1 (not modified)
        labels: Label table from pass 1
        references: Pending references from pass 1

    Returns:
        (resolved cells, diagnostics). A reference that cannot be
        resolved leaves its cell at the base value.
    """
    resolved = list(cells)
    errors: list[AssemblerError] = []

    for ref in references:
        if is_decimal_literal(ref.token):
            value = int(ref.token)
            if value > MAX_VALUE:
                errors.append(ValueRangeError(
                    f'label "{ref.token}" is too large a number',
                    location=ref.location,
                    source_line=ref.source_line,
                ))
                continue
        else:
            address = labels.get(ref.token)
            if address is None:
                errors.append(UndefinedSymbolError(
                    ref.token,
                    location=ref.location,
                    source_line=ref.source_line,
                    similar_symbols=find_similar_labels(ref.token, labels),
                ))
                continue
            if address > MAX_ADDRESS:
                # reported, but the value is still added
                errors.append(ValueRangeError(
                    f'offset of label "{ref.token}" is too large ({address})',
                    location=ref.location,
                    source_line=ref.source_line,
                ))
            value = address

        combined = resolved[ref.address] + value
        if combined > MAX_VALUE:
            errors.append(ValueRangeError(
                f"operand {value} does not fit in the instruction cell "
                f"at address {ref.address:02d}",
                location=ref.location,
                source_line=ref.source_line,
            ))
            continue
        resolved[ref.address] = combined

    return tuple(resolved), errors


def find_similar_labels(name: str, labels: Iterable[str]) -> list[str]:
    """
    Find labels with similar names for error hints.

    Uses a simple edit distance heuristic.
    """
    name_lower = name.lower()
    similar = []

    for label in labels:
        label_lower = label.lower()
        if (
            label_lower == name_lower or
            abs(len(label) - len(name)) <= 1 and
            _edit_distance(name_lower, label_lower) <= 2
        ):
            similar.append(label)

    return similar[:3]


def _edit_distance(s1: str, s2: str) -> int:
    """Levenshtein edit distance between two strings."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    distances = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        new_distances = [i + 1]
        for j, c2 in enumerate(s2):
            if c1 == c2:
                new_distances.append(distances[j])
            else:
                new_distances.append(1 + min(
                    distances[j], distances[j + 1], new_distances[-1]
                ))
        distances = new_distances
    return distances[-1]


# =============================================================================
# Code Generator
# =============================================================================

class CodeGenerator:
    """
    Lays out and resolves one program.

    All assembly state (program counter, label table, pending references,
    diagnostics) lives on the instance; use a fresh generator per program.

    Usage:
        codegen = CodeGenerator()
        cells = codegen.generate(Lexer(source, "prog.lmc").lines())
        symbols = codegen.get_symbols()
    """

    def __init__(self):
        self._cells = [0] * MEMORY_SIZE
        self._pc = 0
        self._labels: dict[str, Label] = {}
        self._references: list[PendingReference] = []
        self._errors = ErrorCollector()
        self._length = 0

    # =========================================================================
    # Public Interface
    # =========================================================================

    def generate(self, lines: Iterable[SourceLine]) -> tuple[int, ...]:
        """
        Run both passes over the source lines.

        Args:
            lines: Tokenized source lines

        Returns:
            The 100 resolved cells

        Raises:
            AssemblyFailedError: If any diagnostic was produced
        """
        draft = self.layout(lines)
        cells, errors = resolve_references(draft.cells, draft.labels, draft.references)
        self._errors.extend(errors)
        logger.debug(
            f"Pass 2: {len(draft.references)} references, {len(errors)} errors"
        )

        if self._errors.has_errors():
            for error in self._errors.errors:
                logger.debug(f"Diagnostic: {error.message}")
            raise AssemblyFailedError(self._errors.errors, self._errors.report())

        self._cells = list(cells)
        return cells

    def layout(self, lines: Iterable[SourceLine]) -> Draft:
        """
        Pass 1: place every instruction and data word.

        Args:
            lines: Tokenized source lines

        Returns:
            Immutable Draft with the cells, labels, references and
            the diagnostics found in this pass
        """
        for line in lines:
            try:
                self._layout_line(line)
            except AssemblerError as e:
                self._errors.add(e)

        self._length = self._pc
        logger.debug(
            f"Pass 1: {self._pc} cells, {len(self._labels)} labels, "
            f"{len(self._references)} pending references"
        )

        return Draft(
            cells=tuple(self._cells),
            length=self._pc,
            labels=MappingProxyType(self.get_symbols()),
            references=tuple(self._references),
            errors=tuple(self._errors.errors),
        )

    def get_length(self) -> int:
        """Return the number of cells the program occupies."""
        return self._length

    def get_symbols(self) -> dict[str, int]:
        """Return the label table as name -> address."""
        return {name: label.address for name, label in self._labels.items()}

    def has_errors(self) -> bool:
        """Check if any errors occurred."""
        return self._errors.has_errors()

    def get_errors(self) -> list[AssemblerError]:
        """Return the collected diagnostics."""
        return list(self._errors.errors)

    def get_error_report(self) -> str:
        """Get formatted error report."""
        return self._errors.report()

    # =========================================================================
    # Pass 1 Internals
    # =========================================================================

    def _layout_line(self, line: SourceLine) -> None:
        """Classify one line and emit its cell."""
        tokens = line.tokens
        if not tokens:
            return

        parameter: Optional[Token] = None
        mnemonic = recognize_mnemonic(tokens[0].text)

        if mnemonic is not None:
            # no label
            if len(tokens) > 2:
                raise AssemblySyntaxError(
                    "more than two words on the line is not legal",
                    location=tokens[2].location,
                    source_line=line.text,
                )
            if len(tokens) == 2:
                parameter = tokens[1]

        elif len(tokens) < 2:
            raise AssemblySyntaxError(
                "a word by itself, which is not a mnemonic, is not legal",
                location=tokens[0].location,
                source_line=line.text,
            )

        else:
            mnemonic = recognize_mnemonic(tokens[1].text)
            if mnemonic is None:
                raise AssemblySyntaxError(
                    "a label must be followed by a mnemonic",
                    location=tokens[1].location,
                    source_line=line.text,
                )

            self._define_label(tokens[0], line)

            if len(tokens) > 3:
                raise AssemblySyntaxError(
                    "a mnemonic can be followed by at most one parameter",
                    location=tokens[3].location,
                    source_line=line.text,
                )
            if len(tokens) == 3:
                parameter = tokens[2]

        if self._pc >= MEMORY_SIZE:
            raise ProgramTooLongError(
                f"program too long; limit is {MEMORY_SIZE} instructions/data",
                location=tokens[0].location,
                source_line=line.text,
            )

        self._emit_instruction(mnemonic, parameter, line)

    def _define_label(self, token: Token, line: SourceLine) -> None:
        """Bind a label to the current program counter."""
        existing = self._labels.get(token.text)
        if existing is not None:
            # keep the first binding and still emit the line
            self._errors.add(DuplicateSymbolError(
                token.text,
                location=token.location,
                original_location=existing.location,
                source_line=line.text,
            ))
            return

        self._labels[token.text] = Label(token.text, self._pc, token.location)

    def _emit_instruction(
        self,
        mnemonic: Mnemonic,
        parameter: Optional[Token],
        line: SourceLine,
    ) -> None:
        """Emit one cell according to the instruction's parameter rule."""
        info = INSTRUCTION_TABLE[mnemonic]
        location = line.tokens[0].location

        if mnemonic is Mnemonic.DAT:
            self._emit_data(parameter, line)

        elif info.operand is OperandRule.REQUIRED:
            if parameter is None:
                raise MissingOperandError(
                    mnemonic.name, location=location, source_line=line.text
                )
            self._references.append(PendingReference(
                address=self._pc,
                token=parameter.text,
                location=parameter.location,
                source_line=line.text,
            ))
            self._emit(info.base)

        else:
            if parameter is not None:
                raise UnexpectedOperandError(
                    mnemonic.name, location=parameter.location, source_line=line.text
                )
            self._emit(info.base)

    def _emit_data(self, parameter: Optional[Token], line: SourceLine) -> None:
        """Emit a DAT word; no parameter means 0."""
        if parameter is None:
            self._emit(0)
            return

        if not is_decimal_literal(parameter.text) or int(parameter.text) > MAX_VALUE:
            raise ValueRangeError(
                "DAT supports numbers between 0 and 999",
                location=parameter.location,
                source_line=line.text,
            )
        self._emit(int(parameter.text))

    def _emit(self, value: int) -> None:
        """Store a value at the program counter and advance it."""
        self._cells[self._pc] = value
        self._pc += 1
