"""
Little Man Computer Instruction Set
===================================

Single source of truth for the machine's instruction set. The assembler
uses it to encode mnemonics and the emulator uses it to decode cells.

Encoding
--------
Every memory cell holds a decimal value between 0 and 999. When a cell is
executed it is split into two fields:

    opcode  = value // 100      (hundreds digit)
    operand = value % 100       (address 00-99)

| Mnemonic | Opcode | Base | Parameter |
|----------|--------|------|-----------|
| HLT      | 0      | 000  | forbidden |
| ADD      | 1      | 100  | required  |
| SUB      | 2      | 200  | required  |
| STA      | 3      | 300  | required  |
| LDA      | 4      | 400  | required  |
| BRA      | 5      | 500  | required  |
| BRZ      | 6      | 600  | required  |
| BRP      | 7      | 700  | required  |
| INP      | 8      | 800  | forbidden |
| OUT      | 9      | 900  | forbidden |
| DAT      | -      | n    | optional  |

DAT is a pseudo-op: it reserves one cell holding its literal (or 0).
"""

from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Optional


# =============================================================================
# Machine Constants
# =============================================================================

MEMORY_SIZE = 100   # number of cells
MAX_ADDRESS = MEMORY_SIZE - 1
CELL_MODULUS = 1000  # cell values are 0..999
MAX_VALUE = CELL_MODULUS - 1
OPCODE_DIVISOR = 100


class Mnemonic(IntEnum):
    """Instruction mnemonics; the value is the opcode digit."""
    HLT = 0
    ADD = 1
    SUB = 2
    STA = 3
    LDA = 4
    BRA = 5
    BRZ = 6
    BRP = 7
    INP = 8
    OUT = 9
    DAT = 10  # pseudo-op, never decoded from memory


class OperandRule(Enum):
    """Whether an instruction takes a parameter."""
    REQUIRED = auto()
    FORBIDDEN = auto()
    OPTIONAL = auto()


@dataclass(frozen=True)
class InstructionInfo:
    """
    Static description of one instruction.

    Attributes:
        mnemonic: The instruction
        base: Value emitted before the operand is added
        operand: Parameter rule
        description: One-line summary used in documentation and traces
    """
    mnemonic: Mnemonic
    base: int
    operand: OperandRule
    description: str


INSTRUCTION_TABLE: dict[Mnemonic, InstructionInfo] = {
    Mnemonic.HLT: InstructionInfo(Mnemonic.HLT, 0, OperandRule.FORBIDDEN, "halt"),
    Mnemonic.ADD: InstructionInfo(Mnemonic.ADD, 100, OperandRule.REQUIRED, "add memory to accumulator"),
    Mnemonic.SUB: InstructionInfo(Mnemonic.SUB, 200, OperandRule.REQUIRED, "subtract memory from accumulator"),
    Mnemonic.STA: InstructionInfo(Mnemonic.STA, 300, OperandRule.REQUIRED, "store accumulator"),
    Mnemonic.LDA: InstructionInfo(Mnemonic.LDA, 400, OperandRule.REQUIRED, "load accumulator"),
    Mnemonic.BRA: InstructionInfo(Mnemonic.BRA, 500, OperandRule.REQUIRED, "branch always"),
    Mnemonic.BRZ: InstructionInfo(Mnemonic.BRZ, 600, OperandRule.REQUIRED, "branch if zero"),
    Mnemonic.BRP: InstructionInfo(Mnemonic.BRP, 700, OperandRule.REQUIRED, "branch if no overflow"),
    Mnemonic.INP: InstructionInfo(Mnemonic.INP, 800, OperandRule.FORBIDDEN, "input to accumulator"),
    Mnemonic.OUT: InstructionInfo(Mnemonic.OUT, 900, OperandRule.FORBIDDEN, "output accumulator"),
    Mnemonic.DAT: InstructionInfo(Mnemonic.DAT, 0, OperandRule.OPTIONAL, "data word"),
}

MNEMONICS = frozenset(m.name for m in Mnemonic)

# ASCII-only upper-casing; str.upper() would also fold non-ASCII letters
_ASCII_UPPER = str.maketrans("abcdefghijklmnopqrstuvwxyz", "ABCDEFGHIJKLMNOPQRSTUVWXYZ")


# =============================================================================
# Lookup Functions
# =============================================================================

def recognize_mnemonic(token: str) -> Optional[Mnemonic]:
    """
    Match a token against the mnemonic set, ignoring ASCII case.

    Args:
        token: A single source word

    Returns:
        The matching Mnemonic, or None if the word is not a mnemonic

    Example:
        >>> recognize_mnemonic("lda")
        <Mnemonic.LDA: 4>
        >>> recognize_mnemonic("loop") is None
        True
    """
    name = token.translate(_ASCII_UPPER)
    if name in MNEMONICS:
        return Mnemonic[name]
    return None


def get_instruction_info(mnemonic: Mnemonic) -> InstructionInfo:
    """Return the table entry for a mnemonic."""
    return INSTRUCTION_TABLE[mnemonic]


def decode(value: int) -> tuple[int, int]:
    """Split a cell value into (opcode, operand)."""
    return value // OPCODE_DIVISOR, value % OPCODE_DIVISOR


def format_instruction(value: int) -> str:
    """
    Render a cell as assembly text.

    Cells that encode no instruction unambiguously (operand on INP/OUT,
    non-zero HLT) are shown as data.

    Example:
        >>> format_instruction(499)
        'LDA 99'
        >>> format_instruction(7)
        'DAT 7'
    """
    opcode, operand = decode(value)
    mnemonic = Mnemonic(opcode)
    rule = INSTRUCTION_TABLE[mnemonic].operand
    if rule is OperandRule.REQUIRED:
        return f"{mnemonic.name} {operand:02d}"
    if operand == 0:
        return mnemonic.name
    return f"DAT {value}"
