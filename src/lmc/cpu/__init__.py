"""
LMC CPU Package
===============

Instruction set definitions shared by the assembler (which encodes
instructions) and the emulator (which decodes them).

Usage:
    from lmc.cpu import Mnemonic, recognize_mnemonic, decode
"""

from lmc.cpu.instructions import (
    # Machine constants
    MEMORY_SIZE,
    MAX_ADDRESS,
    CELL_MODULUS,
    MAX_VALUE,
    OPCODE_DIVISOR,
    # Core types
    Mnemonic,
    OperandRule,
    InstructionInfo,
    # Instruction database
    INSTRUCTION_TABLE,
    MNEMONICS,
    # Lookup functions
    recognize_mnemonic,
    get_instruction_info,
    decode,
    format_instruction,
)

__all__ = [
    "MEMORY_SIZE",
    "MAX_ADDRESS",
    "CELL_MODULUS",
    "MAX_VALUE",
    "OPCODE_DIVISOR",
    "Mnemonic",
    "OperandRule",
    "InstructionInfo",
    "INSTRUCTION_TABLE",
    "MNEMONICS",
    "recognize_mnemonic",
    "get_instruction_info",
    "decode",
    "format_instruction",
]
