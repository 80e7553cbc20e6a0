"""
Little Man Computer Assembler
=============================

Converts LMC assembly source into a 100-cell memory image for the
emulator.

Main Components
---------------
- **Assembler**: Main assembler class that orchestrates the assembly process
- **Lexer**: Splits source lines into words, dropping comments
- **CodeGenerator**: Two-pass layout and reference resolution
- **MemoryImage**: The resolved program handed to the emulator

Assembly Process
----------------
1. **Tokenizing (Lexer)**: each line becomes a list of words; ``#``, ``/``
   and ``;`` start a comment.
2. **Pass 1 (layout)**: labels are bound to addresses, base values are
   emitted and operands are recorded as pending references.
3. **Pass 2 (resolution)**: literals and label addresses are added onto
   their instruction cells.

Source Format
-------------
::

    [label] MNEMONIC [parameter]

    loop    LDA count   ; labels are case-sensitive
            sub ONE     # mnemonics are not
            BRZ done
            BRA loop
    done    HLT
    count   DAT 10
    ONE     DAT 1

Example Usage
-------------
>>> from lmc.assembler import assemble
>>> image = assemble("INP\\nOUT\\nHLT")
>>> image.cells[:3]
(800, 900, 0)
"""

from lmc.assembler.assembler import Assembler, MemoryImage, assemble, assemble_file
from lmc.assembler.lexer import Lexer, SourceLine, Token, split_words, tokenize_line
from lmc.assembler.codegen import (
    CodeGenerator,
    Draft,
    Label,
    PendingReference,
    resolve_references,
)
from lmc.cpu import Mnemonic, recognize_mnemonic

__all__ = [
    # Main class and functions
    "Assembler",
    "MemoryImage",
    "assemble",
    "assemble_file",
    # Lexer
    "Lexer",
    "SourceLine",
    "Token",
    "split_words",
    "tokenize_line",
    # Code generator
    "CodeGenerator",
    "Draft",
    "Label",
    "PendingReference",
    "resolve_references",
    # Instruction set
    "Mnemonic",
    "recognize_mnemonic",
]
