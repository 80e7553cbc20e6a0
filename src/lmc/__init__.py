"""
LMC - Little Man Computer Toolchain
===================================

This package assembles and runs programs for the Little Man Computer, a
teaching model of a decimal computer with 100 memory cells, one
accumulator and a handful of instructions.

Main Components
---------------
- **assembler**: two-pass assembler
    Converts mnemonic source (.lmc) into a 100-cell memory image

- **emulator**: fetch/decode/execute interpreter
    Runs a memory image with console or scripted input/output

- **cpu**: instruction set definitions shared by both

Quick Start
-----------
Assemble and run a program:
    >>> from lmc import assemble, Emulator, ScriptedIO
    >>> image = assemble('''
    ...         INP
    ...         STA 99
    ...         LDA 99
    ...         OUT
    ...         HLT
    ... ''')
    >>> io = ScriptedIO([7])
    >>> result = Emulator(image, io).run()
    >>> io.outputs
    [7]

Or use the command-line tool:
    $ lmc program.lmc
    $ lmc --show program.lmc

Version History
---------------
1.0.0 - Initial release with assembler, emulator and CLI
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from lmc.assembler import Assembler, MemoryImage, assemble, assemble_file
from lmc.cpu import Mnemonic, recognize_mnemonic
from lmc.emulator import (
    Emulator,
    EmulatorConfig,
    RunResult,
    StopReason,
    ConsoleIO,
    ScriptedIO,
)
from lmc.errors import (
    LMCError,
    AssemblerError,
    AssemblySyntaxError,
    MissingOperandError,
    UnexpectedOperandError,
    ValueRangeError,
    ProgramTooLongError,
    UndefinedSymbolError,
    DuplicateSymbolError,
    AssemblyFailedError,
    EmulatorError,
    InputFormatError,
    InputExhaustedError,
)

__all__ = [
    # Version info
    "__version__",
    # Assembler
    "Assembler",
    "MemoryImage",
    "assemble",
    "assemble_file",
    # Instruction set
    "Mnemonic",
    "recognize_mnemonic",
    # Emulator
    "Emulator",
    "EmulatorConfig",
    "RunResult",
    "StopReason",
    "ConsoleIO",
    "ScriptedIO",
    # Exception hierarchy
    "LMCError",
    "AssemblerError",
    "AssemblySyntaxError",
    "MissingOperandError",
    "UnexpectedOperandError",
    "ValueRangeError",
    "ProgramTooLongError",
    "UndefinedSymbolError",
    "DuplicateSymbolError",
    "AssemblyFailedError",
    "EmulatorError",
    "InputFormatError",
    "InputExhaustedError",
]
