"""
Little Man Computer Emulator
============================

Runs assembled memory images on a model of the Little Man Computer:
100 decimal cells, one accumulator, an overflow flag and ten runtime
instructions.

Quick Start
-----------

    >>> from lmc.assembler import assemble
    >>> from lmc.emulator import Emulator, ScriptedIO
    >>> io = ScriptedIO([3, 4])
    >>> emu = Emulator(assemble('''
    ...         INP
    ...         STA a
    ...         INP
    ...         ADD a
    ...         OUT
    ...         HLT
    ... a       DAT
    ... '''), io)
    >>> result = emu.run()
    >>> io.outputs
    [7]

Module Structure
----------------

- `emulator.py`: Emulator class (high-level API) and EmulatorConfig
- `cpu.py`: fetch/decode/execute state machine
- `memory.py`: the 100-cell memory
- `io.py`: console and scripted INP/OUT collaborators
"""

from .cpu import LittleManCPU, CPUState
from .memory import Memory
from .io import IOPort, ConsoleIO, ScriptedIO, parse_input_token, DEFAULT_PROMPT
from .emulator import Emulator, EmulatorConfig, RunResult, StopReason

__all__ = [
    # Main API
    "Emulator",
    "EmulatorConfig",
    "RunResult",
    "StopReason",
    # Components
    "LittleManCPU",
    "CPUState",
    "Memory",
    # I/O
    "IOPort",
    "ConsoleIO",
    "ScriptedIO",
    "parse_input_token",
    "DEFAULT_PROMPT",
]
