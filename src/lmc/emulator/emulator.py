"""
LMC Emulator - Main Orchestrator
================================

This module provides the `Emulator` class that wires memory, CPU and I/O
together and offers a small API for running assembled programs.

The Emulator class:
- Loads a MemoryImage (or raw cell values) into memory
- Provides execution control (reset, step, run)
- Optionally logs a trace line for every executed instruction

Example usage:
    >>> from lmc.assembler import assemble
    >>> from lmc.emulator import Emulator, ScriptedIO
    >>> io = ScriptedIO([7])
    >>> emu = Emulator(assemble("INP\\nSTA 99\\nLDA 99\\nOUT\\nHLT"), io)
    >>> emu.run().reason
    <StopReason.HALT: 1>
    >>> io.outputs
    [7]
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional, Union
import logging
import os

from lmc.assembler.assembler import MemoryImage
from lmc.cpu import format_instruction
from lmc.emulator.cpu import CPUState, LittleManCPU
from lmc.emulator.io import DEFAULT_PROMPT, ConsoleIO, IOPort
from lmc.emulator.memory import Memory


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmulatorConfig:
    """
    Configuration for emulator runs.

    Attributes:
        max_steps: Stop after this many instructions. None (the default)
                   runs until HLT, forever if the program never halts.
        prompt: Prompt printed by the console before each INP
        trace: Log every executed instruction at DEBUG level

    Example:
        >>> config = EmulatorConfig(max_steps=10_000)
    """
    max_steps: Optional[int] = None
    prompt: str = DEFAULT_PROMPT
    trace: bool = False

    @classmethod
    def from_env(cls) -> "EmulatorConfig":
        """
        Create EmulatorConfig from environment variables.

        Environment variables (all optional):
            LMC_MAX_STEPS: Instruction limit (integer)
            LMC_PROMPT: INP prompt text
            LMC_TRACE: "1", "true" or "yes" enables tracing

        Raises:
            ValueError: If LMC_MAX_STEPS is not an integer
        """
        max_steps = os.environ.get("LMC_MAX_STEPS")
        return cls(
            max_steps=int(max_steps) if max_steps else None,
            prompt=os.environ.get("LMC_PROMPT", DEFAULT_PROMPT),
            trace=os.environ.get("LMC_TRACE", "").lower() in ("1", "true", "yes"),
        )


class StopReason(Enum):
    """Why a run ended."""
    HALT = auto()       # HLT executed
    MAX_STEPS = auto()  # instruction limit reached


@dataclass
class RunResult:
    """
    Outcome of Emulator.run().

    Attributes:
        reason: Why execution stopped
        steps: Instructions executed during the run
        pc: Program counter when execution stopped
        accumulator: Accumulator when execution stopped
    """
    reason: StopReason
    steps: int
    pc: int
    accumulator: int

    def __str__(self) -> str:
        if self.reason is StopReason.HALT:
            return f"Halted at {self.pc:02d} after {self.steps} steps"
        return f"Stopped at {self.pc:02d}: reached max steps ({self.steps})"


class Emulator:
    """
    Little Man Computer emulator.

    Attributes:
        config: The EmulatorConfig used by this instance
        cpu: The CPU (accessible for low-level control)
        memory: The 100-cell memory
        io: The INP/OUT collaborator
    """

    def __init__(
        self,
        image: Union[MemoryImage, Iterable[int]],
        io: Optional[IOPort] = None,
        config: Optional[EmulatorConfig] = None,
    ):
        """
        Initialize the emulator with a program.

        Args:
            image: Assembled MemoryImage, or raw leading cell values
            io: INP/OUT collaborator (defaults to the console)
            config: Run configuration (defaults to EmulatorConfig())

        Raises:
            ValueError: If raw values do not fit in memory
        """
        self.config = config or EmulatorConfig()
        if isinstance(image, MemoryImage):
            self._program = image.cells
        else:
            self._program = tuple(image)

        self.memory = Memory(self._program)
        self.io = io if io is not None else ConsoleIO(prompt=self.config.prompt)
        self.cpu = LittleManCPU(self.memory, self.io)
        if self.config.trace:
            self.cpu.on_instruction = self._trace_hook

        self._total_steps = 0

    def _trace_hook(self, pc: int, value: int) -> None:
        logger.debug(
            f"{pc:02d}: {value:03d}  {format_instruction(value):<7} "
            f"acc={self.cpu.accumulator:03d} overflow={int(self.cpu.overflow)}"
        )

    # ========================================
    # Execution Control
    # ========================================

    def reset(self) -> None:
        """Reload the program into memory and clear the registers."""
        self.memory.load(self._program)
        self.cpu.reset()
        self._total_steps = 0

    def step(self) -> CPUState:
        """
        Execute a single instruction.

        Returns:
            The CPU state after the instruction
        """
        self.cpu.step()
        self._total_steps += 1
        return self.cpu.state

    def run(self, max_steps: Optional[int] = None) -> RunResult:
        """
        Run the program from cell 00 until HLT.

        The registers are cleared first; memory keeps whatever earlier
        runs stored into it (call reset() to reload the program).

        Args:
            max_steps: Instruction limit for this run, overriding
                       config.max_steps. None means no limit.

        Returns:
            RunResult describing why execution stopped

        Raises:
            EmulatorError: If INP receives malformed or no input
        """
        limit = max_steps if max_steps is not None else self.config.max_steps
        self.cpu.reset()
        logger.debug(f"Run started (limit: {limit if limit is not None else 'none'})")

        steps = 0
        while not self.cpu.halted:
            if limit is not None and steps >= limit:
                result = RunResult(StopReason.MAX_STEPS, steps, self.cpu.pc, self.cpu.accumulator)
                logger.info(str(result))
                return result
            self.step()
            steps += 1

        # pc already points past the HLT
        result = RunResult(StopReason.HALT, steps, (self.cpu.pc - 1) % len(self.memory),
                           self.cpu.accumulator)
        logger.debug(str(result))
        return result

    # ========================================
    # Inspection
    # ========================================

    @property
    def accumulator(self) -> int:
        return self.cpu.accumulator

    @property
    def overflow(self) -> bool:
        return self.cpu.overflow

    @property
    def pc(self) -> int:
        return self.cpu.pc

    @property
    def halted(self) -> bool:
        return self.cpu.halted

    @property
    def total_steps(self) -> int:
        """Instructions executed since construction or the last reset()."""
        return self._total_steps

    @property
    def registers(self) -> dict:
        """Current register values."""
        return {
            "accumulator": self.cpu.accumulator,
            "overflow": self.cpu.overflow,
            "pc": self.cpu.pc,
        }

    def read_cell(self, address: int) -> int:
        """Read one memory cell."""
        return self.memory.read(address)

    def __repr__(self) -> str:
        return (
            f"Emulator(pc={self.cpu.pc:02d}, acc={self.cpu.accumulator:03d}, "
            f"overflow={self.cpu.overflow}, halted={self.cpu.halted})"
        )
