"""
LMC CPU Emulator
================

Fetch-decode-execute loop for the Little Man Computer.

Registers:
- accumulator: 0..999
- overflow: set by ADD/SUB, read by BRP
- pc: program counter, 00..99

Each step fetches the cell at pc, splits it into opcode (hundreds digit)
and operand (last two digits), advances pc, then executes:

| Opcode | Mnemonic | Effect |
|--------|----------|--------|
| 0      | HLT      | stop |
| 1      | ADD      | overflow = acc + m > 999; acc = (acc + m) mod 1000 |
| 2      | SUB      | overflow = acc < m; acc = (acc - m) mod 1000 |
| 3      | STA      | m = acc |
| 4      | LDA      | acc = m |
| 5      | BRA      | pc = operand |
| 6      | BRZ      | if acc == 0: pc = operand |
| 7      | BRP      | if not overflow: pc = operand |
| 8      | INP      | acc = input mod 1000 |
| 9      | OUT      | output acc |

Python's modulo is floored, so a negative difference or input always
wraps into 0..999.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from lmc.cpu import CELL_MODULUS, MEMORY_SIZE, Mnemonic, decode
from lmc.emulator.io import IOPort
from lmc.emulator.memory import Memory


@dataclass
class CPUState:
    """
    Complete CPU state for snapshotting.

    Attributes:
        accumulator: 0..999
        overflow: Result of the last ADD/SUB
        pc: Next cell to execute
        halted: True once HLT has executed
    """
    accumulator: int = 0
    overflow: bool = False
    pc: int = 0
    halted: bool = False


class LittleManCPU:
    """
    LMC CPU with an instruction hook for tracing.

    Example:
        >>> cpu = LittleManCPU(Memory([901, 0]), ScriptedIO())
        >>> cpu.step()
        <Mnemonic.OUT: 9>
    """

    def __init__(self, memory: Memory, io: IOPort):
        """
        Initialize CPU.

        Args:
            memory: The 100-cell memory
            io: Input/output collaborator for INP/OUT
        """
        self.memory = memory
        self.io = io
        self.state = CPUState()

        # on_instruction(pc, value) is called before each instruction executes
        self.on_instruction: Optional[Callable[[int, int], None]] = None

    # ========================================
    # Register Properties
    # ========================================

    @property
    def accumulator(self) -> int:
        return self.state.accumulator

    @accumulator.setter
    def accumulator(self, value: int) -> None:
        self.state.accumulator = value % CELL_MODULUS

    @property
    def overflow(self) -> bool:
        return self.state.overflow

    @overflow.setter
    def overflow(self, value: bool) -> None:
        self.state.overflow = bool(value)

    @property
    def pc(self) -> int:
        return self.state.pc

    @pc.setter
    def pc(self, value: int) -> None:
        self.state.pc = value % MEMORY_SIZE

    @property
    def halted(self) -> bool:
        return self.state.halted

    def reset(self) -> None:
        """Clear registers and start again at cell 00."""
        self.state = CPUState()

    # ========================================
    # Execution
    # ========================================

    def step(self) -> Optional[Mnemonic]:
        """
        Execute exactly one instruction.

        Returns:
            The executed instruction (None only for an opcode outside 0..9)

        Raises:
            EmulatorError: If INP cannot read an integer
        """
        value = self.memory.read(self.pc)
        if self.on_instruction:
            self.on_instruction(self.pc, value)

        opcode, operand = decode(value)
        self.pc = self.pc + 1
        return self._execute_instruction(opcode, operand)

    def _execute_instruction(self, opcode: int, operand: int) -> Optional[Mnemonic]:
        """Dispatch one decoded instruction."""
        match opcode:
            case Mnemonic.HLT:
                self.state.halted = True
            case Mnemonic.ADD:
                total = self.accumulator + self.memory.read(operand)
                self.overflow = total >= CELL_MODULUS
                self.accumulator = total
            case Mnemonic.SUB:
                value = self.memory.read(operand)
                self.overflow = self.accumulator < value
                self.accumulator = self.accumulator - value
            case Mnemonic.STA:
                self.memory.write(operand, self.accumulator)
            case Mnemonic.LDA:
                self.accumulator = self.memory.read(operand)
            case Mnemonic.BRA:
                self.pc = operand
            case Mnemonic.BRZ:
                if self.accumulator == 0:
                    self.pc = operand
            case Mnemonic.BRP:
                if not self.overflow:
                    self.pc = operand
            case Mnemonic.INP:
                self.accumulator = self.io.read_input()
            case Mnemonic.OUT:
                self.io.write_output(self.accumulator)
            case _:
                # cells stay within 0..999, so opcode is always 0..9
                return None
        return Mnemonic(opcode)
