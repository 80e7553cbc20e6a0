"""
Memory Subsystem for the LMC Emulator
=====================================

The machine has 100 cells addressed 00-99. Each cell holds a decimal
value between 0 and 999 and may be read as data or executed as an
instruction.
"""

from typing import Iterable

from lmc.cpu import CELL_MODULUS, MAX_VALUE, MEMORY_SIZE


class Memory:
    """
    Flat 100-cell memory.

    Addresses are reduced modulo 100 and stored values modulo 1000, so
    every cell always holds a value in range.
    """

    def __init__(self, cells: Iterable[int] = ()):
        """
        Initialize memory.

        Args:
            cells: Initial values for the leading cells; the rest are 0
        """
        self._cells = [0] * MEMORY_SIZE
        self.load(cells)

    def load(self, cells: Iterable[int]) -> None:
        """
        Replace memory contents with the given values.

        Raises:
            ValueError: If more than 100 values are given or one is out of range
        """
        values = list(cells)
        if len(values) > MEMORY_SIZE:
            raise ValueError(f"cannot load {len(values)} values into {MEMORY_SIZE} cells")
        for address, value in enumerate(values):
            if not 0 <= value <= MAX_VALUE:
                raise ValueError(f"cell {address} value {value} outside 0..{MAX_VALUE}")
        self._cells = values + [0] * (MEMORY_SIZE - len(values))

    def read(self, address: int) -> int:
        """Read the cell at address."""
        return self._cells[address % MEMORY_SIZE]

    def write(self, address: int, value: int) -> None:
        """Write value to the cell at address."""
        self._cells[address % MEMORY_SIZE] = value % CELL_MODULUS

    def snapshot(self) -> tuple[int, ...]:
        """Return the current contents of all cells."""
        return tuple(self._cells)

    def __len__(self) -> int:
        return MEMORY_SIZE

    def __getitem__(self, address: int) -> int:
        return self.read(address)
