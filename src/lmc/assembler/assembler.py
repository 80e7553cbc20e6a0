"""
LMC Assembler - Main Interface
==============================

This module provides the Assembler class, the primary interface for
assembling Little Man Computer source code. It coordinates the lexer and
the two-pass code generator and returns a MemoryImage ready for the
emulator.

Example Usage
-------------
>>> from lmc.assembler import Assembler
>>> asm = Assembler()
>>> image = asm.assemble('''
...         INP
...         STA 99
...         LDA 99
...         OUT
...         HLT
... ''')
>>> image.cells[:5]
(800, 399, 499, 900, 0)
>>> print("\\n".join(asm.get_memory_dump()))
00: 800
01: 399
02: 499
03: 900
04: 000

Command-Line Usage
------------------
    $ lmc program.lmc          # assemble and run
    $ lmc --show program.lmc   # print the assembled image
"""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional
import logging

from lmc.assembler.codegen import CodeGenerator
from lmc.assembler.lexer import Lexer
from lmc.cpu import MAX_VALUE, MEMORY_SIZE
from lmc.errors import AssemblerError, AssemblyFailedError, SourceLocation


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MemoryImage:
    """
    A fully resolved program.

    Attributes:
        cells: Exactly 100 values, each 0..999
        length: Number of cells the program emitted
        symbols: Label name -> address (informational only)
    """
    cells: tuple[int, ...]
    length: int = MEMORY_SIZE
    symbols: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self):
        if len(self.cells) != MEMORY_SIZE:
            raise ValueError(
                f"memory image needs {MEMORY_SIZE} cells, got {len(self.cells)}"
            )
        for address, value in enumerate(self.cells):
            if not 0 <= value <= MAX_VALUE:
                raise ValueError(f"cell {address} holds {value}, outside 0..{MAX_VALUE}")
        if not 0 <= self.length <= MEMORY_SIZE:
            raise ValueError(f"invalid program length {self.length}")

    @classmethod
    def from_values(cls, values, length: Optional[int] = None) -> "MemoryImage":
        """
        Build an image from up to 100 values, padding with zeros.

        Args:
            values: Leading cell values
            length: Program length (defaults to the number of values)
        """
        values = list(values)
        if len(values) > MEMORY_SIZE:
            raise ValueError(f"too many values for a {MEMORY_SIZE}-cell image")
        cells = tuple(values + [0] * (MEMORY_SIZE - len(values)))
        return cls(cells, len(values) if length is None else length)

    def dump(self) -> list[str]:
        """
        Render the emitted cells as ``AA: VVV`` lines.

        Example:
            >>> MemoryImage.from_values([901, 0]).dump()
            ['00: 901', '01: 000']
        """
        return [f"{address:02d}: {self.cells[address]:03d}" for address in range(self.length)]


class Assembler:
    """
    Main LMC assembler class.

    Each call to assemble() starts from a clean state; the results of the
    most recent call are available through the getters.

    Attributes:
        verbose: If True, log progress at INFO level
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize the assembler.

        Args:
            verbose: Log progress messages
        """
        self._verbose = verbose
        self._codegen = CodeGenerator()
        self._image: Optional[MemoryImage] = None
        self._errors: list[AssemblerError] = []

    def assemble(self, source: str, filename: str = "<input>") -> MemoryImage:
        """
        Assemble source code.

        Args:
            source: Assembly source code
            filename: Filename for error messages

        Returns:
            The resolved MemoryImage

        Raises:
            AssemblyFailedError: If any line failed to assemble
        """
        self._codegen = CodeGenerator()
        self._image = None
        self._errors = []

        if self._verbose:
            logger.info(f"Assembling {filename}")

        try:
            cells = self._codegen.generate(Lexer(source, filename).lines())
        except AssemblyFailedError as e:
            self._errors = e.errors
            logger.debug(f"Assembly of {filename} failed with {len(e.errors)} errors")
            raise

        self._image = MemoryImage(
            cells=cells,
            length=self._codegen.get_length(),
            symbols=MappingProxyType(self._codegen.get_symbols()),
        )
        if self._verbose:
            logger.info(
                f"Assembled {self._image.length} cells, "
                f"{len(self._image.symbols)} labels"
            )
        return self._image

    def assemble_string(self, source: str, filename: str = "<input>") -> MemoryImage:
        """Alias of assemble() for string input."""
        return self.assemble(source, filename)

    def assemble_file(self, filepath: str | Path) -> MemoryImage:
        """
        Assemble a source file.

        Args:
            filepath: Path to the source file

        Returns:
            The resolved MemoryImage

        Raises:
            FileNotFoundError: If the file does not exist
            AssemblerError: If the file is not valid UTF-8
            AssemblyFailedError: If any line failed to assemble
        """
        path = Path(filepath)
        data = path.read_bytes()
        try:
            source = data.decode("utf-8")
        except UnicodeDecodeError as e:
            line = data.count(b"\n", 0, e.start) + 1
            column = e.start - (data.rfind(b"\n", 0, e.start) + 1) + 1
            raise AssemblerError(
                f"source is not valid UTF-8 (byte 0x{data[e.start]:02x})",
                location=SourceLocation(str(path), line, column),
            ) from e
        return self.assemble(source, str(path))

    # =========================================================================
    # Results
    # =========================================================================

    def has_errors(self) -> bool:
        """Check if the last assembly produced diagnostics."""
        return len(self._errors) > 0

    def get_errors(self) -> list[AssemblerError]:
        """Return the diagnostics of the last assembly."""
        return list(self._errors)

    def get_error_report(self) -> str:
        """Get formatted error report of the last assembly."""
        return self._codegen.get_error_report()

    def get_image(self) -> MemoryImage:
        """
        Return the image of the last successful assembly.

        Raises:
            AssemblerError: If nothing has been assembled successfully
        """
        if self._image is None:
            raise AssemblerError("no program has been assembled")
        return self._image

    def get_symbols(self) -> dict[str, int]:
        """Return the label table of the last assembly."""
        return self._codegen.get_symbols()

    def get_memory_dump(self) -> list[str]:
        """Return the show-mode rendering of the last image."""
        return self.get_image().dump()


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>") -> MemoryImage:
    """
    Assemble source code in one call.

    Raises:
        AssemblyFailedError: If any line failed to assemble
    """
    return Assembler().assemble(source, filename)


def assemble_file(filepath: str | Path) -> MemoryImage:
    """
    Assemble a source file in one call.

    Raises:
        AssemblyFailedError: If any line failed to assemble
    """
    return Assembler().assemble_file(filepath)
