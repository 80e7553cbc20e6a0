"""
Shared pytest fixtures for the LMC toolchain tests.
"""

from pathlib import Path
from typing import Callable

import pytest

from lmc.assembler import assemble
from lmc.emulator import Emulator, EmulatorConfig, ScriptedIO


@pytest.fixture(scope="session")
def project_root() -> Path:
    """
    Fixture: Get project root directory.

    Returns the absolute path to the project root (where pyproject.toml is).
    """
    current = Path(__file__).parent.parent
    while current != current.parent:
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def examples_dir(project_root: Path) -> Path:
    """Fixture: Get examples directory."""
    return project_root / "examples"


@pytest.fixture
def run_source() -> Callable[..., tuple[Emulator, list[int]]]:
    """
    Fixture: assemble source, run it with scripted input.

    Returns a function ``run(source, inputs=(), max_steps=10_000)`` giving
    ``(emulator, outputs)``.
    """
    def run(source: str, inputs=(), max_steps: int = 10_000):
        io = ScriptedIO(inputs)
        emu = Emulator(assemble(source), io, EmulatorConfig(max_steps=max_steps))
        emu.run()
        return emu, io.outputs

    return run
