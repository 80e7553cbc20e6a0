#!/usr/bin/env python3
"""
Little Man Computer Emulator Demo
=================================

This script demonstrates how to use the toolchain to:
1. Assemble a source file
2. Inspect the memory image and label table
3. Run the program with scripted input
4. Single-step through a program

Usage:
    source .venv/bin/activate
    python examples/emulator_demo.py
"""

from pathlib import Path

from lmc.assembler import Assembler
from lmc.emulator import Emulator, EmulatorConfig, ScriptedIO


def main():
    examples = Path(__file__).parent

    # ==========================================================================
    # 1. Assemble
    # ==========================================================================
    asm = Assembler()
    image = asm.assemble_file(examples / "countdown.lmc")

    print(f"Assembled {image.length} cells")
    for line in image.dump():
        print(f"  {line}")

    # ==========================================================================
    # 2. Labels
    # ==========================================================================
    print("\nLabels:")
    for name, address in sorted(asm.get_symbols().items(), key=lambda item: item[1]):
        print(f"  {name:<8} {address:02d}")

    # ==========================================================================
    # 3. Run with scripted input
    # ==========================================================================
    io = ScriptedIO([5])
    emu = Emulator(image, io, EmulatorConfig(max_steps=10_000))
    result = emu.run()
    print(f"\n{result}")
    print(f"Output: {io.outputs}")

    # ==========================================================================
    # 4. Single-step
    # ==========================================================================
    emu = Emulator(image, ScriptedIO([2]))
    print("\nFirst five steps:")
    for _ in range(5):
        state = emu.step()
        print(f"  pc={state.pc:02d} acc={state.accumulator:03d} overflow={state.overflow}")


if __name__ == "__main__":
    main()
