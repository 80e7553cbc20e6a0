"""
LMC Command-Line Interface
==========================

- **lmc**: assemble a source file, then run it or show its memory image

The tool is implemented as a Click-based CLI application.
"""

__all__ = ["lmc"]
