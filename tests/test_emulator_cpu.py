"""
CPU Tests for the LMC Emulator
==============================

Tests for memory and individual instruction semantics of the
LittleManCPU, driven directly with raw cell values.
"""

import pytest

from lmc.cpu import Mnemonic
from lmc.emulator import CPUState, LittleManCPU, Memory, ScriptedIO
from lmc.errors import InputExhaustedError, InputFormatError


def make_cpu(cells, inputs=()):
    """Create a CPU over the given leading cells with scripted I/O."""
    io = ScriptedIO(inputs)
    return LittleManCPU(Memory(cells), io), io


# =============================================================================
# Memory Tests
# =============================================================================

class TestMemory:
    """Test the 100-cell memory."""

    def test_initial_state(self):
        mem = Memory()
        assert len(mem) == 100
        assert mem.snapshot() == (0,) * 100

    def test_load_pads_with_zero(self):
        mem = Memory([1, 2, 3])
        assert mem.snapshot()[:4] == (1, 2, 3, 0)

    def test_load_too_many(self):
        with pytest.raises(ValueError):
            Memory([0] * 101)

    def test_load_out_of_range(self):
        with pytest.raises(ValueError):
            Memory([1000])
        with pytest.raises(ValueError):
            Memory([-1])

    def test_write_read(self):
        mem = Memory()
        mem.write(42, 123)
        assert mem.read(42) == 123
        assert mem[42] == 123

    def test_address_wraps(self):
        mem = Memory()
        mem.write(105, 7)
        assert mem.read(5) == 7

    def test_value_wraps(self):
        mem = Memory()
        mem.write(0, 1002)
        assert mem.read(0) == 2


# =============================================================================
# Instruction Tests
# =============================================================================

class TestArithmetic:
    """Test ADD and SUB with the overflow flag."""

    def test_add(self):
        cpu, _ = make_cpu([150, 0] + [0] * 48 + [5])
        cpu.accumulator = 10
        assert cpu.step() is Mnemonic.ADD
        assert cpu.accumulator == 15
        assert cpu.overflow is False

    def test_add_overflow(self):
        """999 + 2 wraps to 1 and sets overflow."""
        cells = [0] * 100
        cells[0] = 150
        cells[50] = 2
        cpu, _ = make_cpu(cells)
        cpu.accumulator = 999
        cpu.step()
        assert cpu.accumulator == 1
        assert cpu.overflow is True

    def test_add_exactly_999(self):
        cells = [0] * 100
        cells[0] = 150
        cells[50] = 998
        cpu, _ = make_cpu(cells)
        cpu.accumulator = 1
        cpu.step()
        assert cpu.accumulator == 999
        assert cpu.overflow is False

    def test_sub(self):
        cells = [0] * 100
        cells[0] = 250
        cells[50] = 3
        cpu, _ = make_cpu(cells)
        cpu.accumulator = 10
        assert cpu.step() is Mnemonic.SUB
        assert cpu.accumulator == 7
        assert cpu.overflow is False

    def test_sub_to_zero(self):
        cells = [0] * 100
        cells[0] = 250
        cells[50] = 10
        cpu, _ = make_cpu(cells)
        cpu.accumulator = 10
        cpu.step()
        assert cpu.accumulator == 0
        assert cpu.overflow is False

    def test_sub_borrow(self):
        """3 - 5 wraps to 998 and sets overflow."""
        cells = [0] * 100
        cells[0] = 250
        cells[50] = 5
        cpu, _ = make_cpu(cells)
        cpu.accumulator = 3
        cpu.step()
        assert cpu.accumulator == 998
        assert cpu.overflow is True

    def test_overflow_cleared_by_next_add(self):
        cells = [0] * 100
        cells[0] = 150
        cells[1] = 151
        cells[50] = 600
        cells[51] = 1
        cpu, _ = make_cpu(cells)
        cpu.accumulator = 500
        cpu.step()
        assert cpu.overflow is True
        cpu.step()
        assert cpu.overflow is False
        assert cpu.accumulator == 101


class TestMemoryInstructions:
    """Test LDA and STA."""

    def test_lda(self):
        cells = [0] * 100
        cells[0] = 450
        cells[50] = 321
        cpu, _ = make_cpu(cells)
        assert cpu.step() is Mnemonic.LDA
        assert cpu.accumulator == 321

    def test_sta(self):
        cpu, _ = make_cpu([360])
        cpu.accumulator = 77
        assert cpu.step() is Mnemonic.STA
        assert cpu.memory.read(60) == 77

    def test_lda_does_not_touch_overflow(self):
        cpu, _ = make_cpu([450])
        cpu.overflow = True
        cpu.step()
        assert cpu.overflow is True


class TestBranches:
    """Test BRA, BRZ and BRP."""

    def test_bra(self):
        cpu, _ = make_cpu([520])
        assert cpu.step() is Mnemonic.BRA
        assert cpu.pc == 20

    def test_brz_taken(self):
        cpu, _ = make_cpu([620])
        cpu.step()
        assert cpu.pc == 20

    def test_brz_not_taken(self):
        cpu, _ = make_cpu([620])
        cpu.accumulator = 1
        cpu.step()
        assert cpu.pc == 1

    def test_brp_taken_without_overflow(self):
        """BRP tests the overflow flag, not the accumulator."""
        cpu, _ = make_cpu([720])
        cpu.accumulator = 0
        cpu.step()
        assert cpu.pc == 20

    def test_brp_not_taken_with_overflow(self):
        cpu, _ = make_cpu([720])
        cpu.accumulator = 500
        cpu.overflow = True
        cpu.step()
        assert cpu.pc == 1


class TestIO:
    """Test INP and OUT."""

    def test_inp(self):
        cpu, io = make_cpu([800], inputs=[42])
        assert cpu.step() is Mnemonic.INP
        assert cpu.accumulator == 42
        assert io.reads == 1

    def test_inp_negative_wraps(self):
        cpu, _ = make_cpu([800], inputs=[-1])
        cpu.step()
        assert cpu.accumulator == 999

    def test_inp_large_wraps(self):
        cpu, _ = make_cpu([800], inputs=[1234])
        cpu.step()
        assert cpu.accumulator == 234

    def test_inp_bad_text(self):
        cpu, _ = make_cpu([800], inputs=["seven"])
        with pytest.raises(InputFormatError):
            cpu.step()

    def test_inp_exhausted(self):
        cpu, _ = make_cpu([800])
        with pytest.raises(InputExhaustedError):
            cpu.step()

    def test_out(self):
        cpu, io = make_cpu([900])
        cpu.accumulator = 12
        assert cpu.step() is Mnemonic.OUT
        assert io.outputs == [12]


# =============================================================================
# Control Tests
# =============================================================================

class TestControl:
    """Test HLT, decoding, pc wrap and hooks."""

    def test_hlt(self):
        cpu, _ = make_cpu([0])
        assert cpu.step() is Mnemonic.HLT
        assert cpu.halted
        assert cpu.pc == 1

    def test_opcode_is_hundreds_digit(self):
        """Cells like 901 decode by their hundreds digit and run as OUT."""
        cpu, io = make_cpu([901, 950])
        cpu.accumulator = 5
        assert cpu.step() is Mnemonic.OUT
        assert cpu.step() is Mnemonic.OUT
        assert io.outputs == [5, 5]
        assert cpu.accumulator == 5
        assert cpu.pc == 2

    def test_every_cell_value_decodes(self):
        """No cell value in 0..999 falls outside the ten runtime opcodes."""
        for value in range(1000):
            cpu, _ = make_cpu([value], inputs=[0])
            assert cpu.step() is not None

    def test_pc_wraps(self):
        cells = [0] * 100
        cells[99] = 900
        cpu, io = make_cpu(cells)
        cpu.pc = 99
        cpu.step()
        assert cpu.pc == 0
        assert io.outputs == [0]

    def test_reset(self):
        cpu, _ = make_cpu([0])
        cpu.accumulator = 9
        cpu.overflow = True
        cpu.step()
        cpu.reset()
        assert cpu.state == CPUState()

    def test_on_instruction_hook(self):
        seen = []
        cpu, _ = make_cpu([900, 0])
        cpu.on_instruction = lambda pc, value: seen.append((pc, value))
        cpu.step()
        cpu.step()
        assert seen == [(0, 900), (1, 0)]
