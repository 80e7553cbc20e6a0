# =============================================================================
# test_instructions.py - Instruction Set Tests
# =============================================================================
# Tests for the mnemonic recognizer and the shared instruction table.
# =============================================================================

import pytest
from lmc.cpu import (
    INSTRUCTION_TABLE,
    Mnemonic,
    OperandRule,
    decode,
    format_instruction,
    get_instruction_info,
    recognize_mnemonic,
)


class TestRecognizeMnemonic:
    """Test mnemonic recognition."""

    @pytest.mark.parametrize("name", [
        "HLT", "ADD", "SUB", "STA", "LDA", "BRA", "BRZ", "BRP", "INP", "OUT", "DAT",
    ])
    def test_all_mnemonics(self, name):
        assert recognize_mnemonic(name) is Mnemonic[name]

    @pytest.mark.parametrize("token", ["lda", "Lda", "lDa"])
    def test_case_insensitive(self, token):
        assert recognize_mnemonic(token) is Mnemonic.LDA

    @pytest.mark.parametrize("token", ["loop", "LD", "LDAX", "", "100", "HALT"])
    def test_not_a_mnemonic(self, token):
        assert recognize_mnemonic(token) is None

    def test_non_ascii_letters_not_folded(self):
        """Only ASCII a-z are upper-cased; dotless i does not become I."""
        assert recognize_mnemonic("ınp") is None

    def test_opcode_values(self):
        assert [m.value for m in Mnemonic] == list(range(11))


class TestInstructionTable:
    """Test the static instruction descriptions."""

    def test_bases(self):
        bases = {m: INSTRUCTION_TABLE[m].base for m in Mnemonic if m is not Mnemonic.DAT}
        assert bases == {m: m.value * 100 for m in bases}

    def test_parameter_rules(self):
        forbidden = {m for m, info in INSTRUCTION_TABLE.items()
                     if info.operand is OperandRule.FORBIDDEN}
        required = {m for m, info in INSTRUCTION_TABLE.items()
                    if info.operand is OperandRule.REQUIRED}
        assert forbidden == {Mnemonic.HLT, Mnemonic.INP, Mnemonic.OUT}
        assert required == {Mnemonic.ADD, Mnemonic.SUB, Mnemonic.STA, Mnemonic.LDA,
                            Mnemonic.BRA, Mnemonic.BRZ, Mnemonic.BRP}
        assert get_instruction_info(Mnemonic.DAT).operand is OperandRule.OPTIONAL


class TestDecode:
    """Test splitting cells into opcode and operand."""

    def test_decode(self):
        assert decode(0) == (0, 0)
        assert decode(399) == (3, 99)
        assert decode(999) == (9, 99)
        assert decode(7) == (0, 7)

    def test_format_instruction(self):
        assert format_instruction(0) == "HLT"
        assert format_instruction(499) == "LDA 99"
        assert format_instruction(105) == "ADD 05"
        assert format_instruction(800) == "INP"
        assert format_instruction(900) == "OUT"

    def test_format_data(self):
        """Cells that are not clean instructions are shown as data."""
        assert format_instruction(7) == "DAT 7"
        assert format_instruction(901) == "DAT 901"
