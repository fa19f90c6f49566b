# =============================================================================
# test_cpu.py - Hack Instruction Set Table Tests
# =============================================================================
# Tests for the fixed Hack encoding tables and predefined symbols.
#
# Test coverage includes:
#   - Table sizes and code widths
#   - Spot checks of well-known encodings
#   - Table immutability
#   - Destination normalization
#   - Predefined symbol addresses
# =============================================================================

import pytest

from hack_assembler.cpu import (
    COMP_TABLE,
    DEST_TABLE,
    JUMP_TABLE,
    PREDEFINED_SYMBOLS,
    MAX_ADDRESS,
    VARIABLE_BASE,
    get_comp_code,
    get_dest_code,
    get_jump_code,
    normalize_dest,
    is_predefined,
)


# =============================================================================
# Table Shape Tests
# =============================================================================

class TestTableShape:
    """Each table covers exactly its documented vocabulary."""

    def test_comp_table_size(self):
        """The computation vocabulary has 28 expressions."""
        assert len(COMP_TABLE) == 28

    def test_dest_table_size(self):
        """Eight destination combinations, including none."""
        assert len(DEST_TABLE) == 8

    def test_jump_table_size(self):
        """Seven jumps plus no-jump."""
        assert len(JUMP_TABLE) == 8

    def test_comp_codes_are_7_bits(self):
        for code in COMP_TABLE.values():
            assert len(code) == 7
            assert set(code) <= {"0", "1"}

    def test_dest_and_jump_codes_are_3_bits(self):
        for code in list(DEST_TABLE.values()) + list(JUMP_TABLE.values()):
            assert len(code) == 3
            assert set(code) <= {"0", "1"}

    def test_dest_and_jump_codes_unique(self):
        """Every 3-bit pattern is used exactly once."""
        assert len(set(DEST_TABLE.values())) == 8
        assert len(set(JUMP_TABLE.values())) == 8

    def test_comp_codes_unique(self):
        assert len(set(COMP_TABLE.values())) == 28

    def test_absent_fields_encode_as_zero(self):
        assert DEST_TABLE[""] == "000"
        assert JUMP_TABLE[""] == "000"

    def test_a_bit_selects_memory(self):
        """Computations reading M have the a-bit set, all others clear."""
        for comp, code in COMP_TABLE.items():
            assert (code[0] == "1") == ("M" in comp)

    def test_jump_vocabulary(self):
        assert set(JUMP_TABLE) == {"", "JGT", "JEQ", "JGE", "JLT", "JNE", "JLE", "JMP"}


class TestTableImmutability:
    """The tables cannot be extended at runtime."""

    def test_comp_table_is_read_only(self):
        with pytest.raises(TypeError):
            COMP_TABLE["D*A"] = "0000000"

    def test_dest_table_is_read_only(self):
        with pytest.raises(TypeError):
            DEST_TABLE["X"] = "000"

    def test_predefined_symbols_are_read_only(self):
        with pytest.raises(TypeError):
            PREDEFINED_SYMBOLS["SP"] = 100


# =============================================================================
# Lookup Tests
# =============================================================================

class TestLookups:
    """Test the lookup helpers."""

    @pytest.mark.parametrize("comp,code", [
        ("0", "0101010"),
        ("1", "0111111"),
        ("-1", "0111010"),
        ("D", "0001100"),
        ("A", "0110000"),
        ("D+A", "0000010"),
        ("D&A", "0000000"),
        ("M", "1110000"),
        ("D+M", "1000010"),
        ("M-D", "1000111"),
        ("D|M", "1010101"),
    ])
    def test_comp_codes(self, comp, code):
        assert get_comp_code(comp) == code

    def test_unknown_comp(self):
        assert get_comp_code("D*A") is None
        assert get_comp_code("A+D") is None
        assert get_comp_code("d+1") is None

    def test_dest_codes(self):
        assert get_dest_code("M") == "001"
        assert get_dest_code("D") == "010"
        assert get_dest_code("AMD") == "111"

    def test_dest_any_order(self):
        """Registers may be written in any order."""
        assert get_dest_code("DM") == get_dest_code("MD") == "011"
        assert get_dest_code("DA") == "110"
        assert get_dest_code("DMA") == "111"

    def test_dest_rejects_invalid(self):
        assert get_dest_code("X") is None
        assert get_dest_code("MM") is None
        assert get_dest_code("AMDA") is None

    def test_normalize_dest(self):
        assert normalize_dest("") == ""
        assert normalize_dest("MA") == "AM"
        assert normalize_dest("B") is None

    def test_jump_codes(self):
        assert get_jump_code("JGT") == "001"
        assert get_jump_code("JMP") == "111"
        assert get_jump_code("JUMP") is None


# =============================================================================
# Predefined Symbols
# =============================================================================

class TestPredefinedSymbols:
    """Architectural constants have their fixed addresses."""

    def test_pointer_registers(self):
        assert PREDEFINED_SYMBOLS["SP"] == 0
        assert PREDEFINED_SYMBOLS["LCL"] == 1
        assert PREDEFINED_SYMBOLS["ARG"] == 2
        assert PREDEFINED_SYMBOLS["THIS"] == 3
        assert PREDEFINED_SYMBOLS["THAT"] == 4

    def test_virtual_registers(self):
        for n in range(16):
            assert PREDEFINED_SYMBOLS[f"R{n}"] == n

    def test_memory_maps(self):
        assert PREDEFINED_SYMBOLS["SCREEN"] == 16384
        assert PREDEFINED_SYMBOLS["KBD"] == 24576

    def test_count(self):
        assert len(PREDEFINED_SYMBOLS) == 23

    def test_is_predefined(self):
        assert is_predefined("R15")
        assert not is_predefined("R16")
        assert not is_predefined("sp")

    def test_constants(self):
        assert MAX_ADDRESS == 32767
        assert VARIABLE_BASE == 16
