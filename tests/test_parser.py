# =============================================================================
# test_parser.py - Source Cleaning and Parser Unit Tests
# =============================================================================
# Tests for comment stripping, line tracking and statement parsing.
#
# Test coverage includes:
#   - Comment and whitespace removal
#   - Label declarations, well-formed and malformed
#   - A-instructions with literals and symbols
#   - C-instructions with optional dest and jump
#   - Syntax errors with line numbers
# =============================================================================

import pytest

from hack_assembler.assembler.parser import (
    AInstruction,
    CInstruction,
    LabelDef,
    SourceLine,
    clean_line,
    clean_source,
    parse_line,
    parse_source,
    source_context,
)
from hack_assembler.errors import AssemblySyntaxError, MalformedLabelError


def parse(text: str):
    """Parse a single cleaned line."""
    return parse_line(SourceLine(text, 1))


# =============================================================================
# Cleaning Tests
# =============================================================================

class TestCleaning:
    """Test source cleanup."""

    def test_strip_comment(self):
        assert clean_line("D=M // load")[0] == "D=M"

    def test_comment_only_line(self):
        assert clean_line("// just a comment")[0] == ""

    def test_strip_whitespace(self):
        text, column = clean_line("    @i   ")
        assert text == "@i"
        assert column == 5

    def test_blank_lines_dropped(self):
        lines = clean_source("\n\n  \n@1\n\n")
        assert [line.text for line in lines] == ["@1"]

    def test_line_numbers_are_original(self):
        """Line numbers count blank and comment lines too."""
        source = "// header\n\n@2\n  // note\nD=A\n"
        lines = clean_source(source)
        assert [(line.text, line.line) for line in lines] == [("@2", 3), ("D=A", 5)]

    def test_empty_source(self):
        assert clean_source("") == []

    def test_crlf_line_endings(self):
        lines = clean_source("@1\r\nD=A\r\n")
        assert [line.text for line in lines] == ["@1", "D=A"]


# =============================================================================
# Label Tests
# =============================================================================

class TestLabels:
    """Test label declaration parsing."""

    def test_label(self):
        stmt = parse("(LOOP)")
        assert isinstance(stmt, LabelDef)
        assert stmt.name == "LOOP"

    @pytest.mark.parametrize("name", ["END", "ball.setdirection", "Main$ret.1", "a_b:c", "_x"])
    def test_label_characters(self, name):
        assert parse(f"({name})").name == name

    def test_empty_label(self):
        with pytest.raises(MalformedLabelError):
            parse("()")

    def test_label_starting_with_digit(self):
        with pytest.raises(MalformedLabelError) as exc_info:
            parse("(1LOOP)")
        assert exc_info.value.label == "1LOOP"

    def test_label_with_space(self):
        with pytest.raises(MalformedLabelError):
            parse("(MY LOOP)")

    def test_unclosed_label(self):
        with pytest.raises(AssemblySyntaxError):
            parse("(LOOP")

    def test_label_with_trailing_content(self):
        with pytest.raises(AssemblySyntaxError):
            parse("(LOOP) D=M")


# =============================================================================
# A-Instruction Tests
# =============================================================================

class TestAInstructions:
    """Test address instruction parsing."""

    def test_literal(self):
        stmt = parse("@21")
        assert isinstance(stmt, AInstruction)
        assert stmt.value == 21
        assert not stmt.is_symbolic

    def test_literal_zero(self):
        assert parse("@0").value == 0

    def test_literal_leading_zeros(self):
        assert parse("@007").value == 7

    def test_symbol(self):
        stmt = parse("@LOOP")
        assert stmt.symbol == "LOOP"
        assert stmt.value is None
        assert stmt.is_symbolic

    def test_symbol_with_special_characters(self):
        assert parse("@Sys.init$ret:0").symbol == "Sys.init$ret:0"

    def test_missing_reference(self):
        with pytest.raises(AssemblySyntaxError) as exc_info:
            parse("@")
        assert "missing address" in str(exc_info.value)

    def test_negative_literal(self):
        with pytest.raises(AssemblySyntaxError):
            parse("@-1")

    def test_symbol_starting_with_digit(self):
        with pytest.raises(AssemblySyntaxError):
            parse("@1abc")

    def test_reference_with_space(self):
        with pytest.raises(AssemblySyntaxError):
            parse("@ 5")


# =============================================================================
# C-Instruction Tests
# =============================================================================

class TestCInstructions:
    """Test compute instruction parsing."""

    def test_dest_comp(self):
        stmt = parse("D=D+A")
        assert isinstance(stmt, CInstruction)
        assert (stmt.dest, stmt.comp, stmt.jump) == ("D", "D+A", "")

    def test_comp_jump(self):
        stmt = parse("0;JMP")
        assert (stmt.dest, stmt.comp, stmt.jump) == ("", "0", "JMP")

    def test_dest_comp_jump(self):
        stmt = parse("AM=M-1;JNE")
        assert (stmt.dest, stmt.comp, stmt.jump) == ("AM", "M-1", "JNE")

    def test_comp_only(self):
        stmt = parse("D")
        assert (stmt.dest, stmt.comp, stmt.jump) == ("", "D", "")

    def test_fields_not_validated_by_parser(self):
        """Vocabulary checks happen during encoding."""
        stmt = parse("X=Y")
        assert (stmt.dest, stmt.comp) == ("X", "Y")

    @pytest.mark.parametrize("text", ["=D", "D=", "D;", "D=M;", ";JMP", "D=M;JGT;JMP", "D = M"])
    def test_malformed(self, text):
        with pytest.raises(AssemblySyntaxError):
            parse(text)


# =============================================================================
# Whole-Source Parsing
# =============================================================================

class TestParseSource:
    """Test parse_source end to end."""

    def test_statement_types(self):
        statements = parse_source("(LOOP)\n@i  // counter\nD=M;JGT")
        assert [type(s).__name__ for s in statements] == [
            "LabelDef", "AInstruction", "CInstruction",
        ]

    def test_locations(self):
        statements = parse_source("\n\n   @5", filename="prog.asm")
        location = statements[0].location
        assert (location.filename, location.line, location.column) == ("prog.asm", 3, 4)

    def test_syntax_error_reports_line(self):
        source = "@1\nD=A\n@\nM=D"
        with pytest.raises(AssemblySyntaxError) as exc_info:
            parse_source(source, filename="prog.asm")
        assert exc_info.value.line == 3
        assert "prog.asm:3:" in str(exc_info.value)

    def test_context_keeps_indentation(self):
        """Statements display at their source column; the text stays trimmed."""
        stmt = parse_source("    D=M  // load")[0]
        assert stmt.source == "D=M"
        assert stmt.context == "    D=M"

    def test_syntax_error_context_keeps_indentation(self):
        with pytest.raises(AssemblySyntaxError) as exc_info:
            parse_source("  D=")
        assert exc_info.value.source_line == "  D="
        assert exc_info.value.location.column == 3

    def test_source_context(self):
        assert source_context("@1", 1) == "@1"
        assert source_context("@1", 3) == "  @1"
