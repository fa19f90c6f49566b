"""
Hack Assembly Language Parser
=============================

This module cleans Hack assembly source and parses each remaining line into
a statement object that the code generator can process.

Statement Types
---------------
- **LabelDef**: ``(NAME)``, binds NAME to the next instruction's address
- **AInstruction**: ``@value`` or ``@symbol``
- **CInstruction**: ``dest=comp;jump`` (dest and jump optional)

Cleaning
--------
Everything from ``//`` to the end of a line is a comment. Lines are trimmed
and blank lines dropped. Each remaining line keeps its 1-based line number
and the column of its first character for error reporting.

Symbols
-------
A symbol is a sequence of letters, digits, ``_``, ``.``, ``$`` and ``:``
that does not start with a digit. Symbols are case-sensitive.

Example
-------
>>> statements = parse_source("(LOOP)\\n@i  // counter\\nD=M;JGT")
>>> [type(s).__name__ for s in statements]
['LabelDef', 'AInstruction', 'CInstruction']
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Union
import re

from hack_assembler.errors import (
    AssemblySyntaxError,
    MalformedLabelError,
    SourceLocation,
)


COMMENT_MARKER = "//"

SYMBOL_PATTERN = re.compile(r"[A-Za-z_.$:][A-Za-z0-9_.$:]*")
DECIMAL_PATTERN = re.compile(r"[0-9]+")

# dest=comp;jump with no whitespace; every field is checked against the
# encoding tables later, here we only check the shape.
C_INSTRUCTION_PATTERN = re.compile(
    r"(?:(?P<dest>[^=;\s]*)=)?(?P<comp>[^=;\s]+)(?:;(?P<jump>[^=;\s]*))?"
)


# =============================================================================
# Source Lines
# =============================================================================

@dataclass(frozen=True)
class SourceLine:
    """
    A cleaned, non-empty line of source.

    Attributes:
        text: Line content with comment and surrounding whitespace removed
        line: Line number in the original source (1-indexed)
        column: Column of the first character of text (1-indexed)
    """
    text: str
    line: int
    column: int = 1


def clean_line(raw: str) -> tuple[str, int]:
    """
    Strip the comment and surrounding whitespace from one raw line.

    Returns:
        (cleaned_text, column) where column is the 1-based position of the
        first character of cleaned_text in raw
    """
    comment = raw.find(COMMENT_MARKER)
    if comment != -1:
        raw = raw[:comment]
    stripped = raw.lstrip()
    column = len(raw) - len(stripped) + 1
    return stripped.rstrip(), column


def source_context(text: str, column: int) -> str:
    """Re-indent cleaned text so that a caret at column lines up under it."""
    return " " * (column - 1) + text


def clean_source(source: str) -> list[SourceLine]:
    """
    Clean raw source text into a list of non-empty source lines.

    Args:
        source: Raw assembly source

    Returns:
        SourceLine list in program order, blank and comment-only lines removed
    """
    lines = []
    for number, raw in enumerate(source.splitlines(), start=1):
        text, column = clean_line(raw)
        if text:
            lines.append(SourceLine(text, number, column))
    return lines


# =============================================================================
# Statement Classes
# =============================================================================

@dataclass
class Statement:
    """
    Base class for parsed statements.

    Attributes:
        location: Where the statement appears in source
        source: The cleaned source text of the statement
    """
    location: SourceLocation
    source: str

    @property
    def context(self) -> str:
        """Source text indented to its column, for error display."""
        return source_context(self.source, self.location.column)


@dataclass
class LabelDef(Statement):
    """Label declaration ``(NAME)``."""
    name: str = ""


@dataclass
class AInstruction(Statement):
    """
    Address instruction ``@value``.

    Exactly one of value/symbol is set.

    Attributes:
        value: Decimal literal, if the reference is numeric
        symbol: Symbol name, if the reference is symbolic
    """
    value: Optional[int] = None
    symbol: Optional[str] = None

    @property
    def is_symbolic(self) -> bool:
        return self.symbol is not None


@dataclass
class CInstruction(Statement):
    """
    Compute instruction ``dest=comp;jump``.

    Attributes:
        dest: Destination registers ("" when absent)
        comp: ALU computation (always present)
        jump: Jump condition ("" when absent)
    """
    dest: str = ""
    comp: str = ""
    jump: str = ""


Instruction = Union[AInstruction, CInstruction]


# =============================================================================
# Parser
# =============================================================================

def is_symbol(name: str) -> bool:
    """Check whether name is a legal symbol."""
    return SYMBOL_PATTERN.fullmatch(name) is not None


def parse_line(line: SourceLine, filename: str = "<input>") -> Statement:
    """
    Parse one cleaned source line into a statement.

    Args:
        line: Cleaned source line
        filename: Source filename for error locations

    Returns:
        LabelDef, AInstruction or CInstruction

    Raises:
        AssemblySyntaxError: If the line has no recognizable shape
        MalformedLabelError: If a label's name is empty or illegal
    """
    text = line.text
    location = SourceLocation(filename, line.line, line.column)

    if text.startswith("("):
        return _parse_label(text, location)
    if text.startswith("@"):
        return _parse_a_instruction(text, location)
    return _parse_c_instruction(text, location)


def _parse_label(text: str, location: SourceLocation) -> LabelDef:
    if not text.endswith(")") or text.count("(") != 1 or text.count(")") != 1:
        raise AssemblySyntaxError(
            "label declaration must have the form (NAME)",
            location=location,
            source_line=source_context(text, location.column),
        )

    name = text[1:-1]
    if not is_symbol(name):
        raise MalformedLabelError(
            name,
            location=SourceLocation(location.filename, location.line, location.column + 1),
            source_line=source_context(text, location.column),
        )

    return LabelDef(location=location, source=text, name=name)


def _parse_a_instruction(text: str, location: SourceLocation) -> AInstruction:
    reference = text[1:]
    ref_location = SourceLocation(location.filename, location.line, location.column + 1)

    if not reference:
        raise AssemblySyntaxError(
            "missing address after '@'",
            location=ref_location,
            hint="use @value or @symbol",
            source_line=source_context(text, location.column),
        )

    if DECIMAL_PATTERN.fullmatch(reference):
        return AInstruction(location=location, source=text, value=int(reference))

    if is_symbol(reference):
        return AInstruction(location=location, source=text, symbol=reference)

    raise AssemblySyntaxError(
        f"invalid address reference '{reference}'",
        location=ref_location,
        hint="expected a non-negative decimal number or a symbol "
             "that does not start with a digit",
        source_line=source_context(text, location.column),
    )


def _parse_c_instruction(text: str, location: SourceLocation) -> CInstruction:
    match = C_INSTRUCTION_PATTERN.fullmatch(text)
    if match is None:
        raise AssemblySyntaxError(
            f"unrecognized instruction '{text}'",
            location=location,
            hint="expected @value, (LABEL) or dest=comp;jump",
            source_line=source_context(text, location.column),
        )

    dest = match.group("dest")
    jump = match.group("jump")

    if dest is not None and not dest:
        raise AssemblySyntaxError(
            "missing destination before '='",
            location=location,
            source_line=source_context(text, location.column),
        )
    if jump is not None and not jump:
        raise AssemblySyntaxError(
            "missing jump after ';'",
            location=location,
            source_line=source_context(text, location.column),
        )

    return CInstruction(
        location=location,
        source=text,
        dest=dest or "",
        comp=match.group("comp"),
        jump=jump or "",
    )


def parse_lines(lines: Iterable[SourceLine], filename: str = "<input>") -> list[Statement]:
    """Parse cleaned source lines into statements, in order."""
    return [parse_line(line, filename) for line in lines]


def parse_source(source: str, filename: str = "<input>") -> list[Statement]:
    """
    Clean and parse raw assembly source.

    Args:
        source: Raw assembly source text
        filename: Source filename for error locations

    Returns:
        List of statements in program order
    """
    return parse_lines(clean_source(source), filename)
