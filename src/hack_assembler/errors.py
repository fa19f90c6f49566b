"""
Hack Assembler Error Hierarchy
==============================

This module defines the exception hierarchy for the Hack assembler.
All exceptions inherit from HackError, allowing callers to catch all
assembler-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
HackError (base)
└── AssemblerError (any translation failure)
    ├── AssemblySyntaxError - line is not an A/C instruction or label
    ├── MalformedLabelError - label declaration with an invalid name
    ├── DuplicateSymbolError - label declared twice / predefined shadowed
    └── EncodingError - a field cannot be encoded
        ├── UnknownComputationError - comp not in the computation table
        ├── UnknownDestinationError - dest not in the destination table
        ├── UnknownJumpError - jump not in the jump table
        └── AddressRangeError - address does not fit in 15 bits

Design Philosophy
-----------------
Each exception captures source location information (filename, line, column)
so that the user can find the offending line. Translation is fail-fast: the
first error aborts the run.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HackError(Exception):
    """
    Base exception for all Hack assembler errors.

        try:
            assembler.assemble_file("Prog.asm")
        except HackError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed, 0 when unknown)
    """
    filename: str
    line: int
    column: int = 1

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(HackError):
    """
    Base exception for all translation errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    @property
    def line(self) -> Optional[int]:
        """1-based source line number, if known."""
        return self.location.line if self.location else None

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            Prog.asm:7:1: error: unknown computation 'Y'
                X=Y
                ^
            hint: valid computations include 0, 1, -1, D, A, M, D+1, ...
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class AssemblySyntaxError(AssemblerError):
    """
    Line matches neither an address instruction, a compute instruction,
    nor a label declaration.

    Examples:
        - "@" with no reference
        - "@1abc" (symbol starting with a digit)
        - "D=" (assignment with no computation)
    """
    pass


class MalformedLabelError(AssemblerError):
    """
    Label declaration whose enclosed name is empty or illegal.

    Example:
        ()        ; empty name
        (1LOOP)   ; starts with a digit
        (MY LOOP) ; contains a space
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.label = name
        if name:
            message = f"malformed label name '{name}'"
        else:
            message = "empty label name"
        super().__init__(
            message,
            location=location,
            hint="labels use letters, digits, '_', '.', '$', ':' "
                 "and must not start with a digit",
            source_line=source_line,
        )


class DuplicateSymbolError(AssemblerError):
    """
    Symbol defined multiple times.

    Raised when a label is declared twice, or when a label tries to shadow
    one of the predefined symbols (SP, R0, SCREEN, ...).
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        predefined: bool = False,
    ):
        self.symbol = symbol
        self.original_location = original_location

        hint = None
        if predefined:
            hint = f"'{symbol}' is a predefined symbol and cannot be redefined"
        elif original_location:
            hint = f"'{symbol}' was first defined at {original_location}"

        super().__init__(
            f"duplicate symbol '{symbol}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class EncodingError(AssemblerError):
    """
    A syntactically valid instruction field cannot be encoded.

    Raised during pass 2 when a field is outside the fixed vocabulary of
    the architecture or a value does not fit its bit field.
    """
    pass


class UnknownComputationError(EncodingError):
    """The comp field of a C-instruction is not in the computation table."""

    def __init__(
        self,
        comp: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar: Optional[list[str]] = None,
    ):
        self.comp = comp
        self.similar = similar or []

        hint = None
        if self.similar:
            suggestions = ", ".join(f"'{s}'" for s in self.similar[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"unknown computation '{comp}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UnknownDestinationError(EncodingError):
    """The dest field of a C-instruction is not a valid register set."""

    def __init__(
        self,
        dest: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.dest = dest
        super().__init__(
            f"unknown destination '{dest}'",
            location=location,
            hint="destinations are combinations of A, M and D",
            source_line=source_line,
        )


class UnknownJumpError(EncodingError):
    """The jump field of a C-instruction is not a known condition."""

    def __init__(
        self,
        jump: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.jump = jump
        super().__init__(
            f"unknown jump '{jump}'",
            location=location,
            hint="jumps are JGT, JEQ, JGE, JLT, JNE, JLE, JMP",
            source_line=source_line,
        )


class AddressRangeError(EncodingError):
    """
    Address does not fit in the 15-bit field of an A-instruction.

    The A-instruction carries a leading 0 marker bit followed by a 15-bit
    unsigned value, so the largest encodable address is 32767.
    """

    def __init__(
        self,
        value: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        symbol: Optional[str] = None,
    ):
        self.value = value
        self.symbol = symbol

        if symbol:
            message = f"address {value} of '{symbol}' is out of range"
        else:
            message = f"address {value} is out of range"

        super().__init__(
            message,
            location=location,
            hint="A-instruction addresses must be in the range 0 to 32767",
            source_line=source_line,
        )
