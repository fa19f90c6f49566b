"""
Hack Code Generator
===================

This module generates Hack machine code from parsed assembly statements.
It implements the two-pass assembly process:

Pass 1 (Label Collection)
-------------------------
- Scan all statements sequentially
- Bind each label to the address of the next real instruction
- Drop label declarations from the instruction stream

Pass 2 (Resolution and Encoding)
--------------------------------
- Resolve A-instruction symbols, allocating variables from address 16
- Encode each instruction as a 16-character binary string

Pass 1 must finish before pass 2 starts so that forward references to
labels resolve.

Output Formats
--------------
The code generator can produce:
- Machine code lines (one 16-bit binary string per instruction)
- Listing file with addresses, code and source
- Symbol table file

Instruction Encoding
--------------------
```
A-instruction:  0vvv vvvv vvvv vvvv    v = 15-bit address
C-instruction:  111a cccc ccdd djjj    a/c = comp, d = dest, j = jump
```
"""

from pathlib import Path
from typing import Optional
import logging

from hack_assembler.assembler.parser import (
    AInstruction,
    CInstruction,
    Instruction,
    LabelDef,
    Statement,
)
from hack_assembler.assembler.symbols import SymbolKind, SymbolTable
from hack_assembler.cpu import (
    ADDRESS_BITS,
    A_INSTRUCTION_PREFIX,
    COMP_TABLE,
    C_INSTRUCTION_PREFIX,
    MAX_ADDRESS,
    get_comp_code,
    get_dest_code,
    get_jump_code,
)
from hack_assembler.errors import (
    AddressRangeError,
    AssemblerError,
    SourceLocation,
    UnknownComputationError,
    UnknownDestinationError,
    UnknownJumpError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Encoding Functions
# =============================================================================

def encode_address(
    address: int,
    location: Optional[SourceLocation] = None,
    source_line: Optional[str] = None,
    symbol: Optional[str] = None,
) -> str:
    """
    Encode an A-instruction.

    Args:
        address: Resolved address (0..32767)

    Returns:
        "0" followed by the 15-bit address, most significant bit first

    Raises:
        AddressRangeError: If address is negative or above 32767
    """
    if address < 0 or address > MAX_ADDRESS:
        raise AddressRangeError(
            address, location=location, source_line=source_line, symbol=symbol,
        )
    return A_INSTRUCTION_PREFIX + format(address, f"0{ADDRESS_BITS}b")


def encode_compute(
    comp: str,
    dest: str = "",
    jump: str = "",
    location: Optional[SourceLocation] = None,
    source_line: Optional[str] = None,
) -> str:
    """
    Encode a C-instruction from its three symbolic fields.

    The comp field is checked first, so an instruction with both an unknown
    destination and an unknown computation reports the computation.

    Returns:
        "111" + comp (7 bits) + dest (3 bits) + jump (3 bits)

    Raises:
        UnknownComputationError: comp is not in the computation table
        UnknownDestinationError: dest is not a set of A, M, D
        UnknownJumpError: jump is not a known condition
    """
    comp_code = get_comp_code(comp)
    if comp_code is None:
        raise UnknownComputationError(
            comp, location=location, source_line=source_line,
            similar=find_similar_computations(comp),
        )

    dest_code = get_dest_code(dest)
    if dest_code is None:
        raise UnknownDestinationError(dest, location=location, source_line=source_line)

    jump_code = get_jump_code(jump)
    if jump_code is None:
        raise UnknownJumpError(jump, location=location, source_line=source_line)

    return C_INSTRUCTION_PREFIX + comp_code + dest_code + jump_code


def find_similar_computations(comp: str) -> list[str]:
    """
    Find table computations the user probably meant.

    Catches lowercase registers ("d+1") and swapped operands of the
    commutative operators ("A+D" for "D+A").
    """
    candidates = [comp.upper()]
    for op in "+&|":
        left, sep, right = comp.upper().partition(op)
        if sep and left and right:
            candidates.append(f"{right}{op}{left}")

    similar = []
    for candidate in candidates:
        if candidate != comp and candidate in COMP_TABLE and candidate not in similar:
            similar.append(candidate)
    return similar


# =============================================================================
# Code Generator
# =============================================================================

class CodeGenerator:
    """
    Generates Hack machine code from parsed statements.

    Every call to generate() starts from a fresh symbol table, so a
    generator can be reused and separate generators never share state.

    Usage:
        codegen = CodeGenerator()
        codegen.generate(statements)
        code = codegen.get_code()
        codegen.write_hack("Prog.hack")
    """

    def __init__(self, allow_label_redefinition: bool = False):
        """
        Initialize the code generator.

        Args:
            allow_label_redefinition: If True, a repeated label declaration
                rebinds the label (last write wins) instead of raising
                DuplicateSymbolError.
        """
        self._allow_label_redefinition = allow_label_redefinition
        self._symbols = SymbolTable(allow_label_redefinition)
        self._code: list[str] = []
        self._listing_lines: list[str] = []

    # =========================================================================
    # Public Interface
    # =========================================================================

    def generate(self, statements: list[Statement]) -> list[str]:
        """
        Generate machine code from parsed statements.

        Args:
            statements: List of parsed statements

        Returns:
            One 16-character binary string per instruction

        Raises:
            AssemblerError: On the first invalid statement
        """
        self.reset()

        try:
            instructions = self._pass1(statements)
            logger.debug(
                f"Pass 1: {len(instructions)} instructions, "
                f"{len(statements) - len(instructions)} labels"
            )
            code = self._pass2(instructions)
        except AssemblerError:
            # Drop the symbols bound before the failing statement
            self.reset()
            raise

        logger.debug(
            f"Pass 2: {len(code)} words, "
            f"next variable at {self._symbols.next_variable_address}"
        )

        # Only a complete run is kept
        self._code = code
        self._listing_lines = self._build_listing_lines(statements, code)
        return list(self._code)

    def get_code(self) -> list[str]:
        """Return the generated machine code lines."""
        return list(self._code)

    def reset(self) -> None:
        """Discard the results of the previous run."""
        self._symbols = SymbolTable(self._allow_label_redefinition)
        self._code = []
        self._listing_lines = []

    def get_symbols(self) -> dict[str, int]:
        """Return a dictionary of user symbol names to addresses."""
        return self._symbols.get_symbols()

    def count_symbols(self, kind: SymbolKind) -> int:
        """Count user symbols of one kind."""
        return sum(1 for sym in self._symbols if sym.kind == kind)

    # =========================================================================
    # Pass 1: Label Collection
    # =========================================================================

    def _pass1(self, statements: list[Statement]) -> list[Instruction]:
        """
        First pass: bind labels and strip them from the instruction stream.

        Returns:
            The label-free instruction list; each instruction's index is
            its ROM address
        """
        instructions: list[Instruction] = []

        for stmt in statements:
            if isinstance(stmt, LabelDef):
                self._symbols.define(
                    stmt.name,
                    len(instructions),
                    location=stmt.location,
                    source_line=stmt.context,
                )
            else:
                instructions.append(stmt)

        return instructions

    # =========================================================================
    # Pass 2: Resolution and Encoding
    # =========================================================================

    def _pass2(self, instructions: list[Instruction]) -> list[str]:
        """
        Second pass: resolve operands and encode instructions.

        Args:
            instructions: Label-free instruction list from pass 1

        Returns:
            One machine code word per instruction
        """
        return [self._generate_instruction(inst) for inst in instructions]

    def _generate_instruction(self, inst: Instruction) -> str:
        """Encode one instruction."""
        if isinstance(inst, AInstruction):
            return self._emit_address(inst)
        return self._emit_compute(inst)

    def _emit_address(self, inst: AInstruction) -> str:
        """Resolve and encode an A-instruction."""
        if not inst.is_symbolic:
            return encode_address(inst.value, inst.location, inst.context)

        address = self._symbols.resolve(inst.symbol, inst.location, inst.context)
        return encode_address(address, inst.location, inst.context, symbol=inst.symbol)

    def _emit_compute(self, inst: CInstruction) -> str:
        """Encode a C-instruction."""
        return encode_compute(inst.comp, inst.dest, inst.jump, inst.location, inst.context)

    # =========================================================================
    # Output
    # =========================================================================

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        Returns:
            The listing showing addresses, machine code and source lines,
            followed by the user symbol table.
        """
        lines = []
        lines.append("Hack Assembler Listing")
        lines.append("=" * 60)
        lines.append("")
        lines.append(" Addr  Code              Line  Source")
        lines.append("-" * 60)
        lines.extend(self._listing_lines)
        lines.append("")
        lines.append("Symbol Table")
        lines.append("-" * 30)
        lines.extend(self._format_symbols())
        return "\n".join(lines) + "\n"

    @staticmethod
    def _build_listing_lines(statements: list[Statement], code: list[str]) -> list[str]:
        """Pair each statement with its address and word; labels get no code."""
        lines = []
        address = 0
        for stmt in statements:
            if isinstance(stmt, LabelDef):
                lines.append(f"{'':5s}  {'':16s}  {stmt.location.line:4d}  {stmt.source}")
                continue
            lines.append(
                f"{address:5d}  {code[address]}  {stmt.location.line:4d}  {stmt.source}"
            )
            address += 1
        return lines

    def _format_symbols(self) -> list[str]:
        symbols = sorted(self._symbols, key=lambda s: (s.value, s.name))
        return [f"{sym.name:20s} {sym.value:5d}  {sym.kind}" for sym in symbols]

    def write_hack(self, filepath: str | Path) -> None:
        """Write machine code, one newline-terminated word per line."""
        with open(filepath, "w") as f:
            for word in self._code:
                f.write(word + "\n")

    def write_listing(self, filepath: str | Path) -> None:
        """Write the assembly listing file."""
        with open(filepath, "w") as f:
            f.write(self.get_listing())

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write symbol table file.

        Format: name address kind (one per line, sorted by address)
        """
        with open(filepath, "w") as f:
            f.write("# Symbol table\n")
            f.write("# Generated by hackasm\n")
            for line in self._format_symbols():
                f.write(line + "\n")
