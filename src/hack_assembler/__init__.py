"""
Hack Assembler - Toolchain for the Hack Computer
================================================

This package translates Hack assembly language, the symbolic machine
language of the 16-bit Hack computer, into Hack machine code.

Main Components
---------------
- **assembler**: Two-pass Hack assembler (hackasm)
    Converts assembly source files (.asm) to machine code (.hack)

- **cpu**: Hack architecture definitions
    C-instruction encoding tables, predefined symbols, memory map

- **config**: Assembler configuration

Quick Start
-----------
Assemble a program:
    >>> from hack_assembler import Assembler
    >>> asm = Assembler()
    >>> code = asm.assemble_file("Add.asm")
    >>> asm.write_hack("Add.hack")

Or use the command-line tool:
    $ hackasm Add.asm

Reference Documentation
-----------------------
- Nisan & Schocken, The Elements of Computing Systems, chapter 6
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hack_assembler.assembler import Assembler, assemble, assemble_file
from hack_assembler.config import AssemblerConfig
from hack_assembler.errors import (
    HackError,
    AssemblerError,
    AssemblySyntaxError,
    MalformedLabelError,
    DuplicateSymbolError,
    EncodingError,
    UnknownComputationError,
    UnknownDestinationError,
    UnknownJumpError,
    AddressRangeError,
    SourceLocation,
)

__all__ = [
    # Version info
    "__version__",
    # Assembler
    "Assembler",
    "assemble",
    "assemble_file",
    "AssemblerConfig",
    # Exception hierarchy
    "HackError",
    "AssemblerError",
    "AssemblySyntaxError",
    "MalformedLabelError",
    "DuplicateSymbolError",
    "EncodingError",
    "UnknownComputationError",
    "UnknownDestinationError",
    "UnknownJumpError",
    "AddressRangeError",
    "SourceLocation",
]
