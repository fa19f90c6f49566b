"""
Hack Assembler CPU Package
==========================

This package contains the Hack architecture definitions used by the
assembler: the fixed C-instruction encoding tables, the predefined
symbols, and the address-space constants.

Modules:
    hack: Complete Hack instruction set tables and lookup helpers.

Usage:
    from hack_assembler.cpu import (
        COMP_TABLE,
        DEST_TABLE,
        JUMP_TABLE,
        get_comp_code,
    )
"""

# =============================================================================
# Public API Exports
# =============================================================================

from hack_assembler.cpu.hack import (
    # Address space constants
    ADDRESS_BITS,
    MAX_ADDRESS,
    VARIABLE_BASE,
    A_INSTRUCTION_PREFIX,
    C_INSTRUCTION_PREFIX,
    # Encoding tables
    COMP_TABLE,
    DEST_TABLE,
    DEST_REGISTERS,
    JUMP_TABLE,
    PREDEFINED_SYMBOLS,
    # Lookup functions
    get_comp_code,
    get_dest_code,
    get_jump_code,
    normalize_dest,
    is_predefined,
)

__all__ = [
    # Address space constants
    "ADDRESS_BITS",
    "MAX_ADDRESS",
    "VARIABLE_BASE",
    "A_INSTRUCTION_PREFIX",
    "C_INSTRUCTION_PREFIX",
    # Encoding tables
    "COMP_TABLE",
    "DEST_TABLE",
    "DEST_REGISTERS",
    "JUMP_TABLE",
    "PREDEFINED_SYMBOLS",
    # Lookup functions
    "get_comp_code",
    "get_dest_code",
    "get_jump_code",
    "normalize_dest",
    "is_predefined",
]
