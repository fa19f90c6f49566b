"""
Hack Instruction Set Definition
===============================

This module defines the Hack instruction set: the computation, destination
and jump tables used to encode C-instructions, plus the predefined symbols
and the address-space constants shared by the assembler.

Instruction Formats
-------------------
The Hack CPU has two 16-bit instruction formats:

1. **A-instruction**: ``@value``
   - ``0vvv vvvv vvvv vvvv``
   - Loads a 15-bit unsigned value into the A register
   - Example: @21 -> 0000000000010101

2. **C-instruction**: ``dest=comp;jump``
   - ``111a cccc ccdd djjj``
   - a/c bits: ALU computation (7 bits, ``a`` selects A or M)
   - d bits: destination registers (A, D, M)
   - j bits: jump condition
   - Example: D=D+A -> 1110000010010000

Memory Map
----------
- 0-15: virtual registers R0..R15 (aliased by SP, LCL, ARG, THIS, THAT)
- 16-16383: general RAM, variables start at 16
- 16384-24575: screen memory map (SCREEN)
- 24576: keyboard memory map (KBD)

Reference
---------
- Nisan & Schocken, *The Elements of Computing Systems*, chapters 4 and 6
"""

from types import MappingProxyType
from typing import Mapping, Optional


# =============================================================================
# Address Space Constants
# =============================================================================

ADDRESS_BITS = 15           # A-instruction value field
MAX_ADDRESS = (1 << ADDRESS_BITS) - 1  # 32767
VARIABLE_BASE = 16          # First RAM address handed to variables

A_INSTRUCTION_PREFIX = "0"
C_INSTRUCTION_PREFIX = "111"


# =============================================================================
# Computation Table
# =============================================================================
# Key: comp mnemonic as written in source
# Value: 7-bit string "a c1 c2 c3 c4 c5 c6"
#
# The a-bit selects the ALU's second operand: 0 -> A register, 1 -> M.
# =============================================================================

COMP_TABLE: Mapping[str, str] = MappingProxyType({
    # a = 0
    "0":   "0101010",
    "1":   "0111111",
    "-1":  "0111010",
    "D":   "0001100",
    "A":   "0110000",
    "!D":  "0001101",
    "!A":  "0110001",
    "-D":  "0001111",
    "-A":  "0110011",
    "D+1": "0011111",
    "A+1": "0110111",
    "D-1": "0001110",
    "A-1": "0110010",
    "D+A": "0000010",
    "D-A": "0010011",
    "A-D": "0000111",
    "D&A": "0000000",
    "D|A": "0010101",

    # a = 1
    "M":   "1110000",
    "!M":  "1110001",
    "-M":  "1110011",
    "M+1": "1110111",
    "M-1": "1110010",
    "D+M": "1000010",
    "D-M": "1010011",
    "M-D": "1000111",
    "D&M": "1000000",
    "D|M": "1010101",
})


# =============================================================================
# Destination Table
# =============================================================================
# Key: canonical destination (registers in A, M, D order)
# Value: 3-bit string "d1 d2 d3" = (A, D, M)
# =============================================================================

DEST_TABLE: Mapping[str, str] = MappingProxyType({
    "":    "000",
    "M":   "001",
    "D":   "010",
    "MD":  "011",
    "A":   "100",
    "AM":  "101",
    "AD":  "110",
    "AMD": "111",
})

DEST_REGISTERS = "AMD"


# =============================================================================
# Jump Table
# =============================================================================
# Key: jump mnemonic
# Value: 3-bit string "j1 j2 j3" = (out < 0, out == 0, out > 0)
# =============================================================================

JUMP_TABLE: Mapping[str, str] = MappingProxyType({
    "":    "000",
    "JGT": "001",
    "JEQ": "010",
    "JGE": "011",
    "JLT": "100",
    "JNE": "101",
    "JLE": "110",
    "JMP": "111",
})


# =============================================================================
# Predefined Symbols
# =============================================================================

PREDEFINED_SYMBOLS: Mapping[str, int] = MappingProxyType({
    "SP": 0,
    "LCL": 1,
    "ARG": 2,
    "THIS": 3,
    "THAT": 4,
    **{f"R{n}": n for n in range(16)},
    "SCREEN": 16384,
    "KBD": 24576,
})


# =============================================================================
# Lookup Functions
# =============================================================================

def get_comp_code(comp: str) -> Optional[str]:
    """Return the 7-bit code for a computation, or None if unknown."""
    return COMP_TABLE.get(comp)


def normalize_dest(dest: str) -> Optional[str]:
    """
    Normalize a destination to its canonical table key.

    The registers may be written in any order ("DM" is the same as "MD"),
    but each may appear only once.

    Returns:
        Canonical key, or None if dest is not a set of A, M, D
    """
    if len(set(dest)) != len(dest):
        return None
    if not set(dest) <= set(DEST_REGISTERS):
        return None
    return "".join(reg for reg in DEST_REGISTERS if reg in dest)


def get_dest_code(dest: str) -> Optional[str]:
    """Return the 3-bit code for a destination, or None if invalid."""
    key = normalize_dest(dest)
    if key is None:
        return None
    return DEST_TABLE.get(key)


def get_jump_code(jump: str) -> Optional[str]:
    """Return the 3-bit code for a jump, or None if unknown."""
    return JUMP_TABLE.get(jump)


def is_predefined(name: str) -> bool:
    """Check whether name is one of the architectural symbols."""
    return name in PREDEFINED_SYMBOLS
