"""
Hack Assembler
==============

This module provides a complete two-pass assembler for the Hack computer.
It converts Hack assembly source code into Hack machine code: one
16-character binary string per instruction.

Main Components
---------------
- **Assembler**: Main assembler class that orchestrates the assembly process
- **Parser**: Cleans source and parses lines into statements
- **SymbolTable**: Predefined symbols, labels and variables
- **CodeGenerator**: Resolves symbols and encodes instructions

Assembly Process
----------------
1. **Parsing**:
   - Strip comments (//) and whitespace, drop blank lines
   - Parse each line into a LabelDef, AInstruction or CInstruction

2. **Code Generation** (two-pass):
   - Pass 1: Bind labels to instruction addresses, strip declarations
   - Pass 2: Resolve symbols (allocating variables from 16), encode

Example Usage
-------------
>>> from hack_assembler.assembler import Assembler
>>> asm = Assembler()
>>> asm.assemble_string('''
... (LOOP)
...     @LOOP
...     0;JMP
... ''')
['0000000000000000', '1110101010000111']
"""

from hack_assembler.assembler.assembler import Assembler, assemble, assemble_file
from hack_assembler.assembler.parser import (
    SourceLine,
    Statement,
    LabelDef,
    AInstruction,
    CInstruction,
    clean_source,
    parse_line,
    parse_lines,
    parse_source,
)
from hack_assembler.assembler.symbols import Symbol, SymbolKind, SymbolTable
from hack_assembler.assembler.codegen import (
    CodeGenerator,
    encode_address,
    encode_compute,
)

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    # Parser
    "SourceLine",
    "Statement",
    "LabelDef",
    "AInstruction",
    "CInstruction",
    "clean_source",
    "parse_line",
    "parse_lines",
    "parse_source",
    # Symbols
    "Symbol",
    "SymbolKind",
    "SymbolTable",
    # Code generator
    "CodeGenerator",
    "encode_address",
    "encode_compute",
]
