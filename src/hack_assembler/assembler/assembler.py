"""
Hack Assembler - Main Interface
===============================

This module provides the main Assembler class, which is the primary interface
for assembling Hack source code. It coordinates the source cleaner, parser
and code generator to produce Hack machine code.

Example Usage
-------------
>>> from hack_assembler.assembler import Assembler
>>>
>>> asm = Assembler()
>>> code = asm.assemble_string('''
... @2
... D=A
... @3
... D=D+A
... @0
... M=D
... ''')
>>> code[1]
'1110110000010000'
>>>
>>> asm.write_hack("Add.hack")

Command-Line Usage
------------------
The assembler can also be invoked from the command line:

    $ hackasm Add.asm -l Add.lst -s Add.sym
"""

from pathlib import Path
from typing import Iterable, Optional
import logging

from hack_assembler.assembler.codegen import CodeGenerator
from hack_assembler.assembler.parser import SourceLine, parse_lines, parse_source
from hack_assembler.assembler.symbols import SymbolKind
from hack_assembler.config import AssemblerConfig

logger = logging.getLogger(__name__)


class Assembler:
    """
    Main Hack assembler class.

    Each assemble_* call is an independent run with a fresh symbol table.
    A failed run clears any earlier results. The results of a successful
    run are available through get_code(), get_symbols(), get_listing() and
    the write_* methods.

    Attributes:
        config: Effective AssemblerConfig
    """

    def __init__(self, config: Optional[AssemblerConfig] = None,
                 allow_label_redefinition: Optional[bool] = None):
        """
        Initialize the assembler.

        Args:
            config: Assembler configuration (default: AssemblerConfig())
            allow_label_redefinition: Overrides config.allow_label_redefinition
        """
        self.config = (config or AssemblerConfig()).with_overrides(
            allow_label_redefinition=allow_label_redefinition,
        )
        self._source_file: Optional[Path] = None
        self._codegen = CodeGenerator(
            allow_label_redefinition=self.config.allow_label_redefinition,
        )

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_string(self, source: str, filename: str = "<input>") -> list[str]:
        """
        Assemble source code from a string.

        Args:
            source: Raw Hack assembly source (comments and blank lines allowed)
            filename: Virtual filename for error messages

        Returns:
            One 16-character binary string per instruction

        Raises:
            AssemblerError: If assembly fails
        """
        self._codegen.reset()
        statements = parse_source(source, filename)
        logger.debug(f"Parsed {len(statements)} statements from {filename}")
        return self._codegen.generate(statements)

    def assemble_lines(self, lines: Iterable[str], filename: str = "<input>") -> list[str]:
        """
        Assemble already-cleaned source lines.

        Each line must be non-empty, trimmed and free of comments. Line
        numbers in errors are the 1-based positions in lines.

        Args:
            lines: Cleaned source lines
            filename: Virtual filename for error messages

        Returns:
            One 16-character binary string per instruction
        """
        source_lines = [SourceLine(text, number) for number, text in enumerate(lines, start=1)]
        self._codegen.reset()
        statements = parse_lines(source_lines, filename)
        return self._codegen.generate(statements)

    def assemble_file(self, filepath: str | Path) -> list[str]:
        """
        Assemble source code from a file.

        Args:
            filepath: Path to assembly source file

        Returns:
            One 16-character binary string per instruction

        Raises:
            AssemblerError: If assembly fails
            FileNotFoundError: If source file not found
        """
        filepath = Path(filepath)
        self._source_file = filepath

        logger.debug(f"Assembling {filepath}")
        self._codegen.reset()
        source = filepath.read_text(encoding="utf-8")
        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Output Methods
    # =========================================================================

    def get_code(self) -> list[str]:
        """Get the generated machine code lines."""
        return self._codegen.get_code()

    def get_symbols(self) -> dict[str, int]:
        """
        Get the user symbol table (labels and variables).

        Returns:
            Dictionary mapping symbol names to addresses
        """
        return self._codegen.get_symbols()

    def get_label_count(self) -> int:
        return self._codegen.count_symbols(SymbolKind.LABEL)

    def get_variable_count(self) -> int:
        return self._codegen.count_symbols(SymbolKind.VARIABLE)

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        Returns:
            Listing with addresses, machine code, and source
        """
        return self._codegen.get_listing()

    def output_path_for(self, source: str | Path) -> Path:
        """Default machine-code path for a source file (Prog.asm -> Prog.hack)."""
        return Path(source).with_suffix(self.config.output_suffix)

    def write_hack(self, filepath: str | Path) -> None:
        """
        Write machine code file.

        Args:
            filepath: Output file path
        """
        self._codegen.write_hack(filepath)
        logger.info(f"Wrote {len(self.get_code())} words to {filepath}")

    def write_listing(self, filepath: str | Path) -> None:
        """
        Write assembly listing file.

        Args:
            filepath: Output file path
        """
        self._codegen.write_listing(filepath)
        logger.info(f"Wrote listing to {filepath}")

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write symbol table file.

        Args:
            filepath: Output file path
        """
        self._codegen.write_symbols(filepath)
        logger.info(f"Wrote symbols to {filepath}")


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>",
             allow_label_redefinition: bool = False) -> list[str]:
    """
    Convenience function to assemble source code.

    Args:
        source: Assembly source code
        filename: Virtual filename for errors
        allow_label_redefinition: Let a repeated label rebind (last wins)

    Returns:
        Machine code lines

    Raises:
        AssemblerError: If assembly fails
    """
    asm = Assembler(allow_label_redefinition=allow_label_redefinition)
    return asm.assemble_string(source, filename)


def assemble_file(filepath: str | Path, allow_label_redefinition: bool = False) -> list[str]:
    """
    Convenience function to assemble a file.

    Args:
        filepath: Path to source file
        allow_label_redefinition: Let a repeated label rebind (last wins)

    Returns:
        Machine code lines

    Raises:
        AssemblerError: If assembly fails
    """
    asm = Assembler(allow_label_redefinition=allow_label_redefinition)
    return asm.assemble_file(filepath)
