"""
hackasm - Hack Assembler Command-Line Interface
===============================================

This module implements the command-line interface for the Hack assembler.

Usage Examples
--------------
Basic assembly (writes Prog.hack next to Prog.asm):
    $ hackasm Prog.asm

With output file:
    $ hackasm Prog.asm -o build/Prog.hack

Generate all output files:
    $ hackasm Prog.asm -l Prog.lst -s Prog.sym

Verbose mode:
    $ hackasm -v Prog.asm
"""

from pathlib import Path
from typing import Optional
import logging

import click

from hack_assembler import __version__
from hack_assembler.assembler import Assembler
from hack_assembler.cli.errors import handle_cli_exception
from hack_assembler.config import AssemblerConfig


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output machine code file (default: input.hack)",
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate listing file",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file",
)
@click.option(
    "--allow-redefinition",
    is_flag=True,
    help="Let a repeated label declaration rebind the label (last one wins) "
         "instead of failing with a duplicate symbol error",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="hackasm")
def main(
    input_file: Path,
    output: Optional[Path],
    listing: Optional[Path],
    symbols: Optional[Path],
    allow_redefinition: bool,
    verbose: bool,
) -> None:
    """
    Assemble Hack assembly source into Hack machine code.

    INPUT_FILE is the assembly source file (.asm) to assemble.

    The assembler writes one 16-bit binary word per instruction. Nothing
    is written if assembly fails.

    \b
    Examples:
        hackasm Prog.asm              # Outputs Prog.hack
        hackasm Prog.asm -o out.hack  # Specify output file
        hackasm -l Prog.lst Prog.asm  # Also write a listing
    """
    setup_logging(verbose)

    config = AssemblerConfig.from_env().with_overrides(
        allow_label_redefinition=True if allow_redefinition else None,
    )
    asm = Assembler(config)
    output_file = output if output is not None else asm.output_path_for(input_file)

    try:
        if verbose:
            click.echo(f"Assembling {input_file}...")

        asm.assemble_file(input_file)

        asm.write_hack(output_file)

        if listing:
            asm.write_listing(listing)

        if symbols:
            asm.write_symbols(symbols)

        if verbose:
            code = asm.get_code()
            click.echo(f"Assembly complete: {len(code)} instructions")
            click.echo(
                f"Defined {asm.get_label_count()} labels, "
                f"{asm.get_variable_count()} variables"
            )

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
