"""
Hack Symbol Table
=================

This module implements the symbol table used by the two assembly passes.

The table starts out holding the predefined architectural symbols
(SP, LCL, ARG, THIS, THAT, R0..R15, SCREEN, KBD). Pass 1 adds labels and
pass 2 adds variables, which are allocated sequentially starting at RAM
address 16.

Every name maps to exactly one address. Predefined symbols are immutable,
and a user symbol is never silently reassigned. The only exception is a
label redefinition explicitly allowed by configuration.

Example
-------
>>> table = SymbolTable()
>>> table.lookup("SCREEN")
16384
>>> table.allocate_variable("i")
16
>>> table.allocate_variable("sum")
17
>>> table.lookup("i")
16
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional
import logging

from hack_assembler.cpu import (
    MAX_ADDRESS,
    PREDEFINED_SYMBOLS,
    VARIABLE_BASE,
    is_predefined,
)
from hack_assembler.errors import (
    AddressRangeError,
    DuplicateSymbolError,
    SourceLocation,
)

logger = logging.getLogger(__name__)

PREDEFINED_LOCATION = SourceLocation("<predefined>", 0, 0)


# =============================================================================
# Symbol Table Entry
# =============================================================================

class SymbolKind(Enum):
    """Where a symbol came from."""
    PREDEFINED = auto()  # Architectural constant
    LABEL = auto()       # (NAME) declaration, bound in pass 1
    VARIABLE = auto()    # First use in @NAME, bound in pass 2

    def __str__(self) -> str:
        return self.name.lower()


@dataclass
class Symbol:
    """
    Symbol table entry.

    Attributes:
        name: Symbol name (case-sensitive)
        value: Resolved address
        kind: PREDEFINED, LABEL or VARIABLE
        location: Where the symbol was defined
    """
    name: str
    value: int
    kind: SymbolKind
    location: SourceLocation = PREDEFINED_LOCATION


# =============================================================================
# Symbol Table
# =============================================================================

class SymbolTable:
    """
    Mapping from symbol name to address, scoped to one assembly run.

    The variable address cursor lives here as well, so two tables never
    share allocation state.

    Attributes:
        allow_label_redefinition: If True, redeclaring a label rebinds it
            (last write wins) instead of raising DuplicateSymbolError.
    """

    def __init__(self, allow_label_redefinition: bool = False):
        self.allow_label_redefinition = allow_label_redefinition
        self._symbols: dict[str, Symbol] = {
            name: Symbol(name, value, SymbolKind.PREDEFINED)
            for name, value in PREDEFINED_SYMBOLS.items()
        }
        self._next_variable = VARIABLE_BASE

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[Symbol]:
        """Iterate over user-defined symbols in definition order."""
        return (s for s in self._symbols.values() if s.kind != SymbolKind.PREDEFINED)

    @property
    def next_variable_address(self) -> int:
        """Address the next new variable will receive."""
        return self._next_variable

    def lookup(self, name: str) -> Optional[int]:
        """
        Look up a symbol's address.

        Returns:
            The address, or None if the symbol is not defined
        """
        symbol = self._symbols.get(name)
        return symbol.value if symbol is not None else None

    def get(self, name: str) -> Optional[Symbol]:
        """Return the full Symbol entry, or None."""
        return self._symbols.get(name)

    def define(
        self,
        name: str,
        address: int,
        location: SourceLocation = PREDEFINED_LOCATION,
        source_line: Optional[str] = None,
    ) -> None:
        """
        Bind a label to an address.

        Args:
            name: Label name
            address: Instruction address the label points to
            location: Where the label was declared
            source_line: Source text, for error messages

        Raises:
            DuplicateSymbolError: If name is predefined, or already defined
                and redefinition is not allowed
        """
        if is_predefined(name):
            raise DuplicateSymbolError(
                name, location=location, source_line=source_line,
                predefined=True,
            )

        existing = self._symbols.get(name)
        if existing is not None:
            if not self.allow_label_redefinition:
                raise DuplicateSymbolError(
                    name, location=location,
                    original_location=existing.location,
                    source_line=source_line,
                )
            logger.warning(
                f"{location}: label '{name}' redefined "
                f"(was {existing.value}, now {address})"
            )

        self._symbols[name] = Symbol(name, address, SymbolKind.LABEL, location)
        logger.debug(f"Label {name} = {address}")

    def allocate_variable(
        self,
        name: str,
        location: SourceLocation = PREDEFINED_LOCATION,
        source_line: Optional[str] = None,
    ) -> int:
        """
        Allocate the next RAM address to a new variable.

        Args:
            name: Variable name (must not already be defined)
            location: Where the variable was first used
            source_line: Source text, for error messages

        Returns:
            The allocated address

        Raises:
            AddressRangeError: If RAM above the variable base is exhausted
        """
        if name in self._symbols:
            raise ValueError(f"symbol '{name}' is already defined")

        address = self._next_variable
        if address > MAX_ADDRESS:
            raise AddressRangeError(
                address, location=location, source_line=source_line, symbol=name,
            )

        self._symbols[name] = Symbol(name, address, SymbolKind.VARIABLE, location)
        self._next_variable += 1
        logger.debug(f"Variable {name} = {address}")
        return address

    def resolve(
        self,
        name: str,
        location: SourceLocation = PREDEFINED_LOCATION,
        source_line: Optional[str] = None,
    ) -> int:
        """
        Resolve a symbol, allocating it as a variable on first use.

        Repeated calls with the same name always return the same address.
        """
        address = self.lookup(name)
        if address is None:
            address = self.allocate_variable(name, location, source_line)
        return address

    def get_symbols(self, include_predefined: bool = False) -> dict[str, int]:
        """
        Get a snapshot of the symbol table.

        Args:
            include_predefined: Also include the architectural symbols

        Returns:
            Dictionary mapping symbol names to addresses
        """
        return {
            name: sym.value
            for name, sym in self._symbols.items()
            if include_predefined or sym.kind != SymbolKind.PREDEFINED
        }
