#!/usr/bin/env python3
"""
Symbol Index Protocol Interface

Read-only queries over the debug-symbol database (PDB) that accompanies a
compiled image. Rules depend on this protocol only, so the PDB backend can
be radare2, a pre-extracted dump or a test fake.

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class SymbolIndexInterface(Protocol):
    """
    Protocol defining the queries a mitigation rule may ask of a PDB.

    All methods must be deterministic and free of side effects. A rule
    calls each of them at most once per analysis.
    """

    def has_any_global_function(self) -> bool:
        """
        Whether the PDB records at least one global function.

        Returns:
            True if any global function symbol exists
        """
        ...

    def has_executable_section_contribution(self) -> bool:
        """
        Whether any compiland contributes bytes to an executable section.

        Returns:
            True if some symbol or contribution lands in code
        """
        ...

    def find_global_function(self, name: str, case_sensitive: bool = True) -> bool:
        """
        Exact lookup of a global function by name.

        Args:
            name: Undecorated function name (e.g. "__security_init_cookie")
            case_sensitive: Compare names case-sensitively

        Returns:
            True if a global function with that name exists
        """
        ...
