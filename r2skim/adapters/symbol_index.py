#!/usr/bin/env python3
"""In-memory symbol index."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SymbolRecord:
    """A global symbol as recorded in the PDB."""

    name: str
    section: str | None = None
    is_function: bool = False


class InMemorySymbolIndex:
    """
    SymbolIndexInterface over an already-extracted symbol list.

    The index is built once and never changes, so it can be shared by every
    rule that runs against the same artifact, from any thread.
    """

    def __init__(
        self,
        symbols: Iterable[SymbolRecord] = (),
        executable_sections: Iterable[str] = (),
        has_code_contributions: bool | None = None,
    ):
        self._symbols: tuple[SymbolRecord, ...] = tuple(symbols)
        self._executable_sections = frozenset(executable_sections)
        self._functions = frozenset(s.name for s in self._symbols if s.is_function)
        self._functions_folded = frozenset(name.casefold() for name in self._functions)
        if has_code_contributions is None:
            has_code_contributions = any(
                s.section in self._executable_sections for s in self._symbols
            )
        self._has_code_contributions = has_code_contributions

    @property
    def symbols(self) -> tuple[SymbolRecord, ...]:
        return self._symbols

    def has_any_global_function(self) -> bool:
        return bool(self._functions)

    def has_executable_section_contribution(self) -> bool:
        return self._has_code_contributions

    def find_global_function(self, name: str, case_sensitive: bool = True) -> bool:
        if case_sensitive:
            return name in self._functions
        return name.casefold() in self._functions_folded

    def __len__(self) -> int:
        return len(self._symbols)

    def __repr__(self) -> str:
        return (
            f"InMemorySymbolIndex(symbols={len(self._symbols)}, "
            f"functions={len(self._functions)})"
        )
