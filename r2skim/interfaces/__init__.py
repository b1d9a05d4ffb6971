#!/usr/bin/env python3
"""
r2skim Interfaces Module

Protocol-based interfaces for the read-only providers consumed by rules.
Any object with the right methods satisfies a protocol; no inheritance is
required.

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from .symbol_index import SymbolIndexInterface

__all__ = [
    "SymbolIndexInterface",
]
