#!/usr/bin/env python3
"""
r2skim Adapters

Concrete providers behind the rule-facing interfaces:
    load_artifact: pefile-backed Binary Header Provider
    InMemorySymbolIndex: SymbolIndexInterface over a list of symbol records
    load_pdb_symbol_index: radare2/r2pipe-backed PDB reader
    locate_pdb: PDB discovery next to the image or in search paths
"""

from .pdb_locator import locate_pdb
from .pe_header import load_artifact, sniff_format
from .r2_pdb import load_pdb_symbol_index
from .symbol_index import InMemorySymbolIndex, SymbolRecord

__all__ = [
    "InMemorySymbolIndex",
    "SymbolRecord",
    "load_artifact",
    "load_pdb_symbol_index",
    "locate_pdb",
    "sniff_format",
]
