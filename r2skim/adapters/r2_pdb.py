#!/usr/bin/env python3
"""
PDB symbol index backed by radare2

radare2 can load a PDB next to the image it has open (``idp <file>``) and
dump its public symbol stream as JSON (``idpij``). Each public symbol
carries a CV_PUBSYMFLAGS value; the fFunction bit marks functions. Symbols
placed in an executable section of the image count as code contributions.

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import r2pipe

from ..domain.artifact import BinaryArtifact
from ..domain.pe_constants import IMAGE_FILE_MACHINE_I386
from ..error_handling import LOAD_RETRY_POLICY, ErrorPolicy, run_with_policy
from ..exceptions import SymbolIndexLoadError
from ..utils.logger import get_logger
from .symbol_index import InMemorySymbolIndex, SymbolRecord

logger = get_logger(__name__)

CV_PUBSYMFLAGS_FFUNCTION = 0x2

_STDCALL_SUFFIX = re.compile(r"@\d+$")


@contextmanager
def open_r2pipe(filepath: str, flags: list[str] | None = None) -> Iterator[Any]:
    """Open an r2pipe session with consistent flags."""
    r2 = r2pipe.open(filepath, flags=flags or ["-2"])
    try:
        yield r2
    finally:
        r2.quit()


def undecorate_x86_name(name: str) -> str:
    """
    Strip 32-bit x86 C name decoration.

    ``_foo`` (cdecl), ``_foo@8`` (stdcall) and ``@foo@8`` (fastcall) all
    become ``foo``. C++ mangled names (``?foo@@...``) are left alone.
    """
    if name.startswith("?"):
        return name
    if name.startswith("@"):
        return _STDCALL_SUFFIX.sub("", name[1:])
    if name.startswith("_"):
        return _STDCALL_SUFFIX.sub("", name[1:])
    return name


def iter_public_symbols(payload: Any) -> Iterator[dict[str, Any]]:
    """Yield every public-symbol entry found in an ``idpij`` payload"""
    if isinstance(payload, dict):
        gvars = payload.get("gvars")
        if isinstance(gvars, list):
            for entry in gvars:
                if isinstance(entry, dict):
                    yield entry
        for key, value in payload.items():
            if key != "gvars":
                yield from iter_public_symbols(value)
    elif isinstance(payload, list):
        for item in payload:
            yield from iter_public_symbols(item)


def build_symbol_index(payload: Any, artifact: BinaryArtifact) -> InMemorySymbolIndex:
    """Turn an ``idpij`` payload into an InMemorySymbolIndex for artifact"""
    undecorate = artifact.machine == IMAGE_FILE_MACHINE_I386
    executable_sections = artifact.executable_section_names

    records = []
    for entry in iter_public_symbols(payload):
        name = entry.get("gdata_name") or entry.get("name")
        if not isinstance(name, str) or not name:
            continue
        flags = entry.get("symtype", 0)
        if not isinstance(flags, int):
            flags = 0
        if undecorate:
            name = undecorate_x86_name(name)
        records.append(
            SymbolRecord(
                name=name,
                section=entry.get("section_name"),
                is_function=bool(flags & CV_PUBSYMFLAGS_FFUNCTION),
            )
        )

    has_code = any(record.section in executable_sections for record in records)
    return InMemorySymbolIndex(records, executable_sections, has_code_contributions=has_code)


def load_pdb_symbol_index(
    artifact: BinaryArtifact,
    pdb_path: str | Path,
    flags: list[str] | None = None,
    policy: ErrorPolicy = LOAD_RETRY_POLICY,
) -> InMemorySymbolIndex:
    """
    Load the PDB for artifact through radare2.

    Raises:
        SymbolIndexLoadError: radare2 could not be started or the PDB did not load
    """
    pdb_path = str(pdb_path)
    try:
        payload = run_with_policy(policy, _query_pdb, artifact.artifact_id, pdb_path, flags)
    except Exception as exc:  # r2pipe raises bare Exception on open failures
        raise SymbolIndexLoadError(pdb_path, str(exc)) from exc

    if not isinstance(payload, (dict, list)) or not payload:
        raise SymbolIndexLoadError(pdb_path, "radare2 returned no PDB information")

    index = build_symbol_index(payload, artifact)
    logger.debug(f"Loaded {index!r} from {pdb_path}")
    return index


def _query_pdb(binary_path: str, pdb_path: str, flags: list[str] | None) -> Any:
    with open_r2pipe(binary_path, flags=flags) as r2:
        r2.cmd(f"idp {pdb_path}")
        return r2.cmdj("idpij")
