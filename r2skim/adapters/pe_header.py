#!/usr/bin/env python3
"""
PE header provider backed by pefile

Reads the handful of header fields the mitigation rules need and freezes
them into a BinaryArtifact. Non-PE inputs are not an error: they come back
as an artifact whose file_format names what was found, and the
applicability gate turns them away.

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from __future__ import annotations

import struct
from pathlib import Path
from typing import Any

import pefile

from ..domain.artifact import PE_FORMAT, BinaryArtifact, SectionInfo
from ..domain.pe_constants import IMAGE_DIRECTORY_ENTRY_COM_DESCRIPTOR
from ..error_handling import LOAD_RETRY_POLICY, ErrorPolicy, run_with_policy
from ..exceptions import ArtifactLoadError
from ..utils.logger import get_logger

logger = get_logger(__name__)

# (offset, signature) -> format name; first match wins
MAGIC_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"MZ", PE_FORMAT),
    (b"\x7fELF", "ELF"),
    (b"\xfe\xed\xfa\xce", "MACHO"),
    (b"\xce\xfa\xed\xfe", "MACHO"),
    (b"\xfe\xed\xfa\xcf", "MACHO"),
    (b"\xcf\xfa\xed\xfe", "MACHO"),
    (b"\xca\xfe\xba\xbe", "MACHO_UNIVERSAL"),
)

UNKNOWN_FORMAT = "UNKNOWN"

# cb, MajorRuntimeVersion, MinorRuntimeVersion, MetaData (rva, size), then Flags
_COR20_FLAGS_OFFSET = 16


def sniff_format(header: bytes) -> str:
    """Identify the container format from the first bytes of a file"""
    for signature, name in MAGIC_SIGNATURES:
        if header.startswith(signature):
            return name
    return UNKNOWN_FORMAT


def load_artifact(path: str | Path, policy: ErrorPolicy = LOAD_RETRY_POLICY) -> BinaryArtifact:
    """
    Load the header metadata of a binary.

    Args:
        path: File to inspect
        policy: Error policy applied to the raw read (transient I/O is retried)

    Returns:
        Immutable BinaryArtifact

    Raises:
        ArtifactLoadError: The file cannot be read or claims to be PE but is corrupt
    """
    path = Path(path)
    try:
        return run_with_policy(policy, _read_artifact, path)
    except OSError as exc:
        raise ArtifactLoadError(str(path), exc.strerror or str(exc)) from exc


def _read_artifact(path: Path) -> BinaryArtifact:
    with open(path, "rb") as handle:
        head = handle.read(4)

    file_format = sniff_format(head)
    if file_format != PE_FORMAT:
        logger.debug(f"{path}: not a PE image ({file_format})")
        return BinaryArtifact(path=path, file_format=file_format)

    try:
        pe = pefile.PE(str(path), fast_load=True)
    except pefile.PEFormatError as exc:
        raise ArtifactLoadError(str(path), f"invalid PE image: {exc.value}") from exc

    try:
        return _artifact_from_pe(path, pe)
    finally:
        pe.close()


def _artifact_from_pe(path: Path, pe: Any) -> BinaryArtifact:
    sections = tuple(
        SectionInfo(
            name=section.Name.rstrip(b"\x00").decode("utf-8", errors="replace"),
            characteristics=section.Characteristics,
            virtual_size=section.Misc_VirtualSize,
            raw_size=section.SizeOfRawData,
        )
        for section in pe.sections
    )

    artifact = BinaryArtifact(
        path=path,
        file_format=PE_FORMAT,
        machine=pe.FILE_HEADER.Machine,
        subsystem=pe.OPTIONAL_HEADER.Subsystem,
        characteristics=pe.FILE_HEADER.Characteristics,
        sections=sections,
        clr_flags=_read_clr_flags(pe),
        pdb_path=_read_codeview_pdb_path(pe),
    )
    logger.debug(
        f"{path}: machine={artifact.machine_name} subsystem={artifact.subsystem} "
        f"sections={len(sections)} managed={artifact.is_managed}"
    )
    return artifact


def _read_clr_flags(pe: Any) -> int | None:
    directories = pe.OPTIONAL_HEADER.DATA_DIRECTORY
    if len(directories) <= IMAGE_DIRECTORY_ENTRY_COM_DESCRIPTOR:
        return None
    com_dir = directories[IMAGE_DIRECTORY_ENTRY_COM_DESCRIPTOR]
    if not com_dir.VirtualAddress or not com_dir.Size:
        return None

    try:
        data = pe.get_data(com_dir.VirtualAddress, _COR20_FLAGS_OFFSET + 4)
    except pefile.PEFormatError as exc:
        logger.debug(f"Unreadable COR20 header: {exc}")
        return 0
    if len(data) < _COR20_FLAGS_OFFSET + 4:
        return 0
    return struct.unpack_from("<I", data, _COR20_FLAGS_OFFSET)[0]


def _read_codeview_pdb_path(pe: Any) -> str | None:
    pe.parse_data_directories(
        directories=[pefile.DIRECTORY_ENTRY["IMAGE_DIRECTORY_ENTRY_DEBUG"]]
    )
    for debug_entry in getattr(pe, "DIRECTORY_ENTRY_DEBUG", []):
        entry = getattr(debug_entry, "entry", None)
        pdb_name = getattr(entry, "PdbFileName", None)
        if pdb_name:
            return pdb_name.rstrip(b"\x00").decode("utf-8", errors="replace")
    return None
