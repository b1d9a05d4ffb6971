#!/usr/bin/env python3
"""
Binary artifact model

Immutable header metadata for one compiled image. Rules receive a
BinaryArtifact and only ever read from it.

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .pe_constants import (
    COMIMAGE_FLAGS_ILONLY,
    IMAGE_FILE_MACHINE_UNKNOWN,
    IMAGE_SCN_CNT_CODE,
    IMAGE_SCN_MEM_EXECUTE,
    IMAGE_SUBSYSTEM_NATIVE,
    IMAGE_SUBSYSTEM_UNKNOWN,
    MACHINE_NAMES,
)

PE_FORMAT = "PE"


@dataclass(frozen=True, slots=True)
class SectionInfo:
    """One entry of the section table."""

    name: str
    characteristics: int = 0
    virtual_size: int = 0
    raw_size: int = 0

    @property
    def is_executable(self) -> bool:
        return bool(self.characteristics & (IMAGE_SCN_MEM_EXECUTE | IMAGE_SCN_CNT_CODE))


@dataclass(frozen=True, slots=True)
class BinaryArtifact:
    """
    Header view of a compiled image.

    Attributes:
        path: Location of the image; doubles as its identity
        file_format: "PE" for Portable Executables, otherwise the sniffed format
        machine: IMAGE_FILE_MACHINE_* value
        subsystem: IMAGE_SUBSYSTEM_* value
        characteristics: COFF file header characteristics
        sections: Section table in file order
        clr_flags: COR20 header flags, None when the image has no CLR header
        pdb_path: PDB path recorded in the CodeView debug entry, if any
    """

    path: Path
    file_format: str = PE_FORMAT
    machine: int = IMAGE_FILE_MACHINE_UNKNOWN
    subsystem: int = IMAGE_SUBSYSTEM_UNKNOWN
    characteristics: int = 0
    sections: tuple[SectionInfo, ...] = field(default_factory=tuple)
    clr_flags: int | None = None
    pdb_path: str | None = None

    @property
    def artifact_id(self) -> str:
        return str(self.path)

    @property
    def machine_name(self) -> str:
        return MACHINE_NAMES.get(self.machine, f"0x{self.machine:04x}")

    @property
    def is_pe(self) -> bool:
        return self.file_format == PE_FORMAT

    @property
    def is_managed(self) -> bool:
        return self.clr_flags is not None

    @property
    def is_il_only(self) -> bool:
        return self.clr_flags is not None and bool(self.clr_flags & COMIMAGE_FLAGS_ILONLY)

    @property
    def is_kernel_mode(self) -> bool:
        return self.subsystem == IMAGE_SUBSYSTEM_NATIVE

    @property
    def executable_section_names(self) -> frozenset[str]:
        return frozenset(section.name for section in self.sections if section.is_executable)

    @property
    def has_executable_sections(self) -> bool:
        return any(section.is_executable for section in self.sections)

    @property
    def is_resource_only(self) -> bool:
        """A PE image with no code at all, typically a satellite resource DLL."""
        return self.is_pe and not self.has_executable_sections
