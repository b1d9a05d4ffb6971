"""Shared fixtures for r2skim tests."""

from __future__ import annotations

import struct
from collections.abc import Sequence
from pathlib import Path

import pytest

from r2skim.adapters.symbol_index import InMemorySymbolIndex, SymbolRecord
from r2skim.domain.artifact import BinaryArtifact, SectionInfo
from r2skim.domain.pe_constants import (
    IMAGE_FILE_MACHINE_AMD64,
    IMAGE_FILE_MACHINE_I386,
    IMAGE_SUBSYSTEM_WINDOWS_CUI,
)

TEXT_CHARACTERISTICS = 0x60000020  # CNT_CODE | MEM_EXECUTE | MEM_READ
RDATA_CHARACTERISTICS = 0x40000040  # CNT_INITIALIZED_DATA | MEM_READ
RSRC_CHARACTERISTICS = 0x40000040

_FILE_ALIGNMENT = 0x200
_SECTION_ALIGNMENT = 0x1000
_OPTIONAL_HEADER32 = "<HBB" + "I" * 9 + "H" * 6 + "I" * 4 + "HH" + "I" * 6


def build_pe(
    machine: int = IMAGE_FILE_MACHINE_I386,
    subsystem: int = IMAGE_SUBSYSTEM_WINDOWS_CUI,
    characteristics: int = 0x0102,
    sections: Sequence[tuple[str, int]] = ((".text", TEXT_CHARACTERISTICS),),
    clr_flags: int | None = None,
) -> bytes:
    """
    Assemble a minimal PE32 image.

    Every section is one file-aligned block of zeros. With clr_flags, a
    COR20 header is written at the start of the first section and the
    COM descriptor directory points at it.
    """
    count = len(sections)
    dos_header = b"MZ" + b"\x00" * 58 + struct.pack("<I", 0x40)
    file_header = struct.pack("<HHIIIHH", machine, count, 0, 0, 0, 224, characteristics)

    optional_header = struct.pack(
        _OPTIONAL_HEADER32,
        0x10B,  # PE32
        14,
        0,
        _FILE_ALIGNMENT,  # SizeOfCode
        0,
        0,
        _SECTION_ALIGNMENT,  # AddressOfEntryPoint
        _SECTION_ALIGNMENT,  # BaseOfCode
        0,
        0x400000,  # ImageBase
        _SECTION_ALIGNMENT,
        _FILE_ALIGNMENT,
        6,
        0,
        0,
        0,
        6,
        0,
        0,
        _SECTION_ALIGNMENT * (count + 1),  # SizeOfImage
        _FILE_ALIGNMENT,  # SizeOfHeaders
        0,
        subsystem,
        0,
        0x100000,
        0x1000,
        0x100000,
        0x1000,
        0,
        16,  # NumberOfRvaAndSizes
    )

    directories = [(0, 0)] * 16
    if clr_flags is not None:
        directories[14] = (_SECTION_ALIGNMENT, 72)
    data_directories = b"".join(struct.pack("<II", rva, size) for rva, size in directories)

    section_table = b"".join(
        struct.pack(
            "<8sIIIIIIHHI",
            name.encode(),
            _FILE_ALIGNMENT,
            _SECTION_ALIGNMENT * (index + 1),
            _FILE_ALIGNMENT,
            _FILE_ALIGNMENT * (index + 1),
            0,
            0,
            0,
            0,
            section_characteristics,
        )
        for index, (name, section_characteristics) in enumerate(sections)
    )

    headers = (
        dos_header + b"PE\x00\x00" + file_header + optional_header + data_directories + section_table
    )
    image = headers.ljust(_FILE_ALIGNMENT, b"\x00")

    for index in range(count):
        body = b""
        if index == 0 and clr_flags is not None:
            # cb, runtime version, metadata directory, Flags
            body = struct.pack("<IHHIII", 72, 2, 5, 0, 0, clr_flags)
        image += body.ljust(_FILE_ALIGNMENT, b"\x00")
    return image


@pytest.fixture
def pe_factory(tmp_path: Path):
    """Write crafted PE images into tmp_path"""

    def _write(name: str = "sample.exe", **kwargs) -> Path:
        path = tmp_path / name
        path.write_bytes(build_pe(**kwargs))
        return path

    return _write


def make_artifact(
    path: str = "C:/build/app.exe",
    machine: int = IMAGE_FILE_MACHINE_AMD64,
    subsystem: int = IMAGE_SUBSYSTEM_WINDOWS_CUI,
    sections: Sequence[SectionInfo] = (SectionInfo(".text", TEXT_CHARACTERISTICS),),
    **kwargs,
) -> BinaryArtifact:
    return BinaryArtifact(
        path=Path(path),
        machine=machine,
        subsystem=subsystem,
        sections=tuple(sections),
        **kwargs,
    )


def make_index(*functions: str, code: bool = True) -> InMemorySymbolIndex:
    """Index holding the given global functions, all placed in .text"""
    records = [SymbolRecord(name, ".text", is_function=True) for name in functions]
    return InMemorySymbolIndex(records, {".text"}, has_code_contributions=code)


@pytest.fixture
def native_artifact() -> BinaryArtifact:
    return make_artifact()
