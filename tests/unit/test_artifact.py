from __future__ import annotations

from pathlib import Path

from conftest import RSRC_CHARACTERISTICS, TEXT_CHARACTERISTICS, make_artifact

from r2skim.domain.artifact import BinaryArtifact, SectionInfo
from r2skim.domain.pe_constants import (
    IMAGE_FILE_MACHINE_ARM64,
    IMAGE_SCN_CNT_CODE,
    IMAGE_SCN_MEM_EXECUTE,
    IMAGE_SUBSYSTEM_NATIVE,
)


def test_section_is_executable_by_either_flag():
    assert SectionInfo(".text", IMAGE_SCN_MEM_EXECUTE).is_executable
    assert SectionInfo(".code", IMAGE_SCN_CNT_CODE).is_executable
    assert not SectionInfo(".rsrc", RSRC_CHARACTERISTICS).is_executable


def test_artifact_identity_is_path():
    artifact = make_artifact("/tmp/bin/app.dll")
    assert artifact.artifact_id == str(Path("/tmp/bin/app.dll"))


def test_artifact_queries():
    artifact = make_artifact(
        machine=IMAGE_FILE_MACHINE_ARM64,
        characteristics=0x2102,
        sections=(
            SectionInfo(".text", TEXT_CHARACTERISTICS),
            SectionInfo(".rsrc", RSRC_CHARACTERISTICS),
        ),
    )
    assert artifact.is_pe
    assert artifact.characteristics == 0x2102
    assert artifact.machine_name == "ARM64"
    assert artifact.executable_section_names == frozenset({".text"})
    assert artifact.has_executable_sections
    assert not artifact.is_resource_only
    assert not artifact.is_managed
    assert not artifact.is_il_only
    assert not artifact.is_kernel_mode


def test_resource_only_and_kernel_mode():
    resources = make_artifact(sections=(SectionInfo(".rsrc", RSRC_CHARACTERISTICS),))
    assert resources.is_resource_only

    driver = make_artifact(subsystem=IMAGE_SUBSYSTEM_NATIVE)
    assert driver.is_kernel_mode


def test_managed_flags():
    mixed = make_artifact(clr_flags=0)
    assert mixed.is_managed
    assert not mixed.is_il_only

    il_only = make_artifact(clr_flags=0x1)
    assert il_only.is_il_only


def test_non_pe_artifact_is_never_resource_only():
    elf = BinaryArtifact(path=Path("/tmp/a.out"), file_format="ELF")
    assert not elf.is_pe
    assert not elf.is_resource_only
    assert elf.machine_name == "Unknown"


def test_unknown_machine_name_is_hex():
    assert make_artifact(machine=0x1234).machine_name == "0x1234"
