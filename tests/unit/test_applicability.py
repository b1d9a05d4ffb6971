from __future__ import annotations

from pathlib import Path

import pytest
from conftest import RSRC_CHARACTERISTICS, make_artifact

from r2skim.domain.artifact import BinaryArtifact, SectionInfo
from r2skim.domain.pe_constants import (
    IMAGE_FILE_MACHINE_AMD64,
    IMAGE_FILE_MACHINE_ARM,
    IMAGE_FILE_MACHINE_ARM64,
    IMAGE_FILE_MACHINE_ARMNT,
    IMAGE_FILE_MACHINE_I386,
    IMAGE_FILE_MACHINE_IA64,
    IMAGE_SUBSYSTEM_NATIVE,
)
from r2skim.rules.applicability import MetadataConditions, evaluate_conditions
from r2skim.rules.stack_protection import common_can_analyze


@pytest.mark.parametrize(
    "machine",
    [
        IMAGE_FILE_MACHINE_I386,
        IMAGE_FILE_MACHINE_AMD64,
        IMAGE_FILE_MACHINE_ARM,
        IMAGE_FILE_MACHINE_ARMNT,
        IMAGE_FILE_MACHINE_ARM64,
    ],
)
def test_native_user_mode_images_are_applicable(machine):
    gate = common_can_analyze(make_artifact(machine=machine))
    assert gate.applicable
    assert gate.reason == ""


def test_non_pe_is_not_applicable():
    gate = common_can_analyze(BinaryArtifact(path=Path("/tmp/a.out"), file_format="ELF"))
    assert not gate.applicable
    assert gate.reason == MetadataConditions.IMAGE_IS_NOT_PE


def test_il_only_assembly_is_not_applicable():
    gate = common_can_analyze(make_artifact(clr_flags=0x1))
    assert gate.reason == MetadataConditions.IMAGE_IS_IL_ONLY_ASSEMBLY


def test_mixed_mode_assembly_is_applicable():
    assert common_can_analyze(make_artifact(clr_flags=0x10)).applicable


def test_resource_only_is_not_applicable():
    artifact = make_artifact(sections=(SectionInfo(".rsrc", RSRC_CHARACTERISTICS),))
    assert common_can_analyze(artifact).reason == MetadataConditions.IMAGE_IS_RESOURCE_ONLY_BINARY


def test_kernel_mode_is_not_applicable():
    artifact = make_artifact(subsystem=IMAGE_SUBSYSTEM_NATIVE)
    assert common_can_analyze(artifact).reason == MetadataConditions.IMAGE_IS_KERNEL_MODE_BINARY


def test_unsupported_machine_is_not_applicable():
    artifact = make_artifact(machine=IMAGE_FILE_MACHINE_IA64)
    assert common_can_analyze(artifact).reason == MetadataConditions.IMAGE_HAS_UNSUPPORTED_MACHINE


def test_first_matching_condition_wins():
    # IL-only, no code, kernel mode and an odd machine all at once
    artifact = make_artifact(
        machine=IMAGE_FILE_MACHINE_IA64,
        subsystem=IMAGE_SUBSYSTEM_NATIVE,
        sections=(SectionInfo(".rsrc", RSRC_CHARACTERISTICS),),
        clr_flags=0x1,
    )
    assert common_can_analyze(artifact).reason == MetadataConditions.IMAGE_IS_IL_ONLY_ASSEMBLY


def test_evaluate_conditions_without_conditions_is_applicable():
    assert evaluate_conditions(make_artifact(), ()).applicable


def test_gate_is_deterministic():
    artifact = make_artifact(subsystem=IMAGE_SUBSYSTEM_NATIVE)
    assert common_can_analyze(artifact) == common_can_analyze(artifact)
