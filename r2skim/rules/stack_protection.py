#!/usr/bin/env python3
"""Shared pieces of the stack protector (/GS) rule family."""

from __future__ import annotations

from ..domain.artifact import BinaryArtifact
from ..domain.pe_constants import (
    IMAGE_FILE_MACHINE_AMD64,
    IMAGE_FILE_MACHINE_ARM,
    IMAGE_FILE_MACHINE_ARM64,
    IMAGE_FILE_MACHINE_ARMNT,
    IMAGE_FILE_MACHINE_I386,
)
from ..domain.verdict import Applicability
from .applicability import (
    MetadataConditions,
    evaluate_conditions,
    il_only,
    kernel_mode,
    machine_not_in,
    not_pe,
    resource_only,
)

GS_CHECK_FUNCTION_NAME = "__security_check_cookie"

# Checked in this order; the first hit wins
GS_INITIALIZATION_FUNCTION_NAMES: tuple[str, ...] = (
    "__security_init_cookie",
    "__security_init_cookie_ex",
)

STACK_PROTECTOR_MACHINES = frozenset(
    {
        IMAGE_FILE_MACHINE_I386,
        IMAGE_FILE_MACHINE_AMD64,
        IMAGE_FILE_MACHINE_ARM,
        IMAGE_FILE_MACHINE_ARMNT,
        IMAGE_FILE_MACHINE_ARM64,
    }
)

STACK_PROTECTION_CONDITIONS = (
    (not_pe, MetadataConditions.IMAGE_IS_NOT_PE),
    (il_only, MetadataConditions.IMAGE_IS_IL_ONLY_ASSEMBLY),
    (resource_only, MetadataConditions.IMAGE_IS_RESOURCE_ONLY_BINARY),
    (kernel_mode, MetadataConditions.IMAGE_IS_KERNEL_MODE_BINARY),
    (
        machine_not_in(STACK_PROTECTOR_MACHINES),
        MetadataConditions.IMAGE_HAS_UNSUPPORTED_MACHINE,
    ),
)


def common_can_analyze(artifact: BinaryArtifact) -> Applicability:
    """Gate shared by every stack protector rule: native user-mode C/C++ code only."""
    return evaluate_conditions(artifact, STACK_PROTECTION_CONDITIONS)
