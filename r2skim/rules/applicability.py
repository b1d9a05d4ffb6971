#!/usr/bin/env python3
"""
Applicability gate helpers

A gate decides from header metadata alone whether a rule means anything
for an artifact. It never looks at the symbol index.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from ..domain.artifact import BinaryArtifact
from ..domain.verdict import Applicability

Condition = tuple[Callable[[BinaryArtifact], bool], str]


class MetadataConditions:
    """Fixed not-applicable reasons"""

    IMAGE_IS_NOT_PE = "image is not a PE binary"
    IMAGE_IS_IL_ONLY_ASSEMBLY = "image is an IL-only managed assembly"
    IMAGE_IS_RESOURCE_ONLY_BINARY = "image is a resource-only binary"
    IMAGE_IS_KERNEL_MODE_BINARY = "image is a kernel mode binary"
    IMAGE_HAS_UNSUPPORTED_MACHINE = "image targets a machine type this check does not support"


def evaluate_conditions(artifact: BinaryArtifact, conditions: Sequence[Condition]) -> Applicability:
    """
    Run exclusion conditions in order.

    Each condition is ``(predicate, reason)``; the first predicate that
    holds makes the rule not applicable with that reason.
    """
    for predicate, reason in conditions:
        if predicate(artifact):
            return Applicability.no(reason)
    return Applicability.yes()


def not_pe(artifact: BinaryArtifact) -> bool:
    return not artifact.is_pe


def il_only(artifact: BinaryArtifact) -> bool:
    return artifact.is_il_only


def resource_only(artifact: BinaryArtifact) -> bool:
    return artifact.is_resource_only


def kernel_mode(artifact: BinaryArtifact) -> bool:
    return artifact.is_kernel_mode


def machine_not_in(machines: frozenset[int]) -> Callable[[BinaryArtifact], bool]:
    def predicate(artifact: BinaryArtifact) -> bool:
        return artifact.machine not in machines

    return predicate
