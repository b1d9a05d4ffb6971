#!/usr/bin/env python3
"""
Binary Rule Abstract Base Class

Every mitigation check is a BinaryRule: a stateless object with a stable id
and name, an applicability gate and a decision procedure returning exactly
one Verdict. Rules never report anything themselves; the driver hands the
returned verdict to a reporter.

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from ..domain.artifact import BinaryArtifact
from ..domain.verdict import Applicability, Verdict
from ..interfaces.symbol_index import SymbolIndexInterface
from .messages import (
    COULD_NOT_LOAD_PDB,
    EXCEPTION_IN_ANALYZE,
    NOT_APPLICABLE,
    MessageTemplateCatalog,
)


class BinaryRule(ABC):
    """
    Abstract base class for all r2skim rules.

    Subclasses declare, as class attributes:
        id: Stable rule identifier (e.g. "BA2013")
        name: Stable rule name
        description: One-line summary for listings
        requires_symbols: Whether analyze() needs a symbol index
        decision_paths: Every path analyze() can terminate on
        messages: The rule's MessageTemplateCatalog

    Construction fails with KeyError when a decision path has no template,
    so a rule that could end without a message never gets registered.

    Example:
        >>> rule = InitializeStackProtection()
        >>> gate = rule.can_analyze(artifact)
        >>> if gate.applicable:
        ...     verdict = rule.analyze(artifact, symbol_index)
    """

    id: ClassVar[str]
    name: ClassVar[str]
    description: ClassVar[str] = ""
    requires_symbols: ClassVar[bool] = False
    decision_paths: ClassVar[tuple[str, ...]] = ()
    messages: ClassVar[MessageTemplateCatalog]

    def __init__(self) -> None:
        if not getattr(self, "id", None) or not getattr(self, "name", None):
            raise TypeError(f"{type(self).__name__} must define id and name")
        self.messages.require((*self.decision_paths, NOT_APPLICABLE, EXCEPTION_IN_ANALYZE))
        if self.requires_symbols:
            self.messages.require((COULD_NOT_LOAD_PDB,))

    @abstractmethod
    def can_analyze(self, artifact: BinaryArtifact) -> Applicability:
        """Decide from header metadata alone whether this rule applies."""

    @abstractmethod
    def analyze(
        self,
        artifact: BinaryArtifact,
        symbol_index: SymbolIndexInterface | None = None,
    ) -> Verdict:
        """
        Run the decision procedure.

        Precondition: can_analyze(artifact) returned applicable.

        Returns:
            Exactly one Verdict
        """

    def verdict(self, artifact: BinaryArtifact, path: str, reason: str = "") -> Verdict:
        """Build the verdict for a decision path from the rule's catalog"""
        template = self.messages[path]
        return Verdict(
            rule_id=self.id,
            rule_name=self.name,
            artifact_id=artifact.artifact_id,
            level=template.level,
            path=path,
            message=template.render(artifact.artifact_id, self.name, reason),
        )

    def not_applicable(self, artifact: BinaryArtifact, applicability: Applicability) -> Verdict:
        """Verdict recorded when the gate turns an artifact away"""
        return self.verdict(artifact, NOT_APPLICABLE, applicability.reason)

    def analysis_error(self, artifact: BinaryArtifact) -> Verdict:
        """Verdict recorded when analyze() raised instead of returning"""
        return self.verdict(artifact, EXCEPTION_IN_ANALYZE)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "requires_symbols": self.requires_symbols,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"
