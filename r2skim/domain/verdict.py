#!/usr/bin/env python3
"""
Verdict model

A verdict is the single, leveled and justified outcome of running one rule
against one artifact.

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class VerdictLevel(str, Enum):
    """Outcome classes, mutually exclusive"""

    PASS = "pass"
    FAIL = "fail"
    ERROR = "error"
    NOT_APPLICABLE = "notApplicable"
    INFORMATIONAL = "informational"

    @property
    def is_problem(self) -> bool:
        return self in (VerdictLevel.FAIL, VerdictLevel.ERROR)


@dataclass(frozen=True, slots=True)
class Applicability:
    """Result of a rule's applicability gate."""

    applicable: bool
    reason: str = ""

    @classmethod
    def yes(cls) -> "Applicability":
        return cls(True, "")

    @classmethod
    def no(cls, reason: str) -> "Applicability":
        if not reason:
            raise ValueError("a not-applicable result needs a reason")
        return cls(False, reason)

    def __bool__(self) -> bool:
        return self.applicable


@dataclass(frozen=True, slots=True)
class Verdict:
    """
    Outcome of one (rule, artifact) analysis.

    Attributes:
        rule_id: Stable rule identifier (e.g. "BA2013")
        rule_name: Stable rule name
        artifact_id: Identity of the analysed artifact
        level: Outcome class
        path: Decision-path key; selects the message template
        message: Rendered justification
    """

    rule_id: str
    rule_name: str
    artifact_id: str
    level: VerdictLevel
    path: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "rule_name": self.rule_name,
            "artifact_id": self.artifact_id,
            "level": self.level.value,
            "path": self.path,
            "message": self.message,
        }
