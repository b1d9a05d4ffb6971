#!/usr/bin/env python3
"""
Result Pydantic Schemas

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..__version__ import __version__
from ..domain.verdict import Verdict, VerdictLevel


class VerdictRecord(BaseModel):
    """
    Serializable form of a Verdict.

    Attributes:
        rule_id: Stable rule identifier
        rule_name: Stable rule name
        artifact_id: Analysed artifact
        level: Outcome class
        path: Decision-path key
        message: Rendered justification
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    rule_id: str = Field(..., min_length=1, description="Rule identifier")
    rule_name: str = Field(..., min_length=1, description="Rule name")
    artifact_id: str = Field(..., min_length=1, description="Artifact identity")
    level: VerdictLevel = Field(..., description="Verdict level")
    path: str = Field(..., min_length=1, description="Decision path key")
    message: str = Field(..., min_length=1, description="Justification")

    @classmethod
    def from_verdict(cls, verdict: Verdict) -> "VerdictRecord":
        return cls(**verdict.to_dict())


class ArtifactReport(BaseModel):
    """All verdicts for one artifact, or why none could be produced."""

    artifact_id: str = Field(..., min_length=1)
    load_error: str | None = Field(None, description="Why the artifact could not be loaded")
    symbols: str | None = Field(None, description="PDB used for the analysis")
    verdicts: list[VerdictRecord] = Field(default_factory=list)

    @field_validator("verdicts")
    @classmethod
    def validate_verdict_artifacts(cls, v: list[VerdictRecord], info: Any) -> list[VerdictRecord]:
        """Every verdict must belong to this artifact"""
        artifact_id = info.data.get("artifact_id")
        for record in v:
            if artifact_id is not None and record.artifact_id != artifact_id:
                raise ValueError(
                    f"verdict for {record.artifact_id} filed under {artifact_id}"
                )
        return v

    @property
    def has_failures(self) -> bool:
        return self.load_error is not None or any(
            VerdictLevel(record.level).is_problem for record in self.verdicts
        )


class SkimReport(BaseModel):
    """Top-level report for one r2skim run."""

    tool: str = "r2skim"
    version: str = __version__
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    rules: list[str] = Field(default_factory=list, description="Rule ids that were run")
    artifacts: list[ArtifactReport] = Field(default_factory=list)

    def counts(self) -> dict[str, int]:
        tally = {level.value: 0 for level in VerdictLevel}
        for artifact in self.artifacts:
            for record in artifact.verdicts:
                tally[VerdictLevel(record.level).value] += 1
        tally["load_errors"] = sum(1 for a in self.artifacts if a.load_error is not None)
        return tally

    @property
    def has_failures(self) -> bool:
        return any(artifact.has_failures for artifact in self.artifacts)

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(indent=indent)
