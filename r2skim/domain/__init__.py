#!/usr/bin/env python3
"""r2skim domain models."""

from .artifact import BinaryArtifact, SectionInfo
from .verdict import Applicability, Verdict, VerdictLevel

__all__ = [
    "Applicability",
    "BinaryArtifact",
    "SectionInfo",
    "Verdict",
    "VerdictLevel",
]
