#!/usr/bin/env python3
"""
r2skim Pydantic Schemas

Machine-diffable output models for verdicts and run reports.

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from .results import ArtifactReport, SkimReport, VerdictRecord

__all__ = [
    "ArtifactReport",
    "SkimReport",
    "VerdictRecord",
]
