from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from r2skim.__version__ import __version__
from r2skim.domain.verdict import Verdict, VerdictLevel
from r2skim.schemas import ArtifactReport, SkimReport, VerdictRecord


def _record(level=VerdictLevel.PASS, artifact="app.exe"):
    return VerdictRecord.from_verdict(
        Verdict("BA2013", "InitializeStackProtection", artifact, level, "initialized", "ok")
    )


def test_record_from_verdict_stores_level_value():
    record = _record(VerdictLevel.NOT_APPLICABLE)
    assert record.level == "notApplicable"
    assert record.model_dump()["rule_id"] == "BA2013"


def test_record_is_frozen():
    record = _record()
    with pytest.raises(ValidationError):
        record.message = "changed"


def test_record_rejects_unknown_level():
    with pytest.raises(ValidationError):
        VerdictRecord(
            rule_id="BA2013",
            rule_name="X",
            artifact_id="a",
            level="warning",
            path="p",
            message="m",
        )


def test_artifact_report_rejects_foreign_verdicts():
    with pytest.raises(ValidationError, match="filed under"):
        ArtifactReport(artifact_id="app.exe", verdicts=[_record(artifact="other.exe")])


def test_artifact_report_failures():
    assert not ArtifactReport(artifact_id="app.exe", verdicts=[_record()]).has_failures
    assert ArtifactReport(artifact_id="app.exe", verdicts=[_record(VerdictLevel.FAIL)]).has_failures
    assert ArtifactReport(artifact_id="app.exe", load_error="truncated").has_failures


def test_skim_report_counts_and_json():
    report = SkimReport(
        rules=["BA2013"],
        artifacts=[
            ArtifactReport(artifact_id="app.exe", symbols="app.pdb", verdicts=[_record()]),
            ArtifactReport(
                artifact_id="lib.dll", verdicts=[_record(VerdictLevel.ERROR, "lib.dll")]
            ),
            ArtifactReport(artifact_id="bad.exe", load_error="invalid PE image"),
        ],
    )

    counts = report.counts()
    assert counts["pass"] == 1
    assert counts["error"] == 1
    assert counts["fail"] == 0
    assert counts["load_errors"] == 1
    assert report.has_failures

    data = json.loads(report.to_json())
    assert data["tool"] == "r2skim"
    assert data["version"] == __version__
    assert data["artifacts"][0]["verdicts"][0]["level"] == "pass"
    assert data["artifacts"][0]["symbols"] == "app.pdb"
    assert data["artifacts"][2]["load_error"] == "invalid PE image"


def test_empty_report_has_no_failures():
    assert not SkimReport().has_failures
