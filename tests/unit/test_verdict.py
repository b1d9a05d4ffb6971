from __future__ import annotations

import dataclasses

import pytest

from r2skim.domain.verdict import Applicability, Verdict, VerdictLevel


def test_problem_levels():
    assert VerdictLevel.FAIL.is_problem
    assert VerdictLevel.ERROR.is_problem
    assert not VerdictLevel.PASS.is_problem
    assert not VerdictLevel.NOT_APPLICABLE.is_problem
    assert not VerdictLevel.INFORMATIONAL.is_problem


def test_applicability_helpers():
    assert Applicability.yes()
    assert Applicability.yes().reason == ""

    gate = Applicability.no("image is not a PE binary")
    assert not gate
    assert gate.reason == "image is not a PE binary"


def test_not_applicable_requires_reason():
    with pytest.raises(ValueError):
        Applicability.no("")


def test_verdict_is_immutable_and_serializable():
    verdict = Verdict("BA2013", "InitializeStackProtection", "app.exe", VerdictLevel.PASS, "initialized", "ok")
    with pytest.raises(dataclasses.FrozenInstanceError):
        verdict.level = VerdictLevel.FAIL  # type: ignore[misc]

    assert verdict.to_dict() == {
        "rule_id": "BA2013",
        "rule_name": "InitializeStackProtection",
        "artifact_id": "app.exe",
        "level": "pass",
        "path": "initialized",
        "message": "ok",
    }


def test_verdicts_compare_by_value():
    a = Verdict("BA2013", "X", "a", VerdictLevel.FAIL, "p", "m")
    b = Verdict("BA2013", "X", "a", VerdictLevel.FAIL, "p", "m")
    assert a == b
