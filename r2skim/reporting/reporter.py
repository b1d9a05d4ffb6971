#!/usr/bin/env python3
"""
Verdict reporter

Receives one verdict per (artifact, rule), logs it at a level matching the
outcome and keeps it for the final report. Safe to call from driver worker
threads.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter

from ..domain.verdict import Verdict, VerdictLevel
from ..utils.logger import get_logger

logger = get_logger(__name__)

LOG_LEVELS: dict[VerdictLevel, int] = {
    VerdictLevel.PASS: logging.INFO,
    VerdictLevel.FAIL: logging.WARNING,
    VerdictLevel.ERROR: logging.ERROR,
    VerdictLevel.NOT_APPLICABLE: logging.DEBUG,
    VerdictLevel.INFORMATIONAL: logging.INFO,
}


class VerdictReporter:
    """Collects and logs verdicts."""

    def __init__(self, log: logging.Logger | None = None):
        self._log = log or logger
        self._verdicts: list[Verdict] = []
        self._lock = threading.Lock()

    def report(self, verdict: Verdict) -> None:
        self._log.log(
            LOG_LEVELS[verdict.level],
            f"{verdict.rule_id}.{verdict.rule_name} [{verdict.level.value}] {verdict.message}",
        )
        with self._lock:
            self._verdicts.append(verdict)

    @property
    def verdicts(self) -> list[Verdict]:
        with self._lock:
            return list(self._verdicts)

    def counts(self) -> dict[VerdictLevel, int]:
        with self._lock:
            tally = Counter(verdict.level for verdict in self._verdicts)
        return {level: tally.get(level, 0) for level in VerdictLevel}

    @property
    def has_failures(self) -> bool:
        """True if any FAIL or ERROR verdict was reported"""
        with self._lock:
            return any(verdict.level.is_problem for verdict in self._verdicts)
