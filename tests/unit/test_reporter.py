from __future__ import annotations

import logging
import threading

from r2skim.domain.verdict import Verdict, VerdictLevel
from r2skim.reporting import VerdictReporter


def _verdict(level, artifact="app.exe"):
    return Verdict("BA2013", "InitializeStackProtection", artifact, level, "path", "message text")


def test_report_logs_at_level_for_outcome(caplog):
    reporter = VerdictReporter()
    with caplog.at_level(logging.DEBUG, logger="r2skim"):
        reporter.report(_verdict(VerdictLevel.FAIL))
        reporter.report(_verdict(VerdictLevel.NOT_APPLICABLE))

    levels = [record.levelno for record in caplog.records if "BA2013" in record.getMessage()]
    assert levels == [logging.WARNING, logging.DEBUG]
    assert "[fail] message text" in caplog.records[0].getMessage()


def test_counts_include_every_level():
    reporter = VerdictReporter()
    reporter.report(_verdict(VerdictLevel.PASS))
    reporter.report(_verdict(VerdictLevel.PASS, "b.exe"))
    reporter.report(_verdict(VerdictLevel.ERROR))

    counts = reporter.counts()
    assert counts[VerdictLevel.PASS] == 2
    assert counts[VerdictLevel.ERROR] == 1
    assert counts[VerdictLevel.FAIL] == 0
    assert set(counts) == set(VerdictLevel)


def test_has_failures():
    reporter = VerdictReporter()
    reporter.report(_verdict(VerdictLevel.PASS))
    assert not reporter.has_failures

    reporter.report(_verdict(VerdictLevel.ERROR))
    assert reporter.has_failures


def test_verdicts_returns_a_copy():
    reporter = VerdictReporter()
    reporter.report(_verdict(VerdictLevel.PASS))
    reporter.verdicts.clear()
    assert len(reporter.verdicts) == 1


def test_concurrent_reports_are_all_kept():
    reporter = VerdictReporter(log=logging.getLogger("r2skim.tests.silent"))

    def worker(n):
        for i in range(50):
            reporter.report(_verdict(VerdictLevel.PASS, f"{n}-{i}.exe"))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(reporter.verdicts) == 400
