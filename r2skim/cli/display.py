#!/usr/bin/env python3
"""
r2skim CLI Display Module

Rich rendering of verdicts, run summaries and the rule catalog.
"""

import sys
from typing import IO, Any, cast

import pyfiglet
from rich.console import Console
from rich.table import Table

from ..domain.verdict import VerdictLevel
from ..schemas.results import SkimReport


class _StdoutProxy:
    def write(self, data: str) -> int:
        return sys.stdout.write(data)

    def flush(self) -> None:
        sys.stdout.flush()

    def isatty(self) -> bool:
        return sys.stdout.isatty()

    @property
    def encoding(self) -> str:
        return getattr(sys.stdout, "encoding", "utf-8")

    @property
    def errors(self) -> str:
        return getattr(sys.stdout, "errors", "strict")


console = Console(file=cast(IO[str], _StdoutProxy()))

LEVEL_STYLES: dict[str, str] = {
    VerdictLevel.PASS.value: "green",
    VerdictLevel.FAIL.value: "bold red",
    VerdictLevel.ERROR.value: "red",
    VerdictLevel.NOT_APPLICABLE.value: "dim",
    VerdictLevel.INFORMATIONAL.value: "cyan",
}


def print_banner() -> None:
    """Print r2skim banner"""
    banner = pyfiglet.figlet_format("r2skim", font="slant")
    console.print(f"[bold blue]{banner}[/bold blue]")
    console.print("[bold]PE Exploit-Mitigation Checker[/bold]")
    console.print("[dim]Header and PDB driven verification powered by pefile and radare2[/dim]\n")


def _styled_level(level: str) -> str:
    style = LEVEL_STYLES.get(level, "white")
    return f"[{style}]{level}[/{style}]"


def display_report(report: SkimReport, show_passing: bool = True) -> None:
    """Display per-artifact verdicts and a summary"""
    table = Table(title="Mitigation Verdicts", show_header=True, expand=True)
    table.add_column("Artifact", style="cyan", overflow="fold")
    table.add_column("Rule", style="magenta", no_wrap=True)
    table.add_column("Level", no_wrap=True)
    table.add_column("Message", overflow="fold")

    for artifact in report.artifacts:
        if artifact.load_error is not None:
            table.add_row(
                artifact.artifact_id, "-", _styled_level(VerdictLevel.ERROR.value), artifact.load_error
            )
            continue
        for record in artifact.verdicts:
            if not show_passing and record.level == VerdictLevel.PASS.value:
                continue
            table.add_row(
                artifact.artifact_id,
                f"{record.rule_id}.{record.rule_name}",
                _styled_level(str(record.level)),
                record.message,
            )

    console.print(table)
    display_summary(report.counts())


def display_summary(counts: dict[str, Any]) -> None:
    """Display verdict totals"""
    table = Table(title="Summary", show_header=True)
    table.add_column("Outcome", style="cyan", no_wrap=True)
    table.add_column("Count", justify="right")
    for outcome, count in counts.items():
        label = _styled_level(outcome) if outcome in LEVEL_STYLES else outcome
        table.add_row(label, str(count))
    console.print(table)


def display_rules(rules: list[dict[str, Any]]) -> None:
    """Display the rule catalog"""
    table = Table(title="Registered Rules", show_header=True, expand=True)
    table.add_column("Id", style="magenta", no_wrap=True)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Needs PDB", justify="center")
    table.add_column("Description", overflow="fold")
    for rule in rules:
        table.add_row(
            rule["id"],
            rule["name"],
            "[green]yes[/green]" if rule["requires_symbols"] else "no",
            rule["description"],
        )
    console.print(table)
