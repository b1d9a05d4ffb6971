#!/usr/bin/env python3
"""
r2skim CLI - Command Line Interface

Click-based entry point. ``r2skim analyze`` runs the registered rules over
one or more binaries; ``r2skim rules`` lists them.

Copyright (C) 2025 Marc Rivero López

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program. If not, see <https://www.gnu.org/licenses/>.
"""

import json
from pathlib import Path
from typing import Any

import click

from ..__version__ import __version__
from ..config import Config
from ..driver import Skimmer, discover_targets
from ..exceptions import RuleRegistrationError
from ..registry import create_default_registry
from ..utils.logger import configure_logging_levels, setup_logger
from .display import console, display_report, display_rules, print_banner

EXIT_OK = 0
EXIT_FINDINGS = 1


def _load_config(config_path: str | None, overrides: dict[str, dict[str, Any]]) -> Config:
    config = Config(config_path)
    config.apply_overrides({section: values for section, values in overrides.items() if values})
    return config


@click.group()
@click.version_option(__version__, prog_name="r2skim")
def cli() -> None:
    """r2skim - verify exploit mitigations in PE binaries using their PDBs."""


@cli.command("analyze")
@click.argument("targets", nargs=-1, required=True, type=click.Path(exists=True))
@click.option(
    "--pdb",
    type=click.Path(exists=True, dir_okay=False),
    help="PDB to use (single target only); skips PDB discovery",
)
@click.option(
    "-s",
    "--symbols-path",
    multiple=True,
    type=click.Path(exists=True, file_okay=False),
    help="Extra directory to search for PDBs (repeatable)",
)
@click.option("-r", "--rule", "rule_ids", multiple=True, help="Run only this rule id (repeatable)")
@click.option(
    "-t",
    "--threads",
    type=click.IntRange(1, 50),
    default=None,
    help="Number of binaries analyzed in parallel (1-50)",
)
@click.option("-j", "--json", "output_json", is_flag=True, help="Output the report as JSON")
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Write the report to a file")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
@click.option("--quiet", is_flag=True, help="Only print the report")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Config file path")
@click.pass_context
def analyze(
    ctx: click.Context,
    targets: tuple[str, ...],
    pdb: str | None,
    symbols_path: tuple[str, ...],
    rule_ids: tuple[str, ...],
    threads: int | None,
    output_json: bool,
    output: str | None,
    verbose: bool,
    quiet: bool,
    config_path: str | None,
) -> None:
    """Check TARGETS (files or directories) against the mitigation rules."""
    setup_logger()

    symbols_overrides: dict[str, Any] = {}
    if symbols_path:
        symbols_overrides["search_paths"] = list(symbols_path)
    config = _load_config(
        config_path,
        {
            "driver": {"max_workers": threads} if threads else {},
            "symbols": symbols_overrides,
        },
    )
    try:
        typed_config = config.typed_config
    except (TypeError, ValueError) as exc:
        raise click.BadParameter(str(exc), param_hint="--config") from exc

    verbose = verbose or typed_config.general.verbose
    quiet = quiet or typed_config.general.quiet
    configure_logging_levels(verbose, quiet)

    registry = create_default_registry()
    if rule_ids:
        try:
            registry = registry.select(rule_ids)
        except RuleRegistrationError as exc:
            raise click.BadParameter(str(exc), param_hint="--rule") from exc

    files = discover_targets(targets, typed_config.driver.extensions)
    if not files:
        raise click.UsageError("No binaries found in the given targets")
    if pdb and len(files) != 1:
        raise click.UsageError("--pdb can only be used with a single binary")

    if not output_json and not quiet:
        print_banner()

    skimmer = Skimmer(registry, config=typed_config, pdb_path=pdb)
    report = skimmer.skim(files)

    if output_json:
        payload = report.to_json(indent=typed_config.output.json_indent or None)
        if output:
            Path(output).write_text(payload + "\n")
        else:
            click.echo(payload)
    else:
        display_report(report, show_passing=typed_config.output.show_passing)
        if output:
            Path(output).write_text(report.to_json(indent=typed_config.output.json_indent or None))
            console.print(f"[green]Report written to {output}[/green]")

    ctx.exit(EXIT_FINDINGS if report.has_failures else EXIT_OK)


@cli.command("rules")
@click.option("-j", "--json", "output_json", is_flag=True, help="Output as JSON")
def list_rules(output_json: bool) -> None:
    """List the registered rules."""
    registry = create_default_registry()
    if output_json:
        click.echo(json.dumps(registry.list_rules(), indent=2))
        return
    display_rules(registry.list_rules())


def main() -> None:
    """Console-script entry point."""
    cli()


if __name__ == "__main__":
    main()
