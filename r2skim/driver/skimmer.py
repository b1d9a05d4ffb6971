#!/usr/bin/env python3
"""
Rule driver

For every artifact the driver loads the header once, runs each rule's
applicability gate, loads the PDB only if an applicable rule needs it, then
runs the rules in registry order and reports each verdict exactly once.
Artifacts are processed in parallel; rules on one artifact run
sequentially and share the read-only header and symbol index.

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

from __future__ import annotations

from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from ..adapters.pdb_locator import locate_pdb
from ..adapters.pe_header import load_artifact
from ..adapters.r2_pdb import load_pdb_symbol_index
from ..config_schemas import R2SkimConfig
from ..domain.artifact import BinaryArtifact
from ..domain.verdict import Verdict
from ..error_handling import FAIL_FAST_POLICY, LOAD_RETRY_POLICY
from ..exceptions import ArtifactLoadError, SymbolIndexLoadError
from ..interfaces.symbol_index import SymbolIndexInterface
from ..registry.rule_registry import RuleRegistry
from ..reporting.reporter import VerdictReporter
from ..schemas.results import ArtifactReport, SkimReport, VerdictRecord
from ..utils.logger import get_logger

logger = get_logger(__name__)

HeaderLoader = Callable[[Path], BinaryArtifact]
SymbolLoader = Callable[[BinaryArtifact, Path], SymbolIndexInterface]


def discover_targets(targets: Iterable[str | Path], extensions: Iterable[str]) -> list[Path]:
    """
    Expand CLI targets into files.

    Files are kept as given; directories are searched recursively for
    the configured extensions. Output is sorted within each directory so
    runs are reproducible.
    """
    wanted = {ext.lower() for ext in extensions}
    files: list[Path] = []
    for target in targets:
        target = Path(target)
        if target.is_dir():
            files.extend(
                sorted(
                    p for p in target.rglob("*") if p.is_file() and p.suffix.lower() in wanted
                )
            )
        else:
            files.append(target)
    return list(dict.fromkeys(files))


class Skimmer:
    """
    Runs a rule registry over binaries.

    Args:
        registry: Rules to run, in order
        reporter: Receives every verdict; a fresh VerdictReporter by default
        config: Typed configuration (symbol discovery, worker count)
        pdb_path: PDB to use instead of searching; only sensible for one target
        header_loader: Replaces the pefile loader (tests)
        symbol_loader: Replaces the radare2 PDB loader (tests)
    """

    def __init__(
        self,
        registry: RuleRegistry,
        reporter: VerdictReporter | None = None,
        config: R2SkimConfig | None = None,
        pdb_path: str | Path | None = None,
        header_loader: HeaderLoader | None = None,
        symbol_loader: SymbolLoader | None = None,
    ):
        self.registry = registry
        self.reporter = reporter or VerdictReporter()
        self.config = config or R2SkimConfig()
        self.pdb_path = Path(pdb_path) if pdb_path else None
        self._load_header = header_loader or load_artifact
        self._load_symbols = symbol_loader or self._load_symbols_with_r2

    def analyze_artifact(
        self,
        artifact: BinaryArtifact,
        symbol_index: SymbolIndexInterface | None = None,
    ) -> list[Verdict]:
        """
        Run every rule against an already-loaded artifact.

        Returns:
            One verdict per registered rule, in registry order
        """
        verdicts = []
        for rule in self.registry:
            applicability = rule.can_analyze(artifact)
            if not applicability.applicable:
                verdict = rule.not_applicable(artifact, applicability)
            else:
                try:
                    verdict = rule.analyze(artifact, symbol_index)
                except Exception:
                    logger.exception(
                        f"Rule {rule.id} raised while analyzing {artifact.artifact_id}"
                    )
                    verdict = rule.analysis_error(artifact)
            self.reporter.report(verdict)
            verdicts.append(verdict)
        return verdicts

    def skim_file(self, path: str | Path) -> ArtifactReport:
        """
        Load one file, its PDB if needed, and run every rule on it.

        Never raises: a file that cannot be processed comes back as a
        report carrying load_error, so one bad input does not cost the
        results of the others.
        """
        path = Path(path)
        try:
            return self._skim_path(path)
        except ArtifactLoadError as exc:
            logger.error(str(exc))
            return ArtifactReport(artifact_id=str(path), load_error=exc.reason)
        except Exception as exc:
            logger.exception(f"Unexpected error processing {path}")
            return ArtifactReport(
                artifact_id=str(path), load_error=f"{type(exc).__name__}: {exc}"
            )

    def _skim_path(self, path: Path) -> ArtifactReport:
        artifact = self._load_header(path)

        symbol_index = None
        pdb_used = None
        if self._needs_symbols(artifact):
            pdb_used = self._find_pdb(artifact)
            if pdb_used is not None:
                symbol_index = self._load_symbol_index(artifact, pdb_used)
                if symbol_index is None:
                    pdb_used = None

        verdicts = self.analyze_artifact(artifact, symbol_index)
        return ArtifactReport(
            artifact_id=artifact.artifact_id,
            symbols=str(pdb_used) if pdb_used else None,
            verdicts=[VerdictRecord.from_verdict(v) for v in verdicts],
        )

    def skim(self, paths: Iterable[str | Path]) -> SkimReport:
        """
        Analyze many files in parallel.

        Returns:
            SkimReport with artifacts in input order
        """
        paths = [Path(p) for p in paths]
        workers = min(self.config.driver.max_workers, max(len(paths), 1))
        logger.info(f"Skimming {len(paths)} file(s) with {len(self.registry)} rule(s)")

        if workers == 1:
            artifacts = [self.skim_file(path) for path in paths]
        else:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                artifacts = list(executor.map(self.skim_file, paths))

        return SkimReport(rules=[rule.id for rule in self.registry], artifacts=artifacts)

    def _needs_symbols(self, artifact: BinaryArtifact) -> bool:
        return any(
            rule.requires_symbols and rule.can_analyze(artifact).applicable
            for rule in self.registry
        )

    def _find_pdb(self, artifact: BinaryArtifact) -> Path | None:
        symbols = self.config.symbols
        if not symbols.enabled:
            return None
        return locate_pdb(
            artifact,
            explicit=self.pdb_path,
            search_paths=symbols.search_paths,
            use_codeview_path=symbols.use_codeview_path,
        )

    def _load_symbol_index(
        self, artifact: BinaryArtifact, pdb_path: Path
    ) -> SymbolIndexInterface | None:
        try:
            return self._load_symbols(artifact, pdb_path)
        except SymbolIndexLoadError as exc:
            logger.warning(f"{artifact.artifact_id}: {exc}")
            return None

    def _load_symbols_with_r2(
        self, artifact: BinaryArtifact, pdb_path: Path
    ) -> SymbolIndexInterface:
        symbols = self.config.symbols
        if symbols.load_retries == 0:
            policy = FAIL_FAST_POLICY
        else:
            policy = LOAD_RETRY_POLICY.copy_with_overrides(max_retries=symbols.load_retries)
        return load_pdb_symbol_index(
            artifact, pdb_path, flags=list(symbols.r2_flags), policy=policy
        )
