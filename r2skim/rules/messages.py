#!/usr/bin/env python3
"""
Message template catalog

Each rule owns a fixed catalog mapping decision-path keys to a verdict
level and a message template. Templates may only reference the artifact,
the rule name and (for not-applicable verdicts) one of the fixed metadata
reasons, so output stays stable across runs and machines.

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from __future__ import annotations

import string
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from ..domain.verdict import VerdictLevel

ALLOWED_FIELDS = frozenset({"artifact", "rule", "reason"})

# Paths every rule catalog carries
NOT_APPLICABLE = "not_applicable"
COULD_NOT_LOAD_PDB = "could_not_load_pdb"
EXCEPTION_IN_ANALYZE = "exception_in_analyze"


@dataclass(frozen=True, slots=True)
class MessageTemplate:
    level: VerdictLevel
    template: str

    def __post_init__(self) -> None:
        fields = {name for _, name, _, _ in string.Formatter().parse(self.template) if name}
        unknown = fields - ALLOWED_FIELDS
        if unknown:
            raise ValueError(f"Template uses unsupported fields: {sorted(unknown)}")

    def render(self, artifact: str, rule: str, reason: str = "") -> str:
        return self.template.format(artifact=artifact, rule=rule, reason=reason)


SHARED_TEMPLATES: dict[str, MessageTemplate] = {
    NOT_APPLICABLE: MessageTemplate(
        VerdictLevel.NOT_APPLICABLE,
        "'{artifact}' was not evaluated for check '{rule}' as the analysis is not "
        "relevant based on observed metadata: {reason}.",
    ),
    COULD_NOT_LOAD_PDB: MessageTemplate(
        VerdictLevel.ERROR,
        "'{artifact}' was not evaluated for check '{rule}' because its PDB could not "
        "be loaded. This check requires debug information that could not be obtained; "
        "make sure the PDB is next to the binary or pass it explicitly.",
    ),
    EXCEPTION_IN_ANALYZE: MessageTemplate(
        VerdictLevel.ERROR,
        "'{artifact}' could not be evaluated for check '{rule}' because the analysis "
        "raised an unexpected exception. See the log for details.",
    ),
}


class MessageTemplateCatalog(Mapping[str, MessageTemplate]):
    """Immutable decision-path -> template mapping, shared templates included."""

    def __init__(self, templates: Mapping[str, MessageTemplate]):
        merged = {**SHARED_TEMPLATES, **templates}
        self._templates = MappingProxyType(merged)

    def __getitem__(self, path: str) -> MessageTemplate:
        return self._templates[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def require(self, paths: Iterable[str]) -> None:
        """
        Ensure every decision path has a template.

        Raises:
            KeyError: Listing the paths with no template
        """
        missing = sorted(set(paths) - set(self._templates))
        if missing:
            raise KeyError(f"No message template for decision paths: {', '.join(missing)}")
