#!/usr/bin/env python3
"""Rule registry."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from ..exceptions import RuleRegistrationError
from ..rules.base_rule import BinaryRule
from ..utils.logger import get_logger

logger = get_logger(__name__)


class RuleRegistry:
    """
    Ordered registry of rule instances keyed by rule id.

    Ids are matched case-insensitively everywhere.

    Iteration follows registration order, which is also the order the
    driver runs rules on each artifact. Rules are stateless, so a single
    registry can be shared by every worker thread.
    """

    def __init__(self, rules: Iterable[BinaryRule] = ()):
        self._rules: dict[str, BinaryRule] = {}
        for rule in rules:
            self.register(rule)

    def register(self, rule: BinaryRule) -> BinaryRule:
        """
        Register a constructed rule.

        Raises:
            RuleRegistrationError: Not a BinaryRule, or its id is already taken
        """
        if not isinstance(rule, BinaryRule):
            raise RuleRegistrationError(f"Expected a BinaryRule instance, got {type(rule).__name__}")
        key = rule.id.upper()
        if key in self._rules:
            raise RuleRegistrationError(
                f"Rule id {rule.id} already registered by {self._rules[key].name}"
            )
        self._rules[key] = rule
        logger.debug(f"Registered rule {rule.id} ({rule.name})")
        return rule

    def get(self, rule_id: str) -> BinaryRule:
        """
        Look up a rule by id.

        Raises:
            RuleRegistrationError: Unknown id
        """
        try:
            return self._rules[rule_id.upper()]
        except KeyError:
            raise RuleRegistrationError(f"Unknown rule id: {rule_id}") from None

    def select(self, rule_ids: Iterable[str]) -> "RuleRegistry":
        """
        Build a sub-registry holding only the given rules.

        Rules keep this registry's order, not the order of rule_ids.

        Raises:
            RuleRegistrationError: Any unknown id
        """
        wanted = {rule_id.upper() for rule_id in rule_ids}
        unknown = wanted - set(self._rules)
        if unknown:
            raise RuleRegistrationError(f"Unknown rule id(s): {', '.join(sorted(unknown))}")
        return RuleRegistry(rule for rule_id, rule in self._rules.items() if rule_id in wanted)

    def list_rules(self) -> list[dict[str, Any]]:
        return [rule.to_dict() for rule in self._rules.values()]

    def __contains__(self, rule_id: object) -> bool:
        return isinstance(rule_id, str) and rule_id.upper() in self._rules

    def __iter__(self) -> Iterator[BinaryRule]:
        return iter(list(self._rules.values()))

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleRegistry({[rule.id for rule in self._rules.values()]})"
