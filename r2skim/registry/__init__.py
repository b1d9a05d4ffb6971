#!/usr/bin/env python3
"""
r2skim Registry Module

Explicit rule registry: a mapping from rule id to a constructed rule
instance, built once at startup and passed to the driver. There is no
plugin scanning; adding a rule means registering it in
``default_registry.create_default_registry``.

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

Examples:
    >>> from r2skim.registry import create_default_registry
    >>>
    >>> registry = create_default_registry()
    >>> rule = registry.get("BA2013")
    >>> for info in registry.list_rules():
    ...     print(f"{info['id']}: {info['name']}")
    >>>
    >>> only_gs = registry.select(["BA2013"])
"""

from .default_registry import create_default_registry
from .rule_registry import RuleRegistry

__all__ = [
    "RuleRegistry",
    "create_default_registry",
]
