#!/usr/bin/env python3
"""
Default Rule Registry Configuration

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

from ..rules.initialize_stack_protection import InitializeStackProtection
from .rule_registry import RuleRegistry


def create_default_registry() -> RuleRegistry:
    """
    Create the registry holding every built-in rule.

    Returns:
        RuleRegistry with one constructed instance per rule
    """
    registry = RuleRegistry()

    # =========================================================================
    # STACK PROTECTOR (/GS)
    # =========================================================================

    registry.register(InitializeStackProtection())

    return registry
