#!/usr/bin/env python3
"""
Unified Error Handling System for r2skim

Policy-based error handling: fail fast or retry with backoff, declared
once and applied with run_with_policy. Used by the driver around artifact and
PDB loading; rule analysis itself is never retried.

Copyright (C) 2025 Marc Rivero Lopez

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

Author: Marc Rivero Lopez
"""

from .policies import ErrorHandlingStrategy, ErrorPolicy
from .presets import FAIL_FAST_POLICY, LOAD_RETRY_POLICY
from .unified_handler import run_with_policy

__all__ = [
    "ErrorHandlingStrategy",
    "ErrorPolicy",
    "LOAD_RETRY_POLICY",
    "FAIL_FAST_POLICY",
    "run_with_policy",
]
