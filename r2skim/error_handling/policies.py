#!/usr/bin/env python3
"""
Error Handling Policies

Defines declarative policies for error handling strategies.

Copyright (C) 2025 Marc Rivero Lopez

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

Author: Marc Rivero Lopez
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

class ErrorHandlingStrategy(Enum):
    """Error handling strategies for different scenarios"""

    FAIL_FAST = "fail_fast"  # Re-raise exceptions immediately
    RETRY = "retry"  # Retry operation with backoff


@dataclass(frozen=True)
class ErrorPolicy:
    """
    Unified error handling policy configuration

    Attributes:
        strategy: Primary error handling strategy to apply
        max_retries: Maximum number of retry attempts (RETRY only)
        retry_delay: Base delay between retries in seconds
        retry_backoff: Backoff multiplier for exponential delay (1.0 = no backoff)
        retryable_exceptions: Exceptions that should trigger a retry
        fatal_exceptions: Exceptions that are never retried
    """

    strategy: ErrorHandlingStrategy
    max_retries: int = 3
    retry_delay: float = 0.5
    retry_backoff: float = 2.0
    retryable_exceptions: frozenset[type[BaseException]] = field(
        default_factory=lambda: frozenset({Exception})
    )
    fatal_exceptions: frozenset[type[BaseException]] = field(default_factory=frozenset)

    def __post_init__(self):
        """Validate policy configuration"""
        if self.max_retries < 0:
            raise ValueError("max_retries must be non-negative")

        if self.retry_delay < 0:
            raise ValueError("retry_delay must be non-negative")

        if self.retry_backoff < 1.0:
            raise ValueError("retry_backoff must be >= 1.0")

    def is_retryable(self, exception: BaseException) -> bool:
        """
        Determine if exception should trigger retry based on policy

        Args:
            exception: Exception to evaluate

        Returns:
            True if exception should trigger retry
        """
        if self.is_fatal(exception):
            return False
        return isinstance(exception, tuple(self.retryable_exceptions))

    def is_fatal(self, exception: BaseException) -> bool:
        """Fatal exceptions always propagate, whatever the strategy"""
        return bool(self.fatal_exceptions) and isinstance(
            exception, tuple(self.fatal_exceptions)
        )

    def copy_with_overrides(self, **overrides: Any) -> "ErrorPolicy":
        """
        Create a copy of this policy with specific overrides

        Raises:
            AttributeError: If an override names an unknown attribute
        """
        for key in overrides:
            if not hasattr(self, key):
                raise AttributeError(f"ErrorPolicy has no attribute '{key}'")
        return replace(self, **overrides)
