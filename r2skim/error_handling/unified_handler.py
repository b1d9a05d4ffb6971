#!/usr/bin/env python3
"""
Unified Error Handler

Runs a call under an ErrorPolicy: straight through, or retried with backoff.

Copyright (C) 2025 Marc Rivero Lopez

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

Author: Marc Rivero Lopez
"""

import time
from collections.abc import Callable
from typing import Any

from ..utils.logger import get_logger
from .policies import ErrorHandlingStrategy, ErrorPolicy

logger = get_logger(__name__)

# Replaced in tests to avoid real sleeps
_sleep = time.sleep


def _calculate_retry_delay(attempt: int, policy: ErrorPolicy) -> float:
    """Calculate delay before retry using exponential backoff"""
    if attempt <= 0:
        return 0.0
    return policy.retry_delay * (policy.retry_backoff ** (attempt - 1))


def _retry_execution(
    func: Callable, policy: ErrorPolicy, func_args: tuple, func_kwargs: dict
) -> Any:
    """
    Execute function with retry logic

    Args:
        func: Function to execute
        policy: Error policy configuration
        func_args: Positional arguments for function
        func_kwargs: Keyword arguments for function

    Returns:
        Function result

    Raises:
        Exception: If all retries exhausted or non-retryable error
    """
    for attempt in range(policy.max_retries + 1):
        try:
            result = func(*func_args, **func_kwargs)
            if attempt > 0:
                logger.debug(f"Operation succeeded on retry attempt {attempt + 1}")
            return result

        except Exception as e:
            if not policy.is_retryable(e):
                logger.debug(f"Non-retryable error: {type(e).__name__}")
                raise

            if attempt >= policy.max_retries:
                logger.warning(
                    f"Operation failed after {policy.max_retries + 1} attempts: "
                    f"{type(e).__name__}: {e}"
                )
                raise

            delay = _calculate_retry_delay(attempt + 1, policy)
            logger.debug(
                f"Retrying after error ({type(e).__name__}), "
                f"attempt {attempt + 2}/{policy.max_retries + 1} in {delay:.2f}s"
            )
            _sleep(delay)

    raise RuntimeError("Retry execution completed without result")


def run_with_policy(policy: ErrorPolicy, func: Callable, *args: Any, **kwargs: Any) -> Any:
    """
    Call func under an error policy

    Loaders take their policy as an argument, so it is chosen at call time.
    """
    match policy.strategy:
        case ErrorHandlingStrategy.FAIL_FAST:
            return func(*args, **kwargs)
        case ErrorHandlingStrategy.RETRY:
            return _retry_execution(func, policy, args, kwargs)
    raise ValueError(f"Unsupported error handling strategy: {policy.strategy}")
