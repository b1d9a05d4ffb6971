#!/usr/bin/env python3
"""
Error Handling Policy Presets

Common error handling configurations for typical use cases.

Copyright (C) 2025 Marc Rivero Lopez

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

Author: Marc Rivero Lopez
"""

from .policies import ErrorHandlingStrategy, ErrorPolicy

# Transient failures while reading binaries or talking to radare2
COMMON_RETRYABLE_EXCEPTIONS: frozenset[type[BaseException]] = frozenset(
    {
        ConnectionError,
        TimeoutError,
        BrokenPipeError,
        InterruptedError,
    }
)

# Fatal exceptions that should never be retried
FATAL_EXCEPTIONS: frozenset[type[BaseException]] = frozenset(
    {
        MemoryError,
        KeyboardInterrupt,
        SystemExit,
    }
)

# Fail fast policy - re-raise all exceptions immediately
FAIL_FAST_POLICY = ErrorPolicy(
    strategy=ErrorHandlingStrategy.FAIL_FAST,
    fatal_exceptions=FATAL_EXCEPTIONS,
)

# Artifact/PDB loading - short backoff, the files are local
LOAD_RETRY_POLICY = ErrorPolicy(
    strategy=ErrorHandlingStrategy.RETRY,
    max_retries=2,
    retry_delay=0.1,
    retry_backoff=2.0,
    retryable_exceptions=COMMON_RETRYABLE_EXCEPTIONS,
    fatal_exceptions=FATAL_EXCEPTIONS,
)
