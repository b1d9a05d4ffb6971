#!/usr/bin/env python3
"""Verdict reporting."""

from .reporter import VerdictReporter

__all__ = ["VerdictReporter"]
