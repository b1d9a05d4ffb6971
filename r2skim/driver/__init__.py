#!/usr/bin/env python3
"""Rule driver: sequences registered rules over artifacts."""

from .skimmer import Skimmer, discover_targets

__all__ = ["Skimmer", "discover_targets"]
