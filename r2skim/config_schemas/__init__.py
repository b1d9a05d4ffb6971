#!/usr/bin/env python3
"""
r2skim Configuration Schemas

Typed, frozen views over the JSON configuration.
"""

from .schemas import DriverConfig, GeneralConfig, OutputConfig, R2SkimConfig, SymbolsConfig

__all__ = [
    "DriverConfig",
    "GeneralConfig",
    "OutputConfig",
    "R2SkimConfig",
    "SymbolsConfig",
]
