#!/usr/bin/env python3
"""
r2skim Configuration Schemas - Typed Dataclasses
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

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class GeneralConfig:
    """General configuration settings"""

    verbose: bool = False
    quiet: bool = False


def _as_tuple(name: str, value) -> tuple:
    """Lists from JSON become tuples; a bare string is a mistake, not a list"""
    if isinstance(value, str):
        raise TypeError(f"{name} must be a list of strings, not a string")
    return tuple(value)


@dataclass(frozen=True)
class SymbolsConfig:
    """PDB discovery and loading"""

    enabled: bool = True
    search_paths: tuple[str, ...] = ()
    use_codeview_path: bool = True
    r2_flags: tuple[str, ...] = ("-2",)
    load_retries: int = 2

    def __post_init__(self):
        """Validate configuration values"""
        if self.load_retries < 0:
            raise ValueError("load_retries must be non-negative")
        # JSON gives lists; keep the dataclass hashable
        object.__setattr__(self, "search_paths", _as_tuple("search_paths", self.search_paths))
        object.__setattr__(self, "r2_flags", _as_tuple("r2_flags", self.r2_flags))


@dataclass(frozen=True)
class DriverConfig:
    """Rule execution settings"""

    max_workers: int = 4
    extensions: tuple[str, ...] = (".exe", ".dll", ".sys")

    def __post_init__(self):
        """Validate configuration values"""
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        extensions = _as_tuple("extensions", self.extensions)
        object.__setattr__(self, "extensions", tuple(ext.lower() for ext in extensions))


@dataclass(frozen=True)
class OutputConfig:
    """Output formatting configuration"""

    json_indent: int = 2
    show_passing: bool = True

    def __post_init__(self):
        """Validate configuration values"""
        if self.json_indent < 0:
            raise ValueError("json_indent must be non-negative")


@dataclass(frozen=True)
class R2SkimConfig:
    """Main r2skim configuration container"""

    general: GeneralConfig = field(default_factory=GeneralConfig)
    symbols: SymbolsConfig = field(default_factory=SymbolsConfig)
    driver: DriverConfig = field(default_factory=DriverConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary"""
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "R2SkimConfig":
        """Create configuration from dictionary"""
        if not isinstance(config_dict, dict):
            raise TypeError("config_dict must be a dictionary")

        kwargs: dict[str, Any] = {}

        if "general" in config_dict:
            kwargs["general"] = GeneralConfig(**config_dict["general"])

        if "symbols" in config_dict:
            kwargs["symbols"] = SymbolsConfig(**config_dict["symbols"])

        if "driver" in config_dict:
            kwargs["driver"] = DriverConfig(**config_dict["driver"])

        if "output" in config_dict:
            kwargs["output"] = OutputConfig(**config_dict["output"])

        return cls(**kwargs)
