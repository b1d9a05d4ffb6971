#!/usr/bin/env python3
"""
r2skim - PE exploit-mitigation verification using pefile, radare2 and PDBs
Checks that compiler/linker hardening features were correctly enabled

Author: Marc Rivero (@seifreed)
License: GPL-3.0
"""

from .__version__ import __author__, __author_email__, __license__, __url__, __version__

__description__ = "PE exploit-mitigation verification using pefile, radare2 and PDBs"

from .domain import BinaryArtifact, Verdict, VerdictLevel
from .driver import Skimmer
from .registry import create_default_registry

__all__ = [
    "BinaryArtifact",
    "Skimmer",
    "Verdict",
    "VerdictLevel",
    "create_default_registry",
    "__version__",
    "__author__",
    "__author_email__",
    "__license__",
    "__url__",
    "__description__",
]
