#!/usr/bin/env python3
"""
r2skim exception hierarchy

Infrastructure failures (artifact unreadable, PDB unloadable, bad rule
registration) are raised as exceptions. Mitigation outcomes never are: rules
always return a Verdict.
"""


class R2SkimError(Exception):
    """Base class for r2skim errors"""


class ArtifactLoadError(R2SkimError):
    """The binary could not be read or its header is corrupt"""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not load '{path}': {reason}")


class SymbolIndexLoadError(R2SkimError):
    """A PDB was located but could not be turned into a symbol index"""

    def __init__(self, pdb_path: str, reason: str):
        self.pdb_path = pdb_path
        self.reason = reason
        super().__init__(f"Could not load PDB '{pdb_path}': {reason}")


class RuleRegistrationError(R2SkimError):
    """Duplicate or unknown rule identifiers"""
