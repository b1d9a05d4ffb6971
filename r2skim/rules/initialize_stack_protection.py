#!/usr/bin/env python3
"""
BA2013: InitializeStackProtection

The /GS stack protector compares a per-frame cookie against a global
secret before returning. That secret must be randomised at startup by
``__security_init_cookie``; a binary that checks cookies without ever
initialising them runs with a predictable value.

Decision order:
    1. no PDB                           -> error
    2. PDB shows no code                -> pass (nothing to protect)
    3. neither check nor init function  -> pass (feature unused)
    4. no init function                 -> fail
    5. init function present            -> pass
"""

from __future__ import annotations

from ..domain.artifact import BinaryArtifact
from ..domain.verdict import Applicability, Verdict, VerdictLevel
from ..interfaces.symbol_index import SymbolIndexInterface
from ..utils.logger import get_logger
from .base_rule import BinaryRule
from .messages import COULD_NOT_LOAD_PDB, MessageTemplate, MessageTemplateCatalog
from .stack_protection import (
    GS_CHECK_FUNCTION_NAME,
    GS_INITIALIZATION_FUNCTION_NAMES,
    common_can_analyze,
)

logger = get_logger(__name__)

NO_CODE = "no_code"
NO_FEATURE_USE = "no_feature_use"
NOT_INITIALIZED = "not_initialized"
INITIALIZED = "initialized"

INITIALIZE_STACK_PROTECTION_MESSAGES = MessageTemplateCatalog(
    {
        NO_CODE: MessageTemplate(
            VerdictLevel.PASS,
            "'{artifact}' is a C or C++ binary that is not required to initialize the "
            "stack protection, as it does not contain executable code.",
        ),
        NO_FEATURE_USE: MessageTemplate(
            VerdictLevel.PASS,
            "'{artifact}' is a C or C++ binary that does not make use of the stack "
            "protection buffer security feature. It is therefore not required to "
            "initialize the feature.",
        ),
        NOT_INITIALIZED: MessageTemplate(
            VerdictLevel.FAIL,
            "'{artifact}' is a C or C++ binary that does not initialize the stack "
            "protector. The stack protector (/GS) is a security feature of the compiler "
            "which makes it more difficult to exploit stack buffer overflow memory "
            "corruption vulnerabilities. The stack protector requires access to entropy "
            "in order to be effective, which means a binary must initialize a random "
            "number generator at startup, by calling __security_init_cookie() as close "
            "to the binary's entry point as possible. Failing to do so will result in "
            "spurious buffer overflow detections on the part of the stack protector. To "
            "resolve this issue, use the default entry point provided by the C runtime, "
            "which will make this call for you, or call __security_init_cookie() "
            "manually in your custom entry point.",
        ),
        INITIALIZED: MessageTemplate(
            VerdictLevel.PASS,
            "'{artifact}' is a C or C++ binary built with the buffer security feature "
            "that properly initializes the stack protector. This has the effect of "
            "increasing the effectiveness of the feature and reducing spurious detections.",
        ),
    }
)


class InitializeStackProtection(BinaryRule):
    """Binaries using /GS must initialise the security cookie."""

    id = "BA2013"
    name = "InitializeStackProtection"
    description = "Binaries should properly initialize the stack protector."
    requires_symbols = True
    decision_paths = (COULD_NOT_LOAD_PDB, NO_CODE, NO_FEATURE_USE, NOT_INITIALIZED, INITIALIZED)
    messages = INITIALIZE_STACK_PROTECTION_MESSAGES

    def can_analyze(self, artifact: BinaryArtifact) -> Applicability:
        return common_can_analyze(artifact)

    def analyze(
        self,
        artifact: BinaryArtifact,
        symbol_index: SymbolIndexInterface | None = None,
    ) -> Verdict:
        if symbol_index is None:
            return self.verdict(artifact, COULD_NOT_LOAD_PDB)

        no_code = (
            not symbol_index.has_any_global_function()
            and not symbol_index.has_executable_section_contribution()
        )
        if no_code:
            return self.verdict(artifact, NO_CODE)

        uses_check = symbol_index.find_global_function(GS_CHECK_FUNCTION_NAME, case_sensitive=True)
        uses_init = any(
            symbol_index.find_global_function(function_name, case_sensitive=True)
            for function_name in GS_INITIALIZATION_FUNCTION_NAMES
        )
        logger.debug(
            f"{artifact.artifact_id}: {GS_CHECK_FUNCTION_NAME}={uses_check} "
            f"init={uses_init}"
        )

        if not uses_check and not uses_init:
            return self.verdict(artifact, NO_FEATURE_USE)

        if not uses_init:
            return self.verdict(artifact, NOT_INITIALIZED)

        return self.verdict(artifact, INITIALIZED)
