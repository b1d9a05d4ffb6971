#!/usr/bin/env python3
"""
r2skim Rules

Mitigation rules and the shared machinery they are built from.
"""

from .base_rule import BinaryRule
from .initialize_stack_protection import InitializeStackProtection
from .messages import MessageTemplate, MessageTemplateCatalog

__all__ = [
    "BinaryRule",
    "InitializeStackProtection",
    "MessageTemplate",
    "MessageTemplateCatalog",
]
