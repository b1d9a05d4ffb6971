#!/usr/bin/env python3
"""PE header constants used by the mitigation rules."""

from __future__ import annotations

IMAGE_FILE_MACHINE_UNKNOWN = 0x0000
IMAGE_FILE_MACHINE_I386 = 0x014C
IMAGE_FILE_MACHINE_ARM = 0x01C0
IMAGE_FILE_MACHINE_ARMNT = 0x01C4
IMAGE_FILE_MACHINE_IA64 = 0x0200
IMAGE_FILE_MACHINE_AMD64 = 0x8664
IMAGE_FILE_MACHINE_ARM64 = 0xAA64

MACHINE_NAMES: dict[int, str] = {
    IMAGE_FILE_MACHINE_UNKNOWN: "Unknown",
    IMAGE_FILE_MACHINE_I386: "I386",
    IMAGE_FILE_MACHINE_ARM: "ARM",
    IMAGE_FILE_MACHINE_ARMNT: "ARMNT",
    IMAGE_FILE_MACHINE_IA64: "IA64",
    IMAGE_FILE_MACHINE_AMD64: "AMD64",
    IMAGE_FILE_MACHINE_ARM64: "ARM64",
}

IMAGE_SUBSYSTEM_UNKNOWN = 0
IMAGE_SUBSYSTEM_NATIVE = 1
IMAGE_SUBSYSTEM_WINDOWS_GUI = 2
IMAGE_SUBSYSTEM_WINDOWS_CUI = 3

IMAGE_SCN_CNT_CODE = 0x00000020
IMAGE_SCN_MEM_EXECUTE = 0x20000000

# COR20 header flags
COMIMAGE_FLAGS_ILONLY = 0x00000001

IMAGE_DIRECTORY_ENTRY_COM_DESCRIPTOR = 14
