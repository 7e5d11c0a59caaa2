"""Java class-file layout constants.

Single source of truth for the magic value, header layout and constant-pool
entry sizes. The scanner never branches on tags directly; it looks them up here.
"""
from __future__ import annotations

from dataclasses import dataclass

# File magic
CLASS_MAGIC = 0xCAFEBABE

# Header: [Magic(4) | Minor(2) | Major(2) | PoolCount(2)] = 10 bytes
MAGIC_FMT = ">I"
MAGIC_LEN = 4
VERSION_LEN = 4  # minor + major, not needed for patching
U2_FMT = ">H"
U2_LEN = 2

# Marker for entries whose payload length follows the tag as a u2
VARIABLE = -1


@dataclass(frozen=True)
class EntryLayout:
    name: str
    payload: int
    slots: int = 1


CONSTANT_UTF8 = 1

CONSTANT_POOL_LAYOUT: dict[int, EntryLayout] = {
    1: EntryLayout("Utf8", VARIABLE),
    3: EntryLayout("Integer", 4),
    4: EntryLayout("Float", 4),
    5: EntryLayout("Long", 8, slots=2),
    6: EntryLayout("Double", 8, slots=2),
    7: EntryLayout("Class", 2),
    8: EntryLayout("String", 2),
    9: EntryLayout("Fieldref", 4),
    10: EntryLayout("Methodref", 4),
    11: EntryLayout("InterfaceMethodref", 4),
    12: EntryLayout("NameAndType", 4),
    15: EntryLayout("MethodHandle", 3),
    16: EntryLayout("MethodType", 2),
    17: EntryLayout("Dynamic", 4),
    18: EntryLayout("InvokeDynamic", 4),
    19: EntryLayout("Module", 2),
    20: EntryLayout("Package", 2),
}

# ADT plugin target
ADT_CLASS_ENTRY = "com/android/ide/eclipse/adt/AdtConstants.class"
DEFAULT_OLD_VERSION = "1.5"
DEFAULT_NEW_VERSION = "1.7"
