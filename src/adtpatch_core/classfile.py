"""Constant-pool scanner for compiled Java classes."""
from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from adtpatch_core.errors import (
    ConstantNotFound,
    MalformedConstantPool,
    NotAClassFile,
    PatchIOError,
)
from adtpatch_core.protocol import (
    CLASS_MAGIC,
    CONSTANT_POOL_LAYOUT,
    MAGIC_FMT,
    MAGIC_LEN,
    U2_FMT,
    U2_LEN,
    VARIABLE,
    VERSION_LEN,
)


@dataclass(frozen=True)
class ConstantMatch:
    """Location of a matched Utf8 constant inside one class file."""

    content_offset: int
    length: int
    slot: int

    def byte_offset(self, index: int) -> int:
        if not 0 <= index < self.length:
            raise IndexError(f"index {index} outside constant of length {self.length}")
        return self.content_offset + index


def _read_exact(f: BinaryIO, n: int, what: str) -> bytes:
    data = f.read(n)
    if len(data) != n:
        raise MalformedConstantPool(f"truncated {what} at offset {f.tell()}")
    return data


def _read_u2(f: BinaryIO, what: str) -> int:
    (value,) = struct.unpack(U2_FMT, _read_exact(f, U2_LEN, what))
    return value


def locate_utf8(f: BinaryIO, target: bytes) -> ConstantMatch:
    """Find the first Utf8 constant whose content equals ``target`` exactly.

    ``f`` must be positioned at byte 0. The stream is only read; on failure its
    position is undefined.
    """
    head = f.read(MAGIC_LEN)
    if len(head) != MAGIC_LEN or struct.unpack(MAGIC_FMT, head)[0] != CLASS_MAGIC:
        raise NotAClassFile(f"magic mismatch ({head.hex() or 'empty'})")

    _read_exact(f, VERSION_LEN, "version header")
    count = _read_u2(f, "constant pool count")

    # Slot 0 is reserved, so live entries are 1 .. count-1.
    slot = 1
    while slot < count:
        tag = _read_exact(f, 1, f"tag of slot {slot}")[0]
        layout = CONSTANT_POOL_LAYOUT.get(tag)
        if layout is None:
            raise MalformedConstantPool(f"invalid constant type {tag} in slot {slot}")

        if layout.payload == VARIABLE:
            length = _read_u2(f, f"length of slot {slot}")
            content = _read_exact(f, length, f"content of slot {slot}")
            if length == len(target) and content == target:
                return ConstantMatch(f.tell() - length, length, slot)
        else:
            _read_exact(f, layout.payload, f"{layout.name} payload in slot {slot}")

        # Long and Double take two slots; the second has no tag.
        slot += layout.slots

    raise ConstantNotFound(repr(target.decode("latin-1")))


def scan(f: BinaryIO, target: bytes, index: int | None = None) -> int:
    """Return the absolute offset of ``target[index]`` in the matched constant.

    ``index`` defaults to the last byte of ``target``, which for a version
    marker like ``1.5`` is the digit to rewrite.
    """
    if not target:
        raise ValueError("target must not be empty")
    if index is None:
        index = len(target) - 1
    return locate_utf8(f, target).byte_offset(index)


def scan_file(path: Path, target: bytes, index: int | None = None) -> int:
    try:
        f = open(path, "rb")
    except OSError as e:
        raise PatchIOError(f"{path}: {e.strerror or e}") from e
    with f:
        return scan(f, target, index)


def version_marker(old: str, new: str) -> int:
    """Index of the single byte that turns version ``old`` into ``new``."""
    old_b = old.encode("ascii")
    new_b = new.encode("ascii")
    if len(old_b) != len(new_b):
        raise ValueError(f"versions must have equal length: {old!r} -> {new!r}")
    diff = [i for i, (a, b) in enumerate(zip(old_b, new_b)) if a != b]
    if len(diff) != 1:
        raise ValueError(f"versions must differ in exactly one byte: {old!r} -> {new!r}")
    return diff[0]
