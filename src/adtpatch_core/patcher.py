from __future__ import annotations

import os
from pathlib import Path

from adtpatch_core.errors import PatchIOError


def patch_byte(path: Path, offset: int, new_byte: int, expected: int | None = None) -> None:
    """Overwrite the single byte at ``offset`` and flush it to disk.

    When ``expected`` is given, the current byte must equal it or nothing is
    written.
    """
    if not 0 <= new_byte <= 0xFF:
        raise ValueError(f"not a byte value: {new_byte}")

    try:
        with open(path, "r+b") as f:
            size = os.fstat(f.fileno()).st_size
            if not 0 <= offset < size:
                raise PatchIOError(f"offset {offset} outside {path} ({size} bytes)")

            f.seek(offset)
            if expected is not None:
                current = f.read(1)[0]
                if current != expected:
                    raise PatchIOError(
                        f"byte at offset {offset} is 0x{current:02x}, expected 0x{expected:02x}"
                    )
                f.seek(offset)

            if f.write(bytes([new_byte])) != 1:
                raise PatchIOError(f"short write at offset {offset} in {path}")
            f.flush()
            os.fsync(f.fileno())
    except OSError as e:
        raise PatchIOError(f"{path}: {e.strerror or e}") from e
