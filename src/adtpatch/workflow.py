"""Extract, patch and repack the ADT constants class."""
from __future__ import annotations

import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

from adtpatch.archive import ArchiveTool
from adtpatch_core.classfile import scan_file, version_marker
from adtpatch_core.errors import PatchIOError
from adtpatch_core.patcher import patch_byte
from adtpatch_core.protocol import ADT_CLASS_ENTRY, DEFAULT_NEW_VERSION, DEFAULT_OLD_VERSION


@dataclass(frozen=True)
class PatchResult:
    input_jar: Path
    output_jar: Path
    entry: str
    offset: int


def remove_tree(root: Path) -> None:
    """Remove ``root`` and everything under it, like ``rm -r``."""
    root = Path(root)
    if root.is_dir() and not root.is_symlink():
        shutil.rmtree(root)
    elif root.exists() or root.is_symlink():
        root.unlink()


def patch_jar(
    input_jar: Path,
    output_jar: Path,
    tool: ArchiveTool,
    entry: str = ADT_CLASS_ENTRY,
    old_version: str = DEFAULT_OLD_VERSION,
    new_version: str = DEFAULT_NEW_VERSION,
) -> PatchResult:
    """Write a copy of ``input_jar`` to ``output_jar`` with the version byte changed.

    Nothing is written to ``output_jar`` unless the class was located and
    patched successfully.
    """
    index = version_marker(old_version, new_version)
    old_b = old_version.encode("ascii")
    new_b = new_version.encode("ascii")

    class_root = Path(tempfile.mkdtemp(suffix="-adt-jar"))
    try:
        class_path = tool.extract(input_jar, entry, class_root)
        offset = scan_file(class_path, old_b, index)
        patch_byte(class_path, offset, new_b[index], expected=old_b[index])

        try:
            shutil.copyfile(input_jar, output_jar)
        except OSError as e:
            raise PatchIOError(f"cannot copy {input_jar} to {output_jar}: {e.strerror or e}") from e
        try:
            tool.update(output_jar, entry, class_root)
        except Exception:
            # An unpatched copy must not be left behind under the output name.
            Path(output_jar).unlink(missing_ok=True)
            raise
    finally:
        remove_tree(class_root)

    return PatchResult(Path(input_jar), Path(output_jar), entry, offset)
