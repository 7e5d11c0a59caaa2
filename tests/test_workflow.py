import io
import zipfile
from pathlib import Path

import pytest

from adtpatch.archive import ZipArchiveTool
from adtpatch.workflow import patch_jar, remove_tree
from adtpatch_core.classfile import scan
from adtpatch_core.errors import ArchiveError, ConstantNotFound, NotAClassFile
from adtpatch_core.protocol import ADT_CLASS_ENTRY

from classfiles import adt_constants_class, build_class, utf8, write_jar


class DictArchiveTool:
    """Archive backend stub; repacked entries are recorded by archive path."""

    def __init__(self, class_bytes: bytes):
        self.class_bytes = class_bytes
        self.extract_dirs: list[Path] = []
        self.updated: dict[str, bytes] = {}

    def extract(self, archive, entry, dest_dir):
        self.extract_dirs.append(Path(dest_dir))
        out = Path(dest_dir) / entry
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(self.class_bytes)
        return out

    def update(self, archive, entry, src_dir):
        self.updated[str(archive)] = (Path(src_dir) / entry).read_bytes()


class FailingUpdateTool(DictArchiveTool):
    def update(self, archive, entry, src_dir):
        raise ArchiveError("executing 'jar' failed, error #1")


def _jar(tmp_path):
    p = tmp_path / "com.android.ide.eclipse.adt_21.jar"
    p.write_bytes(b"PK-placeholder")
    return p


def test_patch_jar_with_stub_tool(tmp_path):
    original = adt_constants_class()
    tool = DictArchiveTool(original)
    src = _jar(tmp_path)
    out = tmp_path / "adt.jar"

    result = patch_jar(src, out, tool)

    patched = tool.updated[str(out)]
    assert result.offset == scan(io.BytesIO(original), b"1.5")
    assert patched[result.offset] == ord("7")
    assert [i for i in range(len(original)) if original[i] != patched[i]] == [result.offset]
    assert out.read_bytes() == src.read_bytes()
    assert not tool.extract_dirs[0].exists()


def test_scan_failure_aborts_before_repack(tmp_path):
    tool = DictArchiveTool(adt_constants_class("1.6"))
    out = tmp_path / "adt.jar"

    with pytest.raises(ConstantNotFound):
        patch_jar(_jar(tmp_path), out, tool)

    assert tool.updated == {}
    assert not out.exists()
    assert not tool.extract_dirs[0].exists()


def test_not_a_class_aborts(tmp_path):
    tool = DictArchiveTool(b"PK\x03\x04 not a class")
    out = tmp_path / "adt.jar"
    with pytest.raises(NotAClassFile):
        patch_jar(_jar(tmp_path), out, tool)
    assert not out.exists()


def test_failed_update_removes_output(tmp_path):
    tool = FailingUpdateTool(adt_constants_class())
    out = tmp_path / "adt.jar"
    with pytest.raises(ArchiveError):
        patch_jar(_jar(tmp_path), out, tool)
    assert not out.exists()


def test_custom_versions(tmp_path):
    original = build_class([utf8("1.6"), utf8("1.5")])
    tool = DictArchiveTool(original)
    result = patch_jar(_jar(tmp_path), tmp_path / "o.jar", tool, old_version="1.6", new_version="1.8")
    assert tool.updated[str(tmp_path / "o.jar")][result.offset] == ord("8")


def test_round_trip_with_zip_tool(tmp_path):
    src = write_jar(tmp_path / "com.android.ide.eclipse.adt_21.jar", adt_constants_class())
    out = tmp_path / "adt.jar"

    patch_jar(src, out, ZipArchiveTool())

    with zipfile.ZipFile(out) as zf:
        assert zf.read(ADT_CLASS_ENTRY) == adt_constants_class("1.7")
    with zipfile.ZipFile(src) as zf:
        assert zf.read(ADT_CLASS_ENTRY) == adt_constants_class("1.5")


def test_remove_tree(tmp_path):
    root = tmp_path / "root"
    (root / "a" / "b").mkdir(parents=True)
    (root / "a" / "b" / "c.class").write_bytes(b"x")
    (root / "top.txt").write_text("y")

    remove_tree(root)
    assert not root.exists()

    f = tmp_path / "single"
    f.write_bytes(b"")
    remove_tree(f)
    assert not f.exists()

    remove_tree(tmp_path / "missing")
