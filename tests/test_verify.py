import json

from click.testing import CliRunner

from adtpatch.archive import ZipArchiveTool
from adtpatch.workflow import patch_jar
from adtpatch_verify.cli import main
from adtpatch_verify.logic import verify_class_bytes, verify_jars
from adtpatch_core.protocol import ADT_CLASS_ENTRY

from classfiles import adt_constants_class, write_jar


def test_pass_on_correct_patch():
    res = verify_class_bytes(adt_constants_class("1.5"), adt_constants_class("1.7"), "1.5", "1.7")
    assert res["status"] == "PASS"
    assert res["error_count"] == 0


def test_size_mismatch():
    res = verify_class_bytes(adt_constants_class(), adt_constants_class() + b"\x00", "1.5", "1.7")
    assert res["errors"][0]["code"] == "E_SIZE_MISMATCH"


def test_untouched_file_fails():
    data = adt_constants_class()
    res = verify_class_bytes(data, data, "1.5", "1.7")
    assert res["status"] == "FAIL"
    assert res["errors"][0]["code"] == "E_DIFF_COUNT"
    assert res["errors"][0]["count"] == 0


def test_wrong_byte_changed():
    original = adt_constants_class()
    patched = bytearray(original)
    patched[-1] ^= 0x01
    res = verify_class_bytes(original, bytes(patched), "1.5", "1.7")
    assert res["errors"][0]["code"] == "E_DIFF_OFFSET"


def test_wrong_new_value():
    res = verify_class_bytes(adt_constants_class("1.5"), adt_constants_class("1.6"), "1.5", "1.7")
    assert res["errors"][0]["code"] == "E_PATCHED_CONST"


def test_original_not_a_class():
    res = verify_class_bytes(b"\x00\x00\x00\x00abc", b"\x00\x00\x00\x00abd", "1.5", "1.7")
    assert res["errors"][0]["code"] == "E_CLASS_MAGIC"


def test_verify_jars_after_workflow(tmp_path):
    src = write_jar(tmp_path / "in.jar", adt_constants_class())
    out = tmp_path / "out.jar"
    tool = ZipArchiveTool()
    patch_jar(src, out, tool)

    res = verify_jars(src, out, tool, ADT_CLASS_ENTRY, "1.5", "1.7")
    assert res["status"] == "PASS"


def test_verify_jars_missing_entry(tmp_path):
    src = write_jar(tmp_path / "in.jar", adt_constants_class())
    other = write_jar(tmp_path / "other.jar", b"", entry="x.class")
    res = verify_jars(src, other, ZipArchiveTool(), ADT_CLASS_ENTRY, "1.5", "1.7")
    assert res["errors"][0]["code"] == "E_ARCHIVE"


def test_cli_class_command(tmp_path):
    a = tmp_path / "a.class"
    b = tmp_path / "b.class"
    a.write_bytes(adt_constants_class("1.5"))
    b.write_bytes(adt_constants_class("1.7"))

    r = CliRunner().invoke(main, ["class", str(a), str(b)])
    assert r.exit_code == 0, r.output
    assert json.loads(r.output)["status"] == "PASS"

    r = CliRunner().invoke(main, ["class", str(a), str(a)])
    assert r.exit_code == 1
    assert json.loads(r.output)["status"] == "FAIL"


def test_cli_jar_command_with_versions(tmp_path):
    src = write_jar(tmp_path / "in.jar", adt_constants_class("1.6"))
    out = tmp_path / "out.jar"
    patch_jar(src, out, ZipArchiveTool(), old_version="1.6", new_version="1.8")

    r = CliRunner().invoke(
        main, ["--from-version", "1.6", "--to-version", "1.8", "jar", str(src), str(out), "--tool", "zip"]
    )
    assert r.exit_code == 0, r.output
    assert json.loads(r.output)["offset"] > 0
