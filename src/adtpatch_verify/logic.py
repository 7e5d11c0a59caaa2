import io
import tempfile
from pathlib import Path
from adtpatch.archive import ArchiveTool
from adtpatch.workflow import remove_tree
from adtpatch_core.classfile import scan, version_marker
from adtpatch_core.errors import PatchError, PatchIOError
from .const import ERRORS

def _fail(errors: list) -> dict:
    return {"status":"FAIL","error_count":len(errors),"errors":errors}

def verify_class_bytes(original: bytes, patched: bytes, old: str, new: str) -> dict:
    errors = []
    try:
        index = version_marker(old, new)
    except ValueError as e:
        return _fail([{"code":"E_VERSION_ARGS","message":str(e)}])
    old_b = old.encode("ascii")
    new_b = new.encode("ascii")

    if len(original) != len(patched):
        errors.append({"code":"E_SIZE_MISMATCH","message":ERRORS["E_SIZE_MISMATCH"],"original":len(original),"patched":len(patched)})
        return _fail(errors)

    diff = [i for i, (a, b) in enumerate(zip(original, patched)) if a != b]
    if len(diff) != 1:
        errors.append({"code":"E_DIFF_COUNT","message":ERRORS["E_DIFF_COUNT"],"offsets":diff[:16],"count":len(diff)})
        return _fail(errors)

    try:
        expected = scan(io.BytesIO(original), old_b, index)
    except PatchError as e:
        errors.append(e.as_dict())
        return _fail(errors)
    if diff[0] != expected:
        errors.append({"code":"E_DIFF_OFFSET","message":ERRORS["E_DIFF_OFFSET"],"expected":expected,"found":diff[0]})
        return _fail(errors)

    # The same constant slot must now read as the new version.
    start = expected - index
    found = patched[start:start + len(new_b)]
    if found != new_b:
        errors.append({"code":"E_PATCHED_CONST","message":ERRORS["E_PATCHED_CONST"],"found":found.decode("latin-1")})
        return _fail(errors)

    return {"status":"PASS","error_count":0,"errors":[],"offset":expected}

def verify_class_files(original: Path, patched: Path, old: str, new: str) -> dict:
    try:
        a = original.read_bytes()
        b = patched.read_bytes()
    except OSError as e:
        return _fail([PatchIOError(str(e)).as_dict()])
    return verify_class_bytes(a, b, old, new)

def verify_jars(original_jar: Path, patched_jar: Path, tool: ArchiveTool, entry: str, old: str, new: str) -> dict:
    work = Path(tempfile.mkdtemp(suffix="-adt-verify"))
    try:
        (work / "original").mkdir()
        (work / "patched").mkdir()
        try:
            a = tool.extract(original_jar, entry, work / "original")
            b = tool.extract(patched_jar, entry, work / "patched")
        except PatchError as e:
            return _fail([e.as_dict()])
        return verify_class_files(a, b, old, new)
    finally:
        remove_tree(work)
