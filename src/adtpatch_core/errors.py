"""Error kinds shared by the scanner, the patcher and the jar workflow.

Every error carries a stable ``code`` so callers can report it without parsing
the message. Nothing in this package prints; the CLIs own presentation.
"""
from __future__ import annotations

ERRORS = {
    "E_CLASS_MAGIC": "Not a *.class file: magic does not match",
    "E_POOL_MALFORMED": "Not a *.class file: constant pool ended prematurely or invalid constant type",
    "E_CONST_MISSING": "Cannot find the constant",
    "E_IO": "File access failed",
    "E_ARCHIVE": "Archive tool failed",
    "E_DISCOVERY": "Cannot find the ADT jar",
}


class PatchError(Exception):
    code = "E_PATCH"

    def __init__(self, detail: str | None = None):
        self.detail = detail
        message = ERRORS.get(self.code, self.code)
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)

    def as_dict(self) -> dict:
        out = {"code": self.code, "message": ERRORS.get(self.code, self.code)}
        if self.detail:
            out["detail"] = self.detail
        return out


class NotAClassFile(PatchError):
    code = "E_CLASS_MAGIC"


class MalformedConstantPool(PatchError):
    code = "E_POOL_MALFORMED"


class ConstantNotFound(PatchError):
    code = "E_CONST_MISSING"


class PatchIOError(PatchError):
    code = "E_IO"


class ArchiveError(PatchError):
    code = "E_ARCHIVE"


class DiscoveryError(PatchError):
    code = "E_DISCOVERY"
