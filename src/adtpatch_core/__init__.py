"""ADT patch core - class-file constant lookup and single-byte patching."""
from .classfile import ConstantMatch, locate_utf8, scan, scan_file, version_marker
from .patcher import patch_byte

__all__ = ["ConstantMatch", "locate_utf8", "scan", "scan_file", "version_marker", "patch_byte"]
