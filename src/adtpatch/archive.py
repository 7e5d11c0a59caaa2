"""Jar extraction and repacking.

The workflow only needs two capabilities from an archive backend: pull one
named entry out into a directory, and put it back. Tests pass their own
implementation of this protocol.
"""
from __future__ import annotations

import os
import shutil
import subprocess
import tempfile
import zipfile
from pathlib import Path
from typing import Protocol

from adtpatch_core.errors import ArchiveError


class ArchiveTool(Protocol):
    def extract(self, archive: Path, entry: str, dest_dir: Path) -> Path: ...

    def update(self, archive: Path, entry: str, src_dir: Path) -> None: ...


class JarCommandTool:
    """Drive the JDK ``jar`` command."""

    def __init__(self, command: str = "jar"):
        self.command = command

    def _run(self, args: list[str], cwd: Path) -> None:
        try:
            result = subprocess.run(
                [self.command, *args], cwd=cwd, capture_output=True, text=True, check=False
            )
        except OSError as e:
            raise ArchiveError(f"cannot execute '{self.command}': {e}") from e
        if result.returncode != 0:
            detail = f"executing '{self.command}' failed, error #{result.returncode}"
            if result.stderr.strip():
                detail += f": {result.stderr.strip()}"
            raise ArchiveError(detail)

    def extract(self, archive: Path, entry: str, dest_dir: Path) -> Path:
        self._run(["xf", str(Path(archive).resolve()), entry], cwd=dest_dir)
        out = Path(dest_dir) / entry
        if not out.is_file():
            raise ArchiveError(f"entry {entry} not found in {archive}")
        return out

    def update(self, archive: Path, entry: str, src_dir: Path) -> None:
        self._run(["uf", str(Path(archive).resolve()), entry], cwd=src_dir)


class ZipArchiveTool:
    """Rewrite jars in-process; no JDK required."""

    def extract(self, archive: Path, entry: str, dest_dir: Path) -> Path:
        try:
            with zipfile.ZipFile(archive) as zf:
                try:
                    data = zf.read(entry)
                except KeyError:
                    raise ArchiveError(f"entry {entry} not found in {archive}") from None
        except (OSError, zipfile.BadZipFile) as e:
            raise ArchiveError(f"{archive}: {e}") from e

        out = Path(dest_dir) / entry
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(data)
        return out

    def update(self, archive: Path, entry: str, src_dir: Path) -> None:
        archive = Path(archive)
        data = (Path(src_dir) / entry).read_bytes()

        # Rebuild into a sibling file, then swap it in.
        fd, tmp_name = tempfile.mkstemp(suffix=".jar", dir=archive.parent)
        os.close(fd)
        tmp = Path(tmp_name)
        try:
            with zipfile.ZipFile(archive) as src, zipfile.ZipFile(tmp, "w") as dst:
                dst.comment = src.comment
                replaced = False
                for info in src.infolist():
                    if info.filename == entry:
                        dst.writestr(info, data)
                        replaced = True
                    else:
                        dst.writestr(info, src.read(info.filename))
                if not replaced:
                    dst.writestr(zipfile.ZipInfo(entry), data, compress_type=zipfile.ZIP_DEFLATED)
            os.replace(tmp, archive)
        except (OSError, zipfile.BadZipFile) as e:
            raise ArchiveError(f"{archive}: {e}") from e
        finally:
            if tmp.exists():
                tmp.unlink()


def select_tool(name: str = "auto") -> ArchiveTool:
    if name == "jar":
        return JarCommandTool()
    if name == "zip":
        return ZipArchiveTool()
    if name == "auto":
        return JarCommandTool() if shutil.which("jar") else ZipArchiveTool()
    raise ValueError(f"unknown archive tool: {name}")
