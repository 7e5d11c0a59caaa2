"""Locate the ADT plugin jar and choose where the patched copy goes."""
from __future__ import annotations

from pathlib import Path
from warnings import warn

from adtpatch_core.errors import DiscoveryError

DEFAULT_PLUGIN_DIRS = (
    Path("/usr/share/eclipse/dropins/android/eclipse/plugins"),
)
ADT_JAR_PREFIX = "com.android.ide.eclipse.adt_"
ADT_JAR_SUFFIX = ".jar"
DEFAULT_OUTPUT_NAME = "adt.jar"


def is_adt_jar(name: str) -> bool:
    return name.startswith(ADT_JAR_PREFIX) and name.endswith(ADT_JAR_SUFFIX)


def find_jar(search_dirs: tuple[Path, ...] | list[Path] = DEFAULT_PLUGIN_DIRS) -> Path:
    """Return the first ADT jar found in ``search_dirs``.

    Directories are tried in order; missing ones are skipped. Within a
    directory, candidates are sorted by name so the choice is stable.
    """
    for d in search_dirs:
        d = Path(d)
        if not d.is_dir():
            continue
        found = sorted(p for p in d.iterdir() if p.is_file() and is_adt_jar(p.name))
        if not found:
            continue
        if len(found) > 1:
            warn(f"Multiple ADT jars in {d}; using {found[0].name}")
        return found[0]

    raise DiscoveryError("please use the '-i' flag")


def default_output(input_jar: Path, cwd: Path | None = None) -> Path:
    """Patched jar goes to the working directory under the input's name."""
    cwd = Path.cwd() if cwd is None else Path(cwd)
    out = cwd / (Path(input_jar).name or DEFAULT_OUTPUT_NAME)
    # Never default to overwriting the input itself.
    if out.resolve() == Path(input_jar).resolve():
        out = cwd / DEFAULT_OUTPUT_NAME
    return out
