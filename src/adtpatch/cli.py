"""ADT Java 7 patch - command line entry point."""
from __future__ import annotations

from pathlib import Path

import click

from adtpatch.archive import select_tool
from adtpatch.discovery import default_output, find_jar
from adtpatch.workflow import patch_jar
from adtpatch_core.errors import PatchError
from adtpatch_core.protocol import ADT_CLASS_ENTRY, DEFAULT_NEW_VERSION, DEFAULT_OLD_VERSION

BRIEF_USAGE = """Patch the Eclipse ADT plugin to enable Java 7 compatibility (while disabling
Java 1.5)."""


@click.command(help=BRIEF_USAGE, context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "-i", "--input", "input_jar",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    metavar="x.jar",
    help="The input *.jar. If not provided, this program will search for one "
    "in the filesystem in the default location.",
)
@click.option(
    "-o", "--output", "output_jar",
    type=click.Path(dir_okay=False, path_type=Path),
    metavar="x.jar",
    help="The output *.jar. If not provided, the output will be written to "
    "the working directory.",
)
@click.option("--from-version", default=DEFAULT_OLD_VERSION, show_default=True,
              help="Version constant to look for.")
@click.option("--to-version", default=DEFAULT_NEW_VERSION, show_default=True,
              help="Version constant to write.")
@click.option("--entry", default=ADT_CLASS_ENTRY, show_default=True,
              help="Class file inside the jar to patch.")
@click.option("--tool", "tool_name", type=click.Choice(["auto", "jar", "zip"]),
              default="auto", show_default=True,
              help="Archive backend: the JDK 'jar' command or built-in zip handling.")
def main(
    input_jar: Path | None,
    output_jar: Path | None,
    from_version: str,
    to_version: str,
    entry: str,
    tool_name: str,
) -> None:
    try:
        if input_jar is None:
            input_jar = find_jar()
        if output_jar is None:
            output_jar = default_output(input_jar)
        elif output_jar.resolve() == input_jar.resolve():
            raise click.UsageError("output jar must differ from the input jar")

        result = patch_jar(
            input_jar,
            output_jar,
            select_tool(tool_name),
            entry=entry,
            old_version=from_version,
            new_version=to_version,
        )
    except (PatchError, ValueError) as e:
        # Fail closed with a single-line reason; no stack trace.
        click.echo(f"FATAL: {e}")
        raise SystemExit(1)

    click.echo(
        "Patch complete. You may now want to replace\n"
        f"  {result.input_jar}\n"
        "by\n"
        f"  {result.output_jar}\n"
    )


if __name__ == "__main__":
    main()
