import json
from pathlib import Path
import click
from adtpatch.archive import select_tool
from adtpatch_core.protocol import ADT_CLASS_ENTRY, DEFAULT_NEW_VERSION, DEFAULT_OLD_VERSION
from .logic import verify_class_files, verify_jars

def _emit(result: dict):
    click.echo(json.dumps(result, sort_keys=True, separators=(",", ":"), ensure_ascii=False))
    if result["status"] != "PASS":
        raise SystemExit(1)

@click.group()
@click.option("--from-version", default=DEFAULT_OLD_VERSION, show_default=True)
@click.option("--to-version", default=DEFAULT_NEW_VERSION, show_default=True)
@click.pass_context
def main(ctx, from_version: str, to_version: str):
    ctx.obj = {"old": from_version, "new": to_version}

@main.command("class")
@click.argument("original", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("patched", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def class_cmd(obj, original: Path, patched: Path):
    _emit(verify_class_files(original, patched, obj["old"], obj["new"]))

@main.command("jar")
@click.argument("original", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("patched", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--entry", default=ADT_CLASS_ENTRY, show_default=True)
@click.option("--tool", "tool_name", type=click.Choice(["auto", "jar", "zip"]), default="auto")
@click.pass_obj
def jar_cmd(obj, original: Path, patched: Path, entry: str, tool_name: str):
    _emit(verify_jars(original, patched, select_tool(tool_name), entry, obj["old"], obj["new"]))

if __name__ == "__main__":
    main()
