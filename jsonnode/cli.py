import asyncio
import logging
from typing import List, Optional, Tuple

import click
from dotenv import load_dotenv

from jsonnode.__version__ import __version__
from jsonnode.constants import FORMATS, PathList
from jsonnode.context import EditContext
from jsonnode.exceptions import JsonNodeError, PathSyntaxError
from jsonnode.local_settings import LocalSettings
from jsonnode.path import parse_path
from jsonnode.store import FileDocumentStore

logger = logging.getLogger(__name__)

# Key that addresses the value of a bare scalar node (`-=VALUE`).
BARE_VALUE_KEY = "-"


class NodePath(click.ParamType):
    """A custom Click parameter type for node paths.

    The user enters the canonical form (`$["customer"][0]`) and this class
    returns the list of steps.
    """

    name = "path"

    def convert(self, value, param, ctx):
        if isinstance(value, list):
            return value
        try:
            return parse_path(value)
        except PathSyntaxError as e:
            self.fail(
                f"Invalid path '{value}' at offset {e.offset}: {e}",
                param,
                ctx,
            )


def _create_context(
    file_path: str, fmt: Optional[str], settings: LocalSettings
) -> EditContext:
    if fmt:
        settings.set_read_only(True)
        settings["jsonnode.format"] = fmt
    return EditContext(stg=settings, store=FileDocumentStore(file_path))


def _split_assignments(
    assignments: Tuple[str, ...],
) -> List[Tuple[Optional[str], str]]:
    result: List[Tuple[Optional[str], str]] = []
    for item in assignments:
        key, sep, text = item.partition("=")
        if not sep:
            result.append((None, item))
        elif key == BARE_VALUE_KEY:
            result.append((None, text))
        else:
            result.append((key, text))
    return result


@click.group()
@click.option("--debug/--no-debug", default=False)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(FORMATS),
    default=None,
    help="Format of the document (defaults to the jsonnode.format setting).",
)
@click.version_option(__version__, prog_name="jsonnode")
@click.pass_context
def cli(context: click.Context, debug: bool, fmt: Optional[str]):
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="[%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.debug("Debug mode is on")
    context.obj = {"fmt": fmt}


@cli.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("path", type=NodePath(), default="$")
@click.pass_context
def show(context: click.Context, file_path: str, path: PathList):
    """Print the preview of the node found at PATH."""
    ctx = _create_context(file_path, context.obj["fmt"], LocalSettings())
    try:
        ctx.select_path(path)
    except JsonNodeError as e:
        raise click.ClickException(str(e)) from e

    controller = ctx.create_controller()
    controller.open()
    click.echo(f"JSON Path: {controller.path_text}")
    click.echo(controller.preview)


@cli.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("path", type=NodePath())
@click.argument("assignments", nargs=-1, required=True)
@click.pass_context
def edit(
    context: click.Context,
    file_path: str,
    path: PathList,
    assignments: Tuple[str, ...],
):
    """Edit the fields of the node found at PATH.

    Each assignment has the form KEY=VALUE. For a node that is a single
    value give the new value without a key, or as `-=VALUE`. Values are
    converted to the original type of the field.
    """
    ctx = _create_context(file_path, context.obj["fmt"], LocalSettings())
    try:
        ctx.select_path(path)
    except JsonNodeError as e:
        raise click.ClickException(str(e)) from e

    controller = ctx.create_controller()
    logger.debug("Editing %s in %s", controller.path_text, file_path)
    controller.open()
    controller.start_edit()
    for key, text in _split_assignments(assignments):
        try:
            if key is None:
                controller.set_single(text)
            else:
                controller.set_field(key, text)
        except (KeyError, ValueError) as e:
            raise click.BadParameter(
                str(e).strip("'"), param_hint="ASSIGNMENTS"
            ) from e

    if not asyncio.run(controller.save()):
        raise click.ClickException(
            f"Could not save the node: {controller.last_error}"
        )
    click.echo(f"Updated {controller.path_text} in {file_path}")


if __name__ == "__main__":
    cli()
