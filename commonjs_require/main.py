"""cjs-require - load CommonJS-style module trees from the command line."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError
from rich.pretty import Pretty
from rich.tree import Tree

from .console import console
from .console import error_console
from .error_format import escape_markup
from .error_format import format_error_message
from .folders import FilesystemFolder
from .handlers import BUILTIN_HANDLERS
from .logging_setup import init_json_logging
from .module import Module
from .paths import is_prefixed
from .runtime import Installation
from .runtime import install
from .settings import RequireSettings
from .settings import load_settings

logger = logging.getLogger(__name__)


def create_installation(root: Path, settings: RequireSettings) -> Installation:
    """Install a main module on a filesystem root using CLI settings."""
    folder = FilesystemFolder.create(root, encoding=settings.encoding)
    installation = install(folder, dict(settings.globals))
    for name in settings.handlers:
        BUILTIN_HANDLERS[name]().install(installation.handlers)
    return installation


def entry_specifier(root: Path, entry: str) -> str:
    """Treat an entry naming an existing path under the root as relative."""
    if not is_prefixed(entry) and (root / entry).exists():
        return "./" + entry
    return entry


def _fail(e: BaseException) -> None:
    logger.debug("Command failed", exc_info=e)
    error_console.print(f"[red]Error:[/red] {escape_markup(format_error_message(e))}")
    sys.exit(1)


def _label(module: Module, root: Path) -> str:
    prefix = str(root.absolute())
    label = module.filename
    if label.startswith(prefix):
        label = "." + label[len(prefix) :]
    return escape_markup(label)


def build_tree(module: Module, root: Path) -> Tree:
    """Render a module and its children (call order) as a rich Tree."""
    tree = Tree(_label(module, root))
    _add_children(tree, module, root, {id(module)})
    return tree


def _add_children(tree: Tree, module: Module, root: Path, ancestors: set[int]) -> None:
    for child in module.children:
        if id(child) in ancestors:
            tree.add(f"{_label(child, root)} [dim](cycle)[/dim]")
            continue
        branch = tree.add(_label(child, root))
        _add_children(branch, child, root, ancestors | {id(child)})


@click.group()
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    help="Top folder modules are resolved from (default: current directory)",
)
@click.option("--log-level", default=None, help="Log level (overrides settings)")
@click.option("--log-file", default=None, help="Write JSONL logs to this file")
@click.pass_context
def cli(ctx: click.Context, root: Path, log_level: str | None, log_file: str | None):
    """Resolve and load CommonJS-style modules."""
    try:
        settings = load_settings()
        if log_level:
            settings = settings.model_copy(update={"log_level": log_level.upper()})
    except ValidationError as e:
        _fail(e)

    log_path = log_file or settings.log_path
    if log_path:
        init_json_logging(log_path, settings.log_level)

    ctx.ensure_object(dict)
    ctx.obj["root"] = root
    ctx.obj["settings"] = settings


@cli.command()
@click.argument("entry")
@click.option("--json", "as_json", is_flag=True, help="Print exports as JSON")
@click.pass_context
def run(ctx: click.Context, entry: str, as_json: bool):
    """Require ENTRY and print its exports."""
    root: Path = ctx.obj["root"]
    installation = create_installation(root, ctx.obj["settings"])

    try:
        exports: Any = installation.require(entry_specifier(root, entry))
    except Exception as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps(exports, indent=2, default=repr))
    else:
        console.print(Pretty(exports))


@cli.command()
@click.argument("specifier")
@click.pass_context
def resolve(ctx: click.Context, specifier: str):
    """Print the path SPECIFIER resolves to, without loading it."""
    installation = create_installation(ctx.obj["root"], ctx.obj["settings"])

    try:
        path = installation.main.resolve(specifier)
    except Exception as e:
        _fail(e)

    click.echo(path)


@cli.command()
@click.argument("entry")
@click.pass_context
def tree(ctx: click.Context, entry: str):
    """Load ENTRY and print the module tree."""
    root: Path = ctx.obj["root"]
    installation = create_installation(root, ctx.obj["settings"])

    try:
        installation.require(entry_specifier(root, entry))
    except Exception as e:
        _fail(e)

    console.print(build_tree(installation.main, root))


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
