"""
Command-line interface for Playbook Toolkit
"""

import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from playbook_toolkit import __version__
from playbook_toolkit.core.config import get_settings, load_override_environment
from playbook_toolkit.playbook.exceptions import PlaybookError
from playbook_toolkit.playbook.index import enumerate_playbooks
from playbook_toolkit.playbook.reports import (
    format_describe,
    format_list,
    format_run_results,
)
from playbook_toolkit.playbook.runner import PlaybookRunner
from playbook_toolkit.playbook.selector import (
    merge_environment_overrides,
    resolve,
    resolve_with_env,
)

console = Console()
error_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def echo(text: str, end: str = "\n") -> None:
    """Print text exactly as given (no rich markup, emoji or highlighting)"""
    console.print(text, end=end, markup=False, emoji=False, highlight=False, soft_wrap=True)


def fail(error: Exception) -> None:
    error_console.print(
        f"[bold red]❌ Error:[/bold red] {escape(str(error))}",
        markup=True,
        highlight=False,
        soft_wrap=True,
    )
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show playbook names, contents or engine output")
@click.option(
    "--playbook-dir",
    "-p",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Playbook directory (default: PLAYBOOK_DIR or playbooks/)",
)
@click.option(
    "--inventory",
    "-i",
    type=click.Path(path_type=Path),
    default=None,
    help="Inventory file (default: INVENTORY_DIR or inventory.yaml)",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, playbook_dir: Path | None, inventory: Path | None) -> None:
    """Playbook Toolkit - list, describe and run Ansible playbooks"""
    try:
        settings = get_settings()
    except ValidationError as e:
        fail(e)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    ctx.obj = {
        "verbose": verbose or settings.verbose,
        "playbook_dir": playbook_dir or settings.playbook_dir,
        "inventory": inventory or settings.inventory_dir,
        "command": settings.playbook_command,
    }
    logger.debug(f"Using playbook directory {ctx.obj['playbook_dir']}")


@main.command("list")
@click.pass_obj
def list_playbooks(obj: dict) -> None:
    """List all the available playbooks"""
    try:
        playbooks = enumerate_playbooks(obj["playbook_dir"])
        echo(format_list(playbooks, obj["playbook_dir"], obj["verbose"]), end="")
    except PlaybookError as e:
        fail(e)


@main.command("run")
@click.argument("books", nargs=-1)
@click.pass_obj
def run_playbooks(obj: dict, books: tuple[str, ...]) -> None:
    """
    Run the specified playbooks

    BOOKS are indices (3), ranges (2-4) or file names, each optionally
    followed by comma-separated overrides: deploy.yaml,ENV=prod
    """
    try:
        selection = resolve_with_env(books, obj["playbook_dir"])
        selection = merge_environment_overrides(selection, load_override_environment())

        runner = PlaybookRunner(
            obj["playbook_dir"],
            obj["inventory"],
            command=obj["command"],
            output=echo,
        )
        outcomes = runner.run_all(selection, verbose=obj["verbose"])
        echo(format_run_results(outcomes), end="")
    except PlaybookError as e:
        fail(e)


@main.command("describe")
@click.argument("books", nargs=-1)
@click.pass_obj
def describe_playbooks(obj: dict, books: tuple[str, ...]) -> None:
    """
    Describe the specified playbooks

    Shows each playbook's name and templated variables, or its full
    contents with --verbose.
    """
    try:
        playbooks = resolve(books, obj["playbook_dir"])
        echo(format_describe(playbooks, obj["playbook_dir"], obj["verbose"]), end="")
    except PlaybookError as e:
        fail(e)


if __name__ == "__main__":
    main()
