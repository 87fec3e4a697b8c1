"""CLI entry point for cmddocs.

Generates reference documentation for a Click application from a build
process or Makefile.

Commands:
    cmddocs man APP --dir man/            # One roff page per command
    cmddocs markdown APP --dir docs/      # One Markdown file per command
    cmddocs rest APP --dir docs/          # One reStructuredText file per command
    cmddocs yaml APP --dir docs/          # One YAML file per command

APP is the Click command to document, given as ``package.module:attribute``.
"""

import functools
import logging
from collections.abc import Callable
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from cmddocs import __version__
from cmddocs.click_tree import from_click, load_click_command
from cmddocs.config import ConfigError, DocsConfig, load_config
from cmddocs.filesystem import FileSystemError
from cmddocs.man import ManHeader, gen_man_tree
from cmddocs.markdown import gen_markdown_tree
from cmddocs.rest import gen_rest_tree
from cmddocs.tree import CommandNode, CommandTreeError
from cmddocs.yaml_docs import gen_yaml_tree

logger = logging.getLogger(__name__)

console = Console()


def _load_tree(app: str, name: str | None) -> CommandNode:
    try:
        command = load_click_command(app)
    except (ValueError, ImportError) as e:
        raise click.BadParameter(str(e), param_hint="APP") from e
    try:
        return from_click(command, name=name)
    except CommandTreeError as e:
        raise click.ClickException(f"Invalid command tree: {e}") from e


def _show_summary(written: list[str]) -> None:
    table = Table(title=f"Generated {len(written)} files")
    table.add_column("File", style="cyan")
    for path in written:
        table.add_row(path)
    console.print(table)


def _generator_command(func: Callable[..., list[str]]) -> Callable[..., None]:
    """Add the options shared by every generator and run it with error handling."""

    @click.argument("app")
    @click.option(
        "--dir",
        "directory",
        required=True,
        type=click.Path(file_okay=False),
        help="Directory to write the documentation into",
    )
    @click.option("--name", help="Name of the root command (defaults to the Click name)")
    @click.option("--quiet", "-q", is_flag=True, help="Do not print the generated files")
    @functools.wraps(func)
    def wrapper(app: str, directory: str, name: str | None, quiet: bool, **kwargs: Any) -> None:
        root = _load_tree(app, name)
        try:
            written = func(root, directory, **kwargs)
        except (ConfigError, FileSystemError) as e:
            raise click.ClickException(str(e)) from e
        except OSError as e:
            raise click.ClickException(f"Failed to write documentation: {e}") from e

        if not quiet:
            _show_summary(written)

    return wrapper


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool) -> None:
    """Generate reference documentation for a Click application.

    \b
    Examples:
        cmddocs man myapp.cli:main --dir man/ --section 1
        cmddocs markdown myapp.cli:main --dir docs/commands
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
    )


@main.command()
@click.option("--section", help="Man page section (default: 1)")
@click.option("--title", help="Page title (default: upper-cased command path)")
@click.option("--manual", help="Manual name shown in the page header")
@click.option("--source", help="Source string shown in the page footer")
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="TOML file with header defaults",
)
@_generator_command
def man(
    root: CommandNode,
    directory: str,
    section: str | None,
    title: str | None,
    manual: str | None,
    source: str | None,
    config_file: str | None,
) -> list[str]:
    """Generate one man page per command."""
    config = load_config(config_file) if config_file else DocsConfig.from_environment()
    config = config.merged(section=section, title=title, manual=manual, source=source)
    header = ManHeader(
        title=config.title,
        section=config.section,
        date=config.date,
        source=config.source,
        manual=config.manual,
    )
    return gen_man_tree(root, header, directory)


@main.command()
@click.option("--base-url", default="", help="Prefix for links between pages")
@_generator_command
def markdown(root: CommandNode, directory: str, base_url: str) -> list[str]:
    """Generate one Markdown file per command."""
    return gen_markdown_tree(root, directory, link_handler=lambda link: base_url + link)


@main.command()
@_generator_command
def rest(root: CommandNode, directory: str) -> list[str]:
    """Generate one reStructuredText file per command."""
    return gen_rest_tree(root, directory)


@main.command(name="yaml")
@_generator_command
def yaml_command(root: CommandNode, directory: str) -> list[str]:
    """Generate one YAML file per command."""
    return gen_yaml_tree(root, directory)


if __name__ == "__main__":
    main()
