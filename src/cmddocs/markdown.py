"""Markdown documentation generation.

One Markdown file per command, named by the command path joined with
underscores (``root_echo.md``), cross-linked through a SEE ALSO list.
"""

import io
from collections.abc import Callable
from datetime import datetime
from typing import TextIO

from cmddocs.config import generation_date
from cmddocs.filesystem import FileSystem
from cmddocs.flags import flag_usages
from cmddocs.man import AUTO_GEN_SOURCE
from cmddocs.tree import CommandNode
from cmddocs.walker import walk_tree

__all__ = ["gen_markdown", "gen_markdown_tree"]

LinkHandler = Callable[[str], str]


def _identity(link: str) -> str:
    return link


def _options(buf: io.StringIO, node: CommandNode) -> None:
    local = flag_usages(node.local_flags())
    if local:
        buf.write(f"### Options\n\n```\n{local}```\n\n")

    inherited = flag_usages(node.inherited_flags())
    if inherited:
        buf.write(f"### Options inherited from parent commands\n\n```\n{inherited}```\n\n")


def _link(command: CommandNode, link_handler: LinkHandler) -> str:
    path = command.command_path()
    target = link_handler(command.dashed_path("_") + ".md")
    return f"* [{path}]({target})\t - {command.short}\n"


def gen_markdown(
    node: CommandNode,
    out: TextIO,
    link_handler: LinkHandler | None = None,
    date: datetime | None = None,
) -> None:
    """Write the Markdown page for ``node`` to ``out``.

    Args:
        node: Command to document
        out: Writable text sink
        link_handler: Maps a target file name (``root_echo.md``) to the link
            written in SEE ALSO; defaults to the file name itself
        date: Date for the auto generated footer
    """
    link_handler = link_handler or _identity
    buf = io.StringIO()

    buf.write(f"## {node.command_path()}\n\n")
    buf.write(f"{node.short}\n\n")
    if node.long:
        buf.write(f"### Synopsis\n\n{node.long}\n\n")
    if node.runnable:
        buf.write(f"```\n{node.use_line()}\n```\n\n")
    if node.example:
        buf.write(f"### Examples\n\n```\n{node.example}\n```\n\n")

    _options(buf, node)

    if node.has_see_also():
        buf.write("### SEE ALSO\n\n")
        if node.parent is not None:
            buf.write(_link(node.parent, link_handler))
        for child in node.available_children():
            buf.write(_link(child, link_handler))
        buf.write("\n")

    if not node.auto_gen_tag_disabled():
        stamp = generation_date(date)
        buf.write(f"###### {AUTO_GEN_SOURCE} on {stamp.day}-{stamp:%b-%Y}\n")

    out.write(buf.getvalue())


def gen_markdown_tree(
    node: CommandNode,
    directory: str,
    *,
    file_prepender: Callable[[str], str] | None = None,
    link_handler: LinkHandler | None = None,
    fs: FileSystem | None = None,
) -> list[str]:
    """Write a Markdown page for ``node`` and every available descendant.

    Args:
        node: Root of the tree to document
        directory: Target directory
        file_prepender: Returns text (e.g. front matter) written at the top of
            each file, given the file's path
        link_handler: See ``gen_markdown``
        fs: Filesystem to write through

    Returns:
        Paths of the written files
    """
    date = generation_date()
    return walk_tree(
        node,
        lambda command, f: gen_markdown(command, f, link_handler, date),
        directory,
        separator="_",
        suffix=".md",
        fs=fs,
        prepend=file_prepender,
    )
