"""reStructuredText documentation generation.

Pages carry a ``.. _root_echo:`` anchor so Sphinx ``:ref:`` links resolve
between commands.
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

__all__ = ["default_link_handler", "gen_rest", "gen_rest_tree"]

RestLinkHandler = Callable[[str, str], str]


def default_link_handler(name: str, ref: str) -> str:
    return f":ref:`{name} <{ref}>`"


def _indent(text: str, prefix: str = "  ") -> str:
    return "\n".join(prefix + line if line else line for line in text.splitlines())


def _heading(title: str, underline: str) -> str:
    return f"{title}\n{underline * len(title)}\n\n"


def _options(buf: io.StringIO, node: CommandNode) -> None:
    local = flag_usages(node.local_flags())
    if local:
        buf.write(_heading("Options", "~"))
        buf.write(f"::\n\n{_indent(local)}\n\n")

    inherited = flag_usages(node.inherited_flags())
    if inherited:
        buf.write(_heading("Options inherited from parent commands", "~"))
        buf.write(f"::\n\n{_indent(inherited)}\n\n")


def gen_rest(
    node: CommandNode,
    out: TextIO,
    link_handler: RestLinkHandler | None = None,
    date: datetime | None = None,
) -> None:
    """Write the reStructuredText page for ``node`` to ``out``."""
    link_handler = link_handler or default_link_handler
    name = node.command_path()
    buf = io.StringIO()

    buf.write(f".. _{node.dashed_path('_')}:\n\n")
    buf.write(_heading(name, "-"))
    buf.write(f"{node.short}\n\n")
    buf.write(_heading("Synopsis", "~"))
    buf.write(f"\n{node.long}\n\n")
    if node.runnable:
        buf.write(f"::\n\n  {node.use_line()}\n\n")
    if node.example:
        buf.write(_heading("Examples", "~"))
        buf.write(f"::\n\n{_indent(node.example)}\n\n")

    _options(buf, node)

    if node.has_see_also():
        buf.write(_heading("SEE ALSO", "~"))
        related = [node.parent] if node.parent is not None else []
        related.extend(node.available_children())
        for command in related:
            link = link_handler(command.command_path(), command.dashed_path("_"))
            buf.write(f"* {link} \t - {command.short}\n")
        buf.write("\n")

    if not node.auto_gen_tag_disabled():
        stamp = generation_date(date)
        buf.write(f"*{AUTO_GEN_SOURCE} on {stamp.day}-{stamp:%b-%Y}*\n")

    out.write(buf.getvalue())


def gen_rest_tree(
    node: CommandNode,
    directory: str,
    *,
    file_prepender: Callable[[str], str] | None = None,
    link_handler: RestLinkHandler | None = None,
    fs: FileSystem | None = None,
) -> list[str]:
    """Write a reStructuredText page for ``node`` and every available descendant."""
    date = generation_date()
    return walk_tree(
        node,
        lambda command, f: gen_rest(command, f, link_handler, date),
        directory,
        separator="_",
        suffix=".rst",
        fs=fs,
        prepend=file_prepender,
    )
