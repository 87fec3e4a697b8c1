"""Man page generation.

Each command becomes one roff page with the sections NAME, SYNOPSIS,
DESCRIPTION, OPTIONS, OPTIONS INHERITED FROM PARENT COMMANDS, EXAMPLE,
COMMANDS, SEE ALSO and HISTORY. Empty sections other than DESCRIPTION are
left out.

Example:
    >>> header = ManHeader(title="Project", section="2")
    >>> gen_man(root, header, sys.stdout)
    >>> gen_man_tree(root, header, "man/")
"""

import io
import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import TextIO

from cmddocs import roff
from cmddocs.config import generation_date
from cmddocs.filesystem import FileSystem
from cmddocs.flags import man_flags
from cmddocs.tree import CommandNode
from cmddocs.walker import walk_tree

logger = logging.getLogger(__name__)

__all__ = ["AUTO_GEN_SOURCE", "ManHeader", "fill_header", "gen_man", "gen_man_tree"]

AUTO_GEN_SOURCE = "Auto generated by cmddocs"
DEFAULT_SECTION = "1"


@dataclass
class ManHeader:
    """Presentation metadata for a man page.

    Empty fields are filled with defaults at render time, on a copy.
    """

    title: str = ""
    section: str = ""
    date: datetime | None = None
    source: str = ""
    manual: str = ""


def fill_header(header: ManHeader | None, node: CommandNode) -> ManHeader:
    """Return a copy of ``header`` with every empty field defaulted.

    Raises:
        ConfigError: If the date falls back to an invalid SOURCE_DATE_EPOCH
    """
    filled = replace(header) if header is not None else ManHeader()
    if not filled.title:
        filled.title = node.dashed_path().upper()
    if not filled.section:
        filled.section = DEFAULT_SECTION
    filled.date = generation_date(filled.date)
    if not filled.source and not node.auto_gen_tag_disabled():
        filled.source = AUTO_GEN_SOURCE
    return filled


def _history_date(date: datetime) -> str:
    return f"{date.day}-{date:%b-%Y}"


def _preamble(buf: io.StringIO, header: ManHeader, node: CommandNode) -> None:
    description = node.long or node.short
    buf.write(
        f'% "{header.title}" "{header.section}" "{header.date:%b %Y}" '
        f'"{header.source}" "{header.manual}"\n'
    )
    buf.write("# NAME\n")
    buf.write(f"{node.dashed_path()} - {node.short}\n\n")
    buf.write("# SYNOPSIS\n")
    buf.write(f"**{node.use_line()}**\n\n")
    buf.write("# DESCRIPTION\n")
    buf.write(f"{description}\n\n")


def _options(buf: io.StringIO, node: CommandNode) -> None:
    local = [flag for flag in node.local_flags() if flag.is_visible]
    if local:
        buf.write("# OPTIONS\n")
        man_flags(buf, local)
        buf.write("\n")

    inherited = [flag for flag in node.inherited_flags() if flag.is_visible]
    if inherited:
        buf.write("# OPTIONS INHERITED FROM PARENT COMMANDS\n")
        man_flags(buf, inherited)
        buf.write("\n")


def _commands(buf: io.StringIO, node: CommandNode, section: str) -> None:
    children = node.available_children()
    if not children:
        return
    buf.write("# COMMANDS\n")
    for child in children:
        buf.write(f"**{child.name}**\n")
        buf.write(f"\t{child.short}\n")
        buf.write(f"\tSee **{child.dashed_path()}({section})**.\n\n")


def _see_also(buf: io.StringIO, node: CommandNode, section: str) -> None:
    related = []
    if node.parent is not None:
        if node.parent.is_visible:
            related.append(node.parent)
        related.extend(node.available_siblings())
    related.extend(node.available_children())
    if not related:
        return
    buf.write("# SEE ALSO\n")
    links = [f"**{command.dashed_path()}({section})**" for command in related]
    buf.write(", ".join(links) + "\n\n")


def man_source(node: CommandNode, header: ManHeader) -> str:
    """Build the marked-up source of a man page from a filled header."""
    buf = io.StringIO()
    _preamble(buf, header, node)
    _options(buf, node)
    if node.example:
        buf.write("# EXAMPLE\n")
        buf.write(f"```\n{node.example}\n```\n\n")
    _commands(buf, node, header.section)
    _see_also(buf, node, header.section)
    if not node.auto_gen_tag_disabled():
        buf.write("# HISTORY\n")
        buf.write(f"{_history_date(header.date)} {AUTO_GEN_SOURCE}\n")
    return buf.getvalue()


def gen_man(node: CommandNode, header: ManHeader | None, out: TextIO) -> None:
    """Write the man page for ``node`` to ``out``.

    The header is not modified. Write errors on ``out`` propagate unchanged.
    """
    filled = fill_header(header, node)
    out.write(roff.render(man_source(node, filled)))


def gen_man_tree(
    node: CommandNode,
    header: ManHeader | None,
    directory: str,
    *,
    separator: str = "-",
    fs: FileSystem | None = None,
) -> list[str]:
    """Write a man page for ``node`` and every available descendant.

    Files are named by the command path joined with ``separator`` plus the
    section, e.g. ``root-echo.2``.

    Returns:
        Paths of the written files
    """
    section = header.section if header is not None and header.section else DEFAULT_SECTION
    logger.debug(f"Generating man pages for '{node.command_path()}' in {directory}")
    return walk_tree(
        node,
        lambda command, f: gen_man(command, header, f),
        directory,
        separator=separator,
        suffix=f".{section}",
        fs=fs,
    )
