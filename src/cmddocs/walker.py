"""Tree walker writing one documentation file per command.

The walker is format-agnostic: it receives a ``render(node, out)`` callable
and the file naming rules, and handles traversal and file handling. Files
are created through the filesystem abstraction and closed as soon as their
command is rendered.
"""

import logging
import os
from collections.abc import Callable, Iterator
from typing import TextIO

from cmddocs.filesystem import FileSystem, get_fs
from cmddocs.tree import CommandNode

logger = logging.getLogger(__name__)

__all__ = ["doc_filename", "iter_documented", "walk_tree"]

Renderer = Callable[[CommandNode, TextIO], None]


def iter_documented(node: CommandNode) -> Iterator[CommandNode]:
    """Yield ``node`` and every available descendant, depth-first, root first.

    Unavailable commands (hidden, deprecated, help topics) are skipped along
    with their subtrees. Children are visited in name order.
    The starting node is always yielded.
    """
    yield node
    for child in node.available_children():
        yield from iter_documented(child)


def doc_filename(node: CommandNode, directory: str, separator: str, suffix: str) -> str:
    """Path of the file documenting ``node``, e.g. ``dir/root-echo.1``."""
    return os.path.join(directory, node.dashed_path(separator) + suffix)


def walk_tree(
    node: CommandNode,
    render: Renderer,
    directory: str,
    *,
    separator: str,
    suffix: str,
    fs: FileSystem | None = None,
    prepend: Callable[[str], str] | None = None,
) -> list[str]:
    """Render every documented command under ``node`` into ``directory``.

    Args:
        node: Root of the tree to document
        render: Writes one command's document to an open file
        directory: Target directory, created if missing
        separator: Joins command path words in file names
        suffix: Appended to file names (e.g. ".2", ".md")
        fs: Filesystem to write through (defaults to ``get_fs()``)
        prepend: Returns text written before each document, given its path

    Returns:
        Paths of the written files, in traversal order

    Raises:
        FileSystemError: If the directory or a file cannot be created
        OSError: If writing a document fails
    """
    fs = fs or get_fs()
    fs.mkdir_all(directory)

    written = []
    for command in iter_documented(node):
        filename = doc_filename(command, directory, separator, suffix)
        with fs.create(filename) as f:
            if prepend is not None:
                f.write(prepend(filename))
            render(command, f)
        logger.debug(f"Wrote {filename}")
        written.append(filename)

    logger.info(f"Generated {len(written)} files in {directory}")
    return written
