"""cmddocs - reference documentation generator for command trees

Philosophy:
- Read-only: renderers never modify the command tree or the header
- Brick architecture (one module per output format)
- Fail fast: the first write error stops generation

Generates man pages, Markdown, reStructuredText and YAML documentation from a
command hierarchy, either built directly from ``CommandNode`` objects or
extracted from a Click application.
"""

from cmddocs.click_tree import from_click
from cmddocs.filesystem import MemoryFileSystem, OsFileSystem, get_fs, set_fs
from cmddocs.man import ManHeader, gen_man, gen_man_tree
from cmddocs.markdown import gen_markdown, gen_markdown_tree
from cmddocs.rest import gen_rest, gen_rest_tree
from cmddocs.tree import CommandNode, CommandTreeError, Flag
from cmddocs.yaml_docs import gen_yaml, gen_yaml_tree

__version__ = "0.1.0"
__all__ = [
    "CommandNode",
    "CommandTreeError",
    "Flag",
    "ManHeader",
    "MemoryFileSystem",
    "OsFileSystem",
    "__version__",
    "from_click",
    "gen_man",
    "gen_man_tree",
    "gen_markdown",
    "gen_markdown_tree",
    "gen_rest",
    "gen_rest_tree",
    "gen_yaml",
    "gen_yaml_tree",
    "get_fs",
    "set_fs",
]
