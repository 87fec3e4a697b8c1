"""YAML documentation generation.

Each command is dumped as a mapping with the keys name, synopsis,
description, usage, options, inherited_options, example and see_also. Keys
with empty values are omitted.
"""

from typing import Any, TextIO

import yaml

from cmddocs.filesystem import FileSystem
from cmddocs.tree import CommandNode, Flag
from cmddocs.walker import walk_tree

__all__ = ["command_doc", "gen_yaml", "gen_yaml_tree"]


class _BlockDumper(yaml.SafeDumper):
    """Dumps multi-line strings in block style."""


def _represent_str(dumper: yaml.SafeDumper, value: str) -> yaml.ScalarNode:
    if "\n" in value:
        return dumper.represent_scalar("tag:yaml.org,2002:str", value, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", value)


_BlockDumper.add_representer(str, _represent_str)


def _force_multiline(text: str) -> str:
    if text and "\n" not in text:
        return text + "\n"
    return text


def _compact(mapping: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in mapping.items() if value}


def _options(flags: list[Flag]) -> list[dict[str, str]]:
    return [
        _compact(
            {
                "name": flag.name,
                "shorthand": flag.shorthand if flag.shows_shorthand else "",
                "default_value": flag.default,
                "usage": flag.usage,
            }
        )
        for flag in flags
        if flag.is_visible
    ]


def command_doc(node: CommandNode) -> dict[str, Any]:
    """Build the YAML-ready mapping documenting ``node``."""
    see_also = []
    if node.parent is not None:
        see_also.append(f"{node.parent.command_path()} - {node.parent.short}")
    for child in node.available_children():
        see_also.append(f"{child.command_path()} - {child.short}")

    return _compact(
        {
            "name": node.command_path(),
            "synopsis": _force_multiline(node.short),
            "description": _force_multiline(node.long),
            "usage": node.use_line() if node.runnable else "",
            "options": _options(node.local_flags()),
            "inherited_options": _options(node.inherited_flags()),
            "example": node.example,
            "see_also": see_also,
        }
    )


def gen_yaml(node: CommandNode, out: TextIO) -> None:
    """Write the YAML document for ``node`` to ``out``."""
    yaml.dump(
        command_doc(node),
        out,
        Dumper=_BlockDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


def gen_yaml_tree(node: CommandNode, directory: str, *, fs: FileSystem | None = None) -> list[str]:
    """Write a YAML document for ``node`` and every available descendant."""
    return walk_tree(node, gen_yaml, directory, separator="_", suffix=".yaml", fs=fs)
