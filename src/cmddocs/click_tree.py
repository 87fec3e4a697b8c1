"""Command tree extraction from Click applications.

Builds a ``CommandNode`` tree from a ``click.Command`` or ``click.Group``
using runtime inspection. Options declared on a group are documented as
persistent flags, since they apply to every command beneath it.

Example:
    >>> from myapp.cli import main
    >>> root = from_click(main, name="myapp")
    >>> gen_man_tree(root, ManHeader(section="1"), "man/")
"""

import importlib
import inspect
import logging
from typing import Any

import click

from cmddocs.tree import CommandNode, Flag

logger = logging.getLogger(__name__)

__all__ = ["from_click", "load_click_command"]


def load_click_command(target: str) -> click.Command:
    """Import a Click command given as ``package.module:attribute``.

    Raises:
        ValueError: If the target is malformed or does not name a Click command
        ImportError: If the module cannot be imported
    """
    module_path, _, attr_path = target.partition(":")
    if not module_path or not attr_path:
        raise ValueError(f"Expected 'module:attribute', got '{target}'")

    obj: Any = importlib.import_module(module_path)
    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise ValueError(f"'{module_path}' has no attribute '{attr_path}'") from e

    if not isinstance(obj, click.Command):
        raise ValueError(f"'{target}' is not a Click command")
    return obj


def _clean_help(text: str | None) -> str:
    """Dedent help text, drop Click's \\b markers and anything after \\f."""
    if not text:
        return ""
    text = inspect.cleandoc(text).split("\f", 1)[0]
    lines = [line for line in text.splitlines() if line.strip() != "\b"]
    return "\n".join(lines).strip()


def _short_help(command: click.Command, long: str) -> str:
    if command.short_help:
        return command.short_help.strip()
    first_paragraph = long.split("\n\n", 1)[0]
    return " ".join(first_paragraph.split())


def _deprecation(value: Any) -> str:
    if isinstance(value, str):
        return value
    return "deprecated" if value else ""


def _value_type(option: click.Option) -> str:
    if option.is_flag:
        return "bool"
    if isinstance(option.type, click.types.IntParamType):
        return "int"
    if isinstance(option.type, click.types.FloatParamType):
        return "float"
    if isinstance(option.type, click.types.BoolParamType):
        return "bool"
    return "string"


def _default(option: click.Option) -> str:
    default = option.default
    if isinstance(default, bool):
        return "true" if default else "false"
    if isinstance(default, str | int | float):
        return str(default)
    if isinstance(default, list | tuple):
        return "[" + ",".join(str(item) for item in default) + "]"
    # Unset and callable defaults are unknown until invocation
    return "false" if option.is_flag else ""


def _flag(option: click.Option) -> Flag:
    long_names = [opt for opt in option.opts if opt.startswith("--")]
    short_names = [opt for opt in option.opts if len(opt) == 2 and opt.startswith("-")]

    if long_names:
        name = max(long_names, key=len)[2:]
    else:
        name = (short_names[0] if short_names else option.opts[0]).lstrip("-")
        short_names = []

    value_type = _value_type(option)
    return Flag(
        name=name,
        shorthand=short_names[0][1:] if short_names else "",
        default=_default(option),
        usage=" ".join((option.help or "").split()),
        value_type=value_type,
        hidden=option.hidden,
        deprecated=_deprecation(getattr(option, "deprecated", False)),
        no_opt_default="true" if option.is_flag and value_type == "bool" else "",
    )


def _use(command: click.Command, name: str) -> str:
    parts = [name]
    for param in command.params:
        if not isinstance(param, click.Argument):
            continue
        metavar = param.metavar or param.human_readable_name.upper()
        if param.nargs == -1:
            metavar += "..."
        parts.append(metavar if param.required else f"[{metavar}]")
    if isinstance(command, click.Group):
        parts.append("COMMAND")
    return " ".join(parts)


def from_click(
    command: click.Command,
    name: str | None = None,
    parent_ctx: click.Context | None = None,
) -> CommandNode:
    """Build a command tree from a Click command and its subcommands.

    Args:
        command: Click command or group
        name: Name to document the command under (defaults to command.name)
        parent_ctx: Context of the parent group, used to resolve subcommands

    Returns:
        Root CommandNode of the extracted tree
    """
    name = name or command.name or "cli"
    ctx = click.Context(command, info_name=name, parent=parent_ctx)

    long = _clean_help(command.help)
    is_group = isinstance(command, click.Group)
    flags = [_flag(param) for param in command.params if isinstance(param, click.Option)]

    node = CommandNode(
        use=_use(command, name),
        short=_short_help(command, long),
        long=long,
        example=_clean_help(command.epilog),
        hidden=command.hidden,
        deprecated=_deprecation(command.deprecated),
        runnable=not is_group or command.invoke_without_command,
        flags=[] if is_group else flags,
        persistent_flags=flags if is_group else [],
    )

    if is_group:
        for sub_name in command.list_commands(ctx):
            sub_command = command.get_command(ctx, sub_name)
            if sub_command is None:
                logger.debug(f"Skipping unresolvable subcommand '{sub_name}' of '{name}'")
                continue
            node.add_command(from_click(sub_command, sub_name, ctx))

    return node
