"""Flag formatting for generated documentation.

Two renderings are provided:

- ``man_flags``: the marked-up signature/help pairs used by man pages
- ``flag_usages``: the aligned plain-text table used by Markdown and ReST,
  matching the layout of conventional ``--help`` output
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TextIO

from cmddocs.tree import Flag

__all__ = ["flag_usages", "format_default", "man_flags"]

# Defaults that add nothing to a usage line
_ZERO_VALUES = {"", "0", "false", "[]", "<nil>", "0s"}


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def format_default(flag: Flag) -> str:
    """Default value as shown in a signature: quoted for string flags."""
    if flag.value_type == "string":
        return _quote(flag.default)
    return flag.default


def man_flag(flag: Flag) -> str:
    """Render one flag as a signature line plus an indented help line.

    Hidden and deprecated flags render as an empty string.
    """
    if not flag.is_visible:
        return ""

    if flag.shows_shorthand:
        signature = f"**-{flag.shorthand}**, **--{flag.name}**"
    else:
        signature = f"**--{flag.name}**"

    value = f"={format_default(flag)}"
    if flag.no_opt_default:
        value = f"[{value}]"

    return f"{signature}{value}\n\t{flag.usage}\n\n"


def man_flags(out: TextIO, flags: Iterable[Flag]) -> None:
    """Write every visible flag to ``out`` in man source form."""
    for flag in flags:
        text = man_flag(flag)
        if text:
            out.write(text)


def _usage_left(flag: Flag) -> str:
    if flag.shows_shorthand:
        left = f"  -{flag.shorthand}, --{flag.name}"
    else:
        left = f"      --{flag.name}"

    if flag.value_type != "bool":
        left += f" {flag.value_type}"
    if flag.no_opt_default:
        if flag.value_type == "string":
            left += f'[="{flag.no_opt_default}"]'
        elif not (flag.value_type == "bool" and flag.no_opt_default == "true"):
            left += f"[={flag.no_opt_default}]"
    return left


def flag_usages(flags: Iterable[Flag]) -> str:
    """Aligned usage table for the visible flags, one line per flag.

    Example:
        >>> print(flag_usages([Flag("strone", "s", "one", "help for strone")]), end="")
          -s, --strone string   help for strone (default "one")
    """
    rows = []
    for flag in flags:
        if not flag.is_visible:
            continue
        right = flag.usage
        if flag.default not in _ZERO_VALUES:
            right += f" (default {format_default(flag)})"
        rows.append((_usage_left(flag), right))

    if not rows:
        return ""

    width = max(len(left) for left, _ in rows)
    lines = []
    for left, right in rows:
        # Multi-line help continues in the help column
        padding = "\n" + " " * (width + 3)
        lines.append(f"{left.ljust(width)}   {right.replace(chr(10), padding)}".rstrip())
    return "\n".join(lines) + "\n"
