"""Command tree model for documentation generation.

This module defines the read-only view of a command hierarchy that the
renderers consume: commands, their flags, and the parent/child links
between them.

Nodes are built once (by application code, tests, or the click reader in
``cmddocs.click_tree``) and then only read. Parent links are back references
assigned by ``add_command``; children are owned by their parent.

Public API:
    Flag: A single command-line option
    CommandNode: One command in the hierarchy
    CommandTreeError: Raised for malformed trees
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

__all__ = ["CommandNode", "CommandTreeError", "Flag"]


class CommandTreeError(Exception):
    """Raised when a command tree would become malformed."""

    pass


@dataclass
class Flag:
    """A named command-line option.

    Attributes:
        name: Long name without leading dashes (e.g. "strone")
        shorthand: Single-letter short form without the dash, or ""
        default: Default value, already stringified
        usage: Help text
        value_type: Type name ("string", "bool", "int", ...)
        hidden: Excluded from all generated docs
        deprecated: Deprecation message; non-empty excludes the flag
        shorthand_deprecated: Deprecation message for the shorthand only
        no_opt_default: Value used when the flag is given without an argument
    """

    name: str
    shorthand: str = ""
    default: str = ""
    usage: str = ""
    value_type: str = "string"
    hidden: bool = False
    deprecated: str = ""
    shorthand_deprecated: str = ""
    no_opt_default: str = ""

    @property
    def is_visible(self) -> bool:
        """Whether the flag should appear in documentation."""
        return not self.hidden and not self.deprecated

    @property
    def shows_shorthand(self) -> bool:
        """Whether the shorthand form should be rendered."""
        return bool(self.shorthand) and not self.shorthand_deprecated


@dataclass(eq=False)
class CommandNode:
    """One command in a CLI command hierarchy.

    The first word of ``use`` is the command name; the rest is the argument
    synopsis shown in usage lines (e.g. "echo [string to echo]").
    """

    use: str
    short: str = ""
    long: str = ""
    example: str = ""
    aliases: list[str] = field(default_factory=list)
    flags: list[Flag] = field(default_factory=list)
    persistent_flags: list[Flag] = field(default_factory=list)
    hidden: bool = False
    deprecated: str = ""
    runnable: bool = True
    disable_auto_gen_tag: bool = False
    parent: CommandNode | None = field(default=None, repr=False)
    children: list[CommandNode] = field(default_factory=list, repr=False)

    @property
    def name(self) -> str:
        """Command name (first word of the use line)."""
        words = self.use.split()
        return words[0] if words else ""

    def add_command(self, *commands: CommandNode) -> None:
        """Attach child commands to this node.

        Raises:
            CommandTreeError: If a child already has a parent, or attaching it
                would create a cycle
        """
        for command in commands:
            if command is self:
                raise CommandTreeError(f"Command '{self.name}' cannot be its own child")
            if command.parent is not None:
                raise CommandTreeError(
                    f"Command '{command.name}' already belongs to '{command.parent.name}'"
                )
            if any(ancestor is command for ancestor in self.ancestors()):
                raise CommandTreeError(
                    f"Adding '{command.name}' under '{self.name}' would create a cycle"
                )
            command.parent = self
            self.children.append(command)
            logger.debug(f"Attached command '{command.name}' to '{self.name}'")

    def ancestors(self) -> Iterator[CommandNode]:
        """Yield parent, grandparent, ... up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def root(self) -> CommandNode:
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def command_path(self) -> str:
        """Space-joined names from the root down to this command."""
        if self.parent is None:
            return self.name
        return f"{self.parent.command_path()} {self.name}"

    def dashed_path(self, separator: str = "-") -> str:
        """Command path with spaces replaced by ``separator``."""
        return self.command_path().replace(" ", separator)

    def use_line(self) -> str:
        """Full usage line, e.g. "root echo [string to echo] [flags]"."""
        if self.parent is not None:
            line = f"{self.parent.command_path()} {self.use}"
        else:
            line = self.use
        if self.has_available_flags() and "[flags]" not in line:
            line += " [flags]"
        return line

    # Visibility

    @property
    def is_visible(self) -> bool:
        """Neither hidden nor deprecated."""
        return not self.hidden and not self.deprecated

    def is_available(self) -> bool:
        """Whether the command is listed in docs of its parent and siblings."""
        if not self.is_visible:
            return False
        return self.runnable or self.has_available_children()

    def has_available_children(self) -> bool:
        return any(child.is_available() for child in self.children)

    def available_children(self) -> list[CommandNode]:
        """Available direct children sorted by name."""
        return sorted(
            (child for child in self.children if child.is_available()),
            key=lambda child: child.name,
        )

    def available_siblings(self) -> list[CommandNode]:
        """Available children of the parent, excluding this command."""
        if self.parent is None:
            return []
        return [sibling for sibling in self.parent.available_children() if sibling is not self]

    def has_see_also(self) -> bool:
        return self.parent is not None or self.has_available_children()

    def auto_gen_tag_disabled(self) -> bool:
        """Suppression set on this command or inherited from any ancestor."""
        if self.disable_auto_gen_tag:
            return True
        return any(ancestor.disable_auto_gen_tag for ancestor in self.ancestors())

    # Flags

    def local_flags(self) -> list[Flag]:
        """Flags defined on this command itself, local and persistent."""
        seen: set[str] = set()
        result = []
        for flag in [*self.flags, *self.persistent_flags]:
            if flag.name not in seen:
                seen.add(flag.name)
                result.append(flag)
        return result

    def inherited_flags(self) -> list[Flag]:
        """Persistent flags of all non-hidden ancestors, nearest ancestor first.

        Names defined on this command, or on a nearer ancestor, shadow the
        flags of the same name further up the tree. A hidden ancestor's
        flags are skipped, but the ancestors above it still contribute.
        """
        seen = {flag.name for flag in self.local_flags()}
        result = []
        for ancestor in self.ancestors():
            if ancestor.hidden:
                continue
            for flag in ancestor.persistent_flags:
                if flag.name not in seen:
                    seen.add(flag.name)
                    result.append(flag)
        return result

    def has_available_flags(self) -> bool:
        return any(flag.is_visible for flag in [*self.local_flags(), *self.inherited_flags()])

    def walk(self) -> Iterator[CommandNode]:
        """Depth-first traversal, root first, over every node."""
        yield self
        for child in self.children:
            yield from child.walk()
