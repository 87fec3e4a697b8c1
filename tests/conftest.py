"""
Shared test fixtures for cmddocs tests.

This module provides common fixtures used across all test types:
- A sample command tree with nested, hidden, deprecated and help-topic commands
- Flag factories
- A fixed generation date
- An in-memory filesystem
"""

from datetime import UTC, datetime
from types import SimpleNamespace

import pytest

from cmddocs.filesystem import MemoryFileSystem, get_fs, set_fs
from cmddocs.tree import CommandNode, Flag

# ============================================================================
# FLAG FACTORIES
# ============================================================================


def string_flag(name: str, shorthand: str, default: str, usage: str) -> Flag:
    return Flag(name=name, shorthand=shorthand, default=default, usage=usage)


def bool_flag(name: str, shorthand: str, default: bool, usage: str) -> Flag:
    return Flag(
        name=name,
        shorthand=shorthand,
        default="true" if default else "false",
        usage=usage,
        value_type="bool",
        no_opt_default="true",
    )


def int_flag(name: str, shorthand: str, default: int, usage: str) -> Flag:
    return Flag(name=name, shorthand=shorthand, default=str(default), usage=usage, value_type="int")


# ============================================================================
# COMMAND TREE FIXTURES
# ============================================================================


@pytest.fixture
def command_tree():
    """Sample command tree.

    root
    ├── print        (not runnable, no children: help topic, undocumented)
    ├── echo         (not runnable, documented through its children)
    │   ├── times
    │   ├── echosub
    │   └── deprecated (deprecated)
    └── dummy        (not runnable, no children: help topic)

    A fresh tree is built for every test so tests may flip flags freely.
    """
    root = CommandNode(
        use="root",
        short="Root short description",
        long="Root long description",
    )
    echo = CommandNode(
        use="echo [string to echo]",
        aliases=["say"],
        short="Echo anything to the screen",
        long="an utterly useless command for testing",
        example="Just run cmddocs-test echo",
        runnable=False,
    )
    echo_sub = CommandNode(
        use="echosub [string to print]",
        short="second sub command for echo",
        long="an absolutely utterly useless command for testing gendocs!.",
    )
    times = CommandNode(
        use="times [# times] [string to echo]",
        short="Echo anything to the screen more times",
        long="a slightly useless command for testing.",
    )
    deprecated = CommandNode(
        use="deprecated [can't do anything here]",
        short="A command which is deprecated",
        long="an absolutely utterly useless command for testing deprecation!.",
        deprecated="Please use echo instead",
    )
    print_cmd = CommandNode(
        use="print [string to print]",
        short="Print anything to the screen",
        long="an absolutely utterly useless command for testing.",
        runnable=False,
    )
    dummy = CommandNode(use="dummy [action]", short="Performs a dummy action", runnable=False)

    root.persistent_flags = [
        string_flag("rootflag", "r", "two", ""),
        string_flag("strtwo", "t", "two", "help message for parent flag strtwo"),
    ]
    echo.persistent_flags = [
        string_flag("strone", "s", "one", "help message for flag strone"),
        bool_flag("persistentbool", "p", False, "help message for flag persistentbool"),
    ]
    echo.flags = [
        int_flag("intone", "i", 123, "help message for flag intone"),
        bool_flag("boolone", "b", True, "help message for flag boolone"),
    ]
    times.persistent_flags = [
        string_flag("strtwo", "t", "2", "help message for child flag strtwo"),
    ]
    times.flags = [
        int_flag("inttwo", "j", 234, "help message for flag inttwo"),
        bool_flag("booltwo", "c", False, "help message for flag booltwo"),
    ]
    print_cmd.persistent_flags = [string_flag("strthree", "s", "three", "help message for flag strthree")]
    print_cmd.flags = [
        int_flag("intthree", "i", 345, "help message for flag intthree"),
        bool_flag("boolthree", "b", True, "help message for flag boolthree"),
    ]

    echo.add_command(times, echo_sub, deprecated)
    root.add_command(print_cmd, echo, dummy)

    return SimpleNamespace(
        root=root,
        echo=echo,
        echo_sub=echo_sub,
        times=times,
        deprecated=deprecated,
        print_cmd=print_cmd,
        dummy=dummy,
    )


# ============================================================================
# ENVIRONMENT FIXTURES
# ============================================================================


@pytest.fixture
def fixed_date():
    """Generation date used for deterministic output."""
    return datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def clear_source_date_epoch(monkeypatch):
    """Keep a SOURCE_DATE_EPOCH from the build environment out of tests."""
    monkeypatch.delenv("SOURCE_DATE_EPOCH", raising=False)


@pytest.fixture
def memory_fs():
    """In-memory filesystem installed as the default, restored afterwards."""
    old_fs = get_fs()
    fs = MemoryFileSystem()
    set_fs(fs)
    yield fs
    set_fs(old_fs)
