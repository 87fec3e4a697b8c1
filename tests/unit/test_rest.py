"""Unit tests for reStructuredText generation."""

import io

from cmddocs.filesystem import MemoryFileSystem
from cmddocs.rest import default_link_handler, gen_rest, gen_rest_tree


def render(node, **kwargs) -> str:
    buf = io.StringIO()
    gen_rest(node, buf, **kwargs)
    return buf.getvalue()


class TestGenRest:
    """Tests for a single reStructuredText page."""

    def test_anchor_title_and_synopsis(self, command_tree, fixed_date):
        output = render(command_tree.times, date=fixed_date)

        assert output.startswith(
            ".. _root_echo_times:\n\n"
            "root echo times\n---------------\n\n"
            "Echo anything to the screen more times\n\n"
            "Synopsis\n~~~~~~~~\n\n"
            "\na slightly useless command for testing.\n\n"
            "::\n\n  root echo times [# times] [string to echo] [flags]\n\n"
        )

    def test_no_use_line_for_non_runnable(self, command_tree, fixed_date):
        output = render(command_tree.echo, date=fixed_date)

        assert "  root echo [string to echo]" not in output

    def test_examples_indented(self, command_tree, fixed_date):
        output = render(command_tree.echo, date=fixed_date)

        assert "Examples\n~~~~~~~~\n\n::\n\n  Just run cmddocs-test echo\n\n" in output

    def test_options_literal_blocks(self, command_tree, fixed_date):
        output = render(command_tree.times, date=fixed_date)

        assert "Options\n~~~~~~~\n\n::\n\n" in output
        assert '    -t, --strtwo string   help message for child flag strtwo (default "2")\n' in output
        assert "    -c, --booltwo" + " " * 9 + "help message for flag booltwo\n" in output
        assert "Options inherited from parent commands\n" in output
        assert "help message for parent flag strtwo" not in output

    def test_see_also_parent_and_children(self, command_tree, fixed_date):
        output = render(command_tree.echo, date=fixed_date)

        assert (
            "SEE ALSO\n~~~~~~~~\n\n"
            "* :ref:`root <root>` \t - Root short description\n"
            "* :ref:`root echo echosub <root_echo_echosub>` \t - second sub command for echo\n"
            "* :ref:`root echo times <root_echo_times>` \t - Echo anything to the screen more times\n"
            "\n"
        ) in output

    def test_custom_link_handler(self, command_tree, fixed_date):
        output = render(
            command_tree.times,
            date=fixed_date,
            link_handler=lambda name, ref: f"`{name} <{ref}.html>`_",
        )

        assert "* `root echo <root_echo.html>`_ \t - Echo anything to the screen\n" in output

    def test_footer(self, command_tree, fixed_date):
        output = render(command_tree.times, date=fixed_date)

        assert output.endswith("*Auto generated by cmddocs on 15-Jan-2024*\n")

    def test_no_gen_tag(self, command_tree, fixed_date):
        command_tree.root.disable_auto_gen_tag = True

        assert "Auto generated" not in render(command_tree.times, date=fixed_date)

    def test_default_link_handler(self):
        assert default_link_handler("root echo", "root_echo") == ":ref:`root echo <root_echo>`"


class TestGenRestTree:
    """Tests for writing a reStructuredText file per command."""

    def test_files_written(self, command_tree):
        fs = MemoryFileSystem()

        written = gen_rest_tree(command_tree.root, "/docs", fs=fs)

        assert written == [
            "/docs/root.rst",
            "/docs/root_echo.rst",
            "/docs/root_echo_echosub.rst",
            "/docs/root_echo_times.rst",
        ]
        assert fs.read_text("/docs/root_echo.rst").startswith(".. _root_echo:\n\n")

    def test_file_prepender(self, command_tree):
        fs = MemoryFileSystem()

        gen_rest_tree(
            command_tree.root, "/docs", fs=fs, file_prepender=lambda filename: ":orphan:\n\n"
        )

        assert fs.read_text("/docs/root.rst").startswith(":orphan:\n\n.. _root:\n")
