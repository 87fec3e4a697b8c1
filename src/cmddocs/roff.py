"""Conversion of man page source into roff.

Man pages are assembled as a small marked-up source document and converted
here in a single pass. The source understands:

    % "TITLE" "SECTION" "DATE" "SOURCE" "MANUAL"   title line (.TH), first line only
    # HEADING                                       section (.SH)
    blank-line separated text                       paragraphs (.PP)
    **text**                                        bold
    ``` ... ```                                     literal block

All text is escaped for roff: backslashes are doubled, hyphens become ``\\-``
and lines that would start with a control character are guarded with ``\\&``.
"""

import re

__all__ = ["escape", "render", "render_inline"]

_BOLD = re.compile(r"\*\*(.+?)\*\*")
_FENCE = "```"


def escape(text: str) -> str:
    """Escape backslashes and hyphens for roff."""
    return text.replace("\\", "\\\\").replace("-", "\\-")


def _guard(line: str) -> str:
    if line.startswith((".", "'")):
        return "\\&" + line
    return line


def render_inline(text: str) -> str:
    """Escape one line of paragraph text and convert bold markup."""
    line = _BOLD.sub(r"\\fB\1\\fP", escape(text))
    # Keep trailing punctuation out of the font run
    line = line.replace("\\fP.", "\\fP\\&.")
    return _guard(line)


def render(source: str) -> str:
    """Convert man page source into roff text."""
    out: list[str] = []
    paragraph: list[str] = []
    literal: list[str] | None = None

    def flush() -> None:
        if paragraph:
            out.append(".PP")
            out.extend(render_inline(line) for line in paragraph)
            paragraph.clear()

    for index, line in enumerate(source.splitlines()):
        if literal is not None:
            if line.strip() == _FENCE:
                out.extend([".PP", ".RS", "", ".nf"])
                out.extend(_guard(escape(text)) for text in literal)
                out.extend(["", ".fi", ".RE"])
                literal = None
            else:
                literal.append(line)
        elif line.strip() == _FENCE:
            flush()
            literal = []
        elif index == 0 and line.startswith("% "):
            flush()
            out.append(".nh")
            out.append(".TH " + escape(line[2:]))
        elif line.startswith("# "):
            flush()
            out.append(".SH " + escape(line[2:].strip()))
        elif not line.strip():
            flush()
        else:
            paragraph.append(line)

    flush()
    if literal is not None:
        # Unterminated fence: keep the text rather than dropping it
        out.extend(render_inline(text) for text in literal)

    return "\n".join(out) + "\n"
