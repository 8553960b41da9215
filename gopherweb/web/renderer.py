"""Plain-text rendering of sanitized HTML.

A small layout engine over a BeautifulSoup tree: paragraphs, headings, lists,
quotes, preformatted blocks and fixed-width tables.  It never wraps lines and
copies text through unchanged apart from whitespace collapsing, so the
``[text](url)`` link tokens written by the sanitizer come out intact.  Wrapping
to the client's width is the reflow step's job.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from gopherweb.errors import RenderError

_SPACE_RE = re.compile(r"\s+")

_SKIP_TAGS = {
    "head", "title", "script", "style", "template", "noscript", "iframe",
    "object", "embed", "svg", "canvas", "select", "textarea",
}
_BLOCK_TAGS = {
    "p", "div", "section", "article", "main", "header", "footer", "nav",
    "aside", "address", "figure", "figcaption", "form", "fieldset", "details",
    "summary", "center", "dl", "legend",
}
_HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}
_UNDERLINES = {"h1": "=", "h2": "-"}


class _TextBuilder:
    """Accumulates output lines.

    Text is appended to the current line; indentation prefixes are kept as a
    stack where each level has a first-line prefix (a bullet) and a prefix for
    the lines that follow.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []
        self._current = ""
        self._space = False
        self._blank = False
        self._prefixes: list[list] = []  # [first, rest, used]

    def _prefix(self) -> str:
        prefix = ""
        for level in self._prefixes:
            prefix += level[1] if level[2] else level[0]
            level[2] = True
        return prefix

    def _emit(self, text: str) -> None:
        if self._blank and self.lines:
            self.lines.append(self._rest_prefix().rstrip())
        self._blank = False
        self.lines.append((self._prefix() + text).rstrip())

    def _rest_prefix(self) -> str:
        return "".join(level[1] for level in self._prefixes)

    def add_text(self, text: str) -> None:
        if not text:
            return
        if text[0] == " ":
            self._space = True
        words = text.strip()
        if words:
            if self._current and self._space:
                self._current += " "
            self._current += words
            self._space = text[-1] == " "

    def newline(self) -> None:
        if self._current:
            self._emit(self._current)
        self._current = ""
        self._space = False

    def line_break(self) -> None:
        if self._current:
            self.newline()
        elif self.lines and not self._blank:
            self._emit("")

    def paragraph(self) -> None:
        self.newline()
        if self.lines and self.lines[-1].strip():
            self._blank = True

    def block(self, lines: list[str]) -> None:
        self.newline()
        for line in lines:
            self._emit(line)

    def indent(self, first: str, rest: str | None = None) -> None:
        self.newline()
        self._prefixes.append([first, first if rest is None else rest, False])

    def dedent(self) -> None:
        self.newline()
        self._prefixes.pop()

    def result(self) -> list[str]:
        self.newline()
        while self.lines and not self.lines[-1]:
            self.lines.pop()
        return self.lines


def _collapse(text: str) -> str:
    return _SPACE_RE.sub(" ", text)


def _preformatted(text: str) -> list[str]:
    text = text.expandtabs(8).replace("\r\n", "\n").replace("\r", "\n")
    if text.startswith("\n"):
        text = text[1:]
    return text.rstrip("\n").split("\n")


def _inline_text(element: Tag) -> str:
    """Render an element's content on a single line (table cells, headings)."""
    sub = _TextBuilder()
    _walk_children(element, sub, 0)
    return " ".join(line.strip() for line in sub.result() if line.strip())


def _render_table(table: Tag) -> list[str]:
    rows: list[list[str]] = []
    header = False
    for row in table.find_all("tr"):
        if row.find_parent("table") is not table:
            continue
        cells = row.find_all(["td", "th"], recursive=False)
        if not rows:
            header = bool(cells) and all(cell.name == "th" for cell in cells)
        rows.append([_inline_text(cell) for cell in cells])
    rows = [row for row in rows if row]
    if not rows:
        return []

    columns = max(len(row) for row in rows)
    widths = [0] * columns
    for row in rows:
        row.extend([""] * (columns - len(row)))
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
    out = [border]
    for i, row in enumerate(rows):
        out.append("| " + " | ".join(c.ljust(w) for c, w in zip(row, widths)) + " |")
        if i == 0 and header and len(rows) > 1:
            out.append(border)
    out.append(border)
    return out


def _walk_children(element: Tag, out: _TextBuilder, width: int) -> None:
    for child in element.children:
        _walk(child, out, width)


def _walk(node, out: _TextBuilder, width: int) -> None:
    if isinstance(node, PreformattedString):
        # comments, doctype, CDATA, processing instructions
        return
    if isinstance(node, NavigableString):
        out.add_text(_collapse(str(node)))
        return
    if not isinstance(node, Tag):
        return

    name = node.name
    if name in _SKIP_TAGS:
        return
    if name in _BLOCK_TAGS:
        out.paragraph()
        _walk_children(node, out, width)
        out.paragraph()
    elif name in _HEADING_TAGS:
        out.paragraph()
        title = _inline_text(node)
        if title:
            lines = [title]
            if name in _UNDERLINES:
                lines.append(_UNDERLINES[name] * len(title))
            out.block(lines)
        out.paragraph()
    elif name == "br":
        out.line_break()
    elif name == "hr":
        out.paragraph()
        out.block(["-" * width])
        out.paragraph()
    elif name == "pre":
        out.paragraph()
        out.block(_preformatted(node.get_text()))
        out.paragraph()
    elif name in ("ul", "ol", "menu"):
        # nested lists continue their parent item without blank lines
        separate = out.newline if node.find_parent("li") else out.paragraph
        separate()
        number = 1
        for child in node.children:
            if isinstance(child, Tag) and child.name == "li":
                bullet = "* " if name != "ol" else f"{number}. "
                number += 1
                out.indent(bullet, " " * len(bullet))
                _walk_children(child, out, width)
                out.dedent()
            else:
                _walk(child, out, width)
        separate()
    elif name == "li":
        # stray list item outside of a list
        out.indent("* ", "  ")
        _walk_children(node, out, width)
        out.dedent()
    elif name == "dt":
        out.newline()
        _walk_children(node, out, width)
        out.newline()
    elif name == "dd":
        out.indent("  ")
        _walk_children(node, out, width)
        out.dedent()
    elif name == "blockquote":
        out.paragraph()
        out.indent("> ")
        _walk_children(node, out, width)
        out.dedent()
        out.paragraph()
    elif name == "table":
        out.paragraph()
        out.block(_render_table(node))
        out.paragraph()
    else:
        _walk_children(node, out, width)


def render_text(html: str, width: int = 59) -> list[str]:
    """Convert sanitized HTML into plain-text lines.

    *width* is only used for horizontal rules.

    Raises:
        RenderError: If the document is nested too deeply to be walked.
    """
    out = _TextBuilder()
    try:
        soup = BeautifulSoup(html, "html.parser")
        _walk_children(soup, out, width)
    except RecursionError as err:
        raise RenderError(f"error converting html to text: {err}") from err
    return out.result()
