"""The ``[text](url)`` token that carries a resolved link through text rendering.

The sanitizer writes tokens into the HTML, the plain-text renderer copies them
through untouched, and the gophermap emitter turns each one into a link line.
Display text may contain one level of square brackets (``[[1]](...)``) and the
URL one level of balanced parentheses (``.../Foo_(bar)``).  URLs never contain
whitespace.
"""

from __future__ import annotations

import re

_TEXT = r"(?:[^\[\]]|\[[^\[\]]*\])*"
_URL = r"(?:[^()\s]|\([^()\s]*\))*"

TOKEN_RE = re.compile(rf"\[({_TEXT})\]\(({_URL})\)")

_TEXT_RE = re.compile(_TEXT)
_URL_RE = re.compile(_URL)
_URL_UNSAFE_RE = re.compile(r"[()\s]")
_BRACKETS_TO_PARENS = str.maketrans("[]", "()")


def _percent_encode(match: re.Match[str]) -> str:
    return "".join(f"%{byte:02X}" for byte in match.group().encode("utf-8"))


def make_token(text: str, url: str) -> str:
    """Build a token that :data:`TOKEN_RE` matches back to *text* and *url*.

    Text the grammar cannot carry has its square brackets turned into
    parentheses; a URL it cannot carry has its parentheses and whitespace
    percent-encoded, which names the same resource.
    """
    if not _TEXT_RE.fullmatch(text):
        text = text.translate(_BRACKETS_TO_PARENS)
    if not _URL_RE.fullmatch(url):
        url = _URL_UNSAFE_RE.sub(_percent_encode, url)
    return f"[{text}]({url})"


def has_token(line: str) -> bool:
    return TOKEN_RE.search(line) is not None
