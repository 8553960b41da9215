"""HTML sanitization and link extraction.

Turns a fetched page into HTML the plain-text renderer can digest while keeping
its links: scripts and comments go, non-breaking spaces become plain spaces, and
every ``<a href>`` is replaced by a ``[text](absolute-url)`` token that survives
text rendering verbatim.

The order matters.  Scripts are removed before anything else because they can
contain literal ``<a`` fragments that would confuse anchor matching.
"""

from __future__ import annotations

import html
import re

import httpx

from gopherweb.placeholders import make_token

_SCRIPT_RE = re.compile(r"<script[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_NBSP_RE = re.compile(r"&nbsp;|&#160;|&#x0*a0;|\xa0", re.IGNORECASE)

# Tolerant of attribute order; the inner markup is matched non-greedily.
_ANCHOR_RE = re.compile(
    r"<a\s(?:[^>]*?\s)?href\s*=[^>]*>(.*?)</a\s*>", re.IGNORECASE | re.DOTALL
)
_ATTR_RE = re.compile(
    r"""([^\s"'=<>/]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]+)))?"""
)
_ALT_RE = re.compile(r"""\salt\s*=\s*(?:"([^"]*)"|'([^']*)')""", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")
_SPACE_RE = re.compile(r"\s+")


def _first_group(match: re.Match[str]) -> str:
    return next(group for group in match.groups() if group is not None)


def _parse_href(raw: str) -> httpx.URL | None:
    """Return the href as a URL, or ``None`` when it does not parse."""
    try:
        return httpx.URL(html.unescape(raw).strip())
    except httpx.InvalidURL:
        return None


def _href(open_tag: str) -> str | None:
    """The raw ``href`` value of an ``<a ...`` open tag, skipping over quoted values."""
    for attr in _ATTR_RE.finditer(open_tag, 2):
        if attr.group(1).lower() == "href":
            return attr.group(2) or attr.group(3) or attr.group(4) or ""
    return None


def _display_text(inner: str, fallback: str) -> str:
    """Plain display text for an anchor, with entities decoded."""
    text = _SPACE_RE.sub(" ", _TAG_RE.sub("", inner)).strip()
    if not text:
        alt = _ALT_RE.search(inner)
        if alt:
            text = _SPACE_RE.sub(" ", _first_group(alt)).strip()
    return html.unescape(text) or fallback


def _rewrite_anchor(match: re.Match[str], base: httpx.URL) -> str:
    markup = match.group(0)
    href = _href(markup[: markup.index(">")])
    if href is None:
        # href= only appeared inside another attribute's value
        return markup
    ref = _parse_href(href)
    if ref is None:
        # Not navigable: show the original markup as text.
        return html.escape(markup, quote=False)

    absolute = str(base.join(ref))
    text = _display_text(match.group(1), absolute)
    return make_token(html.escape(text, quote=False), html.escape(absolute, quote=False))


def sanitize_html(document: str, base_url: str) -> str:
    """Strip scripts, normalise spaces and rewrite anchors into link tokens.

    Relative hrefs are resolved against *base_url*.  This never fails: a page
    without anchors comes back with only scripts and comments removed.
    """
    document = _SCRIPT_RE.sub("", document)
    document = _COMMENT_RE.sub("", document)
    document = _NBSP_RE.sub(" ", document)

    base = httpx.URL(base_url)
    return _ANCHOR_RE.sub(lambda m: _rewrite_anchor(m, base), document)
