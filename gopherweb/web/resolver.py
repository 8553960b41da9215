"""Selector resolution: Gopher selector string -> absolute web URL."""

from __future__ import annotations

_SCHEMES = ("http://", "https://")


def resolve_selector(selector: str) -> str | None:
    """Return the URL a selector refers to, or ``None`` for the root selector.

    A single leading ``/`` and then a single leading tab (what clients send for a
    type 7 search item) are stripped.  What remains is used verbatim when it
    already carries an ``http``/``https`` scheme, otherwise ``https://`` is
    prepended.  Any string is accepted; invalid URLs surface later as fetch
    errors.
    """
    target = selector.removeprefix("/").removeprefix("\t")
    if target in ("", "/"):
        return None
    if target.startswith(_SCHEMES):
        return target
    return f"https://{target}"
