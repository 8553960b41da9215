"""Conversion of rendered text lines into gophermap records."""

from __future__ import annotations

from typing import Iterable, List

from gopherweb.config import GatewayIdentity
from gopherweb.gophermap.models import GophermapLine, info_line, link_line
from gopherweb.placeholders import TOKEN_RE


def emit_line(line: str, identity: GatewayIdentity) -> List[GophermapLine]:
    """Turn one text line into records.

    Each link token becomes its own link line; the text around tokens becomes
    info lines placed before and after it, so every record carries at most one
    selector.  Blank fragments between tokens are dropped.
    """
    matches = list(TOKEN_RE.finditer(line))
    if not matches:
        return [info_line(line)]

    records: List[GophermapLine] = []
    pos = 0
    for match in matches:
        before = line[pos:match.start()]
        if before.strip():
            records.append(info_line(before))
        records.append(link_line(match.group(1), match.group(2), identity))
        pos = match.end()
    after = line[pos:]
    if after.strip():
        records.append(info_line(after))
    return records


def emit_lines(lines: Iterable[str], identity: GatewayIdentity) -> List[GophermapLine]:
    records: List[GophermapLine] = []
    for line in lines:
        records.extend(emit_line(line, identity))
    return records


def emit_plain_text(text: str) -> List[GophermapLine]:
    """Info lines for a document that is already plain text (no reflow, no links)."""
    return [info_line(line.expandtabs(8)) for line in text.splitlines()]
