"""Gophermap records.

One record per line, ``<type><display>\\t<selector>\\t<host>\\t<port>\\r\\n``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from gopherweb.config import GatewayIdentity

CRLF = "\r\n"
TERMINATOR = "." + CRLF

INFO = "i"
MENU = "1"
ERROR = "3"

_FIELD_BREAK_RE = re.compile(r"[\t\r\n]")


def _field(value: object) -> str:
    return _FIELD_BREAK_RE.sub(" ", str(value))


@dataclass(frozen=True)
class GophermapLine:
    item_type: str
    display: str
    selector: str = "-"
    host: str = "-"
    port: int | str = "-"

    def to_line(self) -> str:
        return (
            f"{self.item_type}{_field(self.display)}\t{_field(self.selector)}"
            f"\t{_field(self.host)}\t{_field(self.port)}{CRLF}"
        )


def info_line(text: str) -> GophermapLine:
    """A non-navigable line of text."""
    return GophermapLine(INFO, text)


def link_line(text: str, url: str, identity: GatewayIdentity) -> GophermapLine:
    """A menu entry that sends the client back to this gateway with *url* as selector."""
    return GophermapLine(MENU, text, url, identity.host, identity.port)


def error_line(message: str) -> GophermapLine:
    return GophermapLine(ERROR, message, "", "error.host", 1)


def render_records(records: list[GophermapLine]) -> str:
    return "".join(record.to_line() for record in records)


def complete_menu(data: bytes, identity: GatewayIdentity) -> bytes:
    """Fill in this gateway's host and port on menu lines of a gophermap file that omit them.

    Lines carrying a selector but no host (or no port) get the gateway's own;
    info and error lines and complete lines are left byte for byte as they are.
    """
    defaults = [identity.host.encode(), str(identity.port).encode("ascii")]
    lines = data.split(b"\n")
    for i, line in enumerate(lines):
        body = line.rstrip(b"\r")
        fields = body.split(b"\t")
        if body[:1] in (INFO.encode(), ERROR.encode()) or not 2 <= len(fields) < 4:
            continue
        fields += defaults[len(fields) - 2:]
        lines[i] = b"\t".join(fields) + line[len(body):]
    return b"\n".join(lines)
