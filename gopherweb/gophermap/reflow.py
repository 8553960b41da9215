"""Line reflow to the client's display width.

Gopher clients show menus fixed-width without wrapping, so long lines are cut
here.  Lines carrying a link token are left whole: cutting one could split the
token and lose the link.
"""

from __future__ import annotations

from typing import Iterable, List

from gopherweb.placeholders import has_token

DEFAULT_WIDTH = 59


def chunk_line(line: str, width: int = DEFAULT_WIDTH) -> List[str]:
    """Split *line* into consecutive pieces of *width* characters.

    The last piece may be shorter; an empty line yields ``[""]``.
    """
    if not line:
        return [line]
    return [line[i:i + width] for i in range(0, len(line), width)]


def reflow(lines: Iterable[str], width: int = DEFAULT_WIDTH) -> List[str]:
    out: List[str] = []
    for line in lines:
        if len(line) <= width or has_token(line):
            out.append(line)
        else:
            out.extend(chunk_line(line, width))
    return out
