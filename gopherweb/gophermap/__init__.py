"""Gophermap package: record model, line reflow and record emission."""

from gopherweb.gophermap.emitter import emit_lines, emit_plain_text
from gopherweb.gophermap.models import (
    GophermapLine,
    complete_menu,
    error_line,
    info_line,
    link_line,
    render_records,
)
from gopherweb.gophermap.reflow import chunk_line, reflow

__all__ = [
    "GophermapLine",
    "info_line",
    "link_line",
    "error_line",
    "render_records",
    "complete_menu",
    "chunk_line",
    "reflow",
    "emit_lines",
    "emit_plain_text",
]
