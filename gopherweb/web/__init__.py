"""Web side of the gateway: resolve, fetch, classify, sanitize and render."""

from gopherweb.web.classifier import ContentKind, classify
from gopherweb.web.fetcher import build_client, fetch_resource
from gopherweb.web.models import FetchedResource
from gopherweb.web.renderer import render_text
from gopherweb.web.resolver import resolve_selector
from gopherweb.web.sanitizer import sanitize_html

__all__ = [
    "resolve_selector",
    "build_client",
    "fetch_resource",
    "classify",
    "ContentKind",
    "sanitize_html",
    "render_text",
    "FetchedResource",
]
