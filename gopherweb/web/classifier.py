"""Content classification by declared MIME type."""

from __future__ import annotations

from enum import Enum

from gopherweb.errors import UnsupportedContentError
from gopherweb.web.models import FetchedResource


class ContentKind(str, Enum):
    HTML = "html"
    TEXT = "text"


def classify(resource: FetchedResource) -> ContentKind:
    """Decide how a fetched resource is rendered.

    An empty type or one mentioning ``html`` goes through the HTML pipeline,
    other ``text/*`` types are passed through as plain text.

    Raises:
        UnsupportedContentError: For anything else; a gophermap can only carry
            info and link lines, so binary payloads are refused.
    """
    mime = resource.mime_type.strip().lower()
    if not mime or "html" in mime:
        return ContentKind.HTML
    if mime.startswith("text/"):
        return ContentKind.TEXT
    raise UnsupportedContentError(resource.url, resource.mime_type)
