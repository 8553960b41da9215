"""Errors raised by the request pipeline.

Every one of them is terminal for the current request only: the gateway logs it
and answers the client with a single line instead of a rendered page.
"""

from __future__ import annotations


class GatewayError(Exception):
    """Base class for request-terminal pipeline failures."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class FetchError(GatewayError):
    """The HTTP request could not be made (DNS, connection, TLS, timeout, bad URL)."""


class BodyReadError(GatewayError):
    """The response started but its body could not be read to the end."""


class UnsupportedContentError(GatewayError):
    """The resource is neither HTML nor text and cannot be served as a gophermap."""

    def __init__(self, url: str, mime_type: str) -> None:
        super().__init__(
            f"Not an HTML or text document: {url} (MIME type is {mime_type})", url=url
        )
        self.mime_type = mime_type


class RenderError(GatewayError):
    """The sanitized HTML could not be converted to plain text."""
