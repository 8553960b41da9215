"""The request pipeline: Gopher selector in, gophermap bytes out.

    resolve -> fetch -> classify -> sanitize -> render text -> reflow -> emit

``GopherGateway.handle`` is the only place pipeline errors are caught.  Each
one ends the current request with a single line for the client; nothing is
shared between requests except the read-only settings and the HTTP client.
"""

from __future__ import annotations

import logging
from typing import List

import httpx

from gopherweb.config import Settings
from gopherweb.errors import GatewayError, UnsupportedContentError
from gopherweb.gophermap import (
    GophermapLine,
    complete_menu,
    emit_lines,
    emit_plain_text,
    error_line,
    info_line,
    reflow,
    render_records,
)
from gopherweb.web import (
    ContentKind,
    FetchedResource,
    build_client,
    classify,
    fetch_resource,
    render_text,
    resolve_selector,
    sanitize_html,
)

logger = logging.getLogger(__name__)


def render_resource(resource: FetchedResource, settings: Settings) -> List[GophermapLine]:
    """Render a fetched resource into gophermap records.

    Pure: the same resource and settings always give the same records.  Links
    are resolved against ``resource.url``.

    Raises:
        UnsupportedContentError: If the resource is neither HTML nor text.
        RenderError: If the HTML cannot be converted to text.
    """
    kind = classify(resource)
    text = resource.text(settings.source_encoding)
    if kind is ContentKind.TEXT:
        return emit_plain_text(text)

    sanitized = sanitize_html(text, base_url=resource.url)
    lines = render_text(sanitized, width=settings.line_width)
    return emit_lines(reflow(lines, settings.line_width), settings.identity)


class GopherGateway:
    """Serves one selector at a time; safe to call from many threads at once."""

    def __init__(self, settings: Settings, client: httpx.Client | None = None) -> None:
        self.settings = settings
        self._client = client if client is not None else build_client(settings)

    def __enter__(self) -> GopherGateway:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def handle(self, selector: str) -> bytes:
        """Answer a selector with the gophermap bytes to send to the client."""
        logger.info("Selector: %s", selector)
        url = resolve_selector(selector)
        if url is None:
            return self._welcome()
        return self._encode(self._records_for(url))

    def _records_for(self, url: str) -> List[GophermapLine]:
        try:
            resource = fetch_resource(self._client, url)
            if not resource.ok:
                logger.warning(
                    "rendering %s response from %s", resource.status_code, url,
                    extra={"url": url},
                )
            return render_resource(resource, self.settings)
        except UnsupportedContentError as err:
            logger.error("%s", err, extra={"url": url})
            return [info_line(str(err))]
        except GatewayError as err:
            logger.error("%s", err, extra={"url": url, "cause": repr(err.__cause__)})
            return [error_line(str(err))]

    def _welcome(self) -> bytes:
        try:
            data = self.settings.welcome_file.read_bytes()
        except OSError as err:
            logger.error("cannot read welcome page %s: %s", self.settings.welcome_file, err)
            return self._encode([error_line("welcome page unavailable")])
        return complete_menu(data, self.settings.identity)

    def _encode(self, records: List[GophermapLine]) -> bytes:
        return render_records(records).encode(self.settings.client_encoding, errors="replace")
