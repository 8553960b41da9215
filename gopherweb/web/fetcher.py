"""HTTP fetcher: one streamed GET per request, no retries and no caching."""

from __future__ import annotations

import logging

import httpx

from gopherweb.config import Settings
from gopherweb.errors import BodyReadError, FetchError
from gopherweb.web.models import FetchedResource

logger = logging.getLogger(__name__)


def build_client(settings: Settings) -> httpx.Client:
    """Create the outbound client carrying the process-wide TLS policy.

    The caller owns the client and must close it.
    """
    return httpx.Client(
        headers={"User-Agent": settings.user_agent},
        timeout=settings.timeout,
        follow_redirects=True,
        verify=settings.verify_tls,
    )


def fetch_resource(client: httpx.Client, url: str) -> FetchedResource:
    """GET *url* and read the whole body into memory.

    Non-2xx responses are returned like any other; the caller decides what to
    do with them.

    Raises:
        FetchError: If the request cannot be made (DNS, connection, TLS,
            timeout, too many redirects, invalid or unsupported URL).
        BodyReadError: If the connection fails while the body is being read.
    """
    try:
        with client.stream("GET", url) as response:
            try:
                body = response.read()
            except httpx.HTTPError as err:
                raise BodyReadError(
                    f"error reading web resource body: {err}", url=url
                ) from err
            resource = FetchedResource(
                url=url,
                status_code=response.status_code,
                mime_type=response.headers.get("Content-Type", ""),
                body=body,
                encoding=response.charset_encoding,
            )
    except (httpx.HTTPError, httpx.InvalidURL) as err:
        raise FetchError(f"error fetching web resource {url}: {err}", url=url) from err

    logger.debug(
        "GET %s -> %s (%s, %d bytes)",
        url,
        resource.status_code,
        resource.mime_type or "no content type",
        len(resource.body),
    )
    return resource
