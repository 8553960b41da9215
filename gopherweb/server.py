"""Gopher wire server: accepts connections, reads a selector, writes the reply.

One thread per connection.  Each connection carries exactly one request: a
selector line terminated by CRLF, answered by the gateway's payload followed by
the ``.`` terminator line.
"""

from __future__ import annotations

import logging
import socket
import socketserver
from typing import Tuple

from gopherweb.gateway import GopherGateway
from gopherweb.gophermap.models import CRLF, TERMINATOR

logger = logging.getLogger(__name__)

MAX_SELECTOR_BYTES = 4096
READ_TIMEOUT = 30


def terminate(payload: bytes) -> bytes:
    """Append the end-of-response line unless *payload* already ends with it."""
    if payload == TERMINATOR.encode() or payload.endswith((CRLF + TERMINATOR).encode()):
        return payload
    if payload and not payload.endswith(b"\n"):
        payload += CRLF.encode()
    return payload + TERMINATOR.encode()


class GopherServer(socketserver.ThreadingTCPServer):
    allow_reuse_address = True
    daemon_threads = True

    def __init__(self, address: Tuple[str, int], gateway: GopherGateway) -> None:
        self.gateway = gateway
        super().__init__(address, GopherRequestHandler)

    def handle_error(self, request: socket.socket, client_address: Tuple[str, int]) -> None:
        logger.exception("unhandled error while serving %s", client_address)


class GopherRequestHandler(socketserver.BaseRequestHandler):
    def handle(self) -> None:
        selector = self._read_selector()
        server: GopherServer = self.server  # type: ignore[assignment]
        payload = server.gateway.handle(selector)
        try:
            self.request.sendall(terminate(payload))
        except (BrokenPipeError, ConnectionResetError):
            logger.debug("client %s went away before the reply was sent", self.client_address)

    def _read_selector(self) -> str:
        chunks = []
        size = 0
        self.request.settimeout(READ_TIMEOUT)
        while size < MAX_SELECTOR_BYTES:
            data = self.request.recv(1024)
            if not data:
                break
            chunks.append(data)
            size += len(data)
            if b"\n" in data:
                break
        raw = b"".join(chunks).decode("utf-8", errors="replace")
        return raw.split("\n", 1)[0].rstrip("\r")
