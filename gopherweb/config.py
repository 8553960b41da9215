"""Centralised settings for the gopherweb gateway.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the working directory
(loaded automatically when this module is imported).  The CLI builds one
:class:`Settings` at startup and hands it to the gateway; nothing reads
configuration from module state afterwards.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from gopherweb import __version__

# Load .env from the directory the gateway is started in
load_dotenv(Path.cwd() / ".env", override=False)

_TRUTHY = {"1", "true", "yes", "on"}

DEFAULT_WELCOME_FILE = Path(__file__).resolve().parent / "static" / "request.gopher"


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class GatewayIdentity:
    """Host and port written into every link line so clients come back here."""

    host: str
    port: int


def split_listen_address(address: str) -> tuple[str, int]:
    """Split ``host:port`` (or ``:port``) at the last colon.

    Raises:
        ValueError: If there is no colon or the port is not a valid TCP port.
    """
    host, sep, port_text = address.strip().rpartition(":")
    if not sep:
        raise ValueError(f"listen address must be host:port or :port, got {address!r}")
    try:
        port = int(port_text)
    except ValueError:
        raise ValueError(f"invalid port in listen address {address!r}") from None
    if not 0 <= port <= 65535:
        raise ValueError(f"port out of range in listen address {address!r}")
    return host, port


@dataclass(frozen=True)
class Settings:
    # ------------------------------------------------------------------
    # Gopher listener
    # ------------------------------------------------------------------
    listen_address: str = field(
        default_factory=lambda: os.environ.get("LISTEN_ADDRESS", ":7000")
    )
    welcome_file: Path = field(
        default_factory=lambda: Path(
            os.environ.get("WELCOME_FILE", DEFAULT_WELCOME_FILE)
        )
    )

    # ------------------------------------------------------------------
    # Outbound HTTP
    # ------------------------------------------------------------------
    verify_tls: bool = field(default_factory=lambda: _env_flag("VERIFY_TLS", True))
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("USER_AGENT", f"gopherweb/{__version__}")
    )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    line_width: int = field(
        default_factory=lambda: int(os.environ.get("LINE_WIDTH", "59"))
    )
    source_encoding: str = field(
        default_factory=lambda: os.environ.get("SOURCE_ENCODING", "utf-8")
    )
    client_encoding: str = field(
        default_factory=lambda: os.environ.get("CLIENT_ENCODING", "utf-8")
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: os.environ.get("LOG_FORMAT", "text"))

    def __post_init__(self) -> None:
        if self.line_width < 1:
            raise ValueError(f"line width must be at least 1, got {self.line_width}")

    @property
    def identity(self) -> GatewayIdentity:
        """The address advertised in link lines (``localhost`` when no host is given)."""
        host, port = split_listen_address(self.listen_address)
        return GatewayIdentity(host=host or "localhost", port=port)

    @property
    def bind_address(self) -> tuple[str, int]:
        """The ``(host, port)`` pair the socket server binds; empty host means all interfaces."""
        host, port = split_listen_address(self.listen_address)
        return host.strip("[]"), port

    @property
    def timeout(self) -> float | None:
        """Outbound request timeout in seconds, or ``None`` when disabled."""
        if self.request_timeout <= 0:
            return None
        return self.request_timeout
