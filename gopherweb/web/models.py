"""Data models for the web side of the pipeline."""

from __future__ import annotations

import codecs
from dataclasses import dataclass


@dataclass(frozen=True)
class FetchedResource:
    """The complete HTTP response for a single GET.

    ``mime_type`` is the raw ``Content-Type`` header (empty when absent) and
    ``encoding`` the charset it declares, if any.
    """

    url: str
    status_code: int
    mime_type: str
    body: bytes
    encoding: str | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def text(self, default_encoding: str = "utf-8") -> str:
        """Decode the body, preferring the declared charset over *default_encoding*.

        Unknown charsets fall back to *default_encoding*; undecodable bytes are
        replaced rather than raising.
        """
        encoding = default_encoding
        if self.encoding:
            try:
                encoding = codecs.lookup(self.encoding).name
            except LookupError:
                pass
        return self.body.decode(encoding, errors="replace")
