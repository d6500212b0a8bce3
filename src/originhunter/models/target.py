# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Target URL model shared read-only by every probe."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit, urlunsplit

from ..errors import TargetURLError

_SCHEMES = {"http", "https"}


@dataclass(frozen=True)
class TargetDescriptor:
    """
    The fronted target, split into the pieces a probe needs.

    ``virtual_host`` is the authority sent in the ``Host`` header (including any
    explicit port); ``hostname`` is the bare name used for TLS SNI.
    """

    scheme: str
    virtual_host: str
    hostname: str
    path: str = ""
    query: str = ""

    @classmethod
    def from_url(cls, url: str) -> TargetDescriptor:
        raw = str(url or "").strip()
        try:
            parts = urlsplit(raw)
            hostname = parts.hostname
            port = parts.port
        except ValueError as exc:
            raise TargetURLError(f"could not parse target URL {raw!r}: {exc}") from exc
        scheme = parts.scheme.lower()
        if scheme not in _SCHEMES:
            raise TargetURLError(f"target URL {raw!r} must use http or https")
        if not hostname:
            raise TargetURLError(f"target URL {raw!r} has no host")
        if port == 0:
            raise TargetURLError(f"target URL {raw!r} has an invalid port")
        virtual_host = parts.netloc.rpartition("@")[2]
        return cls(
            scheme=scheme,
            virtual_host=virtual_host,
            hostname=hostname,
            path=parts.path,
            query=parts.query,
        )

    @property
    def url(self) -> str:
        """The target as reached through the normal (fronted) path."""
        return urlunsplit((self.scheme, self.virtual_host, self.path, self.query, ""))

    @property
    def uses_tls(self) -> bool:
        return self.scheme == "https"

    def url_for(self, address: str) -> str:
        """Same scheme, path and query, dialed directly at ``address`` on the default port."""
        return urlunsplit((self.scheme, address, self.path, self.query, ""))
