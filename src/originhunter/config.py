# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for originhunter."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from .errors import ConfigError

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/51.0.2704.103 Safari/537.36"
)

_DURATION_UNITS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_BARE_NUMBER_RE = re.compile(r"^\d+(?:\.\d*)?$|^\.\d+$")
_PROXY_SCHEMES = {"http", "https", "socks5", "socks5h"}


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HttpSettings:
    """HTTP client defaults."""

    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = False
    send_sni: bool = True
    max_body_bytes: int = 16 * 1024 * 1024
    max_workers: int = 64

    @classmethod
    def from_env(cls) -> HttpSettings:
        """Create settings from environment variables (evaluated at call time)."""
        max_body_bytes = _int_env("ORIGINHUNTER_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        max_workers = _int_env("ORIGINHUNTER_MAX_WORKERS", cls.max_workers)
        if max_workers <= 0:
            max_workers = cls.max_workers
        timeout = _float_env("ORIGINHUNTER_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            timeout=timeout,
            user_agent=os.getenv("ORIGINHUNTER_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("ORIGINHUNTER_HTTP_REDIRECTS", cls.allow_redirects),
            send_sni=_bool_env("ORIGINHUNTER_SEND_SNI", cls.send_sni),
            max_body_bytes=max_body_bytes,
            max_workers=max_workers,
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def parse_duration(value: str) -> float:
    """
    Parse a duration string into seconds.

    Accepts Go-style durations (``10s``, ``1m30s``, ``250ms``, ``1.5h``) as well as
    bare numbers, which are read as seconds.
    """
    raw = str(value or "").strip()
    if not raw:
        raise ConfigError(f"invalid duration {value!r}")

    if _BARE_NUMBER_RE.match(raw):
        seconds = float(raw)
    else:
        pos = 0
        seconds = 0.0
        for match in _DURATION_PART_RE.finditer(raw):
            if match.start() != pos:
                raise ConfigError(f"invalid duration {value!r}")
            seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
            pos = match.end()
        if pos != len(raw):
            raise ConfigError(f"invalid duration {value!r}")

    if seconds <= 0:
        raise ConfigError(f"duration must be positive: {value!r}")
    return seconds


def parse_status_codes(value: str | None) -> frozenset[int]:
    """Parse a comma-separated status code list, silently skipping non-numeric fields."""
    codes: set[int] = set()
    for part in str(value or "").split(","):
        try:
            codes.add(int(part.strip()))
        except ValueError:
            continue
    return frozenset(codes)


def parse_proxy(value: str | None) -> str | None:
    """Validate a proxy URL (HTTP, HTTPS or SOCKS5). Empty values disable the proxy."""
    raw = str(value or "").strip()
    if not raw:
        return None
    try:
        parts = urlsplit(raw)
        port = parts.port
    except ValueError as exc:
        raise ConfigError(f"invalid proxy URL {raw!r}: {exc}") from exc
    if parts.scheme.lower() not in _PROXY_SCHEMES:
        raise ConfigError(f"unsupported proxy scheme in {raw!r}; expected one of {', '.join(sorted(_PROXY_SCHEMES))}")
    if not parts.hostname:
        raise ConfigError(f"proxy URL {raw!r} has no host")
    if port is not None and not 0 < port < 65536:
        raise ConfigError(f"proxy URL {raw!r} has an invalid port")
    return raw


@dataclass(frozen=True)
class RunConfiguration:
    """Immutable per-run configuration shared by every probe."""

    timeout: float = 10.0
    proxy: str | None = None
    cookie: str = ""
    accepted_statuses: frozenset[int] = field(default_factory=frozenset)
    include_broadcast: bool = False
    max_workers: int = HttpSettings.max_workers

    @classmethod
    def build(
        cls,
        *,
        timeout: str | None = None,
        proxy: str | None = None,
        cookie: str | None = None,
        status_codes: str | None = None,
        include_broadcast: bool = False,
        max_workers: int | None = None,
        settings: HttpSettings | None = None,
    ) -> RunConfiguration:
        """Validate raw operator input. Raises ConfigError naming the offending value."""
        settings = settings or load_http_settings()
        workers = max_workers if max_workers is not None else settings.max_workers
        if workers <= 0:
            raise ConfigError(f"worker count must be positive: {workers}")
        return cls(
            timeout=parse_duration(timeout) if timeout is not None else settings.timeout,
            proxy=parse_proxy(proxy),
            cookie=cookie or "",
            accepted_statuses=parse_status_codes(status_codes),
            include_broadcast=include_broadcast,
            max_workers=workers,
        )

    def accepts(self, status_code: int) -> bool:
        return 200 <= status_code < 300 or status_code in self.accepted_statuses
