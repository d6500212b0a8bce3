# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging
import time

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import categorize_exception
from .client import HttpClient
from .headers import normalize_headers
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpxClient(HttpClient):
    """
    Synchronous httpx client wrapper shared by every probe thread.

    Certificate verification is always off: candidates are dialed by IP address, so the
    origin's certificate will not match the name being connected to.
    """

    def __init__(
        self,
        settings: HttpSettings | None = None,
        client: httpx.Client | None = None,
        *,
        proxy: str | None = None,
        timeout: float | None = None,
        max_connections: int | None = None,
    ):
        self.settings = settings or load_http_settings()
        self.timeout = timeout if timeout is not None else self.settings.timeout
        if client is None:
            logger.warning("TLS certificate verification is disabled for all probes")
            pool_size = max_connections or self.settings.max_workers
            client = httpx.Client(
                follow_redirects=self.settings.allow_redirects,
                timeout=self.timeout,
                verify=False,
                proxy=proxy,
                # Every candidate is a distinct host; keep-alive connections are never reused.
                limits=httpx.Limits(max_connections=pool_size + 1, max_keepalive_connections=0),
            )
        self._client = client

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)

        timeout = request.timeout if request.timeout is not None else self.timeout
        follow_redirects = request.allow_redirects if request.allow_redirects is not None else self.settings.allow_redirects
        extensions = {"sni_hostname": request.sni_hostname} if request.sni_hostname else None
        max_body_bytes = self.settings.max_body_bytes
        if max_body_bytes <= 0:
            max_body_bytes = 16 * 1024 * 1024

        deadline = time.monotonic() + timeout
        try:
            with self._client.stream(
                request.method,
                request.url,
                headers=headers,
                timeout=timeout,
                follow_redirects=follow_redirects,
                extensions=extensions,
            ) as resp:
                content = bytearray()
                truncated = False
                for chunk in resp.iter_bytes():
                    if time.monotonic() > deadline:
                        raise httpx.ReadTimeout(f"response not complete within {timeout:g}s")
                    if not chunk:
                        continue
                    remaining = max_body_bytes - len(content)
                    if remaining <= 0:
                        truncated = True
                        break
                    if len(chunk) > remaining:
                        content.extend(chunk[:remaining])
                        truncated = True
                        break
                    content.extend(chunk)
                if time.monotonic() > deadline:
                    raise httpx.ReadTimeout(f"response not complete within {timeout:g}s")

                encoding = resp.encoding or "utf-8"
                try:
                    text = bytes(content).decode(encoding, errors="replace")
                except LookupError:
                    text = bytes(content).decode("utf-8", errors="replace")

            return HttpResponse(
                ok=True,
                status_code=resp.status_code,
                headers=normalize_headers(resp.headers),
                text=text,
                content=bytes(content),
                url=str(resp.url),
                meta={"body_truncated": truncated},
            )
        except Exception as exc:  # noqa: BLE001
            return HttpResponse(
                ok=False,
                url=request.url,
                error_message=str(exc) or type(exc).__name__,
                error_category=categorize_exception(exc),
            )

    def close(self) -> None:
        self._client.close()
