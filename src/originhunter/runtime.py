# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level originhunter facade: baseline, expansion, dispatch."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from contextlib import suppress

from .addresses import iter_addresses
from .config import HttpSettings, RunConfiguration, load_http_settings
from .http.client import HttpClient, create_default_http_client
from .models import BaselineResponse, RunSummary, TargetDescriptor
from .scan.dispatcher import ProbeDispatcher, ResultCallback
from .scan.probe import OriginProbe
from .similarity import SimilarityScorer

logger = logging.getLogger(__name__)


class OriginHunter:
    """
    Wires one shared HTTP client, built from an immutable RunConfiguration, into the
    probe and dispatcher for a single run.
    """

    def __init__(
        self,
        config: RunConfiguration,
        http_client: HttpClient | None = None,
        settings: HttpSettings | None = None,
    ):
        self.config = config
        self.http_settings = settings or load_http_settings()
        self.http_client = http_client or create_default_http_client(
            self.http_settings,
            proxy=config.proxy,
            timeout=config.timeout,
            max_connections=config.max_workers,
        )
        self.probe = OriginProbe(self.http_client, config, send_sni=self.http_settings.send_sni)

    def baseline(self, target: TargetDescriptor) -> BaselineResponse:
        return self.probe.fetch_baseline(target)

    def hunt(
        self,
        url: str | TargetDescriptor,
        lines: Iterable[str],
        on_result: ResultCallback | None = None,
    ) -> RunSummary:
        """Fetch the baseline for ``url``, then probe every address the input lines expand to."""
        target = url if isinstance(url, TargetDescriptor) else TargetDescriptor.from_url(url)
        baseline = self.baseline(target)
        dispatcher = ProbeDispatcher(
            self.probe,
            SimilarityScorer(baseline.body),
            max_workers=self.config.max_workers,
            on_result=on_result,
        )
        addresses = iter_addresses(lines, include_broadcast=self.config.include_broadcast)
        return dispatcher.run(addresses, target)

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> OriginHunter:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
