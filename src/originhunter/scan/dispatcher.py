# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Concurrent fan-out of probes over every candidate address."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor

from ..models import ProbeOutcome, ProbeStatus, RunSummary, TargetDescriptor
from ..similarity import SimilarityScorer
from .probe import OriginProbe

logger = logging.getLogger(__name__)

ResultCallback = Callable[[ProbeOutcome], None]

# Futures allowed in flight per worker; bounds memory when a range expands to millions.
IN_FLIGHT_PER_WORKER = 4


class ProbeDispatcher:
    """
    Runs one independent probe per address and reports outcomes as they complete.

    Outcomes are delivered to ``on_result`` in completion order, one call at a time.
    ``run`` returns only after every dispatched probe has finished.
    """

    def __init__(
        self,
        probe: OriginProbe,
        scorer: SimilarityScorer,
        *,
        max_workers: int = 64,
        on_result: ResultCallback | None = None,
    ):
        if max_workers <= 0:
            raise ValueError(f"max_workers must be positive, got {max_workers}")
        self.probe = probe
        self.scorer = scorer
        self.max_workers = max_workers
        self.on_result = on_result
        self._lock = threading.Lock()

    def _probe_one(self, address: str, target: TargetDescriptor) -> ProbeOutcome:
        try:
            return self.probe.probe(address, target, self.scorer)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Probe of %s failed: %s", address, exc)
            return ProbeOutcome(
                address=address,
                status=ProbeStatus.TRANSPORT_ERROR,
                error_message=f"{type(exc).__name__}: {exc}",
            )

    def run(self, addresses: Iterable[str], target: TargetDescriptor) -> RunSummary:
        summary = RunSummary()
        slots = threading.BoundedSemaphore(self.max_workers * IN_FLIGHT_PER_WORKER)
        callback_errors: list[BaseException] = []

        def complete(future: Future[ProbeOutcome]) -> None:
            try:
                outcome = future.result()
                with self._lock:
                    summary.record(outcome)
                    if self.on_result is not None and not callback_errors:
                        self.on_result(outcome)
            except Exception as exc:  # noqa: BLE001
                with self._lock:
                    callback_errors.append(exc)
            finally:
                slots.release()

        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="originhunter-probe") as executor:
            for address in addresses:
                slots.acquire()
                if callback_errors:
                    slots.release()
                    break
                summary.dispatched += 1
                future = executor.submit(self._probe_one, address, target)
                future.add_done_callback(complete)

        if callback_errors:
            raise callback_errors[0]

        logger.info(
            "Probed %d addresses: %s",
            summary.dispatched,
            ", ".join(f"{status.value.lower()}={summary.counts.get(status, 0)}" for status in ProbeStatus),
        )
        return summary


__all__ = ["ProbeDispatcher", "ResultCallback"]
