# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Aggregated run results."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from .probe import ProbeOutcome, ProbeStatus


@dataclass
class RunSummary:
    """Per-status tally of a dispatcher run. Only mutated by the dispatcher while holding its lock."""

    dispatched: int = 0
    counts: Counter[ProbeStatus] = field(default_factory=Counter)
    matches: list[ProbeOutcome] = field(default_factory=list)

    def record(self, outcome: ProbeOutcome) -> None:
        self.counts[outcome.status] += 1
        if outcome.succeeded:
            self.matches.append(outcome)

    @property
    def completed(self) -> int:
        return sum(self.counts.values())

    def best(self, limit: int | None = None) -> list[ProbeOutcome]:
        ranked = sorted(self.matches, key=lambda o: o.similarity, reverse=True)
        return ranked if limit is None else ranked[:limit]

    def to_dict(self) -> dict[str, Any]:
        return {
            "dispatched": self.dispatched,
            "completed": self.completed,
            "counts": {status.value: self.counts.get(status, 0) for status in ProbeStatus},
            "matches": [outcome.to_dict() for outcome in self.best()],
        }
