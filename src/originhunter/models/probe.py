# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe outcome models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ProbeStatus(str, Enum):
    SUCCESS = "SUCCESS"
    TIMEOUT = "TIMEOUT"
    REJECTED_STATUS = "REJECTED_STATUS"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"


@dataclass(frozen=True)
class BaselineResponse:
    url: str
    status_code: int
    body: str


@dataclass(frozen=True)
class ProbeOutcome:
    address: str
    status: ProbeStatus
    similarity: float = 0.0
    status_code: int | None = None
    error_message: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is ProbeStatus.SUCCESS

    @property
    def percent(self) -> float:
        return self.similarity * 100

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "status": self.status.value,
            "similarity": round(self.similarity, 4),
            "status_code": self.status_code,
            "error_message": self.error_message,
        }
