# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for originhunter."""

from ..http.models import Headers, HttpRequest, HttpResponse
from .probe import BaselineResponse, ProbeOutcome, ProbeStatus
from .report import RunSummary
from .target import TargetDescriptor

__all__ = [
    "BaselineResponse",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "ProbeOutcome",
    "ProbeStatus",
    "RunSummary",
    "TargetDescriptor",
]
