# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
originhunter package entrypoint.

Finds the origin server hidden behind a WAF or CDN: every candidate IPv4 address is
requested directly with the target's virtual host in the ``Host`` header, and each
answer is scored against the response served through the normal path.
"""

from .addresses import expand, iter_addresses, read_address_lines
from .config import HttpSettings, RunConfiguration, load_http_settings
from .errors import (
    AddressSourceError,
    BaselineError,
    ConfigError,
    OriginHunterError,
    SetupError,
    TargetURLError,
)
from .http import HttpClient, HttpRequest, HttpResponse, HttpxClient, create_default_http_client
from .log import setup_logging
from .models import BaselineResponse, ProbeOutcome, ProbeStatus, RunSummary, TargetDescriptor
from .runtime import OriginHunter
from .scan import OriginProbe, ProbeDispatcher, ResultPrinter
from .similarity import SimilarityScorer, score
from .version import __version__

__all__ = [
    "AddressSourceError",
    "BaselineError",
    "BaselineResponse",
    "ConfigError",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "OriginHunter",
    "OriginHunterError",
    "OriginProbe",
    "ProbeDispatcher",
    "ProbeOutcome",
    "ProbeStatus",
    "ResultPrinter",
    "RunConfiguration",
    "RunSummary",
    "SetupError",
    "SimilarityScorer",
    "TargetDescriptor",
    "TargetURLError",
    "create_default_http_client",
    "expand",
    "iter_addresses",
    "load_http_settings",
    "read_address_lines",
    "score",
    "setup_logging",
    "__version__",
]
