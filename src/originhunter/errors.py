# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class OriginHunterError(Exception):
    """Base class for originhunter errors."""


class SetupError(OriginHunterError):
    """Fatal problem detected before any candidate is probed."""


class ConfigError(SetupError):
    """Invalid operator-supplied configuration value (timeout, proxy, workers)."""


class TargetURLError(SetupError):
    """The target URL cannot be used to derive a virtual host."""


class AddressSourceError(SetupError):
    """The address list file cannot be read."""


class BaselineError(SetupError):
    """The baseline request through the normal path did not succeed."""


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    PROXY_ERROR = "PROXY_ERROR"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, (httpx.TimeoutException, TimeoutError, socket.timeout)):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, httpx.ProxyError):
        return ErrorCategory.PROXY_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    cause = exc.__cause__ or exc.__context__
    if cause is not None and cause is not exc:
        nested = categorize_exception(cause)
        if nested is not ErrorCategory.UNKNOWN_ERROR:
            return nested

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout during probe",
        ErrorCategory.PROXY_ERROR: "Proxy refused or failed the request",
        ErrorCategory.SSL_ERROR: "TLS handshake failure",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.UNKNOWN_ERROR: "Network error during probe",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Probe failed due to network error")


__all__ = [
    "AddressSourceError",
    "BaselineError",
    "ConfigError",
    "ErrorCategory",
    "OriginHunterError",
    "SetupError",
    "TargetURLError",
    "categorize_exception",
    "error_category_to_reason",
]
