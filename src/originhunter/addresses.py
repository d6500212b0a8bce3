# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Candidate address expansion.

Each input line is one of:

- a CIDR network (``192.168.0.0/24``), expanded from the network address up to, but
  not including, the broadcast address;
- a block (``192.168.0.1 - 192.168.0.255``), expanded inclusively;
- anything else, passed through verbatim as a single address.

Expansion is lazy so a ``/8`` never sits in memory as a list.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable, Iterator
from typing import TextIO
from ipaddress import IPv4Address, IPv4Network

from .errors import AddressSourceError

logger = logging.getLogger(__name__)


def _cidr_bounds(spec: str, include_broadcast: bool) -> tuple[int, int] | None:
    try:
        network = IPv4Network(spec.strip(), strict=False)
    except ValueError:
        return None
    start = int(network.network_address)
    end = int(network.broadcast_address)
    if not include_broadcast:
        end -= 1
    return start, end


def _block_bounds(spec: str) -> tuple[int, int] | None:
    first, _, last = spec.strip().partition("-")
    first, last = first.strip(), last.strip()
    if not first or not last:
        return None
    try:
        return int(IPv4Address(first)), int(IPv4Address(last))
    except ValueError:
        return None


def _bounds(line: str, include_broadcast: bool) -> tuple[int, int] | None:
    if "/" in line:
        return _cidr_bounds(line, include_broadcast)
    return _block_bounds(line)


def expand(line: str, *, include_broadcast: bool = False) -> Iterator[str]:
    """Yield every candidate address described by one input line."""
    spec = str(line or "").strip()
    if not spec:
        return

    if "/" not in spec and "-" not in spec:
        yield spec
        return

    bounds = _bounds(spec, include_broadcast)
    if bounds is None:
        logger.warning('Unable to parse "%s". Skipping...', spec)
        return

    start, end = bounds
    if start > end and "/" not in spec:
        logger.warning('Block "%s" ends before it starts. Skipping...', spec)
        return

    for value in range(start, end + 1):
        yield str(IPv4Address(value))


def count_addresses(line: str, *, include_broadcast: bool = False) -> int:
    """Number of addresses ``expand`` would yield, without enumerating them."""
    spec = str(line or "").strip()
    if not spec:
        return 0
    if "/" not in spec and "-" not in spec:
        return 1
    bounds = _bounds(spec, include_broadcast)
    if bounds is None:
        return 0
    start, end = bounds
    return max(0, end - start + 1)


def iter_addresses(lines: Iterable[str], *, include_broadcast: bool = False) -> Iterator[str]:
    """Expand every line in order. Duplicates are kept: each occurrence is probed."""
    for line in lines:
        if logger.isEnabledFor(logging.DEBUG) and line.strip():
            logger.debug("%s expands to %d addresses", line.strip(), count_addresses(line, include_broadcast=include_broadcast))
        yield from expand(line, include_broadcast=include_broadcast)


def read_address_lines(path: str | None = None) -> Iterator[str]:
    """
    Return an iterator over address specs from ``path``, or stdin when ``path`` is
    ``None`` or ``"-"``.

    The file is opened eagerly so an unreadable path fails before any probing starts.
    """
    if path is None or path == "-":
        return (line.rstrip("\r\n") for line in sys.stdin)
    try:
        handle = open(path, encoding="utf-8", errors="replace")
    except OSError as exc:
        raise AddressSourceError(f'Unable to read "{path}": {exc.strerror or exc}') from exc
    return _iter_file(handle)


def _iter_file(handle: TextIO) -> Iterator[str]:
    with handle:
        for line in handle:
            yield line.rstrip("\r\n")


__all__ = ["count_addresses", "expand", "iter_addresses", "read_address_lines"]
