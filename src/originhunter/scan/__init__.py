# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probing, dispatch and result reporting."""

from .dispatcher import ProbeDispatcher
from .probe import OriginProbe, classify
from .report import ResultPrinter, format_outcome

__all__ = ["OriginProbe", "ProbeDispatcher", "ResultPrinter", "classify", "format_outcome"]
