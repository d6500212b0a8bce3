# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Result line formatting for the reporting boundary."""

from __future__ import annotations

import json
import sys
from typing import TextIO

from ..models import ProbeOutcome


def format_outcome(outcome: ProbeOutcome) -> str:
    """``<address padded to 17><similarity with two decimals>%``."""
    return f"{outcome.address:<17}{outcome.percent:.2f}%"


class ResultPrinter:
    """Writes one line per successful outcome; failed candidates print nothing."""

    def __init__(self, stream: TextIO | None = None, *, json_lines: bool = False):
        self.stream = stream if stream is not None else sys.stdout
        self.json_lines = json_lines

    def __call__(self, outcome: ProbeOutcome) -> None:
        if not outcome.succeeded:
            return
        if self.json_lines:
            line = json.dumps(outcome.to_dict(), sort_keys=True)
        else:
            line = format_outcome(outcome)
        self.stream.write(line + "\n")
        self.stream.flush()


__all__ = ["ResultPrinter", "format_outcome"]
