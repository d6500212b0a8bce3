# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""originhunter CLI."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from ..addresses import read_address_lines
from ..config import RunConfiguration
from ..errors import SetupError
from ..log import setup_logging
from ..models import TargetDescriptor
from ..runtime import OriginHunter
from ..scan.report import ResultPrinter

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find the origin server behind a WAF/CDN by probing candidate IPs with the target's Host header",
    )
    parser.add_argument("url", help="Target URL as served through the WAF/CDN")
    parser.add_argument(
        "-l",
        "--list",
        dest="address_list",
        metavar="FILE",
        help="File with every IP/range to test (default: read from stdin)",
    )
    parser.add_argument(
        "--proxy",
        default="",
        help="Proxy to use. HTTP, HTTPS and SOCKS5 are supported",
    )
    parser.add_argument(
        "-c",
        "--cookie",
        default="",
        help="Cookie string to send with every request. Helps with WAFs blocking automated requests",
    )
    parser.add_argument(
        "-s",
        "--status-codes",
        default="",
        help="Comma-separated valid status codes other than 2xx",
    )
    parser.add_argument(
        "-t",
        "--timeout",
        default=None,
        help="Timeout while checking hosts, e.g. 10s, 1500ms, 1m (default: ORIGINHUNTER_HTTP_TIMEOUT or 10s)",
    )
    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        default=None,
        help="Concurrent probes (default: ORIGINHUNTER_MAX_WORKERS or 64)",
    )
    parser.add_argument(
        "--include-broadcast",
        action="store_true",
        help="Also probe the broadcast address of CIDR networks",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output one JSON object per matching address",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level for stderr diagnostics (default: ORIGINHUNTER_LOG_LEVEL or WARNING)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = RunConfiguration.build(
            timeout=args.timeout,
            proxy=args.proxy,
            cookie=args.cookie,
            status_codes=args.status_codes,
            include_broadcast=args.include_broadcast,
            max_workers=args.workers,
        )
        target = TargetDescriptor.from_url(args.url)
        lines = read_address_lines(args.address_list)
        with OriginHunter(config) as hunter:
            summary = hunter.hunt(target, lines, on_result=ResultPrinter(sys.stdout, json_lines=args.json))
    except SetupError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("ERROR: interrupted", file=sys.stderr)
        return 130

    logger.info("Summary: %s", json.dumps(summary.to_dict()["counts"], sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
