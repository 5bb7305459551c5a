# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""OmniSuggest command line entry point.

Runs one suggestion session and prints the finalized suggestion and the
ledger receipt:

    python -m omnisuggest "sort an array" --seed patterns.yaml

Options override the matching OMNISUGGEST_* environment variables.

Exit codes:
    0: Session committed
    1: Session aborted (the failing stage is reported)
    2: Invalid arguments or configuration
    3: Ledger unavailable (the commit may be retried)
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from omnisuggest.clients import HttpLedgerClient
from omnisuggest.exceptions import OmniSuggestError, SessionAbortedError
from omnisuggest.nodes.node_session_orchestrator import ModelSessionResult
from omnisuggest.runtime import (
    EnumLogLevel,
    OmniSuggestSettings,
    build_orchestrator,
    configure_logging,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ABORTED = 1
EXIT_USAGE = 2
EXIT_RETRYABLE = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="omnisuggest",
        description="Suggest code for a request from stored patterns and commit it to a ledger.",
    )
    parser.add_argument("request", help="Natural-language request, e.g. 'sort an array'")
    parser.add_argument(
        "--seed",
        type=Path,
        default=None,
        help="YAML seed file with patterns to load before matching",
    )
    parser.add_argument(
        "--ledger-url",
        default=None,
        help="Ledger service URL (in-memory ledger when omitted)",
    )
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in EnumLogLevel],
        type=str.upper,
        default=None,
        help="Logging level (default: OMNISUGGEST_LOG_LEVEL or INFO)",
    )
    return parser


def load_settings(args: argparse.Namespace) -> OmniSuggestSettings:
    """Environment settings with command line overrides applied."""
    overrides: dict[str, object] = {}
    if args.seed is not None:
        overrides["seed_file"] = args.seed
    if args.ledger_url is not None:
        overrides["ledger_url"] = args.ledger_url
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    return OmniSuggestSettings(**overrides)


def format_result(result: ModelSessionResult) -> str:
    receipt = result.receipt
    lines = [
        result.suggestion.rstrip("\n"),
        "",
        f"session:   {result.session_id}",
        f"receipt:   {receipt.receipt_id}",
        f"timestamp: {receipt.timestamp.isoformat()}",
        f"hash:      {receipt.content_hash}",
    ]
    return "\n".join(lines)


async def run_session(settings: OmniSuggestSettings, request: str) -> ModelSessionResult:
    orchestrator = build_orchestrator(settings)
    try:
        return await orchestrator.run(request)
    finally:
        if isinstance(orchestrator.ledger, HttpLedgerClient):
            await orchestrator.ledger.close()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args)
    except ValidationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return EXIT_USAGE

    configure_logging(settings.log_level)

    try:
        result = asyncio.run(run_session(settings, args.request))
    except SessionAbortedError as exc:
        logger.debug("Session aborted", exc_info=True)
        print(f"error [{exc.error_code}] {exc}", file=sys.stderr)
        return EXIT_RETRYABLE if exc.is_retryable else EXIT_ABORTED
    except OmniSuggestError as exc:
        # seed file problems surface before a session starts
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    print(format_result(result))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
