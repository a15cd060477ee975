#!/usr/bin/env python3
"""
Sentri batch check — score wallets and print one JSON line per result.

Reads wallets from the command line and/or a text file (one per line, blank
lines and # comments skipped). Output lines are canonical JSON (sorted keys),
so re-running on the same wallets yields identical lines apart from created_at.

Usage:
  py -m backend_sentri.tools.check_wallets 0x742d35Cc6634C0532925a3b844Bc9e7595f0bEb
  py -m backend_sentri.tools.check_wallets --file wallets.txt --payload
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from backend_sentri.analytics.analytics_pipeline import check_compliance
from backend_sentri.analytics.provenance import canonical_dumps
from backend_sentri.core.exceptions import InvalidWalletFormatError
from backend_sentri.sentri_logging import bind_wallet, get_logger
from backend_sentri.utils.wallet_utils import require_valid_wallet

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_USAGE = 2


def _load_wallets_file(path: Path) -> list[str]:
    wallets: list[str] = []
    with open(path, encoding="utf-8") as f:
        for line in f:
            w = line.strip()
            if not w or w.startswith("#"):
                continue
            wallets.append(w)
    return wallets


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="check_wallets",
        description="Deterministic compliance check for one or more wallets.",
    )
    parser.add_argument("wallets", nargs="*", help="Wallet addresses")
    parser.add_argument("--file", "-f", type=Path, help="Text file with one wallet per line")
    parser.add_argument("--ledger", help="Override the ledger label attached to each check")
    parser.add_argument("--payload", action="store_true", help="Include the canonical provenance payload")
    parser.add_argument(
        "--skip-format-check",
        action="store_true",
        help="Score every input as-is instead of rejecting non-wallet strings",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    wallets = list(args.wallets)
    if args.file:
        wallets.extend(_load_wallets_file(args.file))
    if not wallets:
        print("check_wallets: no wallets given (pass addresses or --file)", file=sys.stderr)
        return EXIT_USAGE

    invalid = 0
    for raw in wallets:
        wallet = raw
        if not args.skip_format_check:
            try:
                wallet = require_valid_wallet(raw)
            except InvalidWalletFormatError:
                invalid += 1
                bind_wallet(logger, raw).warning("check_wallets_invalid")
                continue
        check = check_compliance(wallet, ledger_label=args.ledger)
        print(canonical_dumps(check.to_dict(include_payload=args.payload)))

    logger.info("check_wallets_done", total=len(wallets), invalid=invalid)
    return EXIT_INVALID if invalid else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
