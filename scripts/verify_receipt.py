#!/usr/bin/env python3
"""Fetch or read a telebirr receipt, extract its fields and verify them.

Usage:
    python scripts/verify_receipt.py --receipt-no FT25ABC123 \\
        --expected '{"to": "John Doe", "total_amount": 1000}' --exclude payer_name
    python scripts/verify_receipt.py --html-file receipt.html --expected expected.json \\
        --only receiptNo total_amount

Exit codes:
    0 - receipt verified
    1 - verification failed
    2 - receipt could not be read, retrieved or parsed, or --expected is invalid
"""

import argparse
import json
import logging
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any

from receipt_verifier.extraction.base import MalformedMarkupError
from receipt_verifier.extraction.factory import ExtractorRegistry, create_extractor
from receipt_verifier.loader.client import ReceiptLoader, ReceiptRetrievalError
from receipt_verifier.shared.config import Settings, get_settings
from receipt_verifier.verification.receipt import ReceiptVerifier

logger = logging.getLogger(__name__)


def load_expected(value: str | None) -> dict[str, Any]:
    """Load expected fields from inline JSON or a JSON file path.

    The value is parsed as JSON first and only read as a file path when that
    fails.

    Args:
        value: JSON object text, path to a JSON file, or None

    Returns:
        Expected field mapping (empty if value is None)

    Raises:
        OSError: If the value is not JSON and the file cannot be read
        ValueError: If the content is not a JSON object
    """
    if not value:
        return {}
    try:
        expected = json.loads(value)
    except json.JSONDecodeError:
        expected = json.loads(Path(value).read_text(encoding="utf-8"))
    if not isinstance(expected, dict):
        raise ValueError("Expected fields must be a JSON object")
    return expected


def read_markup(args: argparse.Namespace, settings: Settings) -> str | bytes:
    """Return receipt markup from a local file or the receipt site.

    Local files are returned as raw bytes and decoded by the extractor.

    Raises:
        OSError: If the local file cannot be read
        ReceiptRetrievalError: If the receipt cannot be fetched
    """
    if args.html_file:
        return Path(args.html_file).read_bytes()
    with ReceiptLoader(settings) as loader:
        return loader.load(receipt_no=args.receipt_no, url=args.url)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line argument parser."""
    parser = argparse.ArgumentParser(description="Verify a telebirr receipt")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--receipt-no", help="Receipt number to fetch")
    source.add_argument("--url", help="Full receipt URL to fetch")
    source.add_argument("--html-file", type=Path, help="Local receipt HTML file")
    parser.add_argument("--expected", help="Expected fields as JSON text or a JSON file path")
    selection = parser.add_mutually_exclusive_group()
    selection.add_argument("--exclude", nargs="*", default=[], help="Expected fields to skip")
    selection.add_argument("--only", nargs="+", help="Verify only these fields")
    parser.add_argument(
        "--strategy",
        choices=ExtractorRegistry.list_extractors(),
        help="Extraction strategy (default: APP_EXTRACTION_STRATEGY)",
    )
    return parser


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def main(argv: list[str] | None = None) -> int:
    """Run the command line verifier.

    Args:
        argv: Command line arguments (defaults to sys.argv)

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        expected = load_expected(args.expected)
    except (OSError, ValueError) as e:
        parser.error(f"invalid --expected: {e}")

    extractor = create_extractor(settings, args.strategy)

    try:
        fields = extractor.extract(read_markup(args, settings))
    except ReceiptRetrievalError as e:
        logger.error(f"Failed to load receipt: {e}")
        return 2
    except OSError as e:
        logger.error(f"Failed to read receipt file: {e}")
        return 2
    except MalformedMarkupError as e:
        logger.error(f"Failed to parse receipt: {e}")
        return 2

    print(json.dumps(fields, indent=2, ensure_ascii=False, default=_json_default))

    verifier = ReceiptVerifier(fields, expected)
    if args.only:
        verified = verifier.verify_only(args.only)
    else:
        verified = verifier.verify_all(args.exclude)

    print("Receipt verification successful!" if verified else "Receipt verification failed!")
    return 0 if verified else 1


if __name__ == "__main__":
    sys.exit(main())
