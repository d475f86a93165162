"""
CLI interface for GS1 decoder.

Usage:
    python -m gs1_decoder "<barcode text>" [options]

Options:
    --json        Output as JSON
    --labels      Use human-readable field names in JSON output
    --lookup      Merge the product registry entry for the decoded GTIN (with --json)
    --api         Look the GTIN up through the backend API instead of local storage
    --verbose     Enable debug logging
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, Optional

from .core.decoder import DecodedRecord, decode
from .formatters.json_formatter import FIELD_LABELS, record_to_dict


logger = logging.getLogger(__name__)


def format_result(raw: str, record: DecodedRecord) -> str:
    """Format a decoded record for display."""
    lines = [
        "=" * 60,
        "GS1 Decode Result",
        "=" * 60,
        f"Raw Input: {raw!r}",
        f"Format: {'bracketed' if '(' in raw else 'positional'}",
        "",
        "Fields:",
        "-" * 40,
    ]
    for attribute, label in FIELD_LABELS.items():
        value = getattr(record, attribute)
        shown = "(absent)" if value is None else repr(value)
        lines.append(f"  {label}: {shown}")
    return "\n".join(lines)


def lookup_product(gtin: str, use_api: bool = False) -> Optional[Dict[str, Any]]:
    """Look a GTIN up in the product registry."""
    if use_api:
        from modules.api_client import APIClient

        with APIClient() as api:
            return api.get_product_by_gtin(gtin)

    from modules.products import ProductManager

    return ProductManager().get_product_by_gtin(gtin)


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='gs1_decoder',
        description='Decode GTIN, lot, serial and expiration from GS1 barcodes'
    )

    parser.add_argument(
        'barcode',
        help='Barcode data to decode'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Output result as JSON'
    )

    parser.add_argument(
        '--labels',
        action='store_true',
        help='Use human-readable field names in JSON output'
    )

    parser.add_argument(
        '--lookup',
        action='store_true',
        help='Lookup GTIN in the product registry and merge results (requires --json)'
    )

    parser.add_argument(
        '--api',
        action='store_true',
        help='Use the backend API for --lookup'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args(argv)

    if args.lookup and not args.json:
        parser.error("--lookup requires --json")
    if args.api and not args.lookup:
        parser.error("--api requires --lookup")

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    record = decode(args.barcode)

    if args.json:
        output: Dict[str, Any] = record_to_dict(record, labels=args.labels)

        if args.lookup:
            from modules.api_client import APIError

            if not record.gtin:
                output["_lookup_error"] = "GTIN not found in decoded result"
            else:
                try:
                    product = lookup_product(record.gtin, use_api=args.api)
                except APIError as exc:
                    logger.warning("Product lookup for %s failed: %s", record.gtin, exc.message)
                    output["_lookup_error"] = f"Product lookup failed: {exc.message}"
                else:
                    if product:
                        for k, v in product.items():
                            if k == "gtin":
                                continue
                            output[k] = v
                    else:
                        output["_lookup_error"] = f"GTIN not found in product registry: {record.gtin}"

        print(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        print(format_result(args.barcode.strip(), record))

    # Exit code reflects whether anything was decoded
    return 1 if record.is_empty else 0


if __name__ == '__main__':
    sys.exit(main())
