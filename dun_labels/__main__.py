"""
CLI interface for the DUN label toolkit.

Usage:
    python -m dun_labels validate 27898971826272
    python -m dun_labels check-digit 2789897182627
    python -m dun_labels gs1 --gtin 27898971826272 --lot L2409-A --expiry 2026-03-31
    python -m dun_labels import labels.csv [--json] [--save NAME]
    python -m dun_labels render labels.csv --output labels.pdf [--layout double]
    python -m dun_labels qr qr.csv --output qr.pdf
    python -m dun_labels sets list|show|delete|export [ID]
"""

import argparse
import json
import sys
from typing import List, Optional

from .core.gs1_builder import build_gs1_strings
from .exceptions import DunLabelsError
from .formatters.exporters import export_label_set_json, export_labels_csv
from .importers.csv_importer import import_labels_csv, import_qr_csv
from .logger import get_logger, setup_logging
from .models import LabelListValidation, SavedLabelSet
from .reports import LAYOUTS, QR_PAPER_SIZES, QrSheetSettings, render_labels_pdf, render_qr_pdf
from .validators.validators import (
    calculate_check_digit_mod10,
    normalize_expiry,
    parse_expiry,
    validate_gtin14,
)
from . import storage


logger = get_logger(__name__)


def format_import_result(result: LabelListValidation) -> str:
    """Format an import partition for display."""
    lines = [
        "=" * 60,
        "CSV Import Result",
        "=" * 60,
        f"Valid labels: {result.valid_count}",
        f"Invalid labels: {result.invalid_count}",
    ]

    if result.invalid_labels:
        lines.extend([
            "",
            "Invalid rows:",
            "-" * 40,
        ])
        for item in result.invalid_labels:
            lines.append(f"  SKU {item.label.sku or '?'} / GTIN {item.label.gtin14 or '?'}")
            lines.append(f"    Errors: {', '.join(item.errors)}")

    return '\n'.join(lines)


def format_label_set(label_set: SavedLabelSet) -> str:
    lines = [
        f"{label_set.name} | {label_set.id} | {label_set.created_at} | {label_set.orientation}",
    ]
    for label in label_set.labels:
        gs1 = build_gs1_strings(label.gtin14, lot=label.lot, expiry=label.expiry)
        lines.append(f"  {label.sku:<16} {label.product[:40]:<40} {gs1.human_readable}")
    return '\n'.join(lines)


def _cmd_validate(args) -> int:
    valid = validate_gtin14(args.gtin)
    if args.json:
        print(json.dumps({"gtin14": args.gtin, "valid": valid}))
    else:
        print(f"GTIN-14 {args.gtin}: {'valid' if valid else 'invalid'}")
    return 0 if valid else 1


def _cmd_check_digit(args) -> int:
    try:
        digit = calculate_check_digit_mod10(args.digits)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"{args.digits}{digit}")
    return 0


def _cmd_gs1(args) -> int:
    if not validate_gtin14(args.gtin):
        print(f"Error: invalid GTIN-14: {args.gtin}", file=sys.stderr)
        return 1
    expiry = normalize_expiry(args.expiry)
    if expiry is not None and parse_expiry(expiry) is None:
        print(f"Error: invalid expiry date: {args.expiry}", file=sys.stderr)
        return 1
    gs1 = build_gs1_strings(args.gtin, lot=args.lot or None, expiry=expiry)
    if args.json:
        print(json.dumps(gs1._asdict(), indent=2, ensure_ascii=False))
    else:
        print(f"Encoded: {gs1.value_for_encoding}")
        print(f"Human readable: {gs1.human_readable}")
    return 0


def _cmd_import(args) -> int:
    result = import_labels_csv(args.csv)

    if args.json:
        output = {
            "validLabels": [label.to_dict() for label in result.valid_labels],
            "invalidLabels": [item.to_dict() for item in result.invalid_labels],
        }
        print(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        print(format_import_result(result))

    if args.save:
        if not result.valid_labels:
            print("Error: no valid labels to save", file=sys.stderr)
            return 1
        label_set = storage.save_label_set(args.save, result.valid_labels, args.orientation)
        print(f"Saved label set {label_set.name!r} as {label_set.id}", file=sys.stderr)

    return 0 if not result.invalid_labels else 1


def _cmd_render(args) -> int:
    if args.set_id:
        label_set = storage.load_label_set(args.set_id)
        if label_set is None:
            print(f"Error: label set not found: {args.set_id}", file=sys.stderr)
            return 1
        labels = label_set.labels
    elif args.csv:
        result = import_labels_csv(args.csv)
        if result.invalid_labels:
            print(format_import_result(result), file=sys.stderr)
        labels = result.valid_labels
    else:
        print("Error: provide a CSV file or --set ID", file=sys.stderr)
        return 1

    path = render_labels_pdf(
        labels,
        args.output,
        orientation=args.orientation,
        layout=args.layout,
        show_box_size=not args.hide_box_size,
        show_weight=not args.hide_weight,
    )
    print(path)
    return 0


def _cmd_qr(args) -> int:
    settings = QrSheetSettings(
        paper_size=args.paper_size,
        width_mm=args.width_mm,
        height_mm=args.height_mm,
        qr_size_percent=args.qr_size,
        auto_font=args.auto_font,
        orientation=args.orientation,
    )
    entries = import_qr_csv(args.csv)
    path = render_qr_pdf(entries, args.output, settings)
    if args.save:
        qr_set = storage.save_qr_set(args.save, entries, args.orientation, settings.to_dict())
        print(f"Saved QR set {qr_set.name!r} as {qr_set.id}", file=sys.stderr)
    print(path)
    return 0


def _cmd_sets(args) -> int:
    if args.action == "list":
        sets = storage.get_saved_label_sets()
        if not sets:
            print("No saved label sets.")
        for label_set in sets:
            print(f"{label_set.id}  {label_set.created_at}  {len(label_set.labels):>4} labels  {label_set.name}")
        return 0

    if not args.set_id:
        print(f"Error: sets {args.action} requires a set ID", file=sys.stderr)
        return 1

    if args.action == "delete":
        storage.delete_label_set(args.set_id)
        print(f"Deleted {args.set_id}")
        return 0

    label_set = storage.load_label_set(args.set_id)
    if label_set is None:
        print(f"Error: label set not found: {args.set_id}", file=sys.stderr)
        return 1

    if args.action == "show":
        print(format_label_set(label_set))
    elif args.csv:
        print(export_labels_csv(label_set.labels))
    else:
        print(export_label_set_json(label_set))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='dun_labels',
        description='Validate, encode, store and print DUN/GS1 logistics labels'
    )
    parser.add_argument(
        '--log-level',
        default=None,
        help='Logging level (default: DUN_LABELS_LOG_LEVEL or INFO)'
    )
    parser.add_argument(
        '--log-config',
        default=None,
        help='YAML logging dictConfig file'
    )
    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('validate', help='Validate a GTIN-14 check digit')
    p.add_argument('gtin')
    p.add_argument('--json', action='store_true', help='Output result as JSON')
    p.set_defaults(func=_cmd_validate)

    p = sub.add_parser('check-digit', help='Append the GS1 Mod10 check digit')
    p.add_argument('digits')
    p.set_defaults(func=_cmd_check_digit)

    p = sub.add_parser('gs1', help='Build GS1-128 strings for AIs 01, 17 and 10')
    p.add_argument('--gtin', required=True)
    p.add_argument('--lot', default=None)
    p.add_argument('--expiry', default=None, help='YYYY-MM-DD, YYYYMMDD or DD/MM/YYYY')
    p.add_argument('--json', action='store_true', help='Output result as JSON')
    p.set_defaults(func=_cmd_gs1)

    p = sub.add_parser('import', help='Import and validate a label CSV')
    p.add_argument('csv')
    p.add_argument('--json', action='store_true', help='Output result as JSON')
    p.add_argument('--save', default=None, metavar='NAME', help='Save valid labels as a named set')
    p.add_argument('--orientation', choices=['portrait', 'landscape'], default='portrait')
    p.set_defaults(func=_cmd_import)

    p = sub.add_parser('render', help='Render labels to PDF')
    p.add_argument('csv', nargs='?', default=None)
    p.add_argument('--set', dest='set_id', default=None, help='Render a saved label set')
    p.add_argument('--output', '-o', required=True)
    p.add_argument('--orientation', choices=['portrait', 'landscape'], default='portrait')
    p.add_argument('--layout', choices=list(LAYOUTS), default='single')
    p.add_argument('--hide-box-size', action='store_true')
    p.add_argument('--hide-weight', action='store_true')
    p.set_defaults(func=_cmd_render)

    p = sub.add_parser('qr', help='Render QR cards from a label,value CSV')
    p.add_argument('csv')
    p.add_argument('--output', '-o', required=True)
    p.add_argument('--paper-size', choices=list(QR_PAPER_SIZES) + ['custom'], default='60x40')
    p.add_argument('--width-mm', type=float, default=60)
    p.add_argument('--height-mm', type=float, default=40)
    p.add_argument('--qr-size', type=float, default=70, help='QR size as percent of the card')
    p.add_argument('--auto-font', action='store_true')
    p.add_argument('--orientation', choices=['portrait', 'landscape'], default='portrait')
    p.add_argument('--save', default=None, metavar='NAME', help='Save the QR list as a named set')
    p.set_defaults(func=_cmd_qr)

    p = sub.add_parser('sets', help='Manage saved label sets')
    p.add_argument('action', choices=['list', 'show', 'delete', 'export'])
    p.add_argument('set_id', nargs='?', default=None)
    p.add_argument('--csv', action='store_true', help='Export labels as CSV instead of JSON')
    p.set_defaults(func=_cmd_sets)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(config_path=args.log_config, log_level=args.log_level)

    try:
        return args.func(args)
    except DunLabelsError as exc:
        logger.error("%s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
