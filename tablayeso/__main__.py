"""
Tablayeso Materials Estimator - CLI Entry Point

Commands:
    calculate - Calculate materials for walls/ceilings in a YAML/JSON file
    catalog   - List panel types and material units
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from . import ExportRefused, ItemInputError, __version__
from .catalog import MATERIAL_CATALOG, PANEL_TYPES, finishing_system, PanelType
from .config import EstimatorConfig
from .engine import calculate_materials
from .models.schema import CalculationMode
from .report.excel_report import export_to_excel
from .report.pdf_report import generate_pdf_report
from .report.text_report import render_result
from .takeoff.loader import load_items


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )


def cmd_calculate(args):
    """Calculate materials for an items document."""
    config = EstimatorConfig.load(Path(args.config) if args.config else None)

    try:
        items = load_items(Path(args.items), config)
    except (OSError, ItemInputError) as e:
        print(f"Cannot load items: {e}")
        return 1

    result = calculate_materials(items, CalculationMode(args.mode), config)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(render_result(result))

    try:
        if args.pdf:
            generate_pdf_report(result, Path(args.pdf))
            print(f"PDF: {args.pdf}")
        if args.excel:
            export_to_excel(result, Path(args.excel))
            print(f"Excel: {args.excel}")
    except ExportRefused as e:
        print(str(e))
        return 1

    return 1 if result.has_errors else 0


def cmd_catalog(args):
    """Print panel types and material units."""
    print("Panel types:")
    for label in PANEL_TYPES:
        system = finishing_system(PanelType(label))
        print(f"  {label:<20} {system.value}")

    print("\nMaterials:")
    for name, material in sorted(MATERIAL_CATALOG.items()):
        print(f"  {name:<32} {material.unit}")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Tablayeso - drywall materials estimator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')

    subparsers = parser.add_subparsers(dest='command', help='Command')

    calc_parser = subparsers.add_parser('calculate', help='Calculate materials')
    calc_parser.add_argument('items', help='YAML or JSON file with walls and ceilings')
    calc_parser.add_argument(
        '--mode',
        choices=[m.value for m in CalculationMode],
        default=CalculationMode.STRICT.value,
        help='strict: any invalid item blocks totals; best-effort: totals for valid items',
    )
    calc_parser.add_argument('--config', help='Norms YAML (default: rules/drywall_norms.yaml)')
    calc_parser.add_argument('--pdf', help='Write PDF report to this path')
    calc_parser.add_argument('--excel', help='Write Excel workbook to this path')
    calc_parser.add_argument('--json', action='store_true', help='Print result as JSON')

    catalog_parser = subparsers.add_parser('catalog', help='List panel types and material units')

    # -v is accepted before or after the subcommand
    for sub in (calc_parser, catalog_parser):
        sub.add_argument(
            '-v', '--verbose', action='store_true', default=argparse.SUPPRESS,
            help='Verbose output',
        )

    args = parser.parse_args()
    setup_logging(args.verbose)

    if args.command == 'calculate':
        return cmd_calculate(args)
    elif args.command == 'catalog':
        return cmd_catalog(args)

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())
