"""
VARSHA MAIN ENTRY POINT
Rooftop rainwater harvesting and artificial recharge assessment for sites in India

Usage:
    python -m varsha_core --mode rainwater --input site.json
    python -m varsha_core --mode recharge --input site.json --output reports/ --save
    python -m varsha_core --history 5
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from varsha_core.config.settings import CALCULATION_MODES, SUBMISSION_DB_PATH, HISTORY_DEFAULT_LIMIT
from varsha_core.engine import CalculationEngine
from varsha_core.models.site import site_input_from_dict, validate_site_input
from varsha_core.reports.html_generator import HtmlReportGenerator, monthly_frame
from varsha_core.utils.core import (
    VarshaError, InputValidationError, ReportExporter, DataValidator
)
from varsha_core.utils.submission_store import SubmissionStore

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='varsha',
        description="Estimate rainwater harvesting or groundwater recharge for a site"
    )

    parser.add_argument(
        "--mode",
        choices=CALCULATION_MODES,
        default='rainwater',
        help="Calculation type (default: rainwater)",
    )

    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="JSON file describing the site (camelCase or snake_case keys)",
    )

    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Folder for HTML, JSON, CSV and Excel reports",
    )

    parser.add_argument(
        "--save",
        action="store_true",
        help="Store the submission in the history database",
    )

    parser.add_argument(
        "--db",
        type=str,
        default=SUBMISSION_DB_PATH,
        help="Submission database path",
    )

    parser.add_argument(
        "--history",
        type=int,
        nargs='?',
        const=HISTORY_DEFAULT_LIMIT,
        default=None,
        help="List recent submissions instead of calculating",
    )

    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Reference data folder (cities.json, coefficients.json)",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Debug logging",
    )

    return parser


def _print_history(store: SubmissionStore, limit: int) -> None:
    rows = store.history(limit)
    if not rows:
        print("No submissions stored")
        return

    for row in rows:
        coverage = f", coverage {row['coverage_percentage']}%" if 'coverage_percentage' in row else ''
        print(f"{row['created_at']}  {row['id']}  {row['calculation_type']:<9}  "
              f"{row['name']} ({row['location']})  {row['feasibility_level']}{coverage}")


def _write_reports(site, results, mode: str, output_folder: Path) -> None:
    generator = HtmlReportGenerator()
    html_path = generator.generate_report(site, results, mode, output_folder)

    stem = f"{mode}-analysis-report-{DataValidator.sanitize_filename(site.name) or 'site'}"
    frame = monthly_frame(results)
    ReportExporter.to_json(results.to_dict(), output_folder / f"{stem}.json")
    ReportExporter.to_csv(frame, output_folder / f"{stem}.csv")
    ReportExporter.to_excel(frame, output_folder / f"{stem}.xlsx")

    print(f"Reports saved to: {html_path.parent}")


def main(argv: Optional[List[str]] = None) -> int:
    """Run one calculation (or list history) and return a process exit code"""
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.history is not None:
        _print_history(SubmissionStore(args.db), args.history)
        return 0

    if args.input is None:
        logger.error("--input is required unless --history is given")
        return 2

    try:
        with open(args.input, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Cannot read site file {args.input}: {e}")
        return 2

    try:
        engine = CalculationEngine.from_packaged_data(args.data_dir)
        site = validate_site_input(site_input_from_dict(raw, args.mode), args.mode)
        results = engine.calculate(site, args.mode)
    except InputValidationError as e:
        for message in e.errors:
            logger.error(f"Invalid input: {message}")
        return 2
    except VarshaError as e:
        logger.error(f"Calculation failed: {e}")
        return 1

    print(results.to_json())

    if args.output is not None:
        _write_reports(site, results, args.mode, args.output)

    if args.save:
        submission = SubmissionStore(args.db).save_submission(site, args.mode, results)
        print(f"Saved submission {submission.id}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
