#!/usr/bin/env python3
"""
Main script for computing lipid-quality indices of a fatty acid profile.
"""

# Pipeline overview (README-style):
# 1) Load a flat CSV profile (or the packaged mature milk composition) and
#    validate its fatty acid fields into columnar form.
# 2) Compute the index table (SFA ... TFA) for every value column.
# 3) Log a formatted report, flagging undefined indices.
# 4) Export the profile with nomenclature columns and the index table as CSV.

import argparse
import logging
import os
import sys
import time

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from fatty.chemistry.fatty_acid import StructuralValidationError
from fatty.columnar import SchemaMismatchError
from fatty.indices.formulas import indices_table
from fatty.output import DEFAULT_OUTPUT_DIR, save_results_to_csv
from fatty.reference import load_profile, mature_milk
from fatty.reporting import format_indices

LOG_FILE = "fatty_indices.log"


def _configure_logging(log_path: str = LOG_FILE) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_path, mode="w"),
        ],
    )


def _build_arg_parser() -> argparse.ArgumentParser:
    """Build command-line parser for the index pipeline."""
    parser = argparse.ArgumentParser(
        description="Lipid-quality indices for fatty acid profiles."
    )
    parser.add_argument(
        "--input",
        default=None,
        help="Path to a flat profile CSV (default: packaged mature milk table).",
    )
    parser.add_argument(
        "--outdir",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR}).",
    )
    parser.add_argument(
        "--value-col",
        action="append",
        default=None,
        help="Value column to evaluate; repeat for several (default: all numeric).",
    )
    parser.add_argument(
        "--expanded",
        action="store_true",
        help="Write bond locants in the nomenclature columns.",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=0,
        help="Zero-padding width of numeric fields in names (default: 0).",
    )
    parser.add_argument(
        "--decimals",
        type=int,
        default=3,
        help="Decimal places in the logged index report (default: 3).",
    )
    return parser


def main(argv=None):
    """Main execution function with step timing."""
    args = _build_arg_parser().parse_args(argv)
    os.makedirs(args.outdir, exist_ok=True)
    _configure_logging(os.path.join(args.outdir, LOG_FILE))

    start_time = time.time()
    logging.info("Initializing fatty acid index pipeline")

    step_start = time.time()
    try:
        if args.input is None:
            logging.info("No input given; using the mature milk reference profile")
            profile = mature_milk()
        else:
            profile = load_profile(args.input)
    except (OSError, SchemaMismatchError) as exc:
        logging.error("Could not load profile: %s", exc)
        return 1
    logging.info(
        "Profile loading completed in %.2f seconds", time.time() - step_start
    )
    logging.info("Profile shape: %s", profile.shape)

    step_start = time.time()
    try:
        table = indices_table(profile, value_columns=args.value_col)
    except (KeyError, SchemaMismatchError, StructuralValidationError) as exc:
        logging.error("Index computation failed: %s", exc)
        return 1
    logging.info(
        "Index computation completed in %.2f seconds", time.time() - step_start
    )

    if table.empty:
        logging.error("No numeric value columns to evaluate. Terminating execution.")
        return 1

    report = format_indices(table, decimals=args.decimals)
    logging.info("Lipid-quality indices:\n%s", report.to_string())

    undefined = table.isna()
    for column in table.columns:
        names = list(table.index[undefined[column].to_numpy()])
        if names:
            logging.warning("Undefined indices for '%s': %s", column, names)

    step_start = time.time()
    profile_csv, indices_csv = save_results_to_csv(
        profile,
        table,
        args.outdir,
        width=args.width,
        expanded=args.expanded,
    )
    logging.info("CSV export completed in %.2f seconds", time.time() - step_start)

    total_duration = time.time() - start_time
    logging.info(f"Total execution time: {total_duration:.2f} seconds")

    logging.info("Analysis pipeline completed successfully")
    logging.info("Generated output files:")
    logging.info("  - Profile CSV: %s", profile_csv)
    logging.info("  - Indices CSV: %s", indices_csv)
    return 0


if __name__ == "__main__":
    sys.exit(main())
