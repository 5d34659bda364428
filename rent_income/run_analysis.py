"""
US Rent & Income Report
Run this script to print the summary statistics and generate all charts:

    python -m rent_income.run_analysis
"""

from pathlib import Path
import logging
import sys
import warnings
warnings.filterwarnings('ignore', category=UserWarning, module='matplotlib')

from .data_processing import COORDINATES_PATH, LOWEST_N, STATES_GEOJSON_PATH, run_pipeline
from .dataset import category_counts
from .visualization import format_dollars, generate_all_charts

logger = logging.getLogger(__name__)

# Paths
OUTPUT_DIR = Path.cwd() / 'outputs'


def banner(title: str):
    print("\n" + "=" * 70)
    print(title)
    print("=" * 70)


def format_ratio(ratio) -> str:
    return 'undefined' if ratio is None else f"{ratio:.2f}"


def main(coordinates_path: Path = COORDINATES_PATH, output_dir: Path = OUTPUT_DIR,
         geo_path: Path = STATES_GEOJSON_PATH) -> int:
    print("=" * 70)
    print("US RENT & INCOME REPORT")
    print("=" * 70)

    counts = category_counts()
    print(f"\nEmbedded estimates: {counts['income']} income, {counts['rent']} rent")

    output_dir = Path(output_dir)
    try:
        report = run_pipeline(coordinates_path, output_dir / 'income_by_region.csv')
    except (OSError, ValueError) as e:
        logger.error(f"Cannot build report: {e}")
        print(f"\nERROR: could not read coordinates file {coordinates_path}")
        return 1

    print(f"Regions with coordinates: {len(report.income_by_region)}")

    # ============================================================
    # 1. SUMMARY STATISTICS
    # ============================================================
    banner("1. SUMMARY STATISTICS")

    summary = report.income_summary
    print(f"\nIncome to rent ratio (total): {format_ratio(report.ratio)}")
    print(f"Minimum median income: {format_dollars(summary.min)}")
    print(f"Median of median incomes: {format_dollars(summary.median)}")
    print(f"Maximum median income: {format_dollars(summary.max)}")

    # ============================================================
    # 2. LOWEST INCOMES
    # ============================================================
    banner(f"2. LOWEST {LOWEST_N} STATES BY MEDIAN INCOME")

    print()
    for i, (_, row) in enumerate(report.lowest_income.iterrows(), 1):
        print(f"  {i}. {row['region']}: {format_dollars(row['estimate'])}")

    # ============================================================
    # 3. CHARTS
    # ============================================================
    banner("3. CHARTS")

    outputs = generate_all_charts(report, output_dir, geo_path=geo_path)
    for path in outputs.values():
        print(f"Saved: {path.name}")

    print("\n" + "=" * 70)
    print("REPORT COMPLETE!")
    print(f"All outputs saved to: {output_dir}")
    print("=" * 70)
    return 0


if __name__ == '__main__':
    sys.exit(main())
