"""
Data Processing Pipeline for the US Rent & Income Report

This module handles the complete pipeline:
1. Load the embedded rent/income table
2. Load state coordinates
3. Filter and rank each category by estimate
4. Join income to coordinates by region
5. Compute summary statistics
"""

import pandas as pd
import numpy as np
from pathlib import Path
from typing import NamedTuple, Optional
import logging

from .dataset import CATEGORIES, load_rent_income

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).parent
COORDINATES_PATH = PACKAGE_DIR / 'data' / 'states.csv'
STATES_GEOJSON_PATH = PACKAGE_DIR / 'data' / 'us_states.json'

COORDINATE_COLUMNS = ['state', 'longitude', 'latitude']

LOWEST_N = 10

# Returned by estimate_ratio when no ratio can be computed
UNDEFINED_RATIO = None


class EstimateSummary(NamedTuple):
    min: Optional[float]
    median: Optional[float]
    max: Optional[float]


class RentIncomeReport(NamedTuple):
    income: pd.DataFrame
    rent: pd.DataFrame
    income_by_region: pd.DataFrame
    ratio: Optional[float]
    income_summary: EstimateSummary
    lowest_income: pd.DataFrame


def load_coordinates(filepath: Path) -> pd.DataFrame:
    """Load state centroid coordinates, keyed by region name."""
    filepath = Path(filepath)
    logger.info(f"Loading coordinates from {filepath}")

    try:
        coords = pd.read_csv(filepath)
    except FileNotFoundError:
        logger.error(f"Coordinates file not found: {filepath}")
        raise
    except OSError as e:
        logger.error(f"Could not read coordinates file {filepath}: {e}")
        raise
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        logger.error(f"Could not parse coordinates file {filepath}: {e}")
        raise OSError(f"Unreadable coordinates file: {filepath}") from e

    missing = [c for c in COORDINATE_COLUMNS if c not in coords.columns]
    if missing:
        raise ValueError(f"Coordinates file {filepath} is missing columns: {missing}")

    coords = coords[COORDINATE_COLUMNS].rename(columns={'state': 'region'})
    logger.info(f"Loaded {len(coords):,} coordinates")
    return coords


def rank_observations(df: pd.DataFrame, n: int, by: str = 'estimate',
                      direction: str = 'max') -> pd.DataFrame:
    """
    Return the top ('max') or bottom ('min') n rows ordered by a column.

    Ties keep their input order and missing values sort last. The input
    frame is left untouched.
    """
    if direction not in ('max', 'min'):
        raise ValueError(f"direction must be 'max' or 'min', got {direction!r}")
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")

    ranked = df.sort_values(
        by, ascending=(direction == 'min'), kind='stable', na_position='last'
    )
    return ranked.head(n).copy()


def filter_category(df: pd.DataFrame, category: str) -> pd.DataFrame:
    """Keep one category, ordered descending by estimate."""
    if category not in CATEGORIES:
        raise ValueError(f"Unknown category {category!r}, expected one of {CATEGORIES}")

    subset = df[df['category'] == category]
    subset = subset.sort_values('estimate', ascending=False, kind='stable', na_position='last')

    logger.info(f"Filtered to {len(subset):,} {category} observations")
    return subset.reset_index(drop=True)


def join_coordinates(observations: pd.DataFrame, coordinates: pd.DataFrame,
                     key: str = 'region') -> pd.DataFrame:
    """
    Inner join observations to coordinates on the exact region name.

    Observations without a coordinate are dropped. Duplicate coordinate keys
    keep their first row so no observation is repeated.
    """
    if coordinates.empty:
        logger.info(f"No coordinates to join, dropping all {len(observations)} observations")
        return observations.iloc[0:0].assign(longitude=np.nan, latitude=np.nan)

    coords = coordinates[[key, 'longitude', 'latitude']].drop_duplicates(subset=[key])

    joined = observations.merge(coords, on=key, how='inner', sort=False)

    dropped = len(observations) - len(joined)
    if dropped:
        unmatched = sorted(set(observations[key]) - set(coords[key]))
        logger.info(f"Dropped {dropped} observations without coordinates: {unmatched}")

    logger.info(f"Joined {len(joined):,} observations to coordinates")
    return joined


def sum_estimates(df: pd.DataFrame, column: str = 'estimate') -> float:
    """Sum a numeric column, ignoring missing values."""
    if df.empty:
        return 0.0
    return float(df[column].sum(skipna=True))


def estimate_ratio(numerator: pd.DataFrame, denominator: pd.DataFrame,
                   column: str = 'estimate') -> Optional[float]:
    """
    Ratio of two column sums, rounded to 2 decimals.

    Returns UNDEFINED_RATIO when either frame is empty or the denominator
    sums to zero.
    """
    if numerator.empty or denominator.empty:
        logger.warning("Cannot compute ratio over an empty collection")
        return UNDEFINED_RATIO

    top = sum_estimates(numerator, column)
    bottom = sum_estimates(denominator, column)

    if bottom == 0:
        logger.warning("Denominator sums to zero, ratio is undefined")
        return UNDEFINED_RATIO

    return round(top / bottom, 2)


def summarize_estimates(df: pd.DataFrame, column: str = 'estimate') -> EstimateSummary:
    """Min, median and max of a numeric column, ignoring missing values."""
    values = df[column].dropna() if column in df.columns else pd.Series(dtype=float)
    if values.empty:
        return EstimateSummary(None, None, None)

    return EstimateSummary(
        min=float(values.min()),
        median=float(np.median(values)),
        max=float(values.max())
    )


def run_pipeline(coordinates_path: Path = COORDINATES_PATH,
                 output_path: Path = None) -> RentIncomeReport:
    """Run the complete data processing pipeline."""
    logger.info("Starting data processing pipeline")

    # Load
    observations = load_rent_income()
    logger.info(f"Loaded {len(observations):,} observations")
    coordinates = load_coordinates(coordinates_path)

    # Filter and sort each category
    income = filter_category(observations, 'income')
    rent = filter_category(observations, 'rent')

    # Join income to coordinates
    income_by_region = join_coordinates(income, coordinates)

    # Summaries
    ratio = estimate_ratio(income, rent)
    income_summary = summarize_estimates(income)
    lowest_income = rank_observations(income, LOWEST_N, direction='min')

    if output_path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        income_by_region.to_csv(output_path, index=False)
        logger.info(f"Saved joined income data to {output_path}")

    logger.info("Pipeline complete!")

    return RentIncomeReport(
        income=income,
        rent=rent,
        income_by_region=income_by_region,
        ratio=ratio,
        income_summary=income_summary,
        lowest_income=lowest_income
    )


if __name__ == '__main__':
    base_path = Path.cwd()

    run_pipeline(
        coordinates_path=COORDINATES_PATH,
        output_path=base_path / 'outputs' / 'income_by_region.csv'
    )
