"""US Rent & Income Report - Source modules."""

from .data_processing import run_pipeline
from .visualization import generate_all_charts

__all__ = ['run_pipeline', 'generate_all_charts']
