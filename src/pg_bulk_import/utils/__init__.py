"""
Utility helpers.

Small, reusable helpers shared by the pipeline and the entry points.
"""

from pg_bulk_import.utils.paths import ensure_dir, ensure_parent_dir
from pg_bulk_import.utils.log import setup_logging
from pg_bulk_import.utils.progress import ProgressReporter

__all__ = [
    "ensure_dir",
    "ensure_parent_dir",
    "setup_logging",
    "ProgressReporter",
]
