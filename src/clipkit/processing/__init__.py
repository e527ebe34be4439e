"""Processing stages applied to parsed annotation records."""

from .pipeline import ProcessResult, process
from .stats import ClippingsStats, calculate_stats, group_by_book

__all__ = ["ClippingsStats", "ProcessResult", "calculate_stats", "group_by_book", "process"]
