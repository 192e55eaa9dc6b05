"""Grading of plotted point submissions."""
from .comparator import (
    CORRECT_SUMMARY,
    INCORRECT_SUMMARY,
    POINT_PRECISION,
    compare,
    evaluate_submission,
    normalize,
)

__all__ = [
    "CORRECT_SUMMARY",
    "INCORRECT_SUMMARY",
    "POINT_PRECISION",
    "compare",
    "evaluate_submission",
    "normalize",
]
