"""Problem definitions and storage."""
from .models import (
    MAX_SUBMISSION_POINTS,
    EvaluationResult,
    Point,
    Problem,
    ProblemAnswer,
    ProblemInput,
    ProblemSummary,
    SubmissionInput,
)
from .store import ProblemStore, problem_store

__all__ = [
    "MAX_SUBMISSION_POINTS",
    "EvaluationResult",
    "Point",
    "Problem",
    "ProblemAnswer",
    "ProblemInput",
    "ProblemStore",
    "ProblemSummary",
    "SubmissionInput",
    "problem_store",
]
