"""Point-set comparison for graph submissions.

Both the official answer and a submission are normalized the same way before
they are compared: coordinates are rounded to ``POINT_PRECISION`` decimal
places, points sharing the same rounded coordinates are collapsed into one,
and the result is sorted by x and then y. Rounding is the only tolerance rule,
so two points are "the same" exactly when their rounded coordinates match.
"""
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Iterable, Sequence

from backend.problems.models import CorrectAnswer, EvaluationResult, Point, Problem

POINT_PRECISION = 6

CORRECT_SUMMARY = "Correct answer. The plotted points match the official graph."
INCORRECT_SUMMARY = "Incorrect answer. Review the missing and unexpected points."

PointKey = tuple[float, float]

_QUANTUM = Decimal(1).scaleb(-POINT_PRECISION)
# enough digits for any finite float quantized to POINT_PRECISION places
_CONTEXT = Context(prec=400)


def _round(value: float) -> float:
    # ties round away from zero; + 0.0 turns a rounded -0.0 into 0.0
    rounded = Decimal(value).quantize(_QUANTUM, rounding=ROUND_HALF_UP, context=_CONTEXT)
    return float(rounded) + 0.0


def point_key(point: Point) -> PointKey:
    return (_round(point.x), _round(point.y))


def normalize(points: Iterable[Point]) -> list[Point]:
    """Round, deduplicate and sort a list of points.

    Later points win when several share a key; they are equal after rounding
    anyway. Calling this on its own output returns the same list.
    """
    by_key: dict[PointKey, Point] = {}
    for point in points:
        key = point_key(point)
        by_key[key] = Point(x=key[0], y=key[1])

    return [by_key[key] for key in sorted(by_key)]


def compare(
    official_points: Iterable[Point],
    submitted_points: Iterable[Point],
    explanation: str = "",
    steps: Sequence[str] = (),
) -> EvaluationResult:
    """Compare a submission with the official points.

    ``missing_points`` are official points the submission lacks and
    ``unexpected_points`` are submitted points that are not in the official
    answer. The explanation, steps and official points are attached as
    ``correct_answer`` only when the submission is wrong.
    """
    expected = normalize(official_points)
    submitted = normalize(submitted_points)

    expected_keys = {point.key() for point in expected}
    submitted_keys = {point.key() for point in submitted}

    missing = [point for point in expected if point.key() not in submitted_keys]
    unexpected = [point for point in submitted if point.key() not in expected_keys]
    is_correct = not missing and not unexpected

    return EvaluationResult(
        is_correct=is_correct,
        summary=CORRECT_SUMMARY if is_correct else INCORRECT_SUMMARY,
        missing_points=missing,
        unexpected_points=unexpected,
        submitted_points=submitted,
        expected_points=expected,
        correct_answer=None if is_correct else CorrectAnswer(
            points=expected,
            explanation=explanation,
            steps=list(steps),
        ),
    )


def evaluate_submission(problem: Problem, submitted_points: Iterable[Point]) -> EvaluationResult:
    """Grade a submission against a stored problem's official answer."""
    answer = problem.answer
    return compare(answer.points, submitted_points, answer.explanation, answer.steps)
