"""Data models for graphing problems, submissions and evaluation results."""
from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    FiniteFloat,
    StringConstraints,
    ValidationError,
    model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import InitErrorDetails, PydanticCustomError

MAX_SUBMISSION_POINTS = 500

GraphType = Literal["scatter", "line"]

TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True)]
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON field names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Point(BaseModel):
    """A plotted (x, y) coordinate pair."""
    x: FiniteFloat
    y: FiniteFloat

    model_config = ConfigDict(frozen=True)

    def key(self) -> tuple[float, float]:
        return (self.x, self.y)


class AxisConfig(CamelModel):
    label: NonEmptyStr
    unit: TrimmedStr = ""
    min: FiniteFloat
    max: FiniteFloat
    step: FiniteFloat = Field(gt=0)

    @model_validator(mode="after")
    def check_range(self) -> "AxisConfig":
        if self.max <= self.min:
            raise ValueError("Axis max must be greater than axis min")
        return self

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


class AxisPairConfig(CamelModel):
    x: AxisConfig
    y: AxisConfig


class GivenTable(CamelModel):
    """Reference data table shown next to the graph."""
    title: Optional[TrimmedStr] = None
    headers: list[NonEmptyStr] = Field(min_length=1)
    rows: list[list[Union[int, FiniteFloat, str]]]

    @model_validator(mode="after")
    def check_row_widths(self) -> "GivenTable":
        width = len(self.headers)
        bad_rows = [str(i) for i, row in enumerate(self.rows) if len(row) != width]
        if bad_rows:
            raise ValueError(
                f"Each row must match the number of headers (rows {', '.join(bad_rows)})"
            )
        return self


class ProblemAnswer(CamelModel):
    """Official answer: points plus remediation text."""
    points: list[Point] = Field(min_length=1)
    explanation: Annotated[str, StringConstraints(strip_whitespace=True, min_length=10)]
    steps: list[NonEmptyStr] = []


class ProblemInput(CamelModel):
    """Author-supplied problem definition."""
    title: Annotated[str, StringConstraints(strip_whitespace=True, min_length=3)]
    question: Annotated[str, StringConstraints(strip_whitespace=True, min_length=8)]
    instructions: TrimmedStr = ""
    graph_type: GraphType
    axis: AxisPairConfig
    given_table: Optional[GivenTable] = None
    answer: ProblemAnswer

    @model_validator(mode="after")
    def check_answer_points(self) -> "ProblemInput":
        issues: list[InitErrorDetails] = []
        seen: set[tuple[float, float]] = set()

        def issue(kind: str, message: str, loc: tuple, value) -> None:
            issues.append(
                {"type": PydanticCustomError(kind, message), "loc": loc, "input": value}
            )

        for index, point in enumerate(self.answer.points):
            loc = ("answer", "points", index)
            if not self.axis.x.contains(point.x):
                issue("answer_point_range", "Point x value is outside the configured x-axis range",
                      loc + ("x",), point.x)
            if not self.axis.y.contains(point.y):
                issue("answer_point_range", "Point y value is outside the configured y-axis range",
                      loc + ("y",), point.y)
            if point.key() in seen:
                issue("answer_point_duplicate", "Duplicate points are not allowed in the official answer",
                      loc, point.model_dump())
            seen.add(point.key())

        if issues:
            raise ValidationError.from_exception_data(type(self).__name__, issues)
        return self


class Problem(ProblemInput):
    """Stored problem."""
    id: str
    created_at: datetime
    updated_at: datetime


class ProblemSummary(CamelModel):
    id: str
    title: str
    graph_type: GraphType
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_problem(cls, problem: Problem) -> "ProblemSummary":
        return cls(
            id=problem.id,
            title=problem.title,
            graph_type=problem.graph_type,
            created_at=problem.created_at,
            updated_at=problem.updated_at,
        )


class SubmissionInput(CamelModel):
    points: list[Point] = Field(max_length=MAX_SUBMISSION_POINTS)


class CorrectAnswer(CamelModel):
    points: list[Point]
    explanation: str
    steps: list[str]


class EvaluationResult(CamelModel):
    """Outcome of comparing a submission with the official answer."""
    is_correct: bool
    summary: str
    missing_points: list[Point]
    unexpected_points: list[Point]
    submitted_points: list[Point]
    expected_points: list[Point]
    correct_answer: Optional[CorrectAnswer] = None  # only set when incorrect
