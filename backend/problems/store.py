"""In-memory problem storage."""
import json
import logging
import secrets
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .models import Problem, ProblemInput, ProblemSummary

logger = logging.getLogger(__name__)

ID_LENGTH = 10


def _new_id() -> str:
    return secrets.token_urlsafe(ID_LENGTH)[:ID_LENGTH]


class ProblemStore:
    """Keeps published problems in a dict keyed by their id."""

    def __init__(self):
        self._problems: dict[str, Problem] = {}

    def __len__(self) -> int:
        return len(self._problems)

    def list_summaries(self) -> list[ProblemSummary]:
        """Summaries of every problem, most recently updated first."""
        summaries = [ProblemSummary.from_problem(p) for p in self._problems.values()]
        summaries.sort(key=lambda s: s.updated_at, reverse=True)
        return summaries

    def get_by_id(self, problem_id: str) -> Optional[Problem]:
        return self._problems.get(problem_id)

    def create(self, problem_input: ProblemInput) -> Problem:
        timestamp = datetime.now(timezone.utc)
        problem_id = _new_id()
        while problem_id in self._problems:
            problem_id = _new_id()

        problem = Problem(
            **problem_input.model_dump(),
            id=problem_id,
            created_at=timestamp,
            updated_at=timestamp,
        )
        self._problems[problem_id] = problem
        return problem

    def load(self, path: Path) -> int:
        """Create a problem for every entry of a JSON array file."""
        with open(path) as f:
            entries = json.load(f)

        for entry in entries:
            self.create(ProblemInput.model_validate(entry))

        logger.info("Loaded %d problems from %s", len(entries), path)
        return len(entries)

    def clear(self) -> None:
        self._problems.clear()


problem_store = ProblemStore()
