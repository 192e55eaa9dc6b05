"""Async client for the graph plotting practice API.

Usage:
    # Submit a JSON list of {"x": .., "y": ..} points for a problem
    python -m backend.client.api_client --url http://localhost:4000 --problem <id> --points points.json

    # List the available problems
    python -m backend.client.api_client --url http://localhost:4000 --list
"""
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Iterable

import httpx

from backend.problems.models import (
    EvaluationResult,
    Point,
    Problem,
    ProblemInput,
    ProblemSummary,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


class ApiError(Exception):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return "Request failed"

    detail = payload.get("detail", payload) if isinstance(payload, dict) else None
    if isinstance(detail, str):
        return detail
    if isinstance(detail, dict) and isinstance(detail.get("message"), str):
        return detail["message"]
    return "Request failed"


async def _request(client: httpx.AsyncClient, method: str, path: str, **kwargs) -> dict:
    response = await client.request(method, f"{API_PREFIX}{path}", **kwargs)
    if response.is_error:
        raise ApiError(response.status_code, _error_message(response))
    return response.json()


async def list_problems(client: httpx.AsyncClient) -> list[ProblemSummary]:
    data = await _request(client, "GET", "/problems")
    return [ProblemSummary.model_validate(item) for item in data["items"]]


async def get_problem(client: httpx.AsyncClient, problem_id: str) -> Problem:
    data = await _request(client, "GET", f"/problems/{problem_id}")
    return Problem.model_validate(data["item"])


async def create_problem(client: httpx.AsyncClient, problem_input: ProblemInput) -> Problem:
    data = await _request(
        client, "POST", "/problems", json=problem_input.model_dump(mode="json", by_alias=True)
    )
    return Problem.model_validate(data["item"])


async def evaluate(
    client: httpx.AsyncClient, problem_id: str, points: Iterable[Point]
) -> EvaluationResult:
    """Submit plotted points and return the server's verdict."""
    payload = {"points": [point.model_dump() for point in points]}
    data = await _request(client, "POST", f"/problems/{problem_id}/evaluate", json=payload)
    return EvaluationResult.model_validate(data["item"])


def load_points(path: Path) -> list[Point]:
    """Read a JSON list of {"x", "y"} objects."""
    with open(path) as f:
        raw = json.load(f)
    return [Point.model_validate(p) for p in raw]


def format_result(result: EvaluationResult) -> str:
    def fmt(points: list[Point]) -> str:
        return ", ".join(f"({p.x:g}, {p.y:g})" for p in points) or "none"

    lines = [result.summary]
    if not result.is_correct:
        lines.append(f"  Missing:    {fmt(result.missing_points)}")
        lines.append(f"  Unexpected: {fmt(result.unexpected_points)}")
        if result.correct_answer is not None:
            lines.append(f"  Explanation: {result.correct_answer.explanation}")
            for i, step in enumerate(result.correct_answer.steps, start=1):
                lines.append(f"    {i}. {step}")
    return "\n".join(lines)


async def _run(args, points: list[Point]) -> int:
    async with httpx.AsyncClient(base_url=args.url, timeout=args.timeout) as client:
        if args.list:
            for summary in await list_problems(client):
                print(f"{summary.id}  [{summary.graph_type}]  {summary.title}")
            return 0

        result = await evaluate(client, args.problem, points)
        print(format_result(result))
        return 0 if result.is_correct else 1


def main(argv=None) -> int:
    """Command line entry point for submitting answers."""
    import argparse

    parser = argparse.ArgumentParser(description="Submit plotted points to the graph practice API")
    parser.add_argument(
        "--url",
        default="http://localhost:4000",
        help="Base URL of the API (default: http://localhost:4000)",
    )
    parser.add_argument("--problem", "-p", help="Problem id to evaluate against")
    parser.add_argument("--points", type=Path, help="JSON file with the submitted points")
    parser.add_argument("--list", action="store_true", help="List problems and exit")
    parser.add_argument("--timeout", type=float, default=10.0, help="Request timeout in seconds")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if not args.list and (not args.problem or not args.points):
        parser.error("--problem and --points are required unless --list is given")

    points: list[Point] = []
    if not args.list:
        try:
            points = load_points(args.points)
        except (OSError, ValueError) as e:
            print(f"Error: could not read points from {args.points}: {e}", file=sys.stderr)
            return 2

    try:
        return asyncio.run(_run(args, points))
    except ApiError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2
    except httpx.RequestError as e:
        logger.debug("Request failed", exc_info=True)
        print(f"Error: API unavailable: {e}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"Error: unexpected response from API: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
