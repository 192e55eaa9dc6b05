"""Compare two point files offline, without the API.

Usage:
    python -m backend.grading.check official.json submitted.json

Each file holds a JSON list of {"x": .., "y": ..} objects. The comparison is
printed as JSON; the exit code is 0 for a match, 1 for a mismatch and 2 when
a file cannot be read.
"""
import json
import logging
import sys
from pathlib import Path

from pydantic import TypeAdapter

from backend.problems.models import Point

from .comparator import compare

logger = logging.getLogger(__name__)

_points_adapter = TypeAdapter(list[Point])


def read_points(path: Path) -> list[Point]:
    with open(path) as f:
        return _points_adapter.validate_python(json.load(f))


def main(argv=None) -> int:
    import argparse

    parser = argparse.ArgumentParser(description="Compare a submitted point set with an official one")
    parser.add_argument("official", type=Path, help="JSON file with the official points")
    parser.add_argument("submitted", type=Path, help="JSON file with the submitted points")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        official = read_points(args.official)
        submitted = read_points(args.submitted)
    except (OSError, ValueError) as e:
        # ValueError covers bad UTF-8, bad JSON and ValidationError
        print(f"Error: {e}", file=sys.stderr)
        return 2

    logger.debug("Comparing %d official points with %d submitted", len(official), len(submitted))
    result = compare(official, submitted)
    print(result.model_dump_json(by_alias=True, indent=2))
    return 0 if result.is_correct else 1


if __name__ == "__main__":
    sys.exit(main())
