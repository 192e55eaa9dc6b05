"""FastAPI backend for graph plotting practice problems."""
import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from backend.grading import evaluate_submission
from backend.problems import (
    EvaluationResult,
    Problem,
    ProblemInput,
    ProblemSummary,
    SubmissionInput,
    problem_store,
)

logger = logging.getLogger(__name__)

# Configuration
DATA_PATH = Path(
    os.environ.get("GRAPH_PROBLEMS_PATH", Path(__file__).parent.parent / "data" / "problems.json")
)
HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "4000"))


# Response envelopes
class ProblemListResponse(BaseModel):
    items: list[ProblemSummary]


class ProblemItemResponse(BaseModel):
    item: Problem


class EvaluationResponse(BaseModel):
    item: EvaluationResult


def _error_list(errors: list[dict]) -> list[dict]:
    # inputs and contexts may hold non-finite floats or exception objects
    return [
        {"type": e.get("type"), "loc": list(e.get("loc", ())), "msg": e.get("msg")}
        for e in errors
    ]


def _validation_failure(message: str, exc: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail={"message": message, "errors": _error_list(exc.errors())},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Seed the problem store on startup."""
    problem_store.clear()
    if DATA_PATH.exists():
        problem_store.load(DATA_PATH)
    else:
        logger.warning("No problems file found at %s", DATA_PATH)

    yield


app = FastAPI(
    title="Graph Plotting Practice API",
    description="API for authoring graphing problems and checking plotted answers",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"detail": {"message": "Validation error", "errors": _error_list(exc.errors())}},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected server error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Unexpected server error"})


@app.get("/api/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "problems_loaded": len(problem_store),
    }


@app.get("/api/problems", response_model=ProblemListResponse)
async def list_problems() -> ProblemListResponse:
    """List problem summaries, most recently updated first."""
    return ProblemListResponse(items=problem_store.list_summaries())


@app.get("/api/problems/{problem_id}", response_model=ProblemItemResponse)
async def get_problem(problem_id: str) -> ProblemItemResponse:
    """Get a single problem including its official answer."""
    problem = problem_store.get_by_id(problem_id)
    if problem is None:
        raise HTTPException(status_code=404, detail="Problem not found")

    return ProblemItemResponse(item=problem)


@app.post("/api/problems", response_model=ProblemItemResponse, status_code=201)
async def create_problem(payload: Any = Body(None)) -> ProblemItemResponse:
    """Publish a new problem."""
    try:
        problem_input = ProblemInput.model_validate(payload)
    except ValidationError as e:
        raise _validation_failure("Invalid problem payload", e)

    problem = problem_store.create(problem_input)
    logger.info("Created problem %s (%s)", problem.id, problem.title)
    return ProblemItemResponse(item=problem)


@app.post("/api/problems/{problem_id}/evaluate", response_model=EvaluationResponse)
async def evaluate(problem_id: str, payload: Any = Body(None)) -> EvaluationResponse:
    """Check a plotted submission against the problem's official answer."""
    problem = problem_store.get_by_id(problem_id)
    if problem is None:
        raise HTTPException(status_code=404, detail="Problem not found")

    try:
        submission = SubmissionInput.model_validate(payload)
    except ValidationError as e:
        raise _validation_failure("Invalid submission payload", e)

    result = evaluate_submission(problem, submission.points)
    logger.debug(
        "Evaluated problem %s: correct=%s missing=%d unexpected=%d",
        problem_id, result.is_correct, len(result.missing_points), len(result.unexpected_points)
    )
    return EvaluationResponse(item=result)


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host=HOST, port=PORT)
