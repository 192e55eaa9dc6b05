import logging

from fastapi.testclient import TestClient

from backend.api import main
from backend.api.main import app
from backend.grading import CORRECT_SUMMARY, INCORRECT_SUMMARY


def _first_problem(client, title):
    items = client.get("/api/problems").json()["items"]
    summary = next(item for item in items if item["title"] == title)
    return client.get(f"/api/problems/{summary['id']}").json()["item"]


def test_health_reports_loaded_problems():
    with TestClient(app) as client:
        resp = client.get("/api/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["problems_loaded"] == 2


def test_get_problems_returns_summaries():
    with TestClient(app) as client:
        resp = client.get("/api/problems")
        assert resp.status_code == 200
        items = resp.json()["items"]
        assert len(items) == 2
        for key in ["id", "title", "graphType", "createdAt", "updatedAt"]:
            assert key in items[0]
        assert "answer" not in items[0]


def test_get_problem_includes_answer():
    with TestClient(app) as client:
        problem = _first_problem(client, "Dog Show Line Graph")
        assert problem["graphType"] == "line"
        assert problem["axis"]["y"]["unit"] == "kg"
        assert len(problem["answer"]["points"]) == 4


def test_get_unknown_problem_is_404():
    with TestClient(app) as client:
        resp = client.get("/api/problems/does-not-exist")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Problem not found"


def test_create_problem_then_list_it_first(problem_payload):
    with TestClient(app) as client:
        resp = client.post("/api/problems", json=problem_payload)
        assert resp.status_code == 201
        created = resp.json()["item"]
        assert created["title"] == problem_payload["title"]
        assert created["givenTable"]["headers"] == ["Fouls", "Points"]

        items = client.get("/api/problems").json()["items"]
        assert items[0]["id"] == created["id"]


def test_create_invalid_problem_is_400(problem_payload):
    problem_payload["axis"]["x"]["max"] = -1
    with TestClient(app) as client:
        resp = client.post("/api/problems", json=problem_payload)
        assert resp.status_code == 400
        detail = resp.json()["detail"]
        assert detail["message"] == "Invalid problem payload"
        assert detail["errors"]


def test_evaluate_correct_submission():
    with TestClient(app) as client:
        problem = _first_problem(client, "Dog Show Line Graph")
        points = list(reversed(problem["answer"]["points"]))
        resp = client.post(f"/api/problems/{problem['id']}/evaluate", json={"points": points})
        assert resp.status_code == 200
        item = resp.json()["item"]
        assert item["isCorrect"] is True
        assert item["summary"] == CORRECT_SUMMARY
        assert item["missingPoints"] == []
        assert item["unexpectedPoints"] == []
        assert item["correctAnswer"] is None


def test_evaluate_incorrect_submission_includes_remediation():
    with TestClient(app) as client:
        problem = _first_problem(client, "Dog Show Line Graph")
        points = [{"x": 2011, "y": 20}, {"x": 2014, "y": 30}, {"x": 2017, "y": 10}, {"x": 2020, "y": 90}]
        resp = client.post(f"/api/problems/{problem['id']}/evaluate", json={"points": points})
        item = resp.json()["item"]
        assert item["isCorrect"] is False
        assert item["summary"] == INCORRECT_SUMMARY
        assert item["missingPoints"] == [{"x": 2020.0, "y": 100.0}]
        assert item["unexpectedPoints"] == [{"x": 2020.0, "y": 90.0}]
        assert item["correctAnswer"]["explanation"] == problem["answer"]["explanation"]
        assert item["correctAnswer"]["steps"] == problem["answer"]["steps"]
        assert len(item["expectedPoints"]) == 4


def test_evaluate_unknown_problem_is_404_before_validation():
    with TestClient(app) as client:
        resp = client.post("/api/problems/does-not-exist/evaluate", json={"points": "nope"})
        assert resp.status_code == 404


def test_evaluate_rejects_oversized_submission():
    with TestClient(app) as client:
        problem = _first_problem(client, "Dog Show Line Graph")
        points = [{"x": i, "y": 0} for i in range(501)]
        resp = client.post(f"/api/problems/{problem['id']}/evaluate", json={"points": points})
        assert resp.status_code == 400
        assert resp.json()["detail"]["message"] == "Invalid submission payload"


def test_evaluate_rejects_non_finite_coordinates():
    with TestClient(app) as client:
        problem = _first_problem(client, "Dog Show Line Graph")
        resp = client.post(
            f"/api/problems/{problem['id']}/evaluate",
            content='{"points": [{"x": Infinity, "y": 0}]}',
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json()["detail"]["message"] == "Invalid submission payload"


def test_create_problem_reports_bad_answer_point_location(problem_payload):
    problem_payload["answer"]["points"].append({"x": 3, "y": 42})
    with TestClient(app) as client:
        resp = client.post("/api/problems", json=problem_payload)
        assert resp.status_code == 400
        locs = [e["loc"] for e in resp.json()["detail"]["errors"]]
        assert ["answer", "points", 2, "y"] in locs


def test_missing_seed_file_is_logged(tmp_path, monkeypatch, caplog):
    monkeypatch.setattr(main, "DATA_PATH", tmp_path / "absent.json")
    with caplog.at_level(logging.WARNING, logger="backend.api.main"):
        with TestClient(app) as client:
            assert client.get("/api/problems").json()["items"] == []
            assert client.get("/api/health").json()["problems_loaded"] == 0

    assert "No problems file found" in caplog.text


def test_unexpected_error_returns_500(monkeypatch):
    def explode(problem, points):
        raise RuntimeError("boom")

    monkeypatch.setattr(main, "evaluate_submission", explode)
    with TestClient(app, raise_server_exceptions=False) as client:
        problem = _first_problem(client, "Dog Show Line Graph")
        resp = client.post(f"/api/problems/{problem['id']}/evaluate", json={"points": []})
        assert resp.status_code == 500
        assert resp.json() == {"message": "Unexpected server error"}
