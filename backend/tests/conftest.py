import copy

import pytest


LACROSSE_PROBLEM = {
    "title": "Lacrosse Games Scatter Plot",
    "question": "Make a scatter plot of fouls against points scored.",
    "instructions": "Click to graph a point.",
    "graphType": "scatter",
    "axis": {
        "x": {"label": "Fouls", "min": 0, "max": 10, "step": 1},
        "y": {"label": "Points", "min": 0, "max": 10, "step": 1},
    },
    "givenTable": {
        "title": "Lacrosse games",
        "headers": ["Fouls", "Points"],
        "rows": [[4, 5], [6, 0]],
    },
    "answer": {
        "points": [{"x": 4, "y": 5}, {"x": 6, "y": 0}],
        "explanation": "Each row becomes a point where x = fouls and y = points.",
        "steps": ["Read a row.", "Plot the pair."],
    },
}


@pytest.fixture
def problem_payload():
    return copy.deepcopy(LACROSSE_PROBLEM)
