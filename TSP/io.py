"""
Reading problems and writing solutions as JSON documents.

A problem document is either a list of cities or an object with a `cities`
list. Each city is a `[name, coordinate1, coordinate2]` triple or an object
with a `name` and one of the coordinate pairs below. The solution document
lists the visited cities in tour order as triples together with the scaled
tour length.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, TextIO, Union

from .TSP import City, TSPProblem, TourSolution

logger = logging.getLogger(__name__)

DEFAULT_GOAL_SCALE = 1000.0

_COORDINATE_KEYS = (("x", "y"), ("latitude", "longitude"), ("coordinate1", "coordinate2"))


def _parse_city(element: Any, position: int) -> City:
    if isinstance(element, dict):
        name = element.get("name")
        for first, second in _COORDINATE_KEYS:
            if first in element and second in element:
                coords = (element[first], element[second])
                break
        else:
            raise ValueError(f"City #{position} has no coordinate pair: {element!r}")
    elif isinstance(element, (list, tuple)) and len(element) == 3:
        name, coords = element[0], (element[1], element[2])
    else:
        raise ValueError(f"City #{position} must be a [name, c1, c2] triple or an object: {element!r}")

    if not isinstance(name, str):
        raise ValueError(f"City #{position} needs a string name: {element!r}")
    try:
        x, y = (float(c) for c in coords)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"City #{position} has non-numeric coordinates: {element!r}") from exc
    return City(name, x, y)


def problem_from_document(document: Any) -> TSPProblem:
    """Builds the problem from an already decoded JSON document."""
    cities_doc = document.get("cities") if isinstance(document, dict) else document
    if not isinstance(cities_doc, list):
        raise ValueError("Problem document must be a list of cities or contain a 'cities' list.")
    cities = [_parse_city(element, i) for i, element in enumerate(cities_doc)]
    return TSPProblem(cities)


def load_problem(stream: TextIO) -> TSPProblem:
    try:
        document = json.load(stream)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Problem document is not valid JSON: {exc}") from exc
    problem = problem_from_document(document)
    logger.info("Loaded problem with %d cities", len(problem))
    return problem


def load_problem_file(path: Union[str, Path]) -> TSPProblem:
    with Path(path).open("r", encoding="utf-8") as stream:
        return load_problem(stream)


def solution_to_document(solution: TourSolution, goal_scale: float = DEFAULT_GOAL_SCALE) -> Dict[str, Any]:
    """
    Returns the serialisable form of a canonical tour.

    Args:
        solution: The tour to write.
        goal_scale: The tour length is divided by this value.
    """
    if goal_scale <= 0:
        raise ValueError("goal_scale must be positive.")
    cities: List[List[Any]] = [[c.name, c.x, c.y] for c in solution.cities()]
    return {"cities": cities, "goal": solution.goal() / goal_scale}


def dump_solution(solution: TourSolution, stream: TextIO, goal_scale: float = DEFAULT_GOAL_SCALE) -> None:
    json.dump(solution_to_document(solution, goal_scale), stream, indent=4)
    stream.write("\n")
