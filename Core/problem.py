import abc
from itertools import count
from typing import Any, Dict, List, Optional

import numpy as np


class Solution:
    """Represents a candidate solution; the goal value is minimised."""
    _id_counter = count()

    def __init__(self, representation: Any, problem: 'ProblemInterface', *, solution_id: Optional[int] = None):
        self.representation = representation
        self.problem = problem
        self.id: int = int(next(self._id_counter) if solution_id is None else solution_id)
        self._goal: Optional[float] = None

    def goal(self) -> float:
        """Returns the goal value, evaluating it on first access."""
        if self._goal is None:
            self._goal = float(self.problem.evaluate(self))
        return self._goal

    def evaluate(self) -> float:
        return self.goal()

    @property
    def is_evaluated(self) -> bool:
        return self._goal is not None

    def spawn(self, representation: Any) -> 'Solution':
        """Creates a new, unevaluated solution of the same kind for the same problem."""
        return type(self)(representation, self.problem)

    def copy(self, *, preserve_id: bool = True) -> 'Solution':
        """Shallow copy of the representation list; the cached goal is kept.

        Args:
            preserve_id: Keep `id` (default). Pass False when the copy enters a
                population as an individual of its own.
        """
        new_id = self.id if preserve_id else None
        new_solution = type(self)(list(self.representation), self.problem, solution_id=new_id)
        new_solution._goal = self._goal
        return new_solution

    def __lt__(self, other: 'Solution') -> bool:
        return self.goal() < other.goal()

    def __gt__(self, other: 'Solution') -> bool:
        return self.goal() > other.goal()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Solution):
            return NotImplemented
        return list(self.representation) == list(other.representation)

    def __hash__(self) -> int:
        return hash(tuple(self.representation))

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.representation}, goal: {self._goal})"

    __repr__ = __str__


class ProblemInterface(abc.ABC):
    """
    What a search engine needs from a problem: evaluation, random starting
    points and, optionally, enumeration and neighbourhoods.
    """

    @abc.abstractmethod
    def evaluate(self, solution: Solution) -> float:
        """
        Evaluates the goal value of a given solution. Lower values are better.

        Args:
            solution: A solution of this problem.

        Returns:
            The goal value (float).
        """

    @abc.abstractmethod
    def get_initial_solution(self, rng: np.random.Generator) -> Solution:
        """
        Generates a single random, valid initial solution.

        Args:
            rng: The random generator of the current run.

        Returns:
            A valid solution, not yet evaluated.
        """

    @abc.abstractmethod
    def get_problem_info(self) -> Dict[str, Any]:
        """
        Describes the search space.
        Examples: 'dimension', 'upper_bounds', 'problem_type'.
        """

    def get_initial_population(self, population_size: int, rng: np.random.Generator) -> List[Solution]:
        """
        Independent random solutions; override for seeded or diverse starts.
        """
        return [self.get_initial_solution(rng) for _ in range(population_size)]

    def get_first_solution(self) -> Solution:
        """
        Optional hook returning the starting point of an exhaustive enumeration.
        The returned solution must provide `next_solution()`.
        """
        raise NotImplementedError(f"{type(self).__name__} does not support exhaustive enumeration")

    def get_neighbours(self, solution: Solution) -> List[Solution]:
        """
        Optional hook returning the full neighbourhood of a solution, in a fixed order.
        """
        raise NotImplementedError(f"{type(self).__name__} does not define a neighbourhood")

    def get_random_neighbour(self, solution: Solution, rng: np.random.Generator, count: int = 1) -> Solution:
        """
        Optional hook returning one random neighbour obtained by `count` random moves.
        """
        raise NotImplementedError(f"{type(self).__name__} does not define a neighbourhood")
