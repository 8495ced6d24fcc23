# Third-party packages
import numpy as np

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

# Local project modules
from Core.problem import ProblemInterface, Solution


@dataclass(frozen=True)
class City:
    """A named city with two coordinates (latitude/longitude or planar x/y)."""
    name: str
    x: float
    y: float


class TSPProblem(ProblemInterface):
    """
    Represents the Traveling Salesperson Problem (TSP).

    The city list and the distance matrix are fixed at construction; every
    solution built for this problem only keeps a reference to it.
    """
    def __init__(self, cities: Sequence[City]):
        """
        Initializes the TSP problem instance.

        Args:
            cities: The cities to visit, at least one.
        """
        if not cities:
            raise ValueError("A TSP problem needs at least one city.")
        self.cities = tuple(cities)
        coords = np.array([(c.x, c.y) for c in self.cities], dtype=float)
        diff = coords[:, None, :] - coords[None, :, :]
        self.distances = np.hypot(diff[..., 0], diff[..., 1])
        self.distances.setflags(write=False)

    def __len__(self) -> int:
        return len(self.cities)

    @property
    def city_coords(self) -> List[tuple]:
        return [(c.x, c.y) for c in self.cities]

    def evaluate(self, solution: Solution) -> float:
        """
        Calculates the total length of the closed tour encoded by the solution.

        Args:
            solution: A TourSolution or AlternativeSolution of this problem.

        Returns:
            The tour length (goal value).
        """
        return self.tour_length(solution.tour())

    def tour_length(self, tour: Sequence[int]) -> float:
        """
        Calculates the total Euclidean length of a tour given as city indices.
        The tour implicitly returns to its first city.
        """
        path = np.asarray(tour, dtype=int)
        return float(self.distances[path, np.roll(path, -1)].sum())

    def get_initial_solution(self, rng: np.random.Generator) -> 'AlternativeSolution':
        return AlternativeSolution.of(self, rng)

    def get_first_solution(self) -> 'TourSolution':
        return TourSolution.identity(self)

    def get_neighbours(self, solution: 'AlternativeSolution') -> List['AlternativeSolution']:
        return generate_neighbours(solution)

    def get_random_neighbour(self, solution: 'AlternativeSolution', rng: np.random.Generator,
                             count: int = 1) -> 'AlternativeSolution':
        return solution.generate_random_neighbour(count, rng)

    def get_problem_info(self) -> Dict[str, Any]:
        """
        Provides essential information about the TSP instance.

        `upper_bounds` holds the exclusive bound of every position of the
        alternative (Lehmer code) representation.
        """
        n = len(self.cities)
        return {
            'dimension': n,
            'problem_type': 'permutation',
            'upper_bounds': [n - i for i in range(n)],
            'cities': self.city_coords,
        }


class TourSolution(Solution):
    """Canonical tour: a permutation of city indices, implicitly closed."""

    @classmethod
    def identity(cls, problem: TSPProblem) -> 'TourSolution':
        return cls(list(range(len(problem))), problem)

    def tour(self) -> List[int]:
        return list(self.representation)

    def cities(self) -> List[City]:
        return [self.problem.cities[i] for i in self.representation]

    def next_solution(self) -> 'TourSolution':
        """
        Returns the lexicographically next permutation.
        The last permutation wraps around to the identity.
        """
        perm = list(self.representation)
        i = len(perm) - 2
        while i >= 0 and perm[i] >= perm[i + 1]:
            i -= 1
        if i < 0:
            return self.spawn(perm[::-1])
        j = len(perm) - 1
        while perm[j] <= perm[i]:
            j -= 1
        perm[i], perm[j] = perm[j], perm[i]
        perm[i + 1:] = reversed(perm[i + 1:])
        return self.spawn(perm)


class AlternativeSolution(Solution):
    """
    Tour encoded as a Lehmer code.

    Position i holds a value strictly below n - i: the index of the next city
    in the pool of cities not yet visited. The last position is therefore
    always 0. Every code respecting these bounds decodes to a valid tour, so
    point mutations and crossovers never need repair.
    """

    @classmethod
    def of(cls, problem: TSPProblem, rng: np.random.Generator) -> 'AlternativeSolution':
        """Builds a uniformly random valid code."""
        n = len(problem)
        return cls([int(rng.integers(0, n - i)) for i in range(n)], problem)

    @classmethod
    def from_solution(cls, solution: TourSolution) -> 'AlternativeSolution':
        """Encodes a canonical tour."""
        pool = list(range(len(solution.problem)))
        code = []
        for city in solution.representation:
            idx = pool.index(city)
            code.append(idx)
            pool.pop(idx)
        return cls(code, solution.problem)

    def bound(self, position: int) -> int:
        return len(self.representation) - position

    def is_valid(self) -> bool:
        n = len(self.problem)
        return len(self.representation) == n and all(
            0 <= value < n - i for i, value in enumerate(self.representation))

    def tour(self) -> List[int]:
        pool = list(range(len(self.representation)))
        return [pool.pop(value) for value in self.representation]

    def get_solution(self) -> TourSolution:
        solution = TourSolution(self.tour(), self.problem)
        solution._goal = self._goal
        return solution

    def generate_random_neighbour(self, count: int, rng: np.random.Generator) -> 'AlternativeSolution':
        """Applies `count` random +/-1 moves, each modulo the bound of its position."""
        code = list(self.representation)
        n = len(code)
        if n < 2:
            return self.spawn(code)
        for _ in range(count):
            i = int(rng.integers(0, n - 1))
            step = 1 if rng.integers(0, 2) else -1
            code[i] = (code[i] + step) % (n - i)
        return self.spawn(code)


def generate_neighbours(solution: AlternativeSolution) -> List[AlternativeSolution]:
    """
    Returns the 2(n-1) neighbours of a code: for every position but the last,
    its value incremented and then decremented modulo the position bound.
    """
    code = solution.representation
    n = len(code)
    neighbours = []
    for i in range(n - 1):
        modulus = n - i
        for step in (1, -1):
            neighbour = list(code)
            neighbour[i] = (neighbour[i] + step) % modulus
            neighbours.append(solution.spawn(neighbour))
    return neighbours
