"""
Hill-climbing TSP solvers over the Lehmer-code neighbourhood.
"""

import logging
from typing import Mapping

import numpy as np

from Core.utils import option_int
from HillClimbing.hill_climbing import DeterministicHillClimbing, StochasticHillClimbing
from TSP.TSP import TSPProblem, TourSolution

logger = logging.getLogger(__name__)


class TSPHillClimbingSolver:
    """
    Stochastic hill climbing from one random code.

    Options: `iterations` (default 1000), `neighbour_count` (default 1).
    """

    def __init__(self, tsp_problem: TSPProblem, *, rng: np.random.Generator,
                 max_iterations: int = 1000, neighbour_count: int = 1):
        self.tsp_problem = tsp_problem
        self.rng = rng
        self.max_iterations = max_iterations
        self.neighbour_count = neighbour_count

    @classmethod
    def from_options(cls, tsp_problem, options: Mapping[str, str], rng):
        return cls(
            tsp_problem,
            rng=rng,
            max_iterations=option_int(options, "iterations", 1000, min_value=0),
            neighbour_count=option_int(options, "neighbour_count", 1, min_value=1),
        )

    def solve(self) -> TourSolution:
        search = StochasticHillClimbing(
            self.tsp_problem,
            max_iterations=self.max_iterations,
            neighbour_count=self.neighbour_count,
            rng=self.rng,
        )
        return search.run().get_solution()


class TSPDeterministicHillClimbingSolver:
    """
    Steepest-descent hill climbing; stops at the first local optimum.

    Options: `iterations` (default 1000).
    """

    def __init__(self, tsp_problem: TSPProblem, *, rng: np.random.Generator, max_iterations: int = 1000):
        self.tsp_problem = tsp_problem
        self.rng = rng
        self.max_iterations = max_iterations
        self.stopped_early = False

    @classmethod
    def from_options(cls, tsp_problem, options: Mapping[str, str], rng):
        return cls(tsp_problem, rng=rng, max_iterations=option_int(options, "iterations", 1000, min_value=0))

    def solve(self) -> TourSolution:
        search = DeterministicHillClimbing(self.tsp_problem, max_iterations=self.max_iterations, rng=self.rng)
        best = search.run()
        self.stopped_early = search.stopped_early
        return best.get_solution()
