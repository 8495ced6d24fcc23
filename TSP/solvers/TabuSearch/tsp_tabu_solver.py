from typing import Mapping

import numpy as np

from Core.utils import option_int
from TabuSearch.tabu_search import TabuSearch
from TSP.TSP import TSPProblem, TourSolution


class TSPTabuSolver:
    """
    Tabu search over the Lehmer-code neighbourhood.

    Options: `iterations` (default 1000), `max_tabu_size` (default 50).
    """

    def __init__(self, tsp_problem: TSPProblem, *, rng: np.random.Generator,
                 max_iterations: int = 1000, max_tabu_size: int = 50):
        self.tsp_problem = tsp_problem
        self.rng = rng
        self.max_iterations = max_iterations
        self.max_tabu_size = max_tabu_size

    @classmethod
    def from_options(cls, tsp_problem, options: Mapping[str, str], rng):
        return cls(
            tsp_problem,
            rng=rng,
            max_iterations=option_int(options, "iterations", 1000, min_value=0),
            max_tabu_size=option_int(options, "max_tabu_size", 50, min_value=1),
        )

    def solve(self) -> TourSolution:
        search = TabuSearch(self.tsp_problem, max_iterations=self.max_iterations,
                            max_tabu_size=self.max_tabu_size, rng=self.rng)
        return search.run().get_solution()
