"""
Brute-force TSP solver.

Enumerates every permutation of the cities, so it is only usable for very
small instances (about 10 cities or fewer).
"""

import logging
from typing import Mapping, Optional

import numpy as np

from BruteForce.brute_force import BruteForceSearch
from TSP.TSP import TSPProblem, TourSolution

logger = logging.getLogger(__name__)


class TSPBruteForceSolver:
    """Exact solver; takes no options and uses no randomness."""

    def __init__(self, tsp_problem: TSPProblem):
        self.tsp_problem = tsp_problem
        self.evaluations = 0

    @classmethod
    def from_options(cls, tsp_problem: TSPProblem, options: Mapping[str, str],
                     rng: Optional[np.random.Generator] = None) -> 'TSPBruteForceSolver':
        return cls(tsp_problem)

    def solve(self) -> TourSolution:
        if len(self.tsp_problem) > 10:
            logger.warning("Brute force over %d cities visits %d! tours", len(self.tsp_problem), len(self.tsp_problem))
        search = BruteForceSearch(self.tsp_problem)
        best = search.run()
        self.evaluations = search.evaluations
        return best
