"""
SA-based TSP Solver.

Wraps the generic Simulated Annealing engine. Moves are random
single-position perturbations of the Lehmer code, so every neighbour is a
valid tour without any repair step.
"""

import logging
from typing import Mapping

import numpy as np

from Core.utils import option_float, option_int
from SA.SA import SimulatedAnnealing
from TSP.TSP import TSPProblem, TourSolution

logger = logging.getLogger(__name__)


class TSPSASolver:
    """
    Simulated Annealing solver for the Traveling Salesman Problem.

    Options: `iterations` (1000), `initial_temperature` (100.0),
    `final_temperature` (1e-3), `cooling_rate` (0.99), `moves_per_temp` (1),
    `neighbour_count` (1).
    """

    def __init__(
        self,
        tsp_problem: TSPProblem,
        *,
        rng: np.random.Generator,
        initial_temp: float = 100.0,
        final_temp: float = 1e-3,
        alpha: float = 0.99,
        moves_per_temp: int = 1,
        max_iterations: int = 1000,
        neighbour_count: int = 1,
    ):
        self.tsp_problem = tsp_problem
        self.rng = rng
        self.initial_temp = initial_temp
        self.final_temp = final_temp
        self.alpha = alpha
        self.moves_per_temp = moves_per_temp
        self.max_iterations = max_iterations
        self.neighbour_count = neighbour_count
        self.final_state = None

    @classmethod
    def from_options(cls, tsp_problem, options: Mapping[str, str], rng):
        return cls(
            tsp_problem,
            rng=rng,
            initial_temp=option_float(options, "initial_temperature", 100.0),
            final_temp=option_float(options, "final_temperature", 1e-3),
            alpha=option_float(options, "cooling_rate", 0.99),
            moves_per_temp=option_int(options, "moves_per_temp", 1, min_value=1),
            max_iterations=option_int(options, "iterations", 1000, min_value=0),
            neighbour_count=option_int(options, "neighbour_count", 1, min_value=1),
        )

    def solve(self) -> TourSolution:
        logger.debug("T0: %s, Tf: %s, alpha: %s, moves/Temp: %s, iterations: %s",
                     self.initial_temp, self.final_temp, self.alpha, self.moves_per_temp, self.max_iterations)
        sa = SimulatedAnnealing(
            self.tsp_problem,
            initial_temperature=self.initial_temp,
            final_temperature=self.final_temp,
            cooling_rate=self.alpha,
            moves_per_temp=self.moves_per_temp,
            max_iterations=self.max_iterations,
            neighbour_count=self.neighbour_count,
            rng=self.rng,
        )
        best = sa.run()
        self.final_state = sa.get_state()
        return best.get_solution()
