"""
Hill climbing over a problem neighbourhood.

Both variants keep a single current solution and only ever accept strictly
better moves.
"""

import logging

from Core.problem import ProblemInterface, Solution
from Core.search_algorithm import SearchAlgorithm

logger = logging.getLogger(__name__)


class StochasticHillClimbing(SearchAlgorithm):
    """
    Randomised hill climbing: each iteration draws one random neighbour and
    moves there if it is strictly better. Runs the full iteration budget and
    reports whatever solution is current at the end.

    Args:
        problem (ProblemInterface): The optimization problem to solve.
        max_iterations (int): Number of neighbours to try.
        neighbour_count (int): Random moves combined into one neighbour.
    """

    def __init__(self, problem: ProblemInterface, max_iterations: int = 1000,
                 neighbour_count: int = 1, **kwargs):
        super().__init__(problem, population_size=1, **kwargs)
        if neighbour_count < 1:
            raise ValueError("Neighbour count must be at least 1.")
        self.max_iterations = max_iterations
        self.neighbour_count = neighbour_count
        self.current_solution: Solution = None

    def initialize(self):
        super().initialize()
        self.current_solution = self.population[0]
        self.finished = self.max_iterations <= 0

    def step(self):
        if self.finished:
            return
        neighbour = self.problem.get_random_neighbour(self.current_solution, self.rng, self.neighbour_count)
        if neighbour < self.current_solution:
            self.current_solution = neighbour
            self.population[0] = neighbour
        self.iteration += 1
        if self.iteration >= self.max_iterations:
            self.finished = True

    def get_best_solution(self):
        return self.current_solution


class DeterministicHillClimbing(SearchAlgorithm):
    """
    Steepest descent: each iteration evaluates the whole neighbourhood and
    moves to its best member if that is strictly better than the current
    solution. Otherwise a local optimum has been reached and the search
    stops at once, possibly well before `max_iterations`.
    """

    def __init__(self, problem: ProblemInterface, max_iterations: int = 1000, **kwargs):
        super().__init__(problem, population_size=1, **kwargs)
        self.max_iterations = max_iterations
        self.current_solution: Solution = None
        self.stopped_early = False

    def initialize(self):
        super().initialize()
        self.current_solution = self.population[0]
        self.stopped_early = False
        self.finished = self.max_iterations <= 0

    def step(self):
        if self.finished:
            return
        neighbours = self.problem.get_neighbours(self.current_solution)
        if not neighbours:
            self._stop_at_local_optimum()
            return
        # Ties keep the last neighbour or the first one that was strictly better.
        current_best = neighbours[-1]
        for candidate in neighbours:
            if candidate < current_best:
                current_best = candidate

        if current_best < self.current_solution:
            self.current_solution = current_best
            self.population[0] = current_best
            self.iteration += 1
            if self.iteration >= self.max_iterations:
                self.finished = True
        else:
            self._stop_at_local_optimum()

    def _stop_at_local_optimum(self):
        self.finished = True
        self.stopped_early = True
        logger.info("Local optimum reached at iteration %d (before %d)",
                    self.iteration, self.max_iterations)

    def get_best_solution(self):
        return self.current_solution
