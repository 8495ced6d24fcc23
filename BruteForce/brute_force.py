import logging

from Core.problem import ProblemInterface
from Core.search_algorithm import SearchAlgorithm

logger = logging.getLogger(__name__)


class BruteForceSearch(SearchAlgorithm):
    """
    Exhaustive enumeration of the search space.

    Starts from the problem's first solution and follows `next_solution()`
    until the enumeration wraps back to the start, keeping the best
    solution. For a TSP of n cities this visits all n! tours (rotations and
    reversed directions are not collapsed), so it is only usable on tiny
    instances. Each step visits one solution.
    """

    def __init__(self, problem: ProblemInterface, **kwargs):
        super().__init__(problem, population_size=1, **kwargs)
        self.start = None
        self.current = None
        self.evaluations = 0

    def initialize(self):
        self.iteration = 0
        self.finished = False
        self.evaluations = 0
        self.start = self.problem.get_first_solution()
        self.start.evaluate()
        self.current = self.start
        self.population = [self.current]
        self.best_solution = self.start.copy()

    def step(self):
        if self.finished:
            return
        self.current = self.current.next_solution()
        self.evaluations += 1
        if self.current < self.best_solution:
            self.best_solution = self.current.copy()
        self.population[0] = self.current
        self.iteration += 1
        if self.current == self.start:
            self.finished = True
            logger.info("Enumerated %d solutions, best goal %.6f",
                        self.evaluations, self.best_solution.goal())
