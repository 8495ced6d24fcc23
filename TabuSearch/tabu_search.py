import logging
from collections import deque
from typing import Deque, List

from Core.problem import ProblemInterface, Solution
from Core.search_algorithm import SearchAlgorithm

logger = logging.getLogger(__name__)


class TabuSearch(SearchAlgorithm):
    """
    Tabu search over the full problem neighbourhood.

    The tabu list holds recently visited solutions, oldest first. Every
    iteration expands the newest entry, discards neighbours that are tabu and
    moves to the best remaining one, even when it is worse. The best
    solution ever visited is tracked apart from the list.

    When every neighbour is tabu, the oldest entry is released and the next
    iteration retries; with a single entry left the search ends.

    Args:
        problem (ProblemInterface): The optimization problem to solve.
        max_iterations (int): Iteration budget.
        max_tabu_size (int): Longest allowed tabu list.
    """

    def __init__(self, problem: ProblemInterface, max_iterations: int = 1000,
                 max_tabu_size: int = 50, **kwargs):
        super().__init__(problem, population_size=1, **kwargs)
        if max_tabu_size < 1:
            raise ValueError("Tabu list size must be at least 1.")
        self.max_iterations = max_iterations
        self.max_tabu_size = max_tabu_size
        self.tabu_list: Deque[Solution] = deque()
        # Neighbours that survived the tabu filter in the last iteration.
        self.candidates: List[Solution] = []

    def initialize(self):
        super().initialize()
        self.tabu_list = deque([self.population[0]])
        self.candidates = []
        self.finished = self.max_iterations <= 0

    def step(self):
        if self.finished:
            return
        tabu = set(self.tabu_list)
        neighbours = self.problem.get_neighbours(self.tabu_list[-1])
        self.candidates = [n for n in neighbours if n not in tabu]

        if not self.candidates:
            if len(self.tabu_list) > 1:
                self.tabu_list.popleft()
            else:
                self.finished = True
                logger.info("Neighbourhood exhausted at iteration %d", self.iteration)
                return
        else:
            current_best = self.candidates[-1]
            for candidate in self.candidates:
                if candidate < current_best:
                    current_best = candidate
            self.tabu_list.append(current_best)
            self.population[0] = current_best
            if current_best < self.best_solution:
                self.best_solution = current_best.copy()
            if len(self.tabu_list) > self.max_tabu_size:
                self.tabu_list.popleft()

        self.iteration += 1
        if self.iteration >= self.max_iterations:
            self.finished = True
