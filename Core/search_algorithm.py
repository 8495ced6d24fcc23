import abc
import logging
from typing import List, Optional, Sequence

import numpy as np

from .problem import ProblemInterface, Solution

logger = logging.getLogger(__name__)


class SearchAlgorithm(abc.ABC):
    """
    Base of every engine: owns the population, the best solution seen and
    the run's random generator, and is driven by `initialize()` followed by
    `step()` calls until `finished` is set.
    """

    def __init__(
        self,
        problem: ProblemInterface,
        population_size: int,
        *,
        rng: Optional[np.random.Generator] = None,
        initial_population: Optional[Sequence[Solution]] = None,
        **kwargs,
    ):
        """
        Args:
            problem: The problem being optimised.
            population_size: Number of solutions kept between steps (1 for
                single-state searches).
            rng: Random generator shared by every random decision of the run.
                A freshly seeded generator is created when omitted.
            initial_population: Optional starting solutions used instead of
                random ones (copied, never mutated).
            **kwargs: Engine-specific settings, kept in `_config`.
        """
        if population_size < 1:
            raise ValueError("Population size must be at least 1.")
        self.problem = problem
        self.population_size = population_size
        self.rng = rng if rng is not None else np.random.default_rng()
        self.population: List[Solution] = []
        self.best_solution: Optional[Solution] = None
        self.iteration = 0
        self.finished = False
        self._initial_population = list(initial_population) if initial_population else None
        self._config = kwargs

    def initialize(self):
        """Builds and evaluates the starting population; call once before stepping."""
        self.iteration = 0
        self.finished = False
        self.best_solution = None
        if self._initial_population:
            self.population = [sol.copy(preserve_id=False) for sol in self._initial_population]
        else:
            self.population = self.problem.get_initial_population(self.population_size, self.rng)
        for sol in self.population:
            sol.evaluate()
        self._update_best_solution()

    @abc.abstractmethod
    def step(self):
        """
        Advances the search by one iteration (or generation) and sets
        `finished` once there is nothing left to do.
        """

    def run(self) -> Optional[Solution]:
        """Initializes the algorithm and steps it until it finishes."""
        self.initialize()
        while not self.finished:
            self.step()
        logger.debug("%s finished after %d iterations", type(self).__name__, self.iteration)
        return self.get_best_solution()

    def _update_best_solution(self):
        candidate = min(self.population, default=None)
        if candidate is not None:
            if self.best_solution is None or candidate < self.best_solution:
                # The population may be rebuilt later; keep a private copy.
                self.best_solution = candidate.copy()

    def get_best_solution(self) -> Optional[Solution]:
        """The result of the run; None before `initialize()`."""
        return self.best_solution
