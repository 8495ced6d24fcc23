"""
Genetic operators: fitness transform, selection, crossover, mutation and
termination.

Operators work on the integer-list representation of a solution and draw
all randomness from the generator passed in. Crossover and mutation rely on
the problem's `upper_bounds` (exclusive bound of every position): since any
value within the bounds is valid, exchanging or redrawing single positions
never produces an invalid individual.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple, Type

import numpy as np

from Core.problem import Solution

logger = logging.getLogger(__name__)

FITNESS_SCALE = 10_000_000.0


def inverse_goal_fitness(solution: Solution) -> float:
    """Monotonically decreasing transform of the goal: higher fitness, shorter tour."""
    return FITNESS_SCALE / (1.0 + solution.goal())


def standard_deviation(values: Sequence[float]) -> float:
    """Sample standard deviation (divides by N-1); 0.0 for fewer than two values."""
    n = len(values)
    if n < 2:
        return 0.0
    mean = sum(values) / n
    return math.sqrt(sum((v - mean) ** 2 for v in values) / (n - 1))


# --- Selection ---------------------------------------------------------------

class SelectionStrategy(ABC):
    """Picks one specimen given only the fitness vector; returns its index."""

    @abstractmethod
    def select(self, fitnesses: Sequence[float], rng: np.random.Generator) -> int:
        pass


class TournamentSelection(SelectionStrategy):
    """Two random specimens compete; the fitter wins (the second on a tie)."""

    def select(self, fitnesses, rng):
        first = int(rng.integers(0, len(fitnesses)))
        second = int(rng.integers(0, len(fitnesses)))
        return first if fitnesses[first] > fitnesses[second] else second


class RouletteSelection(SelectionStrategy):
    """
    Fitness-proportionate selection. A value u is drawn from [0, sum); the
    fitnesses are subtracted from the sum starting at the last specimen until
    the remainder drops to u or below. Index 0 is the fallback.
    """

    def select(self, fitnesses, rng):
        sum_fit = float(sum(fitnesses))
        u = rng.uniform(0.0, sum_fit)
        for i in range(len(fitnesses) - 1, -1, -1):
            sum_fit -= fitnesses[i]
            if sum_fit <= u:
                return i
        return 0


class RankSelection(SelectionStrategy):
    """Roulette over ranks 1..N of the fitnesses sorted ascending."""

    def __init__(self):
        self._roulette = RouletteSelection()

    def select(self, fitnesses, rng):
        order = sorted(range(len(fitnesses)), key=lambda i: fitnesses[i])
        ranks = [float(rank) for rank in range(1, len(fitnesses) + 1)]
        return order[self._roulette.select(ranks, rng)]


# --- Crossover ---------------------------------------------------------------

class CrossoverStrategy(ABC):
    """Builds two children from two parents."""

    @abstractmethod
    def crossover(self, parent1: Solution, parent2: Solution,
                  rng: np.random.Generator) -> Tuple[Solution, Solution]:
        pass

    @staticmethod
    def _swap_segment(parent1: Solution, parent2: Solution, start: int, end: int) -> Tuple[Solution, Solution]:
        genes1 = list(parent1.representation)
        genes2 = list(parent2.representation)
        genes1[start:end], genes2[start:end] = genes2[start:end], genes1[start:end]
        return parent1.spawn(genes1), parent2.spawn(genes2)


class OnePointCrossover(CrossoverStrategy):
    """Swaps everything from one random cut point to the end."""

    def crossover(self, parent1, parent2, rng):
        size = len(parent1.representation)
        cut = int(rng.integers(0, size))
        return self._swap_segment(parent1, parent2, cut, size)


class TwoPointCrossover(CrossoverStrategy):
    """Swaps the segment between two random cut points."""

    def crossover(self, parent1, parent2, rng):
        size = len(parent1.representation)
        a = int(rng.integers(0, size))
        b = int(rng.integers(0, size))
        if a > b:
            a, b = b, a
        return self._swap_segment(parent1, parent2, a, b)


# --- Mutation ----------------------------------------------------------------

class MutationStrategy(ABC):
    """Returns a mutated copy of a specimen."""

    @abstractmethod
    def mutate(self, chromosome: Solution, rng: np.random.Generator) -> Solution:
        pass


class RandomResetMutation(MutationStrategy):
    """
    Redraws one random position with a fresh value below its bound. Positions
    whose bound is 1 can only hold 0 and are never chosen.
    """

    def __init__(self, upper_bounds: Sequence[int]):
        self.upper_bounds = list(upper_bounds)
        self.mutable_positions = [i for i, bound in enumerate(self.upper_bounds) if bound > 1]

    def mutate(self, chromosome, rng):
        genes = list(chromosome.representation)
        if not self.mutable_positions:
            return chromosome.spawn(genes)
        position = self.mutable_positions[int(rng.integers(0, len(self.mutable_positions)))]
        genes[position] = int(rng.integers(0, self.upper_bounds[position]))
        return chromosome.spawn(genes)


# --- Termination ---------------------------------------------------------------

class TerminationCondition(ABC):
    """
    Decides, before every generation, whether the evolution continues.

    With `print_population_stats` every check also logs the max, mean and
    standard deviation of fitness followed by `goal/goal_scale:fitness` for
    every specimen.
    """

    def __init__(self, print_population_stats: bool = False, goal_scale: float = 1000.0):
        self.print_population_stats = print_population_stats
        self.goal_scale = goal_scale

    def __call__(self, population: List[Solution], fitnesses: Sequence[float], iteration: int) -> bool:
        if self.print_population_stats:
            self._log_stats(population, fitnesses, iteration)
        return self.should_continue(population, fitnesses, iteration)

    @abstractmethod
    def should_continue(self, population: List[Solution], fitnesses: Sequence[float], iteration: int) -> bool:
        pass

    def _log_stats(self, population, fitnesses, iteration):
        fit = list(fitnesses)
        specimens = " ".join(
            f"{s.goal() / self.goal_scale}:{f}" for s, f in zip(population, fit))
        logger.info("%d %s %s %s  %s", iteration, max(fit), sum(fit) / len(fit),
                    standard_deviation(fit), specimens)


class IterationLimit(TerminationCondition):
    """Continues while `iteration < iteration_count`."""

    def __init__(self, iteration_count: int = 10, **kwargs):
        super().__init__(**kwargs)
        self.iteration_count = iteration_count

    def should_continue(self, population, fitnesses, iteration):
        return iteration < self.iteration_count


class NoImprovement(TerminationCondition):
    """
    Stops once the best fitness has not improved for `patience` generations.
    The first check records the starting best at its iteration.
    """

    def __init__(self, patience: int = 100, **kwargs):
        super().__init__(**kwargs)
        if patience < 1:
            raise ValueError("Patience must be at least 1.")
        self.patience = patience
        self.best_fitness: Optional[float] = None
        self.last_improvement = 0

    def should_continue(self, population, fitnesses, iteration):
        current = max(fitnesses)
        if self.best_fitness is None or current > self.best_fitness:
            self.best_fitness = current
            self.last_improvement = iteration
        if iteration - self.last_improvement < self.patience:
            return True
        logger.info("No improvement for %d generations, finishing at %d", self.patience, iteration)
        return False


class FitnessConvergence(TerminationCondition):
    """Continues while the population standard deviation of fitness exceeds `epsilon`."""

    def __init__(self, epsilon: float = 1e-7, **kwargs):
        super().__init__(**kwargs)
        self.epsilon = epsilon

    def should_continue(self, population, fitnesses, iteration):
        return float(np.std(fitnesses)) > self.epsilon


# --- Named operators ---------------------------------------------------------

SELECTIONS: Dict[str, Type[SelectionStrategy]] = {
    "tournament_selection": TournamentSelection,
    "roulette_selection": RouletteSelection,
    "rank_selection": RankSelection,
}

CROSSOVERS: Dict[str, Type[CrossoverStrategy]] = {
    "crossover_one_point": OnePointCrossover,
    "crossover_two_point": TwoPointCrossover,
}

DEFAULT_SELECTION = "tournament_selection"
DEFAULT_CROSSOVER = "crossover_one_point"


def selection_by_name(name: str) -> SelectionStrategy:
    if name not in SELECTIONS:
        logger.warning("Unknown selection %r, falling back to %s", name, DEFAULT_SELECTION)
        name = DEFAULT_SELECTION
    return SELECTIONS[name]()


def crossover_by_name(name: str) -> CrossoverStrategy:
    if name not in CROSSOVERS:
        logger.warning("Unknown crossover %r, falling back to %s", name, DEFAULT_CROSSOVER)
        name = DEFAULT_CROSSOVER
    return CROSSOVERS[name]()


TERMINATIONS: Dict[str, Type[TerminationCondition]] = {
    "iteration_limit": IterationLimit,
    "no_improvement": NoImprovement,
    "fitness_convergence": FitnessConvergence,
}

DEFAULT_TERMINATION = "iteration_limit"
