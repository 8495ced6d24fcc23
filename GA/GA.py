import logging
from typing import Callable, List, Optional

import numpy as np

from Core.problem import ProblemInterface, Solution
from Core.search_algorithm import SearchAlgorithm
from GA.operators import (
    CrossoverStrategy,
    IterationLimit,
    MutationStrategy,
    OnePointCrossover,
    RandomResetMutation,
    SelectionStrategy,
    TerminationCondition,
    TournamentSelection,
    inverse_goal_fitness,
)

logger = logging.getLogger(__name__)


class GeneticAlgorithm(SearchAlgorithm):
    """
    Generational genetic algorithm with pluggable operators.

    Each generation computes the fitness vector, asks the termination
    condition whether to continue, selects `population_size` parents, crosses
    consecutive pairs and mutates every child. The children replace the whole
    population. The result is the fittest specimen of the final population.

    Args:
        problem (ProblemInterface): The optimization problem to solve.
        population_size (int): Number of specimens per generation.
        selection (SelectionStrategy): Parent selection, tournament by default.
        crossover (CrossoverStrategy): Pair recombination, one-point by default.
        mutation (MutationStrategy): Child mutation; by default one position is
            redrawn within the problem's `upper_bounds`.
        termination (TerminationCondition): Called before each generation.
        crossover_probability (float): Chance that a pair is recombined.
        mutation_probability (float): Chance that a child is mutated.
        fitness_fn (callable): Solution -> fitness, higher is better.
    """

    def __init__(self, problem: ProblemInterface, population_size: int = 10,
                 selection: Optional[SelectionStrategy] = None,
                 crossover: Optional[CrossoverStrategy] = None,
                 mutation: Optional[MutationStrategy] = None,
                 termination: Optional[TerminationCondition] = None,
                 crossover_probability: float = 0.9,
                 mutation_probability: float = 0.1,
                 fitness_fn: Callable[[Solution], float] = inverse_goal_fitness,
                 **kwargs):
        super().__init__(problem, population_size, **kwargs)
        for name, value in (("Crossover", crossover_probability), ("Mutation", mutation_probability)):
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} probability must be between 0 and 1.")

        self.selection = selection or TournamentSelection()
        self.crossover = crossover or OnePointCrossover()
        if mutation is None:
            mutation = RandomResetMutation(problem.get_problem_info()["upper_bounds"])
        self.mutation = mutation
        self.termination = termination or IterationLimit()
        self.crossover_probability = crossover_probability
        self.mutation_probability = mutation_probability
        self.fitness_fn = fitness_fn
        self.fitnesses = np.zeros(0)

    def initialize(self):
        super().initialize()
        self.fitnesses = self.compute_fitnesses(self.population)

    def compute_fitnesses(self, population: List[Solution]) -> np.ndarray:
        return np.array([self.fitness_fn(s) for s in population], dtype=float)

    def step(self):
        if self.finished:
            return
        if not self.termination(self.population, self.fitnesses, self.iteration):
            self.finished = True
            logger.debug("Termination after %d generations", self.iteration)
            return
        self.evolve_generation()

    def evolve_generation(self):
        """Breeds the next generation, without consulting the termination condition."""
        parents = [self.population[self.selection.select(self.fitnesses, self.rng)]
                   for _ in range(self.population_size)]

        offspring: List[Solution] = []
        for i in range(0, len(parents) - 1, 2):
            a, b = parents[i], parents[i + 1]
            if self.rng.random() < self.crossover_probability:
                a, b = self.crossover.crossover(a, b, self.rng)
            offspring.extend((a, b))
        if len(parents) % 2:
            offspring.append(parents[-1])

        self.population = [
            self.mutation.mutate(child, self.rng) if self.rng.random() < self.mutation_probability else child
            for child in offspring
        ]
        self.fitnesses = self.compute_fitnesses(self.population)
        self._update_best_solution()
        self.iteration += 1

    def fittest(self) -> Solution:
        return self.population[int(np.argmax(self.fitnesses))]

    def get_best_solution(self) -> Optional[Solution]:
        if not self.population:
            return None
        return self.fittest()
