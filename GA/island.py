"""
Island-model genetic algorithm.

The population is split into contiguous demes, each evolved by its own
GeneticAlgorithm with a private random generator. Demes evolve concurrently
between synchronisation points; at every migration the best specimen of each
deme travels to both of its ring neighbours.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional

import numpy as np

from Core.problem import ProblemInterface, Solution
from GA.GA import GeneticAlgorithm
from GA.operators import IterationLimit, TerminationCondition

logger = logging.getLogger(__name__)

MIGRATION_POLICIES = ("replace", "append")


@dataclass
class IslandConfig:
    population_size: int = 10
    iteration_count: int = 10
    demes: int = 2
    migration_gap: int = 5
    migration_policy: str = "replace"
    workers: Optional[int] = None


class IslandModel:
    """
    Runs `config.demes` GeneticAlgorithm instances side by side.

    Args:
        problem (ProblemInterface): The optimization problem to solve.
        config (IslandConfig): Sizes, migration gap and policy.
        rng (np.random.Generator): Run generator; deme generators are spawned
            from it and migration draws from it.
        termination (TerminationCondition): Optional; consulted with the
            whole population before each generation. Defaults to an
            iteration limit of `config.iteration_count`.
        deme_factory (callable): Builds one deme from (population_size, rng).
            Defaults to a GeneticAlgorithm with default operators.
    """

    def __init__(self, problem: ProblemInterface, config: IslandConfig,
                 rng: Optional[np.random.Generator] = None,
                 termination: Optional[TerminationCondition] = None,
                 deme_factory: Optional[Callable[[int, np.random.Generator], GeneticAlgorithm]] = None):
        if config.demes < 1:
            raise ValueError("Number of demes must be at least 1.")
        if config.population_size < config.demes:
            raise ValueError("Population size must be at least the number of demes.")
        if config.migration_gap < 1:
            raise ValueError("Migration gap must be at least 1.")
        if config.migration_policy not in MIGRATION_POLICIES:
            raise ValueError(f"Unknown migration policy {config.migration_policy!r}; "
                             f"expected one of {', '.join(MIGRATION_POLICIES)}")

        self.problem = problem
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng()
        self.termination = termination or IterationLimit(config.iteration_count)
        self.deme_sizes = [len(chunk) for chunk in np.array_split(np.arange(config.population_size), config.demes)]
        if config.migration_policy == "append" and min(self.deme_sizes) < 2:
            raise ValueError("The append policy needs at least two specimens per deme.")

        if deme_factory is None:
            def deme_factory(size, deme_rng):
                return GeneticAlgorithm(problem, size, rng=deme_rng)

        self.demes: List[GeneticAlgorithm] = [
            deme_factory(size, child_rng)
            for size, child_rng in zip(self.deme_sizes, self.rng.spawn(config.demes))
        ]
        self.generation = 0
        self.migrations = 0

    @property
    def population(self) -> List[Solution]:
        return [s for deme in self.demes for s in deme.population]

    @property
    def fitnesses(self) -> np.ndarray:
        return np.concatenate([deme.fitnesses for deme in self.demes])

    def initialize(self):
        self.generation = 0
        self.migrations = 0
        for deme in self.demes:
            deme.initialize()

    def run(self) -> Solution:
        self.initialize()
        workers = self.config.workers or len(self.demes)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            while self.termination(self.population, self.fitnesses, self.generation):
                # Each deme only touches its own population and generator here.
                list(executor.map(lambda deme: deme.evolve_generation(), self.demes))
                if self.generation % self.config.migration_gap == self.config.migration_gap - 1:
                    self.migrate()
                self.generation += 1
        best = self.best()
        logger.info("Island model finished after %d generations and %d migrations, best goal %.6f",
                    self.generation, self.migrations, best.goal())
        return best

    def migrate(self):
        """Sends a copy of every deme's fittest specimen to both ring neighbours."""
        count = len(self.demes)
        migrants = [deme.fittest().copy(preserve_id=False) for deme in self.demes]

        if self.config.migration_policy == "append":
            for deme in self.demes:
                order = np.argsort(deme.fitnesses)[::-1]
                deme.population = [deme.population[i] for i in order[:-2]]

        for i, migrant in enumerate(migrants):
            for target in (self.demes[(i - 1) % count], self.demes[(i + 1) % count]):
                incoming = migrant.copy(preserve_id=False)
                if self.config.migration_policy == "replace":
                    target.population[int(self.rng.integers(0, len(target.population)))] = incoming
                else:
                    target.population.append(incoming)

        for deme in self.demes:
            deme.fitnesses = deme.compute_fitnesses(deme.population)
        self.migrations += 1
        logger.debug("Migration %d at generation %d", self.migrations, self.generation)

    def best(self) -> Solution:
        return max((deme.fittest() for deme in self.demes), key=lambda s: self.demes[0].fitness_fn(s))
