"""
Genetic-algorithm TSP solvers.

Specimens are Lehmer codes, so the plain one- and two-point crossovers and
the single-position mutation always yield valid tours.
"""

import logging
from typing import Mapping, Optional

import numpy as np

from Core.utils import option_bool, option_choice, option_float, option_int, option_probability
from GA.GA import GeneticAlgorithm
from GA.island import MIGRATION_POLICIES, IslandConfig, IslandModel
from GA.operators import (
    DEFAULT_CROSSOVER,
    DEFAULT_SELECTION,
    DEFAULT_TERMINATION,
    TERMINATIONS,
    FitnessConvergence,
    IterationLimit,
    NoImprovement,
    TerminationCondition,
    crossover_by_name,
    selection_by_name,
)
from TSP.TSP import TSPProblem, TourSolution

logger = logging.getLogger(__name__)


def _positive_goal_scale(options: Mapping[str, str]) -> float:
    value = option_float(options, "goal_scale", 1000.0)
    if value <= 0:
        raise ValueError(f"goal_scale must be positive, got {value}")
    return value


class TSPGASolver:
    """
    Options: `population_size` (10), `iteration_count` (10),
    `crossover_probability` (0.9), `mutation_probability` (0.1),
    `selection` (tournament_selection), `crossover` (crossover_one_point),
    `termination` (iteration_limit, no_improvement or fitness_convergence),
    `patience` (100) for no_improvement, `epsilon` (1e-7) for
    fitness_convergence, `print_population_stats` (false) and `goal_scale`
    (1000) dividing the goals in those stats.
    """

    def __init__(self, tsp_problem: TSPProblem, *, rng: np.random.Generator,
                 population_size: int = 10, iteration_count: int = 10,
                 crossover_probability: float = 0.9, mutation_probability: float = 0.1,
                 selection: str = DEFAULT_SELECTION, crossover: str = DEFAULT_CROSSOVER,
                 termination: str = DEFAULT_TERMINATION, patience: int = 100, epsilon: float = 1e-7,
                 print_population_stats: bool = False, goal_scale: float = 1000.0):
        self.tsp_problem = tsp_problem
        self.rng = rng
        self.population_size = population_size
        self.iteration_count = iteration_count
        self.crossover_probability = crossover_probability
        self.mutation_probability = mutation_probability
        self.selection = selection
        self.crossover = crossover
        self.termination = termination
        self.patience = patience
        self.epsilon = epsilon
        self.print_population_stats = print_population_stats
        self.goal_scale = goal_scale

    @staticmethod
    def _common_options(options: Mapping[str, str]) -> dict:
        return dict(
            population_size=option_int(options, "population_size", 10, min_value=1),
            iteration_count=option_int(options, "iteration_count", 10, min_value=0),
            crossover_probability=option_probability(options, "crossover_probability", 0.9),
            mutation_probability=option_probability(options, "mutation_probability", 0.1),
            selection=options.get("selection") or DEFAULT_SELECTION,
            crossover=options.get("crossover") or DEFAULT_CROSSOVER,
            termination=option_choice(options, "termination", DEFAULT_TERMINATION, list(TERMINATIONS)),
            patience=option_int(options, "patience", 100, min_value=1),
            epsilon=option_float(options, "epsilon", 1e-7),
            print_population_stats=option_bool(options, "print_population_stats", False),
            goal_scale=_positive_goal_scale(options),
        )

    @classmethod
    def from_options(cls, tsp_problem, options: Mapping[str, str], rng):
        return cls(tsp_problem, rng=rng, **cls._common_options(options))

    def _termination(self) -> TerminationCondition:
        stats = dict(print_population_stats=self.print_population_stats, goal_scale=self.goal_scale)
        if self.termination == "no_improvement":
            return NoImprovement(self.patience, **stats)
        if self.termination == "fitness_convergence":
            return FitnessConvergence(self.epsilon, **stats)
        return IterationLimit(self.iteration_count, **stats)

    def _build_ga(self, population_size: int, rng: np.random.Generator,
                  termination: Optional[TerminationCondition] = None) -> GeneticAlgorithm:
        return GeneticAlgorithm(
            self.tsp_problem,
            population_size,
            selection=selection_by_name(self.selection),
            crossover=crossover_by_name(self.crossover),
            termination=termination,
            crossover_probability=self.crossover_probability,
            mutation_probability=self.mutation_probability,
            rng=rng,
        )

    def solve(self) -> TourSolution:
        ga = self._build_ga(self.population_size, self.rng, self._termination())
        return ga.run().get_solution()


class TSPIslandGASolver(TSPGASolver):
    """
    Island-model variant. Additional options: `demes` (2), `migration_gap`
    (5), `migration_policy` (replace or append), `workers` (one per deme).
    """

    def __init__(self, tsp_problem: TSPProblem, *, demes: int = 2, migration_gap: int = 5,
                 migration_policy: str = "replace", workers: Optional[int] = None, **kwargs):
        super().__init__(tsp_problem, **kwargs)
        self.demes = demes
        self.migration_gap = migration_gap
        self.migration_policy = migration_policy
        self.workers = workers
        self.model: Optional[IslandModel] = None

    @classmethod
    def from_options(cls, tsp_problem, options: Mapping[str, str], rng):
        workers = option_int(options, "workers", 0, min_value=0)
        return cls(
            tsp_problem,
            rng=rng,
            demes=option_int(options, "demes", 2, min_value=1),
            migration_gap=option_int(options, "migration_gap", 5, min_value=1),
            migration_policy=option_choice(options, "migration_policy", "replace", MIGRATION_POLICIES),
            workers=workers or None,
            **cls._common_options(options),
        )

    def solve(self) -> TourSolution:
        config = IslandConfig(
            population_size=self.population_size,
            iteration_count=self.iteration_count,
            demes=self.demes,
            migration_gap=self.migration_gap,
            migration_policy=self.migration_policy,
            workers=self.workers,
        )
        self.model = IslandModel(
            self.tsp_problem,
            config,
            rng=self.rng,
            termination=self._termination(),
            deme_factory=lambda size, deme_rng: self._build_ga(size, deme_rng),
        )
        return self.model.run().get_solution()
