"""
Named solution methods sharing the contract `(problem, options, rng) -> TourSolution`.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

import numpy as np

from .TSP import TSPProblem, TourSolution


@dataclass
class MethodDefinition:
    """Declarative description of a method and the solver class behind it."""
    name: str
    solver_cls: Any
    description: str = ""

    def build(self, problem: TSPProblem, options: Mapping[str, str], rng: np.random.Generator):
        return self.solver_cls.from_options(problem, options, rng)


_method_definitions: Dict[str, MethodDefinition] = {}
_BUILTINS_REGISTERED = False


def register_method(definition: MethodDefinition) -> None:
    """Register (or override) a method definition."""
    _method_definitions[definition.name] = definition


def get_method(name: str) -> MethodDefinition:
    _ensure_builtin_definitions()
    definition = _method_definitions.get(name)
    if definition is None:
        raise KeyError(f"Method '{name}' is not registered. Available methods: {', '.join(list_methods())}")
    return definition


def list_methods() -> List[str]:
    _ensure_builtin_definitions()
    return list(_method_definitions)


def run_method(name: str, problem: TSPProblem, options: Optional[Mapping[str, str]] = None,
               rng: Optional[np.random.Generator] = None) -> TourSolution:
    definition = get_method(name)
    if rng is None:
        rng = np.random.default_rng()
    solver = definition.build(problem, options or {}, rng)
    return solver.solve()


# --- Built-in definitions -------------------------------------------------

def _ensure_builtin_definitions():
    global _BUILTINS_REGISTERED
    if _BUILTINS_REGISTERED:
        return
    _BUILTINS_REGISTERED = True
    _register_builtin_definitions()


def _register_builtin_definitions():
    from .solvers.BruteForce.tsp_brute_force_solver import TSPBruteForceSolver
    from .solvers.GA.tsp_ga_solver import TSPGASolver, TSPIslandGASolver
    from .solvers.HillClimbing.tsp_hill_climbing_solver import (
        TSPDeterministicHillClimbingSolver,
        TSPHillClimbingSolver,
    )
    from .solvers.SA.tsp_sa_solver import TSPSASolver
    from .solvers.TabuSearch.tsp_tabu_solver import TSPTabuSolver

    for definition in (
        MethodDefinition("brute_force_find_solution", TSPBruteForceSolver, "exhaustive enumeration"),
        MethodDefinition("hillclimb", TSPHillClimbingSolver, "stochastic hill climbing"),
        MethodDefinition("hillclimb_deterministic", TSPDeterministicHillClimbingSolver, "steepest descent"),
        MethodDefinition("hillclimb_deteriministic", TSPDeterministicHillClimbingSolver,
                         "alias of hillclimb_deterministic"),
        MethodDefinition("tabusearch", TSPTabuSolver, "tabu search"),
        MethodDefinition("simulated_annealing", TSPSASolver, "simulated annealing"),
        MethodDefinition("genetic_algorithm", TSPGASolver, "genetic algorithm"),
        MethodDefinition("genetic_algorithm_island", TSPIslandGASolver, "island-model genetic algorithm"),
    ):
        _method_definitions.setdefault(definition.name, definition)
