import logging
import math

from Core.problem import ProblemInterface, Solution
from Core.search_algorithm import SearchAlgorithm

logger = logging.getLogger(__name__)


class SimulatedAnnealing(SearchAlgorithm):
    """
    Single-state simulated annealing with geometric cooling.

    Every move draws one random neighbour of the current solution. Shorter
    neighbours are always taken; longer ones with probability exp(-delta / T).
    The temperature is multiplied by `cooling_rate` after each batch of
    `moves_per_temp` moves and is floored at `final_temperature`. The result
    is the best solution seen, which may differ from the final state.

    Args:
        problem (ProblemInterface): Problem providing random neighbours.
        initial_temperature (float): Temperature of the first batch.
        final_temperature (float): The temperature never goes below this value.
        cooling_rate (float): The rate at which the temperature decreases (e.g., 0.99).
        moves_per_temp (int): Moves performed before each cooling.
        max_iterations (int): The total number of moves to perform.
        neighbour_count (int): Random moves combined into one neighbour.
        **kwargs: Additional keyword arguments for SearchAlgorithm (rng, initial_population).
    """

    def __init__(self, problem: ProblemInterface, initial_temperature: float = 100.0,
                 final_temperature: float = 1e-3, cooling_rate: float = 0.99,
                 moves_per_temp: int = 1, max_iterations: int = 1000,
                 neighbour_count: int = 1, **kwargs):
        super().__init__(problem, population_size=1, **kwargs)

        if not (0 < cooling_rate < 1):
            raise ValueError("Cooling rate must be between 0 and 1.")
        if initial_temperature <= final_temperature:
            raise ValueError("Initial temperature must be greater than final temperature.")
        if final_temperature <= 0:
            raise ValueError("Final temperature must be positive.")
        if moves_per_temp < 1:
            raise ValueError("Moves per temperature must be at least 1.")

        self.initial_temperature = initial_temperature
        self.final_temperature = final_temperature
        self.temperature = initial_temperature
        self.cooling_rate = cooling_rate
        self.moves_per_temp = moves_per_temp
        self.max_iterations = max_iterations
        self.neighbour_count = neighbour_count
        self.accepted_worse = 0

        self.current_solution: Solution = None

    def initialize(self):
        super().initialize()
        self.temperature = self.initial_temperature
        self.accepted_worse = 0
        self.current_solution = self.population[0]
        self.finished = self.max_iterations <= 0

    def step(self):
        """
        Performs moves_per_temp moves at the current temperature, then cools down.
        """
        if self.finished:
            return

        for _ in range(self.moves_per_temp):
            if self.iteration >= self.max_iterations:
                break

            neighbour = self.problem.get_random_neighbour(self.current_solution, self.rng, self.neighbour_count)
            cost_diff = neighbour.goal() - self.current_solution.goal()

            if cost_diff < 0:
                self.current_solution = neighbour
            elif self.rng.random() < self._acceptance_probability(cost_diff):
                self.current_solution = neighbour
                if cost_diff > 0:
                    self.accepted_worse += 1
            self.population[0] = self.current_solution

            if self.current_solution < self.best_solution:
                self.best_solution = self.current_solution.copy()

            self.iteration += 1

        self._cool_down()
        if self.iteration >= self.max_iterations:
            self.finished = True
            logger.info("Annealing done: T=%.6g, %d worse moves accepted, best goal %.6f",
                        self.temperature, self.accepted_worse, self.best_solution.goal())

    def _acceptance_probability(self, cost_difference: float) -> float:
        if self.temperature > 0:
            return math.exp(-cost_difference / self.temperature)
        return 0.0

    def _cool_down(self):
        self.temperature = max(self.temperature * self.cooling_rate, self.final_temperature)

    def is_cooled(self) -> bool:
        return self.temperature <= self.final_temperature

    def get_state(self) -> dict:
        """Snapshot of the annealing schedule."""
        return {
            "iteration": self.iteration,
            "temperature": self.temperature,
            "current_goal": self.current_solution.goal() if self.current_solution else None,
            "is_cooled": self.is_cooled(),
        }
