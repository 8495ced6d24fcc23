"""
Tests for the single-state engines: brute force, hill climbing, tabu search
and simulated annealing.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from BruteForce.brute_force import BruteForceSearch
from HillClimbing.hill_climbing import DeterministicHillClimbing, StochasticHillClimbing
from SA.SA import SimulatedAnnealing
from TabuSearch.tabu_search import TabuSearch
from TSP.TSP import AlternativeSolution, City, TourSolution, TSPProblem, generate_neighbours


@pytest.fixture
def optimal_square_code(square_problem):
    return AlternativeSolution.from_solution(TourSolution.identity(square_problem))


class TestBruteForce:
    def test_finds_optimum_of_unit_square(self, square_problem):
        search = BruteForceSearch(square_problem)
        best = search.run()
        assert best.goal() == pytest.approx(4.0)
        assert search.evaluations == 24

    def test_matches_best_of_all_permutations(self, random_problem):
        search = BruteForceSearch(random_problem)
        best = search.run()
        assert search.evaluations == 40320
        # Any other tour can only be as long or longer.
        for seed in range(5):
            tour = np.random.default_rng(seed).permutation(len(random_problem))
            assert best.goal() <= random_problem.tour_length(tour) + 1e-9


class TestStochasticHillClimbing:
    def test_current_goal_never_increases(self, random_problem, rng):
        search = StochasticHillClimbing(random_problem, max_iterations=200, rng=rng)
        search.initialize()
        previous = search.current_solution.goal()
        while not search.finished:
            search.step()
            assert search.current_solution.goal() <= previous
            previous = search.current_solution.goal()
        assert search.iteration == 200

    def test_rejects_invalid_neighbour_count(self, random_problem):
        with pytest.raises(ValueError):
            StochasticHillClimbing(random_problem, neighbour_count=0)


class TestDeterministicHillClimbing:
    def test_stops_immediately_at_local_optimum(self, square_problem, optimal_square_code):
        search = DeterministicHillClimbing(square_problem, initial_population=[optimal_square_code])
        result = search.run()
        assert search.iteration == 0
        assert search.stopped_early
        assert result == optimal_square_code

    def test_result_is_local_optimum(self, random_problem, rng):
        search = DeterministicHillClimbing(random_problem, max_iterations=10_000, rng=rng)
        result = search.run()
        assert search.stopped_early
        assert all(n.goal() >= result.goal() for n in generate_neighbours(result))

    def test_respects_iteration_budget(self, random_problem, rng):
        search = DeterministicHillClimbing(random_problem, max_iterations=1, rng=rng)
        search.run()
        assert search.iteration <= 1


class TestTabuSearch:
    def test_candidates_are_never_tabu_and_list_is_bounded(self, random_problem, rng):
        search = TabuSearch(random_problem, max_iterations=100, max_tabu_size=3, rng=rng)
        search.initialize()
        while not search.finished:
            tabu_before = list(search.tabu_list)
            search.step()
            assert not any(candidate in tabu_before for candidate in search.candidates)
            assert len(search.tabu_list) <= 3

    def test_best_is_never_worse_than_start(self, random_problem, rng):
        search = TabuSearch(random_problem, max_iterations=50, rng=rng)
        search.initialize()
        start_goal = search.best_solution.goal()
        best = search.run()
        assert best.goal() <= start_goal

    def test_stops_when_neighbourhood_is_empty(self, rng):
        problem = TSPProblem([City("A", 0, 0)])
        search = TabuSearch(problem, max_iterations=100, max_tabu_size=5, rng=rng)
        best = search.run()
        assert search.iteration == 0
        assert best.goal() == 0.0

    def test_two_cities_alternate_until_budget(self, rng):
        problem = TSPProblem([City("A", 0, 0), City("B", 1, 0)])
        search = TabuSearch(problem, max_iterations=10, max_tabu_size=5, rng=rng)
        search.run()
        assert search.iteration == 10

    def test_rejects_empty_tabu_list(self, random_problem):
        with pytest.raises(ValueError):
            TabuSearch(random_problem, max_tabu_size=0)


class TestSimulatedAnnealing:
    @pytest.mark.parametrize("kwargs", [
        {"cooling_rate": 1.0},
        {"cooling_rate": 0.0},
        {"initial_temperature": 1.0, "final_temperature": 2.0},
        {"final_temperature": 0.0},
        {"moves_per_temp": 0},
    ])
    def test_invalid_parameters(self, random_problem, kwargs):
        with pytest.raises(ValueError):
            SimulatedAnnealing(random_problem, **kwargs)

    def test_best_is_minimum_seen(self, random_problem, rng):
        sa = SimulatedAnnealing(random_problem, max_iterations=300, rng=rng)
        sa.initialize()
        start_goal = sa.best_solution.goal()
        seen = [start_goal]
        while not sa.finished:
            sa.step()
            seen.append(sa.current_solution.goal())
        assert sa.get_best_solution().goal() == pytest.approx(min(seen))
        assert sa.get_best_solution().goal() <= start_goal

    def test_temperature_never_drops_below_final(self, random_problem, rng):
        sa = SimulatedAnnealing(random_problem, initial_temperature=1.0, final_temperature=0.5,
                                cooling_rate=0.5, max_iterations=20, rng=rng)
        sa.run()
        assert sa.temperature == pytest.approx(0.5)
        assert sa.is_cooled()

    def test_same_seed_same_result(self, random_problem):
        first = SimulatedAnnealing(random_problem, max_iterations=200, rng=np.random.default_rng(3)).run()
        second = SimulatedAnnealing(random_problem, max_iterations=200, rng=np.random.default_rng(3)).run()
        assert first == second
