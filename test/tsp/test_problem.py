"""
Tests for the TSP problem and its two tour representations.
"""

import math
import sys
from itertools import permutations
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from TSP.TSP import AlternativeSolution, City, TourSolution, TSPProblem, generate_neighbours


class TestTSPProblem:
    def test_requires_cities(self):
        with pytest.raises(ValueError):
            TSPProblem([])

    def test_distance_matrix_is_read_only(self, square_problem):
        assert square_problem.distances[0, 2] == pytest.approx(math.sqrt(2))
        with pytest.raises(ValueError):
            square_problem.distances[0, 1] = 5.0

    def test_tour_length_is_closed_cycle(self, square_problem):
        assert square_problem.tour_length([0, 1, 2, 3]) == pytest.approx(4.0)
        assert square_problem.tour_length([0, 2, 1, 3]) == pytest.approx(2 + 2 * math.sqrt(2))

    def test_single_city_has_zero_length(self):
        problem = TSPProblem([City("solo", 3.0, 4.0)])
        assert TourSolution.identity(problem).goal() == 0.0

    def test_problem_info(self, square_problem):
        info = square_problem.get_problem_info()
        assert info["dimension"] == 4
        assert info["upper_bounds"] == [4, 3, 2, 1]

    def test_goal_is_cached(self, square_problem):
        solution = TourSolution.identity(square_problem)
        assert not solution.is_evaluated
        solution.goal()
        assert solution.is_evaluated


class TestTourSolution:
    def test_next_solution_is_lexicographic(self, square_problem):
        solution = TourSolution([0, 1, 3, 2], square_problem)
        assert solution.next_solution().representation == [0, 2, 1, 3]

    def test_last_permutation_wraps_to_identity(self, square_problem):
        solution = TourSolution([3, 2, 1, 0], square_problem)
        assert solution.next_solution() == TourSolution.identity(square_problem)

    def test_enumeration_visits_every_permutation(self, square_problem):
        start = TourSolution.identity(square_problem)
        seen = {tuple(start.representation)}
        current = start.next_solution()
        while current != start:
            seen.add(tuple(current.representation))
            current = current.next_solution()
        assert seen == set(permutations(range(4)))


class TestAlternativeSolution:
    def test_random_codes_respect_bounds(self, random_problem, rng):
        for _ in range(50):
            code = AlternativeSolution.of(random_problem, rng)
            assert code.is_valid()
            assert code.representation[-1] == 0

    def test_decoding_yields_permutation(self, random_problem, rng):
        code = AlternativeSolution.of(random_problem, rng)
        assert sorted(code.tour()) == list(range(len(random_problem)))

    def test_encode_decode_round_trip(self, random_problem, rng):
        tour = list(rng.permutation(len(random_problem)))
        solution = TourSolution([int(c) for c in tour], random_problem)
        assert AlternativeSolution.from_solution(solution).get_solution() == solution

    def test_identity_encodes_to_zeros(self, square_problem):
        code = AlternativeSolution.from_solution(TourSolution.identity(square_problem))
        assert code.representation == [0, 0, 0, 0]

    def test_goal_matches_decoded_tour(self, random_problem, rng):
        code = AlternativeSolution.of(random_problem, rng)
        assert code.goal() == pytest.approx(code.get_solution().goal())

    def test_random_neighbour_stays_valid(self, random_problem, rng):
        code = AlternativeSolution.of(random_problem, rng)
        for count in (1, 3, 10):
            neighbour = code.generate_random_neighbour(count, rng)
            assert neighbour.is_valid()
        single = code.generate_random_neighbour(1, rng)
        changed = [i for i, (a, b) in enumerate(zip(code.representation, single.representation)) if a != b]
        assert len(changed) <= 1

    def test_random_neighbour_does_not_modify_source(self, random_problem, rng):
        code = AlternativeSolution.of(random_problem, rng)
        before = list(code.representation)
        code.generate_random_neighbour(5, rng)
        assert code.representation == before


class TestNeighbourhood:
    def test_neighbour_count(self, random_problem, rng):
        code = AlternativeSolution.of(random_problem, rng)
        assert len(generate_neighbours(code)) == 2 * (len(random_problem) - 1)

    def test_each_neighbour_differs_in_one_position(self, random_problem, rng):
        code = AlternativeSolution.of(random_problem, rng)
        for neighbour in generate_neighbours(code):
            diff = np.flatnonzero(np.array(neighbour.representation) != np.array(code.representation))
            assert len(diff) == 1
            assert neighbour.is_valid()

    def test_increment_then_decrement_order(self, square_problem):
        code = AlternativeSolution([0, 0, 0, 0], square_problem)
        reps = [n.representation for n in generate_neighbours(code)]
        assert reps == [
            [1, 0, 0, 0], [3, 0, 0, 0],
            [0, 1, 0, 0], [0, 2, 0, 0],
            [0, 0, 1, 0], [0, 0, 1, 0],
        ]
