"""
Traveling Salesman Problem: representations, I/O and the method registry.
"""

from .TSP import AlternativeSolution, City, TourSolution, TSPProblem, generate_neighbours

__all__ = ['AlternativeSolution', 'City', 'TourSolution', 'TSPProblem', 'generate_neighbours']
