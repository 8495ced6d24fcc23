"""
Core abstractions shared by every problem and search algorithm.
"""

from .problem import ProblemInterface, Solution
from .search_algorithm import SearchAlgorithm

__all__ = ['ProblemInterface', 'Solution', 'SearchAlgorithm']
