"""
Genetic algorithms: the generational engine, its operators and the island model.
"""

from .GA import GeneticAlgorithm
from .island import IslandConfig, IslandModel

__all__ = ['GeneticAlgorithm', 'IslandConfig', 'IslandModel']
