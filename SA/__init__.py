from .SA import SimulatedAnnealing

__all__ = ['SimulatedAnnealing']
