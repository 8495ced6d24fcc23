from .hill_climbing import DeterministicHillClimbing, StochasticHillClimbing

__all__ = ['DeterministicHillClimbing', 'StochasticHillClimbing']
