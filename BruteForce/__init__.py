from .brute_force import BruteForceSearch

__all__ = ['BruteForceSearch']
