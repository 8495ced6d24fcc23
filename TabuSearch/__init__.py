from .tabu_search import TabuSearch

__all__ = ['TabuSearch']
