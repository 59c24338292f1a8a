from .problems import BinBalancingProblem, all_problems, make_problem

__all__ = ['BinBalancingProblem', 'all_problems', 'make_problem']
