"""
connect4_engine.ai - Automated opponent for Connect Four

This package provides the one-ply heuristic used by the automated side.
"""

from connect4_engine.ai.heuristic import HeuristicPlayer, choose_column, find_winning_column

__all__ = ['HeuristicPlayer', 'choose_column', 'find_winning_column']
