"""
connect4_engine - Two-mode Connect Four engine

This package provides the board model, move legality, win/draw detection,
turn handling and a one-ply heuristic opponent for a single Connect Four
match. Rendering and transport are left to the caller.
"""

# Version number
__version__ = '0.1.0'
