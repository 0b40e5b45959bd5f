"""
connect4_engine.interfaces - User interfaces for the Connect Four engine

This package contains the terminal interface for playing and inspecting
matches.
"""

# Don't import anything here to avoid circular imports
__all__ = []
