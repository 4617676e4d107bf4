"""
neon tic-tac-toe: hot-seat game with optional AI move hints
"""

__version__ = "1.0.0"
