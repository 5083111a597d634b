"""
Mini Invaders: a minimal arcade shooter simulation.
"""

__version__ = "0.1.0"
