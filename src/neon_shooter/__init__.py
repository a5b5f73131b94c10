"""
Neon Shooter: a fixed-viewport arcade shooter built around a per-frame
simulation engine.
"""

__version__ = "0.1.0"
