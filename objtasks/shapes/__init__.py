"""
Shapes package for objtasks.
Plain value types with bound computations.
"""

from .rectangle import Rectangle

__all__ = ["Rectangle"]
