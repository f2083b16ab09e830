"""
objtasks
--------
Object composition, JSON round-tripping and a CSS selector builder.
"""

__version__ = "0.1.0"
