"""
Serialization package for objtasks.
JSON rendering of plain objects and reconstruction into a given class.
"""

from .json_codec import from_json, get_json

__all__ = ["get_json", "from_json"]
