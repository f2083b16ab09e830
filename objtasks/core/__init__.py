"""
Core package for objtasks.
Lightweight package init to avoid import cycles.

Consumers should import submodules directly, e.g.:
  from objtasks.core.recipe_loader import load_recipes_file, Recipe
"""

__all__: list[str] = []
