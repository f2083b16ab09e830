# scripts/validate_recipes.py
"""
Validate all YAML recipes under ./recipes directory.
Run: python scripts/validate_recipes.py
"""

from objtasks.core.recipe_loader import RecipeLoader
from objtasks.utils.config import get_settings
from objtasks.utils.logger import get_logger

def main():
    log = get_logger(__name__)
    loader = RecipeLoader()
    root = get_settings().RECIPES_DIR

    if not root.exists():
        log.error(f"No recipes directory found at {root}.")
        return

    recipes = loader.load_directory(root)
    log.info(f"Validated {len(recipes)} recipe(s).")

if __name__ == "__main__":
    main()
