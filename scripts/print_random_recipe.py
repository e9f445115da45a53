import sys
from app.core.config import app_config
from app.services.export_service import build_recipe_text, export_filename, recipe_link
from app.services.recipe_service import recipe_service
from app.services.sources.base import RecipeSourceError


def main():
    recipe_id = sys.argv[1] if len(sys.argv) > 1 else None
    save = "--save" in sys.argv[1:]
    if recipe_id == "--save":
        recipe_id = None

    try:
        recipe = recipe_service.load_recipe(recipe_id)
    except RecipeSourceError as exc:
        print(f"Could not load a recipe: {exc}", file=sys.stderr)
        sys.exit(1)

    text = build_recipe_text(recipe, recipe_link(recipe.id, app_config.public_app_url), detailed=save)
    if not save:
        print(text)
        return

    file_name = export_filename(recipe)
    with open(file_name, "w", encoding="utf-8") as handle:
        handle.write(text)
    print(f"Saved {recipe.name} to {file_name}")


if __name__ == "__main__":
    main()
