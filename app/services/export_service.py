import re
from typing import List
from urllib.parse import urlencode
from app.models import Ingredient, Recipe
from app.utils.step_segmenter import segment_steps


def build_recipe_text(recipe: Recipe, source_url: str, detailed: bool = False) -> str:
    """
    Render a recipe as plain text for the clipboard, or for a file download
    when `detailed` is set (adds category, area and the video link).
    """
    lines: List[str] = [recipe.name, ""]
    if detailed:
        lines += [f"Category: {recipe.category}", f"Area: {recipe.area or ''}", ""]

    lines.append("Ingredients:")
    lines += [_ingredient_line(ing) for ing in recipe.ingredients]
    lines += ["", "Instructions:"]
    lines += [f"{i}. {step}" for i, step in enumerate(segment_steps(recipe.instructions), 1)]
    lines.append("")

    if detailed and recipe.youtube_url:
        lines += [f"Video: {recipe.youtube_url}", ""]
    lines.append(f"Source: {source_url}")
    return "\n".join(lines)


def export_filename(recipe: Recipe) -> str:
    return re.sub(r"[^a-z0-9]", "_", recipe.name, flags=re.IGNORECASE).lower() + ".txt"


def recipe_link(recipe_id: str, base_url: str) -> str:
    """Deep link back to a recipe in the UI."""
    separator = "&" if "?" in base_url else "?"
    return f"{base_url}{separator}{urlencode({'recipe': recipe_id})}"


def _ingredient_line(ingredient: Ingredient) -> str:
    text = " ".join(part for part in (ingredient.measure, ingredient.name) if part)
    return f"• {text}"
