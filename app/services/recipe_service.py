from typing import List, Optional
from app.services.sources.base import RecipeSource, RecipeSourceError
from app.services.sources.mealdb import MealDBSource
from app.models import MealSummary, Recipe
from app.core.logging_config import get_logger

logger = get_logger(__name__)


class RecipeService:
    def __init__(self, source: Optional[RecipeSource] = None):
        self.source: RecipeSource = source or MealDBSource()

    def list_desserts(self) -> List[MealSummary]:
        return self.source.list_desserts()

    def get_recipe(self, recipe_id: str, resolve_image: bool = True) -> Recipe:
        return self.source.get_details(recipe_id, resolve_image=resolve_image)

    def get_random_recipe(self) -> Recipe:
        return self.source.get_random()

    def load_recipe(self, recipe_id: Optional[str] = None) -> Recipe:
        """
        Load the recipe a deep link points at, or a random one.
        A deep link that cannot be loaded falls back to a random recipe once.
        """
        if not recipe_id:
            return self.get_random_recipe()
        try:
            return self.get_recipe(recipe_id)
        except RecipeSourceError as e:
            logger.warning(f"Recipe {recipe_id} unavailable ({e}), loading a random recipe instead")
            return self.get_random_recipe()


recipe_service = RecipeService()
