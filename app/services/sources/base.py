import random
from abc import ABC, abstractmethod
from typing import List, Optional
from app.models import MealSummary, Recipe


class RecipeSourceError(Exception):
    """Base class for failures talking to a recipe source."""
    http_status = 502
    error_code = "RECIPE_SOURCE_FAILURE"

    def __init__(self, message: str, source: str = "Unknown"):
        super().__init__(message)
        self.message = message
        self.source = source


class NetworkError(RecipeSourceError):
    http_status = 502
    error_code = "UPSTREAM_FAILURE"

    def __init__(self, message: str, source: str = "Unknown", status_code: Optional[int] = None):
        super().__init__(message, source)
        self.status_code = status_code


class NotFoundError(RecipeSourceError):
    http_status = 404
    error_code = "RECIPE_NOT_FOUND"

    def __init__(self, recipe_id: str, source: str = "Unknown"):
        super().__init__(f"Recipe {recipe_id} not found", source)
        self.recipe_id = recipe_id


class EmptyCatalogError(RecipeSourceError):
    http_status = 503
    error_code = "EMPTY_CATALOG"


class RecipeSource(ABC):
    name: str = "Unknown"

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    @abstractmethod
    def list_desserts(self) -> List[MealSummary]:
        """
        List every recipe in the dessert category, in source order.
        Raises NetworkError when the source cannot be reached.
        """
        pass

    @abstractmethod
    def get_details(self, recipe_id: str, resolve_image: bool = True) -> Recipe:
        """
        Fetch one recipe and adapt it to the canonical `Recipe` model.
        With `resolve_image` off, a missing image is filled without any lookup.
        Raises NetworkError, or NotFoundError when the id is unknown.
        """
        pass

    def get_random(self) -> Recipe:
        """Pick a dessert uniformly at random and return its full details."""
        desserts = self.list_desserts()
        if not desserts:
            raise EmptyCatalogError("No dessert recipes found", self.name)
        picked = desserts[self.rng.randrange(len(desserts))]
        return self.get_details(picked.id)
