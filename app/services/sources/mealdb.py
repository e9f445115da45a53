import random
import time
from typing import Any, Dict, List, Optional
import requests
from app.core.config import AppConfig, app_config
from app.core.logging_config import get_logger
from app.models import Ingredient, MealSummary, Recipe
from app.services.image_resolver import ImageResolver
from app.services.sources.base import NetworkError, NotFoundError, RecipeSource
from app.utils.unit_expander import expand_units

logger = get_logger(__name__)

INGREDIENT_SLOTS = 20


class MealDBSource(RecipeSource):
    name = "TheMealDB"

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        session: Optional[requests.Session] = None,
        image_resolver: Optional[ImageResolver] = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(rng)
        self.config = config or app_config
        self.session = session or requests.Session()
        self.image_resolver = image_resolver or ImageResolver(self.config, self.session)

    @property
    def base_url(self) -> str:
        return self.config.mealdb_base_url.rstrip("/") + "/"

    def list_desserts(self) -> List[MealSummary]:
        category = self.config.dessert_category
        data = self._get("filter.php", {"c": category}, f"filter {category}")
        return [
            MealSummary(
                id=str(m.get("idMeal")),
                name=m.get("strMeal") or "",
                thumbnail=m.get("strMealThumb") or None,
            )
            for m in data.get("meals") or []
            if m.get("idMeal")
        ]

    def get_details(self, recipe_id: str, resolve_image: bool = True) -> Recipe:
        data = self._get("lookup.php", {"i": recipe_id}, f"lookup {recipe_id}")
        meals = data.get("meals") or []
        if not meals or not meals[0]:
            raise NotFoundError(recipe_id, self.name)
        return self._adapt(meals[0], resolve_image)

    def _get(self, endpoint: str, params: Dict[str, str], label: str) -> Dict[str, Any]:
        api_start = time.time()
        try:
            res = self.session.get(
                f"{self.base_url}{endpoint}",
                params=params,
                timeout=self.config.request_timeout_seconds,
            )
        except requests.RequestException as exc:
            raise NetworkError(f"Failed to reach {self.name} ({label}): {exc}", self.name) from exc

        if not res.ok:
            raise NetworkError(
                f"Failed to fetch {label}: {res.status_code} {res.reason}",
                self.name,
                status_code=res.status_code,
            )
        try:
            data = res.json()
        except ValueError as exc:
            raise NetworkError(f"Invalid JSON from {self.name} ({label})", self.name) from exc

        logger.info(f"MealDB API ({label}): {time.time() - api_start:.2f}s")
        return data if isinstance(data, dict) else {}

    def _adapt(self, data: Dict[str, Any], resolve_image: bool = True) -> Recipe:
        ingredients = []
        for i in range(1, INGREDIENT_SLOTS + 1):
            ing = data.get(f"strIngredient{i}")
            meas = data.get(f"strMeasure{i}")
            if ing and ing.strip():
                ingredients.append(Ingredient(
                    name=ing.strip(),
                    measure=expand_units((meas or "").strip()),
                ))

        name = data.get("strMeal") or ""
        thumbnail = data.get("strMealThumb")
        if thumbnail and thumbnail.strip():
            image = thumbnail
        elif not resolve_image:
            image = self.image_resolver.pick_fallback()
        else:
            logger.info(f"No thumbnail for '{name}', resolving a Commons image")
            image = self.image_resolver.resolve(name)

        tags = None
        if data.get("strTags") and data["strTags"].strip():
            tags = tuple(t.strip() for t in data["strTags"].split(",") if t.strip())

        return Recipe(
            id=str(data.get("idMeal")),
            name=name,
            image=image,
            instructions=data.get("strInstructions") or "",
            ingredients=tuple(ingredients),
            category=data.get("strCategory") or "",
            area=data.get("strArea") or None,
            youtube_url=data.get("strYoutube") or None,
            tags=tags or None,
        )
