import pytest
import requests
from unittest.mock import MagicMock
from app.core.config import AppConfig
from app.models import Ingredient, Recipe


def _make_response(payload=None, status_code=200, reason="OK"):
    res = MagicMock()
    res.status_code = status_code
    res.ok = status_code < 400
    res.reason = reason
    res.json.return_value = payload
    if status_code >= 400:
        res.raise_for_status.side_effect = requests.HTTPError(f"{status_code} {reason}")
    return res


@pytest.fixture
def make_response():
    """Factory for fake `requests` responses."""
    return _make_response


@pytest.fixture
def config():
    return AppConfig(request_timeout_seconds=5.0)


@pytest.fixture
def sample_recipe():
    return Recipe(
        id="52768",
        name="Apple Frangipan Tart",
        image="https://www.themealdb.com/images/media/meals/wxywrq1468235067.jpg",
        instructions="1. Preheat the oven. 2. Crush the biscuits.",
        ingredients=(
            Ingredient(name="digestive biscuits", measure="175 gram"),
            Ingredient(name="Salt", measure=""),
        ),
        category="Dessert",
        area="British",
        youtube_url="https://www.youtube.com/watch?v=rp8Slv4INLk",
        tags=("Tart", "Baking"),
    )
