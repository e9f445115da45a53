from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


class Ingredient(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    measure: str = ""


class Recipe(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    image: str
    instructions: str = ""
    ingredients: Tuple[Ingredient, ...] = ()
    category: str = ""
    area: Optional[str] = None
    youtube_url: Optional[str] = None
    tags: Optional[Tuple[str, ...]] = None


class MealSummary(BaseModel):
    """One entry of a category listing."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    thumbnail: Optional[str] = None


class StepProgress(BaseModel):
    recipe_id: str
    steps: List[str] = Field(default_factory=list)
    completed: List[int] = Field(default_factory=list)


class StepProgressUpdate(BaseModel):
    completed: List[int] = Field(
        default_factory=list,
        description="Zero-based indices of the steps marked as done"
    )


class ErrorResponse(BaseModel):
    error_code: str
    message: str
