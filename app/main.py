from typing import List, Literal, Optional
from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse
import time
import uuid
from app.core.config import app_config
from app.core.logging_config import get_logger, parse_level, setup_logging
from app.models import ErrorResponse, MealSummary, Recipe, StepProgress, StepProgressUpdate
from app.services.export_service import build_recipe_text, export_filename, recipe_link
from app.services.progress_store import progress_store
from app.services.recipe_service import recipe_service
from app.services.sources.base import RecipeSourceError
from app.utils.step_segmenter import segment_steps

setup_logging(parse_level(app_config.log_level))

app = FastAPI(title="Random Dessert Recipe API", version="0.1.0")
logger = get_logger(__name__)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Step index outside the recipe"},
    404: {"model": ErrorResponse, "description": "Recipe not found"},
    502: {"model": ErrorResponse, "description": "Recipe API unavailable"},
    503: {"model": ErrorResponse, "description": "No dessert recipes available"},
}


class InvalidStepIndexError(ValueError):
    error_code = "INVALID_STEP_INDEX"


@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = str(uuid.uuid4())
    start = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000.0
    logger.info(
        f"{request.method} {request.url.path} {response.status_code} "
        f"{duration_ms:.1f}ms request_id={request_id}"
    )
    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(RecipeSourceError)
async def recipe_source_error_handler(request: Request, exc: RecipeSourceError):
    logger.error(f"Recipe source failure ({exc.source}): {exc.message}")
    return JSONResponse(
        status_code=exc.http_status,
        content={"error_code": exc.error_code, "message": exc.message}
    )


@app.exception_handler(InvalidStepIndexError)
async def invalid_step_index_handler(request: Request, exc: InvalidStepIndexError):
    return JSONResponse(
        status_code=400,
        content={"error_code": exc.error_code, "message": str(exc)}
    )


@app.get("/")
def read_root():
    return {"message": "Welcome to the Random Dessert Recipe API. Visit /docs for documentation."}


@app.get("/api/recipe", response_model=Recipe, responses=ERROR_RESPONSES)
def load_recipe(recipe: Optional[str] = Query(default=None, description="Recipe id from a deep link")):
    """
    Load the recipe a deep link points at. Falls back to a random dessert
    when the id is missing or cannot be loaded.
    """
    return recipe_service.load_recipe(recipe)


@app.get("/api/recipes/random", response_model=Recipe, responses=ERROR_RESPONSES)
def random_recipe():
    return recipe_service.get_random_recipe()


@app.get("/api/recipes/desserts", response_model=List[MealSummary], responses=ERROR_RESPONSES)
def list_desserts():
    return recipe_service.list_desserts()


@app.get("/api/recipes/{recipe_id}", response_model=Recipe, responses=ERROR_RESPONSES)
def get_recipe(recipe_id: str):
    return recipe_service.get_recipe(recipe_id)


@app.get("/api/recipes/{recipe_id}/progress", response_model=StepProgress, responses=ERROR_RESPONSES)
def get_progress(recipe_id: str):
    steps = _steps_for(recipe_id)
    completed = {i for i in progress_store.load(recipe_id) if i < len(steps)}
    return StepProgress(recipe_id=recipe_id, steps=steps, completed=sorted(completed))


@app.put("/api/recipes/{recipe_id}/progress", response_model=StepProgress, responses=ERROR_RESPONSES)
def save_progress(recipe_id: str, update: StepProgressUpdate):
    steps = _steps_for(recipe_id)
    _check_indices(update.completed, len(steps))
    completed = progress_store.save(recipe_id, update.completed)
    return StepProgress(recipe_id=recipe_id, steps=steps, completed=sorted(completed))


@app.post("/api/recipes/{recipe_id}/progress/{index}/toggle", response_model=StepProgress, responses=ERROR_RESPONSES)
def toggle_step(recipe_id: str, index: int):
    steps = _steps_for(recipe_id)
    _check_indices([index], len(steps))
    completed = progress_store.toggle(recipe_id, index)
    return StepProgress(recipe_id=recipe_id, steps=steps, completed=sorted(completed))


@app.delete("/api/recipes/{recipe_id}/progress", status_code=204)
def clear_progress(recipe_id: str):
    progress_store.clear(recipe_id)


@app.get("/api/recipes/{recipe_id}/export", response_class=PlainTextResponse, responses=ERROR_RESPONSES)
def export_recipe(recipe_id: str, style: Literal["copy", "download"] = "copy"):
    """
    Plain-text rendering of a recipe. The download style adds category, area
    and video link, and is served as an attachment.
    """
    recipe = recipe_service.get_recipe(recipe_id, resolve_image=False)
    text = build_recipe_text(
        recipe,
        recipe_link(recipe.id, app_config.public_app_url),
        detailed=style == "download"
    )
    headers = {}
    if style == "download":
        headers["Content-Disposition"] = f'attachment; filename="{export_filename(recipe)}"'
    return PlainTextResponse(text, headers=headers)


def _steps_for(recipe_id: str) -> List[str]:
    return segment_steps(recipe_service.get_recipe(recipe_id, resolve_image=False).instructions)


def _check_indices(indices: List[int], step_count: int) -> None:
    invalid = sorted(i for i in indices if i < 0 or i >= step_count)
    if invalid:
        raise InvalidStepIndexError(f"Step indices {invalid} are outside 0..{step_count - 1}")
