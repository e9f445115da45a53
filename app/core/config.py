import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from app.core.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AppConfig:
    mealdb_base_url: str = "https://www.themealdb.com/api/json/v1/1/"
    dessert_category: str = "Dessert"
    commons_api_url: str = "https://commons.wikimedia.org/w/api.php"
    request_timeout_seconds: float = 10.0
    image_search_limit: int = 3
    image_thumb_width: int = 800
    progress_store_path: str = "data/recipe_progress.json"
    public_app_url: str = "http://localhost:8501"
    log_level: str = "INFO"


# Environment variable -> AppConfig field
ENV_OVERRIDES = {
    "MEALDB_BASE_URL": "mealdb_base_url",
    "DESSERT_CATEGORY": "dessert_category",
    "COMMONS_API_URL": "commons_api_url",
    "REQUEST_TIMEOUT_SECONDS": "request_timeout_seconds",
    "PROGRESS_STORE_PATH": "progress_store_path",
    "PUBLIC_APP_URL": "public_app_url",
    "LOG_LEVEL": "log_level",
}


def _as_float(value: Any, default: float) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value) if value > 0 else default
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return default
        return parsed if parsed > 0 else default
    return default


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value if value > 0 else default
    if isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            return default
        return parsed if parsed > 0 else default
    return default


def _as_str(value: Any, default: str) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def _config_path() -> Path:
    return Path(__file__).resolve().parents[2] / "config" / "app_config.json"


def _coerce(data: Dict[str, Any], defaults: AppConfig) -> AppConfig:
    return AppConfig(
        mealdb_base_url=_as_str(data.get("mealdb_base_url"), defaults.mealdb_base_url),
        dessert_category=_as_str(data.get("dessert_category"), defaults.dessert_category),
        commons_api_url=_as_str(data.get("commons_api_url"), defaults.commons_api_url),
        request_timeout_seconds=_as_float(
            data.get("request_timeout_seconds"), defaults.request_timeout_seconds
        ),
        image_search_limit=_as_int(data.get("image_search_limit"), defaults.image_search_limit),
        image_thumb_width=_as_int(data.get("image_thumb_width"), defaults.image_thumb_width),
        progress_store_path=_as_str(data.get("progress_store_path"), defaults.progress_store_path),
        public_app_url=_as_str(data.get("public_app_url"), defaults.public_app_url),
        log_level=_as_str(data.get("log_level"), defaults.log_level),
    )


def load_app_config(path: Optional[Path] = None, use_env: bool = True) -> AppConfig:
    """
    Load settings from the JSON config file, then apply environment overrides.

    A missing file yields the defaults; an invalid file is logged and ignored.
    """
    config_path = path or _config_path()
    try:
        data: Dict[str, Any] = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        data = {}
    except json.JSONDecodeError as exc:
        logger.warning(f"Invalid app config JSON at {config_path}: {exc}")
        data = {}

    config = _coerce(data, AppConfig())
    if not use_env:
        return config

    load_dotenv(".env")
    env_values = {
        field: os.getenv(var)
        for var, field in ENV_OVERRIDES.items()
        if os.getenv(var)
    }
    if env_values:
        config = _coerce(env_values, config)
    return config


app_config = load_app_config()
