import json
import logging
from app.core.config import AppConfig, load_app_config
from app.core.logging_config import parse_level


def test_missing_file_uses_defaults(tmp_path):
    assert load_app_config(tmp_path / "missing.json", use_env=False) == AppConfig()


def test_reads_json_file(tmp_path):
    path = tmp_path / "app_config.json"
    path.write_text(json.dumps({
        "dessert_category": "Cake",
        "request_timeout_seconds": 2.5,
        "image_search_limit": "5",
    }))

    config = load_app_config(path, use_env=False)

    assert config.dessert_category == "Cake"
    assert config.request_timeout_seconds == 2.5
    assert config.image_search_limit == 5
    assert config.mealdb_base_url == AppConfig().mealdb_base_url


def test_invalid_json_uses_defaults(tmp_path):
    path = tmp_path / "app_config.json"
    path.write_text("{broken")
    assert load_app_config(path, use_env=False) == AppConfig()


def test_bad_timeouts_fall_back_to_default(tmp_path):
    path = tmp_path / "app_config.json"
    for value in ("abc", -1, 0, True):
        path.write_text(json.dumps({"request_timeout_seconds": value}))
        assert load_app_config(path, use_env=False).request_timeout_seconds == 10.0


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "app_config.json"
    path.write_text(json.dumps({"request_timeout_seconds": 20, "dessert_category": "Cake"}))
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "3")
    monkeypatch.setenv("PUBLIC_APP_URL", "https://desserts.example.com")

    config = load_app_config(path)

    assert config.request_timeout_seconds == 3.0
    assert config.public_app_url == "https://desserts.example.com"
    assert config.dessert_category == "Cake"


def test_parse_level():
    assert parse_level("debug") == logging.DEBUG
    assert parse_level("WARNING") == logging.WARNING
    assert parse_level("nonsense") == logging.INFO


def test_non_positive_image_settings_fall_back_to_default(tmp_path):
    path = tmp_path / "app_config.json"
    path.write_text(json.dumps({"image_search_limit": 0, "image_thumb_width": "-800"}))

    config = load_app_config(path, use_env=False)

    assert config.image_search_limit == 3
    assert config.image_thumb_width == 800
