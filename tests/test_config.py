# tests/test_config.py
import json

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from catalog_api.config import Settings, get_settings
from catalog_api.main import create_app


def test_defaults(settings):
    assert settings.port == 8085
    assert settings.log_level == "INFO"
    assert settings.cors_origins_list == ["*"]
    assert settings.products_path is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CATALOG_PORT", "9000")
    monkeypatch.setenv("CATALOG_LOG_LEVEL", "debug")
    monkeypatch.setenv("CATALOG_APP_NAME", "Staging Catalog")

    settings = Settings(_env_file=None)
    assert settings.port == 9000
    assert settings.log_level == "DEBUG"
    assert settings.app_name == "Staging Catalog"


def test_debug_forces_debug_logging():
    assert Settings(_env_file=None, debug=True).effective_log_level == "DEBUG"


def test_rejects_unknown_log_level():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_level="chatty")


def test_rejects_out_of_range_port():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, port=70000)


@pytest.mark.parametrize("raw, expected", [
    ('["http://localhost:5173", "https://shop.example"]', ["http://localhost:5173", "https://shop.example"]),
    ("http://a.example, http://b.example", ["http://a.example", "http://b.example"]),
    ('"http://only.example"', ["http://only.example"]),
])
def test_cors_origins_parsing(raw, expected):
    assert Settings(_env_file=None, cors_origins=raw).cors_origins_list == expected


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()


def test_products_file_seeds_the_app(tmp_path):
    path = tmp_path / "seed.json"
    path.write_text(json.dumps([
        {"id": 7, "name": "Standing Desk", "price": "449.00", "categoryId": 2},
        {"id": 8, "name": "Webcam", "price": "59.90", "categoryId": 1},
    ]))
    settings = Settings(_env_file=None, products_file=str(path))

    with TestClient(create_app(settings=settings)) as client:
        r = client.get("/api/products", params={"categoryId": 2})

    assert r.status_code == 200
    assert r.json() == [{"id": 7, "name": "Standing Desk", "price": 449.0, "categoryId": 2}]
