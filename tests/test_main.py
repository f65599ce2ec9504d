import json
from pathlib import Path

from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.main import app, create_app
from services.templates import BUILTIN_TEMPLATE_DIR

client = TestClient(app)


def test_health() -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_openapi_lists_script_routes() -> None:
    paths = client.get("/openapi.json").json()["paths"]
    assert "/api/scripts" in paths
    assert "/api/templates/{template_type}" in paths


def test_extra_template_directory_is_registered(tmp_path: Path) -> None:
    data = json.loads((BUILTIN_TEMPLATE_DIR / "summary.json").read_text())
    data.update(id="exec_v1", name="Executive Brief", type="executive")
    (tmp_path / "executive.json").write_text(json.dumps(data))

    custom = TestClient(create_app(Settings(template_dir=tmp_path)))
    response = custom.get("/api/templates")
    assert response.json() == ["summary", "detailed", "technical", "executive"]


def test_settings_from_environment(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SCRIPT_ENGINE_LOG_LEVEL", "debug")
    monkeypatch.setenv("SCRIPT_ENGINE_TEMPLATE_DIR", str(tmp_path))
    monkeypatch.setenv("SCRIPT_ENGINE_CORS_ORIGINS", "http://a.test, http://b.test")
    settings = get_settings()
    assert settings.log_level == "DEBUG"
    assert settings.template_dir == tmp_path
    assert settings.cors_origins == ["http://a.test", "http://b.test"]


def test_settings_defaults(monkeypatch) -> None:
    for name in ("SCRIPT_ENGINE_LOG_LEVEL", "SCRIPT_ENGINE_TEMPLATE_DIR", "SCRIPT_ENGINE_CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    settings = get_settings()
    assert settings == Settings()
