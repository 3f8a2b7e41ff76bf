from pathlib import Path

from src.config import PROJECT_ROOT, load_settings


def test_defaults_from_bundled_config(monkeypatch):
    for name in ("VISUAL_SUPPORTS_CONFIG", "VISUAL_SUPPORTS_VOCABULARY",
                 "VISUAL_SUPPORTS_DB_PATH", "VISUAL_SUPPORTS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("src.config.load_dotenv", lambda: None)

    settings = load_settings()
    assert settings.vocabulary_path == PROJECT_ROOT / "data" / "vocabulary.json"
    assert settings.db_path == PROJECT_ROOT / "database" / "documents.db"
    assert settings.log_level == "WARNING"


def test_config_file_and_env_overrides(tmp_path, monkeypatch):
    config = tmp_path / "app.yaml"
    config.write_text("vocabulary_path: /tmp/v.json\nlog_level: debug\n", encoding="utf-8")
    monkeypatch.setenv("VISUAL_SUPPORTS_DB_PATH", str(tmp_path / "x.db"))
    monkeypatch.delenv("VISUAL_SUPPORTS_VOCABULARY", raising=False)
    monkeypatch.delenv("VISUAL_SUPPORTS_LOG_LEVEL", raising=False)

    settings = load_settings(str(config))
    assert settings.vocabulary_path == Path("/tmp/v.json")
    assert settings.db_path == tmp_path / "x.db"
    assert settings.log_level == "DEBUG"
