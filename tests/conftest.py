import json

import pytest

from src.vocabulary import load_vocabulary

ENTRIES = [
    {"word": "cat", "emoji": "🐱", "category": "animals"},
    {"word": "dog", "emoji": "🐶", "category": "animals"},
    {"word": "world", "emoji": "🌍", "category": "nature"},
    {"word": "sun", "emoji": "☀️", "category": "nature"},
    {"word": "apple", "emoji": "🍎", "category": "food"},
    {"word": "happy", "emoji": "😀", "category": "feelings"},
]


@pytest.fixture
def index():
    return load_vocabulary(ENTRIES)


@pytest.fixture
def pets():
    return load_vocabulary([
        {"word": "cat", "emoji": "🐱", "category": "animals"},
        {"word": "dog", "emoji": "🐶", "category": "animals"},
    ])


@pytest.fixture
def vocab_file(tmp_path):
    path = tmp_path / "vocabulary.json"
    path.write_text(json.dumps(ENTRIES, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def app_env(tmp_path, vocab_file, monkeypatch):
    """Point the application settings at temporary files"""
    db_path = tmp_path / "documents.db"
    monkeypatch.setenv("VISUAL_SUPPORTS_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.setenv("VISUAL_SUPPORTS_VOCABULARY", str(vocab_file))
    monkeypatch.setenv("VISUAL_SUPPORTS_DB_PATH", str(db_path))
    monkeypatch.setenv("VISUAL_SUPPORTS_LOG_LEVEL", "WARNING")
    return db_path
