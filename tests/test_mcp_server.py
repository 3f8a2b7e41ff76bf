import asyncio
import json

import pytest

from mcp_server import server


@pytest.fixture(autouse=True)
def loaded_index(monkeypatch, index):
    monkeypatch.setattr(server, "index", index)
    return index


def test_add_visual_supports_tool():
    data = json.loads(asyncio.run(server.add_visual_supports("The sun is up")))
    assert data["text"] == "The sun ☀️ is up"
    assert data["stats"]["categories_used"] == ["nature"]


def test_batch_tool_preserves_order():
    data = json.loads(asyncio.run(server.add_visual_supports_batch(["dog", "x", "cat dog"])))
    assert data["items"] == ["dog 🐶", "x", "cat 🐱 dog 🐶"]
    assert data["summary"]["unique_matched"] == 2


def test_vocabulary_breakdown_tool(loaded_index):
    data = json.loads(asyncio.run(server.vocabulary_breakdown()))
    assert data["vocabulary_size"] == loaded_index.size
    assert [c["category"] for c in data["categories"]] == ["animals", "feelings", "food", "nature"]
    assert data["categories"][0]["label"] == "Animals"


def test_get_index_loads_configured_file(monkeypatch, app_env):
    monkeypatch.setattr(server, "index", None)
    assert server.get_index().size == 6
