import asyncio
import json

import yaml

from kernel.kernel import _create_plugin, base_kernel, invoke_visual_supports
from plugins.visual_supports_plugin import VisualSupportsPlugin


def test_add_visual_supports(index):
    plugin = VisualSupportsPlugin(index=index)
    assert plugin.add_visual_supports("Hello, world!") == "Hello, world 🌍!"


def test_report_is_json(index):
    plugin = VisualSupportsPlugin(index=index)
    report = json.loads(plugin.visual_supports_report("cat cat\ndog cat"))

    assert report["text"] == "cat 🐱 cat 🐱\ndog 🐶 cat 🐱"
    assert report["summary"]["unique_matched"] == 2
    assert report["summary"]["matched_words"] == 4


def test_plugin_loads_vocabulary_file(vocab_file):
    plugin = VisualSupportsPlugin(vocabulary_path=str(vocab_file))
    assert plugin.index.size == 6


def _write_config(tmp_path, vocab_file, enable=True):
    path = tmp_path / "kernel_config.yaml"
    path.write_text(yaml.safe_dump({
        "plugins": [{
            "name": "visual_supports_plugin",
            "class_name": "VisualSupportsPlugin",
            "alias": "VisualSupports",
            "enable": enable,
            "kwargs": {"vocabulary_path": str(vocab_file)},
        }]
    }), encoding="utf-8")
    return path


def test_create_plugin_from_spec(vocab_file):
    plugin, alias = _create_plugin({
        "name": "visual_supports_plugin",
        "class_name": "VisualSupportsPlugin",
        "kwargs": {"vocabulary_path": str(vocab_file)},
    })
    assert alias == "VisualSupportsPlugin"
    assert isinstance(plugin, VisualSupportsPlugin)


def test_kernel_invokes_plugin(tmp_path, vocab_file):
    k = base_kernel(_write_config(tmp_path, vocab_file))

    assert k.get_function("VisualSupports", "add_visual_supports") is not None
    assert asyncio.run(invoke_visual_supports(k, "my dog")) == "my dog 🐶"


def test_disabled_plugin_is_not_registered(tmp_path, vocab_file):
    k = base_kernel(_write_config(tmp_path, vocab_file, enable=False))
    assert "VisualSupports" not in k.plugins


def test_report_keeps_line_endings(index):
    plugin = VisualSupportsPlugin(index=index)
    report = json.loads(plugin.visual_supports_report("my cat\r\nthe dog\n"))

    assert report["text"] == "my cat 🐱\r\nthe dog 🐶\n"
    assert report["summary"]["supports_added"] == 2
