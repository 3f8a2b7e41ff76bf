import importlib

import yaml
from semantic_kernel import Kernel

from src.config import PROJECT_ROOT

DEFAULT_KERNEL_CONFIG = PROJECT_ROOT / "config" / "kernel_config.yaml"


def _load_config(path):
    with open(path, "r") as file:
        return yaml.safe_load(file)


def _create_plugin(plugin_spec):
    if isinstance(plugin_spec, str):
        name = plugin_spec
        class_name = "".join(part.title() for part in name.split("_"))
        args, kwargs, alias = [], {}, None
    else:
        name = plugin_spec["name"]
        class_name = plugin_spec["class_name"]
        args = plugin_spec.get("args", [])
        kwargs = plugin_spec.get("kwargs", {})
        alias = plugin_spec.get("alias")  # may be None

    for dotted in (f"plugins.{name}", name):
        try:
            mod = importlib.import_module(dotted)
            cls = getattr(mod, class_name)
            break
        except (ModuleNotFoundError, AttributeError):
            continue
    else:
        raise ImportError(f"Could not find plugin class {class_name} in {name}")

    instance = cls(*args, **kwargs)
    return instance, alias or cls.__name__  # alias defaults to class name


def base_kernel(config_path=None) -> Kernel:
    k = Kernel()
    c = _load_config(config_path or DEFAULT_KERNEL_CONFIG)

    for plugin_spec in c.get("plugins", []):
        if isinstance(plugin_spec, dict) and plugin_spec.get("enable", True) is not True:
            continue
        plugin, alias = _create_plugin(plugin_spec)
        k.add_plugin(plugin=plugin, plugin_name=alias)

    return k


async def invoke_visual_supports(k: Kernel, text: str, plugin_name: str = "VisualSupports") -> str:
    result = await k.invoke(
        plugin_name=plugin_name, function_name="add_visual_supports", text=text
    )
    return str(result.value)
