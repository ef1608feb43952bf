import os
import yaml

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
DEFAULT_CONFIG_PATH = os.path.join(PROJECT_ROOT, "config", "config.yaml")


def load_config(config_path=None):
    """Read the YAML config; PLAYERBOOK_CONFIG_PATH overrides the default location."""
    config_path = config_path or os.getenv("PLAYERBOOK_CONFIG_PATH") or DEFAULT_CONFIG_PATH
    if not os.path.exists(config_path):
        return {}
    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}
