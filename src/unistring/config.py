"""Config: load/save, service toggles. YAML file merged over DEFAULT_CONFIG."""
import copy
import logging
import os
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "collation": {"enabled": True, "locale": None},
    "normalization": {"enabled": True},
    "to_ascii": {"best_effort": False},
    "log_level": "WARNING",
}

CONFIG_PATH = Path(__file__).resolve().parent.parent.parent / "configs" / "unistring.yaml"


def config_path() -> Path:
    """UNISTRING_CONFIG if set, else configs/unistring.yaml in the project."""
    env = os.environ.get("UNISTRING_CONFIG")
    return Path(env) if env else CONFIG_PATH


def _merge(base: dict, override: dict) -> dict:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def load_config(path: str | Path | None = None) -> dict:
    path = Path(path) if path else config_path()
    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                cfg = yaml.safe_load(f) or {}
            if not isinstance(cfg, dict):
                raise ValueError(f"top level must be a mapping, got {type(cfg).__name__}")
            return _merge(DEFAULT_CONFIG, cfg)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.warning("Ignoring config %s: %s", path, e)
    else:
        logger.debug("No config at %s, using defaults", path)
    return copy.deepcopy(DEFAULT_CONFIG)


def save_config(cfg: dict, path: str | Path | None = None) -> None:
    path = Path(path) if path else config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(cfg, f, sort_keys=False, allow_unicode=True)


def get_best_effort_default() -> bool:
    return bool(load_config().get("to_ascii", {}).get("best_effort", False))
