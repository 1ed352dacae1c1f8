from __future__ import annotations

# userdb/services/config_svc.py
import logging
import os

import yaml

logger = logging.getLogger(__name__)

_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
DEFAULT_CONFIG_PATH = os.path.join(_PROJECT_ROOT, "config.yaml")

DEFAULTS = {
    "db_path": "test.db",
    "test_db_path": "",
    "log_level": "WARNING",
    "strict_exit": False,
}


def _read_config_yaml(path: str) -> dict:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("ignoring unreadable config %s: %s", path, e)
        return {}
    if not isinstance(cfg, dict):
        return {}
    return cfg


def get_config(path: str | None = None) -> dict:
    """合并 config.yaml 与默认值，并做类型归一。"""
    cfg = _read_config_yaml(path or os.environ.get("USERDB_CONFIG") or DEFAULT_CONFIG_PATH)

    out = dict(DEFAULTS)
    for k in ("db_path", "test_db_path"):
        v = cfg.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    lvl = cfg.get("log_level")
    if isinstance(lvl, str) and lvl.strip():
        out["log_level"] = lvl.strip().upper()
    if isinstance(cfg.get("strict_exit"), bool):
        out["strict_exit"] = cfg["strict_exit"]
    return out
