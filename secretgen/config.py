# secretgen/config.py
"""
Simple settings persistence for secretgen.
Settings saved as JSON in %APPDATA%/SecretGen/config.json (Windows) or ~/.secretgen/config.json (fallback).
SECRETGEN_CONFIG points at an explicit file instead.
"""

import os
import json
from typing import Dict, Any, List

from .logging import get_logger

log = get_logger(__name__)

DEFAULTS: Dict[str, Any] = {
    "length": 12,
    "error_level_fail": 3,      # CRITICAL
    "rndsrc": "/dev/urandom",   # "-" reads stdin
    "no_default": False,
    "charlists": [],
    "copies": 1,
}

def _appdata_dir() -> str:
    appdata = os.getenv("APPDATA")
    if appdata:
        return os.path.join(appdata, "SecretGen")
    return os.path.join(os.path.expanduser("~"), ".secretgen")

def config_path() -> str:
    explicit = os.getenv("SECRETGEN_CONFIG")
    if explicit:
        return explicit
    return os.path.join(_appdata_dir(), "config.json")

def load_config() -> Dict[str, Any]:
    p = config_path()
    out = DEFAULTS.copy()
    if not os.path.exists(p):
        return out
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        log.warning("ignoring unreadable config %s: %s", p, e)
        return out
    if not isinstance(data, dict):
        log.warning("ignoring config %s: expected a JSON object", p)
        return out
    # merge defaults, unknown keys dropped
    for key, value in data.items():
        if key not in DEFAULTS:
            continue
        try:
            out[key] = _checked_value(key, value)
        except ValueError as e:
            log.warning("ignoring %s in config %s: %s", key, p, e)
    return out

def _checked_value(key: str, value: Any) -> Any:
    """Return `value` with the type of DEFAULTS[key]; strings are coerced."""
    default = DEFAULTS[key]
    if isinstance(default, list):
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            return value
    elif isinstance(value, str) and not isinstance(default, str):
        return coerce_value(key, [value])
    elif isinstance(default, bool):
        if isinstance(value, bool):
            return value
    elif isinstance(default, int):
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif isinstance(value, type(default)):
        return value
    raise ValueError(f"expected {type(default).__name__}, got {value!r}")

def save_config(cfg: Dict[str, Any]) -> str:
    p = config_path()
    d = os.path.dirname(p)
    if d:
        os.makedirs(d, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        json.dump(cfg, f, ensure_ascii=False, indent=2)
    return p

def coerce_value(key: str, values: List[str]) -> Any:
    """Convert CLI strings into the type of DEFAULTS[key]."""
    if key not in DEFAULTS:
        raise KeyError(key)
    default = DEFAULTS[key]
    if isinstance(default, list):
        return list(values)
    if len(values) != 1:
        raise ValueError(f"{key} takes exactly one value")
    raw = values[0]
    if isinstance(default, bool):
        lowered = raw.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        raise ValueError(f"{key} expects a boolean, got {raw!r}")
    if isinstance(default, int):
        return int(raw)
    return raw
