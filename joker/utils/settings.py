"""Central loader for ``config.yaml``.

Reads the project's ``config.yaml`` and exposes it through typed getters
keyed by dotted paths.  ``JOKER_*`` environment variables **always win**
over the YAML file, which is only the friendly fallback.

Usage::

    from joker.utils.settings import settings

    settings.get_int("equity.simulations", 10_000)
    settings.get_str("equity.evaluator", "smart")

Environment equivalent: the YAML key ``equity.simulations`` maps to
``JOKER_EQUITY_SIMULATIONS``.

Loading is lazy (first access) and thread-safe.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Any

import yaml

_log = logging.getLogger("joker.utils.settings")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _find_config_path() -> Path:
    """Resolve ``config.yaml``: ``JOKER_CONFIG_FILE`` first, then walk up from this package."""
    env_path = os.getenv("JOKER_CONFIG_FILE", "").strip()
    if env_path:
        return Path(env_path)

    start = Path(__file__).resolve().parent
    for ancestor in [start, start.parent, start.parent.parent]:
        candidate = ancestor / "config.yaml"
        if candidate.exists():
            return candidate

    return start.parent.parent / "config.yaml"


class JokerSettings:
    """Dotted-key access to settings with ``env > yaml > default`` priority.

    Attributes:
        _data:   Raw mapping loaded from YAML.
        _loaded: Whether the YAML file has been read.
    """

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self._loaded: bool = False
        self._lock = threading.Lock()

    # ── Lazy loading ──────────────────────────────────────────────

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        with self._lock:
            if self._loaded:
                return
            self._load()
            self._loaded = True

    def _load(self) -> None:
        config_path = _find_config_path()
        if not config_path.exists():
            self._data = {}
            return
        try:
            with open(config_path, "r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh)
        except (OSError, yaml.YAMLError) as exc:
            _log.warning("Could not read %s (%s), using defaults", config_path, exc)
            self._data = {}
            return
        self._data = raw if isinstance(raw, dict) else {}

    def reload(self) -> None:
        """Force a re-read of the file (the config path is resolved again)."""
        with self._lock:
            self._loaded = False
            self._load()
            self._loaded = True

    # ── Dotted-key access ─────────────────────────────────────────

    def _resolve(self, dotted_key: str) -> Any:
        """``equity.simulations`` → ``data["equity"]["simulations"]``."""
        self._ensure_loaded()
        node: Any = self._data
        for part in dotted_key.split("."):
            if isinstance(node, dict):
                node = node.get(part)
            else:
                return None
        return node

    @staticmethod
    def _env_key(dotted_key: str) -> str:
        return "JOKER_" + dotted_key.upper().replace(".", "_")

    # ── Typed getters ─────────────────────────────────────────────

    def get_str(self, key: str, default: str = "") -> str:
        env_val = os.getenv(self._env_key(key), "").strip()
        if env_val:
            return env_val
        yaml_val = self._resolve(key)
        if yaml_val is not None:
            return str(yaml_val)
        return default

    def get_int(self, key: str, default: int = 0) -> int:
        env_val = os.getenv(self._env_key(key), "").strip()
        if env_val:
            try:
                return int(env_val)
            except ValueError:
                _log.warning("Ignoring non-integer %s=%r", self._env_key(key), env_val)
        yaml_val = self._resolve(key)
        if yaml_val is not None:
            try:
                return int(yaml_val)
            except (ValueError, TypeError):
                _log.warning("Ignoring non-integer %s=%r in config.yaml", key, yaml_val)
        return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        env_val = os.getenv(self._env_key(key), "").strip().lower()
        if env_val in _TRUE:
            return True
        if env_val in _FALSE:
            return False
        yaml_val = self._resolve(key)
        if isinstance(yaml_val, bool):
            return yaml_val
        if yaml_val is not None:
            raw = str(yaml_val).strip().lower()
            if raw in _TRUE:
                return True
            if raw in _FALSE:
                return False
        return default

    def __repr__(self) -> str:
        self._ensure_loaded()
        return f"<JokerSettings sections={list(self._data.keys())}>"


# ── Global singleton ─────────────────────────────────────────────
settings = JokerSettings()
