from __future__ import annotations

from pathlib import Path
from typing import Any

from sphinx.application import Sphinx
from sphinx.environment import BuildEnvironment

from ..config import Config, load_config_file
from ..registry import TraceRegistry


def _config_from_app(app: Sphinx) -> Config:
    payload: dict[str, Any] = {}
    path_raw = str(app.config.trace_config_path).strip()
    if path_raw:
        path = Path(path_raw)
        if not path.is_absolute():
            path = Path(app.confdir) / path
        payload.update(load_config_file(path))
    payload.update(app.config.trace_config or {})
    return Config.from_mapping(payload)


def _reset_env(app: Sphinx, env: BuildEnvironment) -> None:
    env.trace_config = _config_from_app(app)
    env.trace_registry = TraceRegistry(env.trace_config)


def _ensure_env(app: Sphinx, env: BuildEnvironment) -> None:
    if not hasattr(env, "trace_config") or not hasattr(env, "trace_registry"):
        _reset_env(app, env)
