from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


import pytest

from trace_preprocessor.config import Config, ParentNumbering, TargetConfig
from trace_preprocessor.registry import TraceRegistry


@pytest.fixture
def make_config():
    def _make(
        *,
        parent_numbering: ParentNumbering = ParentNumbering.ZERO,
        targets: dict[str, str] | None = None,
        **overrides,
    ) -> Config:
        names = {"req": "Requirements"} if targets is None else targets
        return Config(
            parent_numbering=parent_numbering,
            targets={key: TargetConfig(name) for key, name in names.items()},
            **overrides,
        )

    return _make


@pytest.fixture
def config(make_config) -> Config:
    return make_config()


@pytest.fixture
def registry(config: Config) -> TraceRegistry:
    return TraceRegistry(config)
