from __future__ import annotations

from .config import Config, ParentNumbering, TargetConfig
from .errors import ConfigError, TracePreprocessorError, UnknownTargetError
from .preprocessor import TracePreprocessor
from .registry import TraceRegistry
from .types import Record, Target, Trace

__all__ = [
    "Config",
    "ConfigError",
    "ParentNumbering",
    "Record",
    "Target",
    "TargetConfig",
    "Trace",
    "TracePreprocessor",
    "TracePreprocessorError",
    "TraceRegistry",
    "UnknownTargetError",
]
