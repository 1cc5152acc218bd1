from __future__ import annotations


class TracePreprocessorError(RuntimeError):
    """Base class for failures that abort a preprocessing run."""


class UnknownTargetError(TracePreprocessorError):
    def __init__(self, target_id: str) -> None:
        super().__init__(f"no target defined with id '{target_id}'.")
        self.target_id = target_id


class ConfigError(TracePreprocessorError):
    pass
