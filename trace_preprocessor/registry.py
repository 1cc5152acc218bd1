from __future__ import annotations

import logging

from .config import Config
from .errors import UnknownTargetError
from .types import Record, Target, Trace

LOGGER = logging.getLogger(__name__)


class TraceRegistry:
    """Targets seeded from configuration, filled with traces during pass 1."""

    def __init__(self, config: Config) -> None:
        self.targets: dict[str, Target] = {
            target_id: Target(target.name)
            for target_id, target in config.targets.items()
        }

    def target(self, target_id: str) -> Target:
        target = self.targets.get(target_id)
        if target is None:
            raise UnknownTargetError(target_id)
        return target

    def add_trace(self, target_id: str, record_name: str, trace: Trace) -> Record:
        record = self.target(target_id).add_trace(record_name, trace)
        LOGGER.debug(
            "registered trace %s for %s:%s", trace.ident, target_id, record_name
        )
        return record

    def trace_count(self) -> int:
        return sum(
            len(record.traces)
            for target in self.targets.values()
            for record in target.records.values()
        )
