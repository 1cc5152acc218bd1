from __future__ import annotations

import logging
import re
from typing import Sequence

from .config import Config
from .constants import (
    FOOTNOTE_DIVIDER,
    FOOTNOTE_SEPARATOR,
    HEADING_RE,
    MATRIX_RE,
    TRACE_RE,
)
from .numbering import trace_number
from .registry import TraceRegistry
from .types import Trace

LOGGER = logging.getLogger(__name__)


def number_heading(content: str, number: Sequence[int] | None) -> str:
    """Prefix the first top-level heading with the chapter number."""
    if not number:
        return content

    label = ".".join(str(n) for n in number)

    def _replace(match: re.Match[str]) -> str:
        return f"\n# {label} {match.group('title')}\n\n"

    return HEADING_RE.sub(_replace, content, count=1)


def generate_traces(
    content: str,
    *,
    registry: TraceRegistry,
    config: Config,
    path: str | None,
    prefix: Sequence[int],
    subchapter_count: int,
) -> str:
    """Replace trace markers with anchors and references, appending footnotes.

    Raises ``UnknownTargetError`` for a marker naming an unconfigured target;
    the partially rewritten content is discarded with it.
    """
    footnotes: list[str] = []
    count = 0

    def _replace(match: re.Match[str]) -> str:
        nonlocal count
        count += 1
        target_id = match.group("target")
        record_name = match.group("record")
        target = registry.target(target_id)

        number = trace_number(
            config.parent_numbering, prefix, count, subchapter_count
        )
        trace = Trace(path, number, config.qualified_footnotes)
        registry.add_trace(target_id, record_name, trace)

        footnotes.append(trace.footnote(target.name, record_name))
        return trace.anchor() + trace.reference()

    rewritten = TRACE_RE.sub(_replace, content)
    if not footnotes:
        return rewritten

    footer = FOOTNOTE_SEPARATOR.join(footnotes)
    separator = FOOTNOTE_DIVIDER if config.footnote_divider else FOOTNOTE_SEPARATOR
    return rewritten + separator + footer


def generate_matrices(content: str, *, registry: TraceRegistry, config: Config) -> str:
    """Replace matrix markers with a table of every record of the target."""

    def _replace(match: re.Match[str]) -> str:
        target_id = match.group("target")
        target = registry.target(target_id)
        LOGGER.debug(
            "rendering trace matrix for %s (%d records)",
            target_id,
            len(target.records),
        )
        return target.matrix(config.record_heading, config.trace_heading)

    return MATRIX_RE.sub(_replace, content)
