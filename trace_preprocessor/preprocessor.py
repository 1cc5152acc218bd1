from __future__ import annotations

import logging
import re
from typing import Any

from .book import Chapter, iter_chapters
from .config import Config
from .constants import MDBOOK_VERSION, PREPROCESSOR_NAME, UNSUPPORTED_RENDERER
from .registry import TraceRegistry
from .scanner import generate_matrices, generate_traces, number_heading

LOGGER = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)")


def _parse_version(value: str) -> tuple[int, int, int] | None:
    match = _VERSION_RE.match(value.strip())
    if match is None:
        return None
    major, minor, patch = (int(part) for part in match.groups())
    return major, minor, patch


def version_compatible(actual: str, required: str = MDBOOK_VERSION) -> bool:
    """Check ``actual`` against the caret requirement ``^required``."""
    have = _parse_version(actual)
    want = _parse_version(required)
    if have is None or want is None:
        return False
    if have < want:
        return False
    # the first non-zero component of the requirement must match
    for have_part, want_part in zip(have, want):
        if want_part != 0:
            return have_part == want_part
        if have_part != 0:
            return False
    return True


def supports_renderer(renderer: str) -> bool:
    return renderer != UNSUPPORTED_RENDERER


class TracePreprocessor:
    """Runs both marker passes over an mdBook book with one registry."""

    name = PREPROCESSOR_NAME

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()
        self.registry = TraceRegistry(self.config)

    def check_version(self, mdbook_version: str) -> None:
        if not version_compatible(mdbook_version):
            LOGGER.warning(
                "The %s plugin was built against version %s of mdbook, "
                "but we're being called from version %s",
                self.name,
                MDBOOK_VERSION,
                mdbook_version,
            )

    def _trace_chapter(self, chapter: Chapter) -> None:
        LOGGER.debug("tracing chapter %r", chapter.name)
        content = chapter.content
        if self.config.chapter_numbers:
            content = number_heading(content, chapter.number)
        chapter.content = generate_traces(
            content,
            registry=self.registry,
            config=self.config,
            path=chapter.path,
            prefix=chapter.number or [],
            subchapter_count=len(chapter.sub_items),
        )

    def _tabulate_chapter(self, chapter: Chapter) -> None:
        chapter.content = generate_matrices(
            chapter.content, registry=self.registry, config=self.config
        )

    def run(self, book: dict[str, Any]) -> dict[str, Any]:
        """Rewrite every chapter of ``book`` in place and return it.

        An error aborts the run part way through, leaving chapters that were
        already processed rewritten. Callers that must not expose a partially
        substituted book discard it on error, as the CLI does.
        """
        # matrices may summarise chapters that come later in the book, so every
        # chapter is traced before any matrix is rendered
        for chapter in iter_chapters(book):
            self._trace_chapter(chapter)
        for chapter in iter_chapters(book):
            self._tabulate_chapter(chapter)
        LOGGER.debug("registered %d traces", self.registry.trace_count())
        return book
