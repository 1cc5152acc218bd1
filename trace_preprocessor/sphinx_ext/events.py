from __future__ import annotations

import re
from pathlib import Path

from docutils import nodes
from sphinx.application import Sphinx
from sphinx.environment import BuildEnvironment
from sphinx.errors import ExtensionError

from ..constants import MATRIX_RE
from ..errors import TracePreprocessorError
from ..registry import TraceRegistry
from ..scanner import generate_traces
from .matrix import _resolve_trace_matrices
from .store import _ensure_env, _reset_env

# leading whitespace and list bullet of the line holding a matrix marker
_LINE_INDENT_RE = re.compile(r"[ \t]*(?:[-*+]|\d+[.)])?[ \t]*\Z")


def _is_markdown(app: Sphinx, env: BuildEnvironment, docname: str) -> bool:
    suffix = Path(str(env.doc2path(docname))).suffix
    return app.config.source_suffix.get(suffix) == "markdown"


def _fence_indent(content: str, start: int) -> str:
    line_start = content.rfind("\n", 0, start) + 1
    lead = content[line_start:start]
    if _LINE_INDENT_RE.match(lead) is None:
        return ""
    return " " * len(lead.expandtabs(4))


def _defer_matrices(content: str, registry: TraceRegistry) -> str:
    """Turn matrix markers into directives rendered after all documents are read.

    The fence is indented to the marker's line, so a marker inside a list item
    stays in that item.
    """

    def _replace(match: re.Match[str]) -> str:
        target_id = match.group("target")
        registry.target(target_id)
        indent = _fence_indent(content, match.start())
        return f"\n{indent}```{{trace-matrix}} {target_id}\n{indent}```\n"

    return MATRIX_RE.sub(_replace, content)


def _on_builder_inited(app: Sphinx) -> None:
    try:
        _reset_env(app, app.builder.env)
    except TracePreprocessorError as exc:
        raise ExtensionError(str(exc)) from exc


def _on_env_get_outdated(
    app: Sphinx,
    env: BuildEnvironment,
    added: set[str],
    changed: set[str],
    removed: set[str],
) -> list[str]:
    # the registry is rebuilt on every run, so every document is re-read
    return sorted(env.found_docs)


def _on_source_read(app: Sphinx, docname: str, source: list[str]) -> None:
    env = app.builder.env
    _ensure_env(app, env)
    if not _is_markdown(app, env, docname):
        return

    try:
        content = generate_traces(
            source[0],
            registry=env.trace_registry,
            config=env.trace_config,
            path=docname,
            prefix=[],
            subchapter_count=0,
        )
        source[0] = _defer_matrices(content, env.trace_registry)
    except TracePreprocessorError as exc:
        raise ExtensionError(f"{exc} ({docname})") from exc


def _on_doctree_resolved(app: Sphinx, doctree: nodes.document, docname: str) -> None:
    env = app.builder.env
    _ensure_env(app, env)
    try:
        _resolve_trace_matrices(app, doctree, docname)
    except TracePreprocessorError as exc:
        raise ExtensionError(f"{exc} ({docname})") from exc
