"""Sphinx host for trace markers in MyST markdown sources.

Pass 1 runs on ``source-read`` for every document; matrix markers become
``trace-matrix`` placeholders that are only rendered on ``doctree-resolved``,
after all documents have registered their traces.
"""

from __future__ import annotations

from typing import Any

from sphinx.application import Sphinx

from .directives import TraceMatrixDirective
from .events import (
    _on_builder_inited,
    _on_doctree_resolved,
    _on_env_get_outdated,
    _on_source_read,
)
from .nodes import trace_matrix_node


def setup(app: Sphinx) -> dict[str, Any]:
    app.setup_extension("myst_parser")

    app.add_config_value("trace_config", {}, "env")
    app.add_config_value("trace_config_path", "", "env")

    app.add_node(trace_matrix_node)
    app.add_directive("trace-matrix", TraceMatrixDirective)

    app.connect("builder-inited", _on_builder_inited)
    app.connect("env-get-outdated", _on_env_get_outdated)
    app.connect("source-read", _on_source_read)
    app.connect("doctree-resolved", _on_doctree_resolved)

    return {
        "version": "0.1",
        "parallel_read_safe": False,
        "parallel_write_safe": True,
        "env_version": 1,
    }
