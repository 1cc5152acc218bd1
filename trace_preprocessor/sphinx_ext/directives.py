from __future__ import annotations

from docutils import nodes
from docutils.parsers.rst import Directive
from sphinx.environment import BuildEnvironment
from sphinx.errors import ExtensionError

from ..errors import UnknownTargetError
from .nodes import trace_matrix_node


class TraceMatrixDirective(Directive):
    has_content = False
    required_arguments = 1

    def run(self) -> list[nodes.Node]:
        env: BuildEnvironment = self.state.document.settings.env
        target_id = self.arguments[0].strip()
        try:
            env.trace_registry.target(target_id)
        except UnknownTargetError as exc:
            raise ExtensionError(f"{exc} ({env.docname})") from exc
        return [trace_matrix_node(target=target_id)]
