from __future__ import annotations

from typing import Callable

from docutils import nodes
from sphinx.application import Sphinx
from sphinx.util import logging

from ..types import Target, Trace
from .nodes import trace_matrix_node

LOGGER = logging.getLogger(__name__)


def _entry(*children: nodes.Node) -> nodes.entry:
    entry = nodes.entry()
    paragraph = nodes.paragraph()
    for child in children:
        paragraph += child
    entry += paragraph
    return entry


def _trace_links(
    traces: list[Trace], refuri_for: Callable[[Trace], str]
) -> list[nodes.Node]:
    children: list[nodes.Node] = []
    for index, trace in enumerate(traces):
        if index > 0:
            children.append(nodes.Text(", "))
        if trace.path is None:
            children.append(nodes.Text(trace.full_number))
        else:
            children.append(
                nodes.reference(text=trace.full_number, refuri=refuri_for(trace))
            )
    return children


def _build_matrix_table(
    target: Target,
    *,
    record_heading: str,
    trace_heading: str,
    refuri_for: Callable[[Trace], str],
) -> nodes.table:
    table_node = nodes.table()
    table_node["classes"].append("trace-matrix")

    tgroup = nodes.tgroup(cols=2)
    table_node += tgroup
    for _ in range(2):
        tgroup += nodes.colspec(colwidth=1)

    thead = nodes.thead()
    tgroup += thead
    head_row = nodes.row()
    thead += head_row
    head_row += _entry(nodes.Text(record_heading))
    head_row += _entry(nodes.Text(trace_heading))

    tbody = nodes.tbody()
    tgroup += tbody
    for record in target.sorted_records():
        row_node = nodes.row()
        tbody += row_node
        row_node += _entry(nodes.Text(record.name))
        row_node += _entry(*_trace_links(list(record.traces), refuri_for))

    return table_node


def _resolve_trace_matrices(app: Sphinx, doctree: nodes.document, docname: str) -> None:
    env = app.builder.env
    config = env.trace_config

    def _refuri(trace: Trace) -> str:
        uri = app.builder.get_relative_uri(docname, trace.path)
        return f"{uri}#{trace.anchor_name}"

    for placeholder in list(doctree.findall(trace_matrix_node)):
        target = env.trace_registry.target(placeholder["target"])
        LOGGER.debug(
            "rendering trace matrix for %s in %s", placeholder["target"], docname
        )
        placeholder.replace_self(
            _build_matrix_table(
                target,
                record_heading=config.record_heading,
                trace_heading=config.trace_heading,
                refuri_for=_refuri,
            )
        )
