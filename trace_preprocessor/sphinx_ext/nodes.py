from __future__ import annotations

from docutils import nodes


class trace_matrix_node(nodes.General, nodes.Element):
    """Placeholder for a matrix, replaced once every document has been read."""
