from __future__ import annotations

import re

PREPROCESSOR_NAME = "trace-preprocessor"
CONFIG_KEY = "trace"
UNSUPPORTED_RENDERER = "not-supported"

# mdBook release the JSON exchange format was checked against.
MDBOOK_VERSION = "0.4.40"

# {{#trace <target>:<record>}} and {{#tr <target>:<record>}}
TRACE_RE = re.compile(
    r"\{\{#(?:trace|tr)\s+(?P<target>[a-zA-Z0-9_\-]+):\s*(?P<record>.*?)\s*\}\}",
    flags=re.DOTALL,
)

# {{#tracematrix <target>}} and {{#trace_matrix <target>}}
MATRIX_RE = re.compile(
    r"\{\{#(?:tracematrix|trace_matrix)\s+(?P<target>[a-zA-Z0-9_\-]+)\s*\}\}",
    flags=re.DOTALL,
)

# First top-level markdown heading of a chapter.
HEADING_RE = re.compile(r"(^|\n)#\s+(?P<title>.*?)\n")

MATRIX_RULE = "|--------|--------|"
FOOTNOTE_DIVIDER = "\n\n---\n\n"
FOOTNOTE_SEPARATOR = "\n\n"
