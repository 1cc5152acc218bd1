from __future__ import annotations

from dataclasses import dataclass, field

from .constants import MATRIX_RULE


@dataclass(frozen=True)
class Trace:
    """One occurrence of a trace marker.

    ``number`` is the full hierarchical number: the chapter prefix followed by
    the locally assigned segments. Anchor and footnote ids always use the full
    number, so two traces showing the same unqualified number on a page still
    get distinct ids.
    """

    path: str | None
    number: tuple[int, ...]
    qualified: bool

    def _number(self, sep: str, qualified: bool) -> str:
        if qualified:
            return sep.join(str(n) for n in self.number)
        return str(self.number[-1])

    @property
    def ident(self) -> str:
        return self._number("_", True)

    @property
    def full_number(self) -> str:
        return self._number(".", True)

    @property
    def display_number(self) -> str:
        return self._number(".", self.qualified)

    @property
    def anchor_name(self) -> str:
        return f"trace_{self.ident}"

    @property
    def note_name(self) -> str:
        return f"note_{self.ident}"

    def anchor(self) -> str:
        return f'<a name="{self.anchor_name}"></a>'

    def footnote(self, target_name: str, record_name: str) -> str:
        return (
            f'<a name="{self.note_name}"></a><sup>{self.display_number}</sup> '
            f"{target_name} {record_name}"
        )

    def reference(self) -> str:
        return f'<a href="#{self.note_name}"><sup>{self.display_number}</sup></a>'

    def link(self) -> str:
        if self.path is None:
            return self.full_number
        return f"[{self.full_number}]({self.path}#{self.anchor_name})"


@dataclass
class Record:
    name: str
    # dict keys act as an insertion-ordered set
    traces: dict[Trace, None] = field(default_factory=dict)

    def add_trace(self, trace: Trace) -> None:
        self.traces.setdefault(trace, None)

    def references(self) -> list[str]:
        return [trace.link() for trace in self.traces]


@dataclass
class Target:
    name: str
    records: dict[str, Record] = field(default_factory=dict)

    def add_trace(self, record_name: str, trace: Trace) -> Record:
        record = self.records.get(record_name)
        if record is None:
            record = Record(record_name)
            self.records[record_name] = record
        record.add_trace(trace)
        return record

    def sorted_records(self) -> list[Record]:
        return sorted(self.records.values(), key=lambda record: record.name)

    def matrix(self, record_heading: str, trace_heading: str) -> str:
        rows = [f"| {record_heading} | {trace_heading} |", MATRIX_RULE]
        for record in self.sorted_records():
            rows.append(f"| {record.name} | {', '.join(record.references())} |")
        return "\n".join(rows)
