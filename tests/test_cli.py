from __future__ import annotations

import io
import json
import logging
import subprocess
import sys
from pathlib import Path

import pytest

from tests.book_helpers import book, chapter, context
from trace_preprocessor.cli import ExitCode, main


def _run(monkeypatch: pytest.MonkeyPatch, payload: str) -> tuple[int, str]:
    stdout = io.StringIO()
    monkeypatch.setattr("sys.stdin", io.StringIO(payload))
    monkeypatch.setattr("sys.stdout", stdout)
    code = main([])
    return code, stdout.getvalue()


def test_supports_any_renderer_but_sentinel() -> None:
    assert main(["supports", "html"]) == ExitCode.SUCCESS
    assert main(["supports", "not-supported"]) == ExitCode.FAILURE


def test_preprocesses_book_from_stdin(monkeypatch: pytest.MonkeyPatch) -> None:
    trace_config = {
        "qualified-footnotes": True,
        "targets": {"req": {"name": "Requirements"}},
    }
    payload = [
        context(trace_config),
        book(
            chapter(
                "One", "Do X. {{#trace req: FR-1}}", number=[1], path="chapter_1.md"
            ),
            chapter("Matrix", "{{#tracematrix req}}", number=[2], path="matrix.md"),
        ),
    ]

    code, out = _run(monkeypatch, json.dumps(payload))

    assert code == ExitCode.SUCCESS
    processed = json.loads(out)
    first, second = (item["Chapter"] for item in processed["sections"])
    assert first["content"].endswith("<sup>1.1</sup> Requirements FR-1")
    assert second["content"].endswith("| FR-1 | [1.1](chapter_1.md#trace_1_1) |")
    assert processed["__non_exhaustive"] is None


def test_missing_preprocessor_table_uses_defaults(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    payload = [context(None), book(chapter("One", "No markers.", number=[1]))]

    code, out = _run(monkeypatch, json.dumps(payload))

    assert code == ExitCode.SUCCESS
    assert json.loads(out)["sections"][0]["Chapter"]["content"] == "No markers."


def test_unknown_target_fails_without_output(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    payload = [context({}), book(chapter("One", "{{#trace req:A}}", number=[1]))]

    code, out = _run(monkeypatch, json.dumps(payload))

    assert code == ExitCode.FAILURE
    assert out == ""
    assert "no target defined with id 'req'" in capsys.readouterr().err


def test_late_unknown_target_discards_earlier_chapters(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    payload = [
        context({"targets": {"req": {"name": "Requirements"}}}),
        book(
            chapter("One", "{{#trace req:A}}", number=[1], path="one.md"),
            chapter("Two", "{{#trace other:B}}", number=[2], path="two.md"),
        ),
    ]

    code, out = _run(monkeypatch, json.dumps(payload))

    assert code == ExitCode.FAILURE
    assert out == ""
    assert "no target defined with id 'other'" in capsys.readouterr().err


def test_logs_renderer_at_debug(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    payload = [context({}), book(chapter("One", "No markers.", number=[1]))]

    with caplog.at_level(logging.DEBUG, logger="trace_preprocessor"):
        code, _ = _run(monkeypatch, json.dumps(payload))

    assert code == ExitCode.SUCCESS
    assert "for the html renderer" in caplog.text
    assert "tracing chapter 'One'" in caplog.text


def test_invalid_config_fails(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    payload = [context({"parent-numbering": "bogus"}), book()]

    code, out = _run(monkeypatch, json.dumps(payload))

    assert code == ExitCode.FAILURE
    assert out == ""
    assert "invalid trace configuration" in capsys.readouterr().err


def test_malformed_input_fails(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    code, out = _run(monkeypatch, '{"not": "a pair"}')

    assert code == ExitCode.FAILURE
    assert out == ""
    assert "[context, book]" in capsys.readouterr().err


def test_cli_does_not_load_sphinx() -> None:
    script = (
        "import sys, trace_preprocessor.cli\n"
        "roots = {name.split('.')[0] for name in sys.modules}\n"
        "print(sorted(roots & {'sphinx', 'docutils'}))\n"
    )

    result = subprocess.run(
        [sys.executable, "-c", script],
        capture_output=True,
        text=True,
        check=True,
        cwd=Path(__file__).resolve().parents[1],
    )

    assert result.stdout.strip() == "[]"
