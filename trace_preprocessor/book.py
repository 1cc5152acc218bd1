"""Views over mdBook's JSON book representation.

Chapters wrap the decoded JSON objects and mutate them in place, so every key
the preprocessor does not touch is written back exactly as it was received.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import IO, Any, Iterator


@dataclass
class Chapter:
    raw: dict[str, Any]

    @property
    def name(self) -> str:
        return str(self.raw.get("name", ""))

    @property
    def content(self) -> str:
        return str(self.raw.get("content", ""))

    @content.setter
    def content(self, value: str) -> None:
        self.raw["content"] = value

    @property
    def number(self) -> list[int] | None:
        number = self.raw.get("number")
        if number is None:
            return None
        return [int(n) for n in number]

    @property
    def path(self) -> str | None:
        path = self.raw.get("path")
        return None if path is None else str(path)

    @property
    def sub_items(self) -> list[Any]:
        return self.raw.get("sub_items") or []


def _chapter_of(item: Any) -> Chapter | None:
    if isinstance(item, dict) and isinstance(item.get("Chapter"), dict):
        return Chapter(item["Chapter"])
    return None


def _walk(items: list[Any]) -> Iterator[Chapter]:
    for item in items:
        chapter = _chapter_of(item)
        if chapter is None:
            continue
        yield from _walk(chapter.sub_items)
        yield chapter


def iter_chapters(book: dict[str, Any]) -> Iterator[Chapter]:
    """Yield chapters in mdBook's traversal order: sub-items before their parent."""
    yield from _walk(book.get("sections", []))


@dataclass
class PreprocessorInput:
    context: dict[str, Any]
    book: dict[str, Any]

    @property
    def mdbook_version(self) -> str:
        return str(self.context.get("mdbook_version", ""))

    @property
    def renderer(self) -> str:
        return str(self.context.get("renderer", ""))

    def preprocessor_config(self, key: str) -> dict[str, Any]:
        config = self.context.get("config") or {}
        section = (config.get("preprocessor") or {}).get(key) or {}
        return dict(section)


def parse_input(stream: IO[str]) -> PreprocessorInput:
    payload = json.load(stream)
    if not isinstance(payload, list) or len(payload) != 2:
        raise ValueError("expected a JSON array of [context, book]")
    context, book = payload
    if not isinstance(context, dict) or not isinstance(book, dict):
        raise ValueError("context and book must both be JSON objects")
    return PreprocessorInput(context=context, book=book)


def write_book(book: dict[str, Any], stream: IO[str]) -> None:
    json.dump(book, stream)
