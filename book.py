from __future__ import annotations

from typing import Any


class Book:
    """A single book record held by the library."""

    def __init__(self, id: int, title: Any = None, author: Any = None) -> None:
        # title/author are stored exactly as received; no stripping or checks
        self.id = id
        self.title = title
        self.author = author

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.title} by {self.author} (#{self.id})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
        }

    @staticmethod
    def from_dict(data: dict) -> "Book":
        return Book(
            id=int(data["id"]),
            title=data.get("title"),
            author=data.get("author"),
        )
