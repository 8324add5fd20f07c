import logging
import math
import re
from typing import Any, Iterable, List, Optional

from book import Book

logger = logging.getLogger(__name__)

SEED_BOOKS = [
    {"id": 1, "title": "Book1", "author": "Author1"},
    {"id": 2, "title": "Book2", "author": "Author2"},
]


DECIMAL_ID = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
PREFIXED_ID = re.compile(r"0([xX][0-9a-fA-F]+|[bB][01]+|[oO][0-7]+)")


def parse_book_id(raw: Any) -> Optional[int]:
    """Turn a path segment into a book id, or None when it cannot match any book.

    Accepts plain decimal numbers that are finite and integral ("2", " 2 ", "2.0", "2e0")
    and unsigned hex/binary/octal literals ("0xA", "0b10", "0o2").
    Everything else ("1_0", "abc", "1.5") yields None, which callers treat as "not found".
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if PREFIXED_ID.fullmatch(text):
        return int(text, 0)
    if not DECIMAL_ID.fullmatch(text):
        return None
    value = float(text)
    if not math.isfinite(value) or not value.is_integer():
        return None
    return int(value)


class Library:
    """Owns the in-memory collection of books and its CRUD rules."""

    def __init__(self, books: Optional[Iterable[dict]] = None) -> None:
        self.books: List[Book] = []
        if books:
            self.seed(books)

    # ------------------------- Core operations ------------------------- #
    def list_books(self) -> List[Book]:
        return list(self.books)

    def find_book(self, book_id: Any) -> Book:
        """Return the book with the given id or raise BookNotFoundError."""
        index = self._index_of(book_id)
        return self.books[index]

    def add_book(self, title: Any = None, author: Any = None) -> Book:
        """Append a new book. The id follows the current last record."""
        new_id = self.books[-1].id + 1 if self.books else 1
        book = Book(id=new_id, title=title, author=author)
        self.books.append(book)
        logger.info(f"Book created: id={new_id}")
        return book

    def update_book(self, book_id: Any, title: Any = None, author: Any = None) -> Book:
        """Replace a book wholesale, keeping its id and position."""
        index = self._index_of(book_id)
        book = Book(id=self.books[index].id, title=title, author=author)
        self.books[index] = book
        logger.info(f"Book updated: id={book.id}")
        return book

    def remove_book(self, book_id: Any) -> Book:
        index = self._index_of(book_id)
        book = self.books.pop(index)
        logger.info(f"Book removed: id={book.id}")
        return book

    def count(self) -> int:
        return len(self.books)

    def seed(self, records: Iterable[dict]) -> None:
        """Load initial records, keeping their ids. Used at startup and in tests."""
        for record in records:
            book = Book.from_dict(record)
            if any(b.id == book.id for b in self.books):
                raise ValueError(f"Book with id {book.id} already exists.")
            self.books.append(book)

    # ------------------------- Utilities ------------------------- #
    def _index_of(self, book_id: Any) -> int:
        parsed = parse_book_id(book_id)
        if parsed is not None:
            for index, book in enumerate(self.books):
                if book.id == parsed:
                    return index
        logger.debug(f"Book lookup missed: id={book_id!r}")
        raise BookNotFoundError(book_id)


class BookNotFoundError(LookupError):
    """Raised when a path id matches no live book."""

    def __init__(self, book_id: Any) -> None:
        super().__init__(f"Book {book_id!r} not found.")
        self.book_id = book_id
