"""Book model and its SQLite-backed repository."""

from __future__ import annotations

import sqlite3
from dataclasses import asdict, dataclass, replace
from typing import Any, Mapping

TABLE_NAME = "books"
COLUMNS = ("title", "author", "genre", "purpose", "description")

_SELECT = f"SELECT id, {', '.join(COLUMNS)} FROM {TABLE_NAME}"


@dataclass
class Book:
    """A book record; ``id`` is 0 until the book has been stored."""

    id: int = 0
    title: str = ""
    author: str = ""
    genre: str = ""
    purpose: str = ""
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class BookNotFoundError(LookupError):
    """Raised when no book matches a lookup."""


def migrate(connection: sqlite3.Connection) -> None:
    """Create the books table if it does not exist yet."""
    with connection:
        connection.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                author TEXT NOT NULL,
                genre TEXT NOT NULL,
                purpose TEXT NOT NULL,
                description TEXT NOT NULL
            )
            """
        )


def _to_book(row: tuple) -> Book:
    return Book(*row)


class BookRepository:
    """Stores and retrieves books through an SQLite connection."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def create(self, book: Book) -> Book:
        """Insert ``book``, assign its new id and return it."""
        with self._connection:
            cursor = self._connection.execute(
                f"INSERT INTO {TABLE_NAME} ({', '.join(COLUMNS)}) "
                "VALUES (?, ?, ?, ?, ?)",
                (book.title, book.author, book.genre, book.purpose, book.description),
            )
        book.id = cursor.lastrowid
        return book

    def get_all(self) -> list[Book]:
        rows = self._connection.execute(f"{_SELECT} ORDER BY id").fetchall()
        return [_to_book(row) for row in rows]

    def get_by_id(self, book_id: int) -> Book:
        row = self._connection.execute(
            f"{_SELECT} WHERE id = ? ORDER BY id LIMIT 1", (book_id,)
        ).fetchone()
        if row is None:
            raise BookNotFoundError(f"record not found: book {book_id}")
        return _to_book(row)

    def update(self, book_id: int, updates: Mapping[str, Any]) -> Book:
        """Apply column updates to a book and return the updated record."""
        book = self.get_by_id(book_id)
        unknown = set(updates) - set(COLUMNS)
        if unknown:
            raise ValueError(f"unknown columns: {', '.join(sorted(unknown))}")
        if not updates:
            return book
        names = list(updates)
        assignments = ", ".join(f"{name} = ?" for name in names)
        with self._connection:
            self._connection.execute(
                f"UPDATE {TABLE_NAME} SET {assignments} WHERE id = ?",
                (*(updates[name] for name in names), book_id),
            )
        return replace(book, **updates)

    def delete(self, book_id: int) -> Book:
        """Remove a book and return it as it was before removal."""
        book = self.get_by_id(book_id)
        with self._connection:
            self._connection.execute(
                f"DELETE FROM {TABLE_NAME} WHERE id = ?", (book_id,)
            )
        return book

    def find_by_genre_and_purpose(self, genre: str, purpose: str) -> Book:
        """Return the first book (lowest id) with the given genre and purpose."""
        row = self._connection.execute(
            f"{_SELECT} WHERE genre = ? AND purpose = ? ORDER BY id LIMIT 1",
            (genre, purpose),
        ).fetchone()
        if row is None:
            raise BookNotFoundError(
                f"record not found: genre={genre!r} purpose={purpose!r}"
            )
        return _to_book(row)