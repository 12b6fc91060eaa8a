"""Sample data, factories and an in-memory database for exercising the API."""

from __future__ import annotations

import os
import random
import sqlite3
import string
from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping, Optional

from .dto import CreateBookRequest
from .models import COLUMNS, TABLE_NAME, Book, BookNotFoundError, migrate

GENRE_OPTIONS: tuple[str, ...] = (
    "Fiction",
    "Non-Fiction",
    "Technology",
    "Business",
    "Science",
    "History",
    "Biography",
    "Self-Help",
    "Travel",
    "Cooking",
)

PURPOSE_OPTIONS: tuple[str, ...] = (
    "Entertainment",
    "Learning",
    "Research",
    "Reference",
    "Inspiration",
)

SAMPLE_AUTHORS: tuple[str, ...] = (
    "山田太郎",
    "田中花子",
    "佐藤次郎",
    "鈴木美香",
    "高橋一郎",
    "John Smith",
    "Jane Doe",
    "Robert Johnson",
    "Emily Davis",
    "Michael Brown",
)

SAMPLE_TITLES: tuple[str, ...] = (
    "素晴らしい本",
    "技術の未来",
    "ビジネス戦略",
    "人生の教訓",
    "冒険の物語",
    "The Great Adventure",
    "Tech Revolution",
    "Business Mastery",
    "Life Lessons",
    "Creative Writing",
)

_CHARSET = string.ascii_lowercase + string.ascii_uppercase + string.digits + " "

_random = random.Random()


class BookFactory:
    """Produces numbered books and create requests with random genre and purpose."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._counter = 0
        self._random = random.Random(seed)

    def _defaults(self) -> dict[str, str]:
        self._counter += 1
        return {
            "title": f"Test Book {self._counter}",
            "author": f"Test Author {self._counter}",
            "genre": self._random.choice(GENRE_OPTIONS),
            "purpose": self._random.choice(PURPOSE_OPTIONS),
            "description": f"Test Description for book {self._counter}",
        }

    def create_book(self, **kwargs: Any) -> Book:
        """A new book; keyword arguments override any of its fields."""
        return Book(**{**self._defaults(), **kwargs})

    def create_book_request(self, **kwargs: Any) -> CreateBookRequest:
        """A new create request; keyword arguments override any of its fields."""
        return CreateBookRequest(**{**self._defaults(), **kwargs})

    def create_books(self, count: int) -> list[Book]:
        return [self.create_book() for _ in range(count)]

    def create_book_requests(self, count: int) -> list[CreateBookRequest]:
        return [self.create_book_request() for _ in range(count)]

    def create_fiction_book(self) -> Book:
        return self.create_book(genre="Fiction", purpose="Entertainment")

    def create_tech_book(self) -> Book:
        return self.create_book(genre="Technology", purpose="Learning")

    def create_business_book(self) -> Book:
        return self.create_book(genre="Business", purpose="Learning")


class MemoryDatabase:
    """A migrated in-memory SQLite database with helpers for test data."""

    def __init__(self) -> None:
        self.connection = sqlite3.connect(":memory:", check_same_thread=False)
        migrate(self.connection)

    def __enter__(self) -> "MemoryDatabase":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.connection.close()

    def _insert(self, book: Book) -> int:
        names = list(COLUMNS)
        values: list[Any] = [getattr(book, name) for name in names]
        if book.id:
            names.insert(0, "id")
            values.insert(0, book.id)
        placeholders = ", ".join("?" for _ in names)
        with self.connection:
            cursor = self.connection.execute(
                f"INSERT INTO {TABLE_NAME} ({', '.join(names)}) VALUES ({placeholders})",
                values,
            )
        return cursor.lastrowid

    def clean_up(self) -> None:
        """Remove every book."""
        with self.connection:
            self.connection.execute(f"DELETE FROM {TABLE_NAME}")

    def seed_books(self, books: Iterable[Book]) -> None:
        """Insert copies of ``books``; the given objects are left unchanged."""
        for book in books:
            self._insert(replace(book))

    def seed_book(self, book: Book) -> Book:
        """Insert ``book`` and record its id on it."""
        book.id = self._insert(book)
        return book

    def count_books(self) -> int:
        (count,) = self.connection.execute(
            f"SELECT COUNT(*) FROM {TABLE_NAME}"
        ).fetchone()
        return count

    def find_book_by_title(self, title: str) -> Book:
        row = self.connection.execute(
            f"SELECT id, {', '.join(COLUMNS)} FROM {TABLE_NAME} "
            "WHERE title = ? ORDER BY id LIMIT 1",
            (title,),
        ).fetchone()
        if row is None:
            raise BookNotFoundError(f"record not found: title={title!r}")
        return Book(*row)


@dataclass(frozen=True)
class EnvironmentConfig:
    """Settings read from the environment for test runs."""

    enable_integration_tests: bool = False
    test_db_path: str = ":memory:"
    log_level: str = "silent"
    verbose: bool = False


def _env_bool(environ: Mapping[str, str], key: str, default: bool) -> bool:
    value = environ.get(key, "")
    if not value:
        return default
    return value in ("1", "true", "TRUE")


def _env_string(environ: Mapping[str, str], key: str, default: str) -> str:
    return environ.get(key, "") or default


def get_environment_config(
    environ: Optional[Mapping[str, str]] = None,
) -> EnvironmentConfig:
    """Read the test settings from ``environ`` (the process environment by default)."""
    env = os.environ if environ is None else environ
    return EnvironmentConfig(
        enable_integration_tests=_env_bool(env, "RUN_INTEGRATION_TESTS", False),
        test_db_path=_env_string(env, "TEST_DB_PATH", ":memory:"),
        log_level=_env_string(env, "TEST_LOG_LEVEL", "silent"),
        verbose=_env_bool(env, "TEST_VERBOSE", False),
    )


def random_string(length: int) -> str:
    """Random letters, digits and spaces of the given length."""
    if length < 0:
        raise ValueError("length must not be negative")
    return "".join(_random.choice(_CHARSET) for _ in range(length))


def random_int(low: int, high: int) -> int:
    """A random integer in ``[low, high]``."""
    if high < low:
        raise ValueError("high must not be less than low")
    return _random.randint(low, high)


def random_bool() -> bool:
    return random_int(0, 1) == 1


def random_genre() -> str:
    return _random.choice(GENRE_OPTIONS)


def random_purpose() -> str:
    return _random.choice(PURPOSE_OPTIONS)


def random_author() -> str:
    return _random.choice(SAMPLE_AUTHORS)


def random_title() -> str:
    return _random.choice(SAMPLE_TITLES)


def create_sample_data_set() -> list[Book]:
    """Five well-known books across several genres."""
    return [
        Book(
            title="吾輩は猫である",
            author="夏目漱石",
            genre="Fiction",
            purpose="Entertainment",
            description="猫の視点から描かれた小説",
        ),
        Book(
            title="Clean Code",
            author="Robert C. Martin",
            genre="Technology",
            purpose="Learning",
            description="Clean code principles",
        ),
        Book(
            title="The Lean Startup",
            author="Eric Ries",
            genre="Business",
            purpose="Learning",
            description="Startup methodology",
        ),
        Book(
            title="1984",
            author="George Orwell",
            genre="Fiction",
            purpose="Entertainment",
            description="Dystopian novel",
        ),
        Book(
            title="Sapiens",
            author="Yuval Noah Harari",
            genre="History",
            purpose="Learning",
            description="A brief history of humankind",
        ),
    ]


def create_genre_specific_data_set(genre: str, count: int) -> list[Book]:
    factory = BookFactory()
    return [factory.create_book(genre=genre) for _ in range(count)]


def create_purpose_specific_data_set(purpose: str, count: int) -> list[Book]:
    factory = BookFactory()
    return [factory.create_book(purpose=purpose) for _ in range(count)]