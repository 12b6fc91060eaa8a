"""Opening, migrating and seeding the book database."""

from __future__ import annotations

import logging
import sqlite3

from .models import Book, BookRepository, migrate

logger = logging.getLogger(__name__)

SEED_BOOKS: tuple[Book, ...] = (
    Book(
        title="The Great Gatsby",
        author="F. Scott Fitzgerald",
        genre="Fiction",
        purpose="Entertainment",
        description="A story of the fabulously wealthy Jay Gatsby and his love "
        "for the beautiful Daisy Buchanan.",
    ),
    Book(
        title="Clean Code",
        author="Robert C. Martin",
        genre="Technology",
        purpose="Learning",
        description="A handbook of agile software craftsmanship that teaches "
        "principles of writing clean, readable code.",
    ),
    Book(
        title="1984",
        author="George Orwell",
        genre="Fiction",
        purpose="Entertainment",
        description="A dystopian social science fiction novel that follows "
        "Winston Smith, a low-ranking citizen of Oceania.",
    ),
    Book(
        title="The Lean Startup",
        author="Eric Ries",
        genre="Business",
        purpose="Learning",
        description="A methodology for developing businesses and products that "
        "aims to shorten product development cycles.",
    ),
)


def init_database(path: str) -> sqlite3.Connection:
    """Open the database at ``path`` and make sure the schema exists."""
    connection = sqlite3.connect(path, check_same_thread=False)
    try:
        migrate(connection)
    except sqlite3.Error:
        connection.close()
        raise
    logger.info("Database connected and migrated successfully")
    return connection


def seed_database(connection: sqlite3.Connection) -> int:
    """Insert the sample books into an empty database; return how many were added."""
    (count,) = connection.execute("SELECT COUNT(*) FROM books").fetchone()
    if count > 0:
        logger.info("Database already contains data, skipping seed")
        return 0

    repository = BookRepository(connection)
    for template in SEED_BOOKS:
        repository.create(Book(**{**template.to_dict(), "id": 0}))

    logger.info("Database seeded with %d books", len(SEED_BOOKS))
    return len(SEED_BOOKS)