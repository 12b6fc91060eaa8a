"""HTTP-independent handling of the book API operations."""

from __future__ import annotations

import re
from typing import Any, Mapping, Protocol, TypeVar

from .dto import (
    BookResponse,
    CreateBookRequest,
    ErrorResponse,
    RecommendBookRequest,
    RequestValidationError,
    UpdateBookRequest,
)
from .models import Book

_ID_PATTERN = re.compile(r"[0-9]+")
_MAX_ID = 2**32 - 1

_Request = TypeVar("_Request")


class _BookStore(Protocol):
    def create(self, book: Book) -> Book: ...

    def get_all(self) -> list[Book]: ...

    def get_by_id(self, book_id: int) -> Book: ...

    def update(self, book_id: int, updates: Mapping[str, Any]) -> Book: ...

    def delete(self, book_id: int) -> Book: ...

    def find_by_genre_and_purpose(self, genre: str, purpose: str) -> Book: ...


class AppError(Exception):
    """An API failure carrying its HTTP status, error kind and detail."""

    def __init__(self, code: int, message: str, detail: str = "") -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.detail = detail

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error=self.message, message=self.detail)


def _book_not_found() -> AppError:
    return AppError(404, "Book not found", "The requested book could not be found")


def parse_book_id(raw_id: Any) -> int:
    """Parse a path id as an unsigned 32-bit decimal number."""
    text = str(raw_id)
    if not _ID_PATTERN.fullmatch(text) or int(text) > _MAX_ID:
        raise AppError(400, "Invalid ID", "ID must be a valid number")
    return int(text)


class BookHandler:
    """Runs the book operations and turns failures into :class:`AppError`."""

    def __init__(self, repository: _BookStore) -> None:
        self._repository = repository

    @staticmethod
    def _parse(request_type: type[_Request], body: Any) -> _Request:
        try:
            return request_type.from_json(body)  # type: ignore[attr-defined]
        except RequestValidationError as exc:
            raise AppError(400, "Invalid request", str(exc)) from exc

    def create_book(self, body: Any) -> BookResponse:
        request = self._parse(CreateBookRequest, body)
        book = Book(**request.to_dict())
        try:
            self._repository.create(book)
        except Exception as exc:
            raise AppError(500, "Failed to create book", str(exc)) from exc
        return BookResponse.from_book(book)

    def get_all_books(self) -> list[BookResponse]:
        try:
            books = self._repository.get_all()
        except Exception as exc:
            raise AppError(500, "Failed to get books", str(exc)) from exc
        return [BookResponse.from_book(book) for book in books]

    def get_book_by_id(self, raw_id: Any) -> BookResponse:
        book_id = parse_book_id(raw_id)
        try:
            book = self._repository.get_by_id(book_id)
        except Exception as exc:
            raise _book_not_found() from exc
        return BookResponse.from_book(book)

    def update_book(self, raw_id: Any, body: Any) -> BookResponse:
        book_id = parse_book_id(raw_id)
        request = self._parse(UpdateBookRequest, body)
        try:
            book = self._repository.update(book_id, request.to_updates())
        except Exception as exc:
            raise _book_not_found() from exc
        return BookResponse.from_book(book)

    def delete_book(self, raw_id: Any) -> BookResponse:
        book_id = parse_book_id(raw_id)
        try:
            book = self._repository.delete(book_id)
        except Exception as exc:
            raise _book_not_found() from exc
        return BookResponse.from_book(book)

    def recommend_book(self, body: Any) -> BookResponse:
        request = self._parse(RecommendBookRequest, body)
        try:
            book = self._repository.find_by_genre_and_purpose(
                request.genre, request.purpose
            )
        except Exception as exc:
            raise AppError(
                404, "No recommendation found", "No book found matching the criteria"
            ) from exc
        return BookResponse.from_book(book)