"""Flask application serving the book recommendation API."""

from __future__ import annotations

import argparse
import logging
import os
import sqlite3
import sys
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from flask import Flask, Response, abort, jsonify, request, send_file

from .database import init_database, seed_database
from .handlers import AppError, BookHandler
from .models import BookRepository

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_PATH = "./data/books.db"
DEFAULT_PORT = "3001"
OPENAPI_DOCUMENT = Path("docs") / "swagger.json"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PATCH, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Origin, Content-Type, Accept, Authorization",
}


def resolve_database_path(environ: Mapping[str, str]) -> str:
    """Pick the database file from ``DATABASE_URL`` or fall back to the default."""
    url = environ.get("DATABASE_URL", "")
    if not url:
        return DEFAULT_DATABASE_PATH
    if url == "file:./prisma/dev.db":
        return "./prisma/dev.db"
    return url


def create_app(repository: Any) -> Flask:
    """Build the application around a book repository."""
    handler = BookHandler(repository)
    app = Flask(__name__)

    @app.before_request
    def _preflight() -> Optional[Response]:
        if request.method == "OPTIONS":
            return Response(status=204)
        return None

    @app.after_request
    def _cors(response: Response) -> Response:
        for name, value in CORS_HEADERS.items():
            response.headers[name] = value
        return response

    @app.errorhandler(AppError)
    def _app_error(error: AppError):
        return jsonify(error.to_response().to_dict()), error.code

    @app.get("/health")
    def health():
        return jsonify(status="ok", message="Recomemento API is running")

    @app.post("/books")
    def create_book():
        return jsonify(handler.create_book(request.get_data()).to_dict()), 201

    @app.get("/books")
    def get_all_books():
        return jsonify([book.to_dict() for book in handler.get_all_books()])

    @app.get("/books/<raw_id>")
    def get_book_by_id(raw_id: str):
        return jsonify(handler.get_book_by_id(raw_id).to_dict())

    @app.patch("/books/<raw_id>")
    def update_book(raw_id: str):
        return jsonify(handler.update_book(raw_id, request.get_data()).to_dict())

    @app.delete("/books/<raw_id>")
    def delete_book(raw_id: str):
        return jsonify(handler.delete_book(raw_id).to_dict())

    @app.post("/books/recommend")
    def recommend_book():
        return jsonify(handler.recommend_book(request.get_data()).to_dict())

    @app.get("/api-json")
    def api_json():
        document = OPENAPI_DOCUMENT.resolve()
        if not document.is_file():
            abort(404)
        return send_file(document, mimetype="application/json")

    return app


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the database, seed it and serve the API until interrupted."""
    parser = argparse.ArgumentParser(
        prog="recomemento",
        description="Serve the book recommendation API. "
        "Configured through DATABASE_URL and PORT.",
    )
    parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    path = resolve_database_path(os.environ)
    try:
        connection = init_database(path)
    except sqlite3.Error as exc:
        logger.critical("Failed to connect to database: %s", exc)
        return 1

    try:
        seed_database(connection)
    except sqlite3.Error as exc:
        logger.warning("Warning: Failed to seed database: %s", exc)

    app = create_app(BookRepository(connection))
    port = os.environ.get("PORT") or DEFAULT_PORT

    logger.info("Server starting on port %s", port)
    logger.info("Health check available at: http://localhost:%s/health", port)
    try:
        app.run(host="0.0.0.0", port=int(port))
    except (OSError, ValueError) as exc:
        logger.critical("Failed to start server: %s", exc)
        return 1
    finally:
        connection.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())