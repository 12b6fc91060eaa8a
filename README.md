# recomemento

A small HTTP API for keeping a list of books and asking it for a
recommendation by genre and purpose. Books are stored in SQLite; an empty
database is seeded with four sample books when the server starts.

## Installing

    pip install .

For running the tests as well:

    pip install ".[test]"
    pytest

## Running the server

    recomemento

or, equivalently:

    python -m recomemento.app

The command takes no options besides `--help`; it is configured through the
environment:

- `PORT` – the port to listen on (default `3001`). The server binds to all
  interfaces using Flask's built-in server.
- `DATABASE_URL` – the SQLite database file (default `./data/books.db`). The
  value `file:./prisma/dev.db` is read as `./prisma/dev.db`; any other value
  is used as the path as it stands. The directory holding the file must
  already exist.

If the database cannot be opened the command logs the failure and exits with
status 1. A failure while seeding is logged as a warning and the server
starts anyway.

## Endpoints

| Method | Path               | Does                                          |
|--------|--------------------|-----------------------------------------------|
| GET    | `/health`          | Reports that the service is running           |
| POST   | `/books`           | Creates a book (all five fields required)     |
| GET    | `/books`           | Lists every book, ordered by id               |
| GET    | `/books/<id>`      | Fetches one book                              |
| PATCH  | `/books/<id>`      | Changes only the fields that are sent         |
| DELETE | `/books/<id>`      | Deletes a book and returns what was deleted   |
| POST   | `/books/recommend` | Returns the first book (lowest id) matching `genre` and `purpose` |
| GET    | `/api-json`        | Sends `./docs/swagger.json` if that file exists, otherwise 404 |

A book has the fields `title`, `author`, `genre`, `purpose` and
`description`; responses add its numeric `id`. A recommendation request may
also carry a `type`, which is accepted but not used for matching. Genre and
purpose are matched exactly, including case.

Errors come back as JSON with an `error` and a `message`:

| Status | `error`                    | When                                          |
|--------|----------------------------|-----------------------------------------------|
| 400    | `Invalid request`          | Body is not a JSON object, a field is not a string, or a required field is missing or empty |
| 400    | `Invalid ID`               | The id is not an unsigned 32-bit decimal number |
| 404    | `Book not found`           | No book has that id                           |
| 404    | `No recommendation found`  | No book matches the genre and purpose         |
| 500    | `Failed to create book` / `Failed to get books` | The database reported an error |

For example:

    {"error": "Book not found", "message": "The requested book could not be found"}

Every response carries permissive CORS headers, and every `OPTIONS` request
is answered with `204 No Content`.

Example:

    curl -X POST localhost:3001/books/recommend \
         -H 'Content-Type: application/json' \
         -d '{"genre": "Fiction", "purpose": "Entertainment"}'

## Using it as a library

- `recomemento.database.init_database(path)` opens an SQLite database and
  creates the `books` table; `seed_database(connection)` adds the sample
  books to an empty table and returns how many it added.
- `recomemento.models.BookRepository(connection)` stores and retrieves
  `Book` records; lookups that find nothing raise `BookNotFoundError`.
- `recomemento.handlers.BookHandler(repository)` runs each API operation
  without HTTP, returning `BookResponse` objects and raising `AppError`
  (with `code`, `message` and `detail`) on failure.
- `recomemento.dto` holds the request and response bodies; `from_json`
  raises `RequestValidationError` for bad input.
- `recomemento.app.create_app(repository)` builds the Flask application
  around a repository, so the API can be embedded or exercised with Flask's
  test client:

      from recomemento.app import create_app
      from recomemento.database import init_database
      from recomemento.models import BookRepository

      app = create_app(BookRepository(init_database(":memory:")))
      client = app.test_client()
      print(client.get("/health").get_json())

`recomemento.factories` provides `BookFactory` (numbered books and create
requests with random genre and purpose, optionally seeded), `MemoryDatabase`
(a migrated in-memory database with seeding and lookup helpers, usable as a
context manager), `get_environment_config`, random value helpers and sample
data sets for writing tests against the API.

## What it does not do

There is no interactive API documentation page, and no OpenAPI document is
generated: `/api-json` only serves a `docs/swagger.json` file that is already
present in the working directory. There is no authentication.