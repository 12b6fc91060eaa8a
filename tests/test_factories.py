import pytest

from recomemento.dto import CreateBookRequest
from recomemento.factories import (
    GENRE_OPTIONS,
    PURPOSE_OPTIONS,
    SAMPLE_AUTHORS,
    SAMPLE_TITLES,
    BookFactory,
    MemoryDatabase,
    create_genre_specific_data_set,
    create_purpose_specific_data_set,
    create_sample_data_set,
    get_environment_config,
    random_author,
    random_bool,
    random_genre,
    random_int,
    random_purpose,
    random_string,
    random_title,
)
from recomemento.models import Book, BookNotFoundError, BookRepository


@pytest.fixture
def database():
    with MemoryDatabase() as db:
        yield db


def test_factory_numbers_books():
    factory = BookFactory(seed=1)
    first = factory.create_book()
    second = factory.create_book()
    assert first.title == "Test Book 1"
    assert first.author == "Test Author 1"
    assert first.description == "Test Description for book 1"
    assert second.title == "Test Book 2"
    assert first.id == 0
    assert first.genre in GENRE_OPTIONS
    assert first.purpose in PURPOSE_OPTIONS


def test_factory_overrides():
    factory = BookFactory()
    book = factory.create_book(genre="Poetry", title="Odes", id=7)
    assert book.genre == "Poetry"
    assert book.title == "Odes"
    assert book.id == 7
    assert book.author == "Test Author 1"


def test_factory_rejects_unknown_field():
    with pytest.raises(TypeError):
        BookFactory().create_book(publisher="Nobody")


def test_factory_request_and_shared_counter():
    factory = BookFactory()
    factory.create_book()
    request = factory.create_book_request(genre="Science")
    assert isinstance(request, CreateBookRequest)
    assert request.title == "Test Book 2"
    assert request.genre == "Science"
    assert request.purpose in PURPOSE_OPTIONS


def test_factory_same_seed_is_deterministic():
    left = BookFactory(seed=42).create_books(5)
    right = BookFactory(seed=42).create_books(5)
    assert left == right


def test_factory_bulk_creation():
    factory = BookFactory()
    books = factory.create_books(4)
    requests = factory.create_book_requests(3)
    assert len(books) == 4
    assert len({book.title for book in books}) == 4
    assert [r.title for r in requests] == ["Test Book 5", "Test Book 6", "Test Book 7"]


def test_factory_themed_books():
    factory = BookFactory()
    fiction = factory.create_fiction_book()
    tech = factory.create_tech_book()
    business = factory.create_business_book()
    assert (fiction.genre, fiction.purpose) == ("Fiction", "Entertainment")
    assert (tech.genre, tech.purpose) == ("Technology", "Learning")
    assert (business.genre, business.purpose) == ("Business", "Learning")


def test_memory_database_seed_and_count(database):
    database.seed_books(BookFactory().create_books(3))
    assert database.count_books() == 3
    database.clean_up()
    assert database.count_books() == 0


def test_seed_books_leaves_originals_unchanged(database):
    books = BookFactory().create_books(2)
    database.seed_books(books)
    assert all(book.id == 0 for book in books)


def test_seed_book_assigns_id_and_is_findable(database):
    book = BookFactory().create_book(title="Findable")
    database.seed_book(book)
    assert book.id > 0
    found = database.find_book_by_title("Findable")
    assert found == book
    assert BookRepository(database.connection).get_by_id(book.id) == book


def test_seed_book_keeps_explicit_id(database):
    book = BookFactory().create_book(id=42)
    database.seed_book(book)
    assert database.find_book_by_title(book.title).id == 42


def test_find_book_by_title_missing(database):
    with pytest.raises(BookNotFoundError):
        database.find_book_by_title("Missing")


def test_environment_config_defaults():
    config = get_environment_config({})
    assert config.enable_integration_tests is False
    assert config.test_db_path == ":memory:"
    assert config.log_level == "silent"
    assert config.verbose is False


@pytest.mark.parametrize(
    "value, expected",
    [("1", True), ("true", True), ("TRUE", True), ("yes", False), ("0", False)],
)
def test_environment_config_booleans(value, expected):
    config = get_environment_config(
        {"RUN_INTEGRATION_TESTS": value, "TEST_VERBOSE": value}
    )
    assert config.enable_integration_tests is expected
    assert config.verbose is expected


def test_environment_config_strings():
    config = get_environment_config(
        {"TEST_DB_PATH": "test.db", "TEST_LOG_LEVEL": "info"}
    )
    assert config.test_db_path == "test.db"
    assert config.log_level == "info"


def test_random_string():
    text = random_string(50)
    assert len(text) == 50
    assert all(ch.isascii() and (ch.isalnum() or ch == " ") for ch in text)
    assert random_string(0) == ""
    with pytest.raises(ValueError):
        random_string(-1)


def test_random_int_range():
    values = {random_int(3, 5) for _ in range(200)}
    assert values <= {3, 4, 5}
    assert random_int(7, 7) == 7
    with pytest.raises(ValueError):
        random_int(5, 3)


def test_random_choices():
    assert random_bool() in (True, False)
    assert random_genre() in GENRE_OPTIONS
    assert random_purpose() in PURPOSE_OPTIONS
    assert random_author() in SAMPLE_AUTHORS
    assert random_title() in SAMPLE_TITLES


def test_sample_data_set():
    books = create_sample_data_set()
    assert len(books) == 5
    assert books[0].title == "吾輩は猫である"
    assert books[0].author == "夏目漱石"
    assert [b.title for b in books][1:] == [
        "Clean Code",
        "The Lean Startup",
        "1984",
        "Sapiens",
    ]
    assert all(isinstance(book, Book) and book.id == 0 for book in books)


def test_sample_data_set_supports_recommendation(database):
    database.seed_books(create_sample_data_set())
    repository = BookRepository(database.connection)
    found = repository.find_by_genre_and_purpose("History", "Learning")
    assert found.title == "Sapiens"


def test_specific_data_sets():
    by_genre = create_genre_specific_data_set("Travel", 4)
    by_purpose = create_purpose_specific_data_set("Research", 3)
    assert len(by_genre) == 4
    assert all(book.genre == "Travel" for book in by_genre)
    assert len(by_purpose) == 3
    assert all(book.purpose == "Research" for book in by_purpose)
    assert create_genre_specific_data_set("Travel", 0) == []