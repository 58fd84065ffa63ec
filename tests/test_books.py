import base64
import logging

from fastapi import status

from booktrack.repos.book_repo import BookRepository


class TestRootEndpoint:
    def test_root_lists_endpoints(self, test_client):
        response = test_client.get("/")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "Welcome to BookTrack API"
        assert data["endpoints"]["update_book"] == "/updateBook/{id}"


class TestListBooks:
    """Test the book listing endpoint."""

    def test_list_books_empty(self, test_client):
        response = test_client.get("/books")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == "No books found"

    def test_list_books(self, test_client, sample_book, other_book):
        response = test_client.get("/books")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [book["title"] for book in data] == ["Duplicate Title", "Old Title"]
        assert {book["_id"] for book in data} == {sample_book.id, other_book.id}
        assert all("availableCopies" in book for book in data)

    def test_list_books_storage_failure(self, test_client, monkeypatch, caplog):
        def boom(db):
            raise RuntimeError("Database error")

        monkeypatch.setattr(BookRepository, "list", staticmethod(boom))
        with caplog.at_level(logging.ERROR):
            response = test_client.get("/books")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["error"] == "Server error while fetching books"
        assert "Error fetching books:" in caplog.text


class TestFetchBook:
    """Test fetching a single book by id."""

    def test_invalid_id_format(self, test_client):
        response = test_client.get("/books/invalid-id")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Invalid book ID format"

    def test_book_not_found(self, test_client):
        response = test_client.get("/books/5f8f2c8b6a9d1e2b3c7b8f9a")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == "Book not found"

    def test_fetch_book(self, test_client, sample_book):
        response = test_client.get(f"/books/{sample_book.id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["_id"] == sample_book.id
        assert data["title"] == "Old Title"
        assert data["image"] == sample_book.image

    def test_fetch_book_trims_id(self, test_client, sample_book):
        response = test_client.get(f"/books/%20{sample_book.id}%20")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["_id"] == sample_book.id

    def test_fetch_book_storage_failure(self, test_client, monkeypatch, caplog):
        def boom(db, book_id):
            raise RuntimeError("Database error")

        monkeypatch.setattr(BookRepository, "get", staticmethod(boom))
        with caplog.at_level(logging.ERROR):
            response = test_client.get("/books/5f8f2c8b6a9d1e2b3c7b8f9a")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["error"] == "Server error"
        assert "Error fetching book by ID:" in caplog.text


class TestSearchBooks:
    """Test title search."""

    def test_search_requires_query(self, test_client):
        response = test_client.get("/search")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == 'Invalid parameter: "query" is required and must be a string.'

    def test_search_empty_query(self, test_client):
        response = test_client.get("/search", params={"query": ""})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_search_blank_query(self, test_client, sample_book, other_book):
        response = test_client.get("/search", params={"query": "   "})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == 'Invalid parameter: "query" is required and must be a string.'

    def test_search_query_too_long(self, test_client):
        response = test_client.get("/search", params={"query": "a" * 101})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Query is too long. Max length is 100 characters."

    def test_search_case_insensitive(self, test_client, sample_book, other_book):
        response = test_client.get("/search", params={"query": "OLD"})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert len(data) == 1
        assert data[0]["title"] == "Old Title"

    def test_search_substring(self, test_client, sample_book, other_book):
        response = test_client.get("/search", params={"query": "title"})

        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()) == 2

    def test_search_no_match(self, test_client, sample_book):
        response = test_client.get("/search", params={"query": "nothing like it"})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == "No books found matching your search criteria"

    def test_search_storage_failure(self, test_client, monkeypatch):
        def boom(db, q):
            raise RuntimeError("Database error")

        monkeypatch.setattr(BookRepository, "search_by_title", staticmethod(boom))
        response = test_client.get("/search", params={"query": "old"})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["error"] == "An error occurred while searching for books."


class TestAddBook:
    """Test the add workflow."""

    def test_add_book(self, test_client):
        response = test_client.post(
            "/addBook",
            data={
                "title": "Brand New",
                "author": "Someone",
                "isbn": "156881111X",
                "genre": "Poetry",
                "availableCopies": "3",
            },
            files={"image": ("cover.png", b"png-bytes", "image/png")},
        )

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["message"] == "Book added successfully!"
        assert body["book"]["title"] == "Brand New"
        assert body["book"]["availableCopies"] == 3
        assert body["book"]["image"] == base64.b64encode(b"png-bytes").decode("ascii")
        assert len(body["book"]["_id"]) == 24

        fetched = test_client.get(f"/books/{body['book']['_id']}")
        assert fetched.status_code == status.HTTP_200_OK

    def test_add_book_without_image(self, test_client):
        response = test_client.post(
            "/addBook",
            json={
                "title": "No Cover",
                "author": "Someone",
                "isbn": "156881111X",
                "genre": "Poetry",
                "availableCopies": 0,
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["book"]["image"] is None

    def test_add_book_duplicate_title(self, test_client, sample_book):
        response = test_client.post(
            "/addBook",
            data={
                "title": "Old Title",
                "author": "Someone",
                "isbn": "156881111X",
                "genre": "Poetry",
                "availableCopies": "1",
            },
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Title already exists."

    def test_add_book_validation(self, test_client):
        response = test_client.post(
            "/addBook",
            data={
                "title": "Fine",
                "author": "a" * 151,
                "isbn": "156881111X",
                "genre": "Poetry",
                "availableCopies": "1",
            },
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Author name must be 150 characters or fewer."

    def test_add_book_empty_image(self, test_client):
        response = test_client.post(
            "/addBook",
            data={
                "title": "Fine",
                "author": "Someone",
                "isbn": "156881111X",
                "genre": "Poetry",
                "availableCopies": "1",
            },
            files={"image": ("empty.jpg", b"", "image/jpeg")},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Uploaded file is invalid."
