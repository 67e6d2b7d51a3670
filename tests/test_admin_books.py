from tests.conftest import envelope

BOOK = {
    "_id": "b1",
    "title": "Dune",
    "author": "Frank Herbert",
    "genre": {"_id": "g1", "name": "Sci-Fi"},
    "coverImage": "https://img.example/dune.jpg",
    "description": "Desert planet.",
    "summary": "Paul Atreides.",
}

VALID_FORM = {
    "title": "Dune",
    "author": "Frank Herbert",
    "genre": "g1",
    "description": "Desert planet.",
    "summary": "Paul Atreides.",
    "cover_image": "https://img.example/dune.jpg",
    "next": "/admin/books?page=2",
}


def _stub_lists(backend):
    backend.add("GET", "/api/v1/book", envelope([BOOK], {"total": 11, "page": 2, "limit": 10, "pages": 2}))
    backend.add("GET", "/api/v1/genre/genre-names", envelope([{"_id": "g1", "name": "Sci-Fi"}]))


def test_list_renders_books_and_forwards_query(admin_client, backend):
    _stub_lists(backend)
    response = admin_client.get("/admin/books?page=2&search=dune")

    assert response.status_code == 200
    assert "Frank Herbert" in response.text
    assert "Showing 11 to 11 of 11 books" in response.text
    request = backend.calls("GET", "/api/v1/book")[0]
    assert request.url.params["search"] == "dune"
    assert request.url.params["page"] == "2"
    assert request.url.params["limit"] == "10"
    assert request.headers["authorization"] == "Bearer test-token"


def test_list_failure_shows_error_and_empty_table(admin_client, backend):
    backend.add("GET", "/api/v1/book", {"success": False, "message": "Database offline"}, status_code=500)
    response = admin_client.get("/admin/books")

    assert response.status_code == 200
    assert "Database offline" in response.text
    assert "No books found." in response.text


def test_missing_title_shows_validation_error(admin_client, backend):
    _stub_lists(backend)
    form = dict(VALID_FORM, title="   ")
    response = admin_client.post("/admin/books/new", data=form)

    assert response.status_code == 422
    assert "Title is required" in response.text
    assert backend.calls("POST", "/api/v1/book") == []


def test_create_posts_payload_and_returns_to_list(admin_client, backend):
    _stub_lists(backend)
    backend.add("POST", "/api/v1/book", envelope(BOOK, message="Book created"))
    response = admin_client.post("/admin/books/new", data=VALID_FORM, follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/admin/books?page=2"
    assert backend.last_json("POST", "/api/v1/book") == {
        "title": "Dune",
        "author": "Frank Herbert",
        "genre": "g1",
        "description": "Desert planet.",
        "summary": "Paul Atreides.",
        "coverImage": "https://img.example/dune.jpg",
    }


def test_create_flash_is_shown_on_the_list(admin_client, backend):
    _stub_lists(backend)
    backend.add("POST", "/api/v1/book", envelope(BOOK))
    response = admin_client.post("/admin/books/new", data=VALID_FORM)

    assert response.status_code == 200
    assert "Book created successfully!" in response.text


def test_edit_preloads_book(admin_client, backend):
    _stub_lists(backend)
    backend.add("GET", "/api/v1/book/b1", envelope(BOOK))
    response = admin_client.get("/admin/books/b1/edit")

    assert response.status_code == 200
    assert 'value="Frank Herbert"' in response.text
    assert "Update Book" in response.text


def test_update_puts_to_book(admin_client, backend):
    _stub_lists(backend)
    backend.add("PUT", "/api/v1/book/b1", envelope(BOOK))
    response = admin_client.post("/admin/books/b1/edit", data=VALID_FORM, follow_redirects=False)

    assert response.status_code == 303
    assert backend.last_json("PUT", "/api/v1/book/b1")["title"] == "Dune"


def test_deleting_last_item_on_page_goes_to_previous_page(admin_client, backend):
    backend.add("DELETE", "/api/v1/book/b1", envelope(None))
    response = admin_client.post(
        "/admin/books/b1/delete",
        data={"next": "/admin/books?page=3&search=dune", "page": "3", "count": "1"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/admin/books?page=2&search=dune"
    assert len(backend.calls("DELETE", "/api/v1/book/b1")) == 1


def test_deleting_one_of_many_stays_on_page(admin_client, backend):
    backend.add("DELETE", "/api/v1/book/b1", envelope(None))
    response = admin_client.post(
        "/admin/books/b1/delete",
        data={"next": "/admin/books?page=3", "page": "3", "count": "4"},
        follow_redirects=False,
    )

    assert response.headers["location"] == "/admin/books?page=3"


def test_delete_failure_returns_with_backend_message(admin_client, backend):
    backend.add("GET", "/api/v1/book", envelope([], {"total": 0, "page": 1, "limit": 10, "pages": 1}))
    backend.add("DELETE", "/api/v1/book/b1", {"success": False, "message": "Book is shelved"}, status_code=400)
    response = admin_client.post("/admin/books/b1/delete", data={"next": "/admin/books", "page": "1", "count": "1"})

    assert "Book is shelved" in response.text


def test_delete_notice_survives_failed_list_reload(admin_client, backend):
    backend.add("DELETE", "/api/v1/book/b1", envelope(None))
    backend.add("GET", "/api/v1/book", {"success": False, "message": "Database offline"}, status_code=500)
    response = admin_client.post("/admin/books/b1/delete", data={"next": "/admin/books", "page": "1", "count": "2"})

    assert response.status_code == 200
    assert "Book deleted successfully!" in response.text
    assert "Database offline" in response.text
