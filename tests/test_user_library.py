from tests.conftest import envelope


def _item(item_id, book_id, title, shelf, progress=0):
    return {
        "_id": item_id,
        "book": {"_id": book_id, "title": title, "author": "Anon"},
        "shelf": shelf,
        "progress": progress,
    }


LIBRARY = [
    _item("l1", "b1", "Dune", "reading", 40),
    _item("l2", "b2", "Emma", "want"),
    _item("l3", "b3", "Ulysses", "read", 100),
]


def _stub_library(backend, items=LIBRARY):
    backend.add("GET", "/api/v1/library/u1", envelope(items))


def test_library_shows_shelf_counts(user_client, backend):
    _stub_library(backend)
    response = user_client.get("/user/library")

    assert response.status_code == 200
    assert "All (3)" in response.text
    assert "Currently Reading (1)" in response.text
    assert "Want to Read (1)" in response.text
    assert "40% complete" in response.text


def test_shelf_tab_filters_items(user_client, backend):
    _stub_library(backend)
    response = user_client.get("/user/library?shelf=want")

    assert "Emma" in response.text
    assert "Ulysses" not in response.text


def test_library_paginates_five_per_page(user_client, backend):
    items = [_item(f"l{i}", f"b{i}", f"Book {i}", "want") for i in range(7)]
    _stub_library(backend, items)
    response = user_client.get("/user/library?page=2")

    assert "Book 5" in response.text
    assert "Book 0" not in response.text
    assert "Showing 6 to 7 of 7 books" in response.text


def test_invalid_progress_is_not_sent(user_client, backend):
    _stub_library(backend)
    response = user_client.post("/user/library/progress", data={"book_id": "b1", "progress": "150", "next": "/user/library"})

    assert "Progress must be a number between 0 and 100" in response.text
    assert backend.calls("PUT", "/api/v1/library/progress/u1") == []


def test_progress_update(user_client, backend):
    _stub_library(backend)
    backend.add("PUT", "/api/v1/library/progress/u1", envelope(None))
    response = user_client.post("/user/library/progress", data={"book_id": "b1", "progress": "75", "next": "/user/library"})

    assert backend.last_json("PUT", "/api/v1/library/progress/u1") == {"bookId": "b1", "progress": 75}
    assert "Progress updated!" in response.text


def test_move_book_keeps_list_state(user_client, backend):
    backend.add("PUT", "/api/v1/library/moveBook/u1", envelope(None))
    response = user_client.post(
        "/user/library/move",
        data={"book_id": "b2", "shelf": "reading", "next": "/user/library?page=1&shelf=want"},
        follow_redirects=False,
    )

    assert response.headers["location"] == "/user/library?page=1&shelf=want"
    assert backend.last_json("PUT", "/api/v1/library/moveBook/u1") == {"bookId": "b2", "shelf": "reading"}


def test_move_to_unknown_shelf_is_rejected(user_client, backend):
    response = user_client.post(
        "/user/library/move", data={"book_id": "b2", "shelf": "lost", "next": "/user/library"}, follow_redirects=False
    )

    assert response.status_code == 303
    assert backend.calls("PUT", "/api/v1/library/moveBook/u1") == []
