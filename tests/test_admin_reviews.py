from tests.conftest import envelope

REVIEW = {
    "_id": "r1",
    "userId": {"_id": "u7", "name": "Maya", "email": "maya@bookworm.io"},
    "bookId": {"_id": "b1", "title": "Dune", "author": "Frank Herbert"},
    "rating": 4,
    "comment": "Loved the worldbuilding",
    "status": "pending",
    "createdAt": "2024-03-01T10:00:00Z",
}


def _stub_reviews(backend, total=1, pages=1):
    backend.add(
        "GET",
        "/api/v1/review",
        {"success": True, "data": [REVIEW], "meta": {"total": total, "page": 1, "limit": 10, "totalPages": pages}},
    )


def test_filters_and_sort_are_forwarded(admin_client, backend):
    _stub_reviews(backend)
    response = admin_client.get("/admin/reviews?status=pending&sort=oldest&limit=20")

    assert response.status_code == 200
    assert "Loved the worldbuilding" in response.text
    params = backend.calls("GET", "/api/v1/review")[0].url.params
    assert params["status"] == "pending"
    assert params["sort"] == "createdAt"
    assert params["limit"] == "20"


def test_all_status_is_not_sent_and_newest_is_default(admin_client, backend):
    _stub_reviews(backend)
    admin_client.get("/admin/reviews?status=all")

    params = backend.calls("GET", "/api/v1/review")[0].url.params
    assert "status" not in params
    assert params["sort"] == "-createdAt"
    assert params["limit"] == "10"


def test_meta_total_pages_drives_pagination(admin_client, backend):
    _stub_reviews(backend, total=25, pages=3)
    response = admin_client.get("/admin/reviews")

    assert "Showing 1 to 10 of 25 reviews" in response.text
    assert "page=2" in response.text


def test_approve_patches_status(admin_client, backend):
    _stub_reviews(backend)
    backend.add("PATCH", "/api/v1/review/status", envelope(None))
    response = admin_client.post("/admin/reviews/r1/status", data={"status": "approved", "next": "/admin/reviews"})

    assert backend.last_json("PATCH", "/api/v1/review/status") == {"reviewId": "r1", "status": "approved"}
    assert "Review approved" in response.text


def test_set_to_pending_message(admin_client, backend):
    _stub_reviews(backend)
    backend.add("PATCH", "/api/v1/review/status", envelope(None))
    response = admin_client.post("/admin/reviews/r1/status", data={"status": "pending", "next": "/admin/reviews"})

    assert "Review set to pending" in response.text


def test_delete_adjusts_page(admin_client, backend):
    backend.add("DELETE", "/api/v1/review/r1", envelope(None))
    response = admin_client.post(
        "/admin/reviews/r1/delete",
        data={"next": "/admin/reviews?page=4&status=pending&sort=newest", "page": "4", "count": "1"},
        follow_redirects=False,
    )

    assert response.headers["location"] == "/admin/reviews?page=3&status=pending&sort=newest"
