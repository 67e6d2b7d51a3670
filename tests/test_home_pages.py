import json
import re

from tests.conftest import envelope

STATS = {
    "overview": {"totalBooks": 42, "totalUsers": 7, "totalReviews": 19, "pendingReviews": 3, "recentUsers": 2},
    "charts": {
        "booksPerGenre": [{"genre": "Fantasy", "count": 12}],
        "monthlyBooks": [{"month": "2024-01", "count": 4}],
        "shelfDistribution": [{"shelf": "read", "count": 9}],
        "userRoles": [{"role": "user", "count": 6}],
        "topRatedBooks": [{"title": "Dune", "avgRating": 4.8, "totalReviews": 5}],
    },
}


def test_dashboard_cards_and_chart_data(admin_client, backend):
    backend.add("GET", "/api/v1/recommendation", envelope(STATS))
    response = admin_client.get("/admin/dashboard")

    assert response.status_code == 200
    assert "Pending Reviews" in response.text
    assert "42" in response.text
    match = re.search(r'<script type="application/json" id="dashboard-data">(.*?)</script>', response.text, re.S)
    charts = json.loads(match.group(1))
    assert charts["booksPerGenre"] == [{"genre": "Fantasy", "count": 12}]
    assert charts["topRatedBooks"][0]["avgRating"] == 4.8


def test_dashboard_failure_shows_error(admin_client, backend):
    backend.add("GET", "/api/v1/recommendation", {"success": False, "message": "Stats unavailable"}, status_code=500)
    response = admin_client.get("/admin/dashboard")

    assert response.status_code == 200
    assert "Stats unavailable" in response.text


def test_home_shows_personalized_recommendations(user_client, backend):
    backend.add(
        "GET",
        "/api/v1/library/u1",
        envelope([{"_id": "l1", "book": {"_id": "b1", "title": "Dune"}, "shelf": "read", "progress": 100}]),
    )
    backend.add(
        "GET",
        "/api/v1/recommendation/u1",
        envelope({"recommendations": [{"_id": "b2", "title": "Hyperion"}], "isPersonalized": True, "booksRead": 4}),
    )
    response = user_client.get("/user/home")

    assert response.status_code == 200
    assert "Recommended for You" in response.text
    assert "Based on your 4 books read" in response.text
    assert "Hyperion" in response.text
    assert backend.calls("GET", "/api/v1/recommendation/u1")[0].url.params["limit"] == "12"


def test_home_falls_back_when_recommendations_fail(user_client, backend):
    backend.add("GET", "/api/v1/library/u1", envelope([]))
    backend.add("GET", "/api/v1/recommendation/u1", {"success": False, "message": "Engine down"}, status_code=503)
    response = user_client.get("/user/home")

    assert response.status_code == 200
    assert "Engine down" in response.text
    assert "No recommendations yet" in response.text


def test_reader_tutorials_use_page_size_six(user_client, backend):
    backend.add(
        "GET",
        "/api/v1/tutorial",
        envelope([{"_id": "t1", "title": "Shelves", "videoUrl": "https://www.youtube.com/embed/x"}]),
    )
    response = user_client.get("/user/tutorials")

    assert response.status_code == 200
    assert "Shelves" in response.text
    assert backend.calls("GET", "/api/v1/tutorial")[0].url.params["limit"] == "6"
