"""
Tests for article routes.
"""

ARTICLE = {
    "id": "art-9",
    "feed_url": "https://a.example/rss",
    "feed_name": "Example Feed",
    "title": "Posted",
    "content": "body",
    "published_ts": 7000,
    "fetched_at": 8000,
}


class TestListArticles:
    """Tests for GET /articles endpoint."""

    def test_list_articles_empty(self, client):
        response = client.get("/articles")
        assert response.status_code == 200
        assert response.json() == []

    def test_list_articles_newest_first(self, client_with_data):
        client, data = client_with_data
        response = client.get("/articles")
        assert response.status_code == 200
        assert [a["id"] for a in response.json()] == ["art-2", "art-1"]

    def test_list_articles_by_feed(self, client_with_data):
        client, data = client_with_data
        response = client.get("/articles", params={"feed_url": data["feed_url"]})
        assert len(response.json()) == 2

        response = client.get("/articles", params={"feed_url": "https://other.example/"})
        assert response.json() == []

    def test_list_articles_unread_filter(self, client_with_data):
        client, _ = client_with_data
        response = client.get("/articles", params={"filter": "unread"})
        assert [a["id"] for a in response.json()] == ["art-2"]

    def test_list_articles_starred_filter(self, client_with_data):
        client, _ = client_with_data
        assert client.get("/articles", params={"filter": "starred"}).json() == []

    def test_list_articles_invalid_filter(self, client):
        response = client.get("/articles", params={"filter": "bogus"})
        assert response.status_code == 422

    def test_article_has_required_fields(self, client_with_data):
        client, _ = client_with_data
        article = client.get("/articles/item", params={"id": "art-1"}).json()
        assert article == {
            "id": "art-1",
            "feed_url": "https://a.example/rss",
            "feed_name": "Example Feed",
            "title": "Title",
            "link": None,
            "published": None,
            "published_ts": 2000,
            "content": "body",
            "author": "auth",
            "is_read": True,
            "is_starred": False,
            "fetched_at": 3000,
        }

    def test_get_article_not_found(self, client):
        response = client.get("/articles/item", params={"id": "missing"})
        assert response.status_code == 404


class TestUpsertArticle:
    """Tests for PUT /articles endpoint."""

    def test_upsert_article(self, client_with_data):
        client, _ = client_with_data
        response = client.put("/articles", json=ARTICLE)
        assert response.status_code == 200
        assert response.json()["title"] == "Posted"
        assert response.json()["is_read"] is False

    def test_upsert_article_unknown_feed(self, client):
        """Should return 409 when the feed is not subscribed."""
        response = client.put("/articles", json=ARTICLE)
        assert response.status_code == 409
        assert client.get("/articles").json() == []


class TestIngest:
    """Tests for POST /articles/ingest endpoint."""

    def test_ingest(self, client_with_data):
        client, data = client_with_data
        response = client.post("/articles/ingest", json={
            "feed_url": data["feed_url"],
            "feed_name": "Example Feed",
            "items": [
                {"title": "Fresh", "link": "https://a.example/fresh",
                 "published": "2024-01-01T00:00:00Z"},
            ],
        })
        assert response.status_code == 200
        assert response.json() == {"success": True, "count": 1}

        article = client.get(
            "/articles/item",
            params={"id": f"{data['feed_url']}::https://a.example/fresh"}
        ).json()
        assert article["published_ts"] == 1704067200

    def test_ingest_unknown_feed(self, client):
        response = client.post("/articles/ingest", json={
            "feed_url": "https://nowhere.example/",
            "feed_name": "Nowhere",
            "items": [{"title": "x"}],
        })
        assert response.status_code == 404


class TestFlags:
    """Tests for read/star endpoints."""

    def test_set_flags(self, client_with_data):
        client, _ = client_with_data
        response = client.patch("/articles/flags", json={"id": "art-2", "is_starred": True})
        assert response.status_code == 200
        assert response.json()["is_starred"] is True
        assert response.json()["is_read"] is False

    def test_set_flags_not_found(self, client):
        response = client.patch("/articles/flags", json={"id": "missing", "is_read": True})
        assert response.status_code == 404

    def test_toggle_read(self, client_with_data):
        client, _ = client_with_data
        response = client.post("/articles/toggle-read", json={"id": "art-1"})
        assert response.status_code == 200
        assert response.json() == {"success": True, "is_read": False}

    def test_toggle_star(self, client_with_data):
        client, _ = client_with_data
        response = client.post("/articles/toggle-star", json={"id": "art-1"})
        assert response.json() == {"success": True, "is_starred": True}

    def test_toggle_not_found(self, client):
        assert client.post("/articles/toggle-read", json={"id": "x"}).status_code == 404
        assert client.post("/articles/toggle-star", json={"id": "x"}).status_code == 404

    def test_mark_read(self, client_with_data):
        client, data = client_with_data
        response = client.post("/articles/mark-read", json={"article_ids": data["article_ids"]})
        assert response.status_code == 200
        assert response.json()["count"] == 2
        assert client.get("/articles", params={"filter": "unread"}).json() == []

    def test_mark_read_too_many(self, client):
        response = client.post(
            "/articles/mark-read",
            json={"article_ids": [str(i) for i in range(1001)]}
        )
        assert response.status_code == 400
