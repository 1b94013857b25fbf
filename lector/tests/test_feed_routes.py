"""
Tests for feed routes.
"""


class TestListFeeds:
    """Tests for GET /feeds endpoint."""

    def test_list_feeds_empty(self, client):
        """Should return empty list when no feeds."""
        response = client.get("/feeds")
        assert response.status_code == 200
        assert response.json() == []

    def test_list_feeds_returns_feeds(self, client_with_data):
        """Should return list of feeds."""
        client, data = client_with_data
        response = client.get("/feeds")
        assert response.status_code == 200
        assert response.json() == [
            {"url": data["feed_url"], "name": "Example Feed", "added_at": 1000}
        ]


class TestUpsertFeed:
    """Tests for PUT /feeds endpoint."""

    def test_add_feed(self, client):
        response = client.put("/feeds", json={
            "url": "https://b.example/feed.xml",
            "name": "My Feed",
            "added_at": 1234,
        })
        assert response.status_code == 200
        assert response.json()["name"] == "My Feed"
        assert len(client.get("/feeds").json()) == 1

    def test_rename_feed(self, client_with_data):
        client, data = client_with_data
        response = client.put("/feeds", json={
            "url": data["feed_url"],
            "name": "Renamed",
            "added_at": 9999,
        })
        assert response.status_code == 200
        assert response.json() == {"url": data["feed_url"], "name": "Renamed", "added_at": 1000}

    def test_add_feed_missing_fields(self, client):
        """Should require url, name and added_at."""
        response = client.put("/feeds", json={"url": "https://b.example/"})
        assert response.status_code == 422


class TestDeleteFeed:
    """Tests for DELETE /feeds endpoint."""

    def test_delete_feed(self, client_with_data):
        client, data = client_with_data
        response = client.delete("/feeds", params={"url": data["feed_url"]})
        assert response.status_code == 200
        assert response.json()["success"] is True
        assert client.get("/feeds").json() == []

    def test_delete_feed_not_found(self, client):
        response = client.delete("/feeds", params={"url": "https://nowhere.example/"})
        assert response.status_code == 404

    def test_delete_feed_cascades_articles(self, client_with_data):
        """Deleting feed should delete its articles."""
        client, data = client_with_data
        client.delete("/feeds", params={"url": data["feed_url"]})
        assert client.get("/articles").json() == []
