from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from app.core.telegram import get_bot

from conftest import upload_payload


def upload(client, bot_headers, count):
    for message_id in range(1, count + 1):
        response = client.post("/api/events/upload", json=upload_payload(message_id), headers=bot_headers)
        assert response.status_code == 200


class TestListVideos:

    def test_empty_registry(self, client):
        response = client.get("/api/videos")

        assert response.status_code == 200
        assert response.json() == {
            "status": "success",
            "count": 0,
            "videos": [],
            "lastViewedVideoIndex": 0,
        }

    def test_lists_uploads_in_order(self, client, bot_headers):
        upload(client, bot_headers, 3)

        data = client.get("/api/videos").json()

        assert data["count"] == 3
        assert [video["id"] for video in data["videos"]] == ["1", "2", "3"]
        first = data["videos"][0]
        assert first["url"] == "/api/videos/1/file"
        assert first["filename"] == "clip1.mp4"
        assert first["uploadedBy"] == "@user42"
        assert first["userId"] == "42"
        assert first["likes"] == 0
        assert first["dislikes"] == 0

    def test_cursor_at_end_means_nothing_unseen(self, client, bot_headers):
        upload(client, bot_headers, 2)
        client.post("/api/videos/mark-as-viewed", json={"index": 1})

        data = client.get("/api/videos").json()

        assert data["lastViewedVideoIndex"] == data["count"] == 2


class TestMarkAsViewed:

    def test_by_index(self, client, bot_headers):
        upload(client, bot_headers, 3)

        response = client.post("/api/videos/mark-as-viewed", json={"index": 0})

        assert response.status_code == 200
        assert response.json()["status"] == "success"
        assert response.json()["nextVideoIndex"] == 1

    def test_by_video_id(self, client, bot_headers):
        upload(client, bot_headers, 3)

        response = client.post("/api/videos/mark-as-viewed", json={"videoId": "2"})

        assert response.status_code == 200
        assert response.json()["nextVideoIndex"] == 2

    def test_numeric_video_id(self, client, bot_headers):
        upload(client, bot_headers, 3)

        response = client.post("/api/videos/mark-as-viewed", json={"videoId": 3})

        assert response.json()["nextVideoIndex"] == 3

    def test_out_of_range_index_is_rejected(self, client, bot_headers):
        upload(client, bot_headers, 3)

        response = client.post("/api/videos/mark-as-viewed", json={"index": 5})

        assert response.status_code == 400
        assert response.json()["status"] == "error"
        assert response.json()["message"]
        assert client.get("/api/videos").json()["lastViewedVideoIndex"] == 0

    def test_empty_body_is_rejected(self, client):
        response = client.post("/api/videos/mark-as-viewed", json={})

        assert response.status_code == 400

    @pytest.mark.parametrize("index", ["abc", "1", 1.5, [1], True])
    def test_non_integer_index_is_rejected(self, client, bot_headers, index):
        upload(client, bot_headers, 3)

        response = client.post("/api/videos/mark-as-viewed", json={"index": index})

        assert response.status_code == 400
        assert response.json()["status"] == "error"
        assert client.get("/api/videos").json()["lastViewedVideoIndex"] == 0

    def test_non_integer_index_falls_back_to_video_id(self, client, bot_headers):
        upload(client, bot_headers, 3)

        response = client.post("/api/videos/mark-as-viewed", json={"index": "abc", "videoId": "2"})

        assert response.status_code == 200
        assert response.json()["nextVideoIndex"] == 2

    def test_malformed_json_uses_error_envelope(self, client):
        response = client.post(
            "/api/videos/mark-as-viewed",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["status"] == "error"
        assert response.json()["message"]

    def test_cursor_survives_restart(self, app, bot_headers):
        from fastapi.testclient import TestClient

        with TestClient(app) as client:
            upload(client, bot_headers, 2)
            client.post("/api/videos/mark-as-viewed", json={"index": 0})

        with TestClient(app) as client:
            data = client.get("/api/videos").json()

        assert data["count"] == 2
        assert data["lastViewedVideoIndex"] == 1


class TestVideoFile:

    def test_unknown_video(self, client):
        response = client.get("/api/videos/404/file")

        assert response.status_code == 404
        assert response.json() == {"status": "error", "message": "Video not found."}

    def test_streams_file_from_telegram(self, app, client, bot_headers):
        upload(client, bot_headers, 1)

        async def fake_download(file_path, destination):
            destination.write(b"video-bytes")
            return destination

        bot = SimpleNamespace(
            get_file=AsyncMock(return_value=SimpleNamespace(file_path="videos/file_1.mp4")),
            download_file=AsyncMock(side_effect=fake_download),
        )
        app.dependency_overrides[get_bot] = lambda: bot

        response = client.get("/api/videos/1/file")

        assert response.status_code == 200
        assert response.content == b"video-bytes"
        assert response.headers["content-type"] == "video/mp4"
        bot.get_file.assert_awaited_once_with("file-1")


class TestServiceEndpoints:

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_cors_headers(self, client):
        response = client.get("/api/videos", headers={"Origin": "http://review.local"})

        assert response.headers["access-control-allow-origin"] == "*"
