from __future__ import annotations

import uuid
from fastapi import status
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastapi.testclient import TestClient


class TestCorrelationIdMiddleware:
    """Test request id propagation."""

    def test_generated_when_missing(self, test_client: TestClient) -> None:
        response = test_client.get("/")
        assert response.status_code == status.HTTP_200_OK
        request_id = response.headers["X-Request-ID"]
        assert uuid.UUID(request_id).version == 4

    def test_echoes_caller_id(self, test_client: TestClient) -> None:
        headers = {"X-Request-ID": "abc-123_req.1"}
        response = test_client.get("/", headers=headers)
        assert response.headers["X-Request-ID"] == "abc-123_req.1"

    def test_replaces_malformed_id(self, test_client: TestClient) -> None:
        headers = {"X-Request-ID": "bad id with spaces"}
        response = test_client.get("/", headers=headers)
        assert response.headers["X-Request-ID"] != "bad id with spaces"

    def test_id_in_error_meta(self, test_client: TestClient) -> None:
        headers = {"X-Request-ID": "trace-42"}
        response = test_client.get("/books/invalid-id", headers=headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["meta"]["request_id"] == "trace-42"
        assert body["meta"]["path"] == "/books/invalid-id"
        assert body["meta"]["method"] == "GET"
        assert response.headers["X-Request-ID"] == "trace-42"


class TestCorsMiddleware:
    def test_cors_allows_any_origin(self, test_client: TestClient) -> None:
        response = test_client.get("/", headers={"Origin": "http://localhost:5500"})
        assert response.headers["access-control-allow-origin"] == "*"
