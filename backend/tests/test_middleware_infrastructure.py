"""
Tests for the HTTP middlewares, CORS options, request correlation and
safe_commit.
"""

import logging
import uuid
from unittest.mock import MagicMock

import pytest

from sales_api.core.cors import DEV_ORIGINS, cors_options, parse_origins
from shared.config.settings import Settings, settings
from shared.infrastructure.correlation import (
    CorrelationIdFilter,
    request_id_var,
    resolve_request_id,
)
from shared.infrastructure.db import safe_commit


class TestSecurityHeadersMiddleware:

    def test_no_hsts_outside_production(self, client):
        response = client.get("/api/health")

        assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
        assert "Strict-Transport-Security" not in response.headers

    def test_hsts_in_production(self, client, monkeypatch):
        monkeypatch.setattr(settings, "environment", "production")

        response = client.get("/api/health")

        assert response.headers["Strict-Transport-Security"].startswith("max-age=")


class TestContentTypeValidationMiddleware:

    def test_rejects_xml_body_with_problem_details(self, client):
        response = client.put(
            "/api/products/1",
            content="<xml/>",
            headers={"Content-Type": "application/xml"},
        )

        assert response.status_code == 415
        assert response.json()["title"] == "Unsupported Media Type"

    def test_json_with_charset_is_accepted(self, client):
        response = client.post(
            "/api/customers",
            content='{"name": "C", "phone": "1", "company": "E"}',
            headers={"Content-Type": "application/json; charset=utf-8"},
        )

        assert response.status_code == 201


class TestCorrelationId:

    def test_generates_id_when_missing(self, client):
        response = client.get("/api/health")

        uuid.UUID(response.headers["X-Request-ID"])

    def test_replaces_malformed_client_id(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "bad id with spaces"})

        assert response.headers["X-Request-ID"] != "bad id with spaces"

    @pytest.mark.parametrize("value", ["abc-123", "req:42", "a.b_c"])
    def test_keeps_well_formed_ids(self, value):
        assert resolve_request_id(value) == value

    def test_rejects_overlong_ids(self):
        assert resolve_request_id("x" * 129) != "x" * 129

    def test_filter_adds_request_id(self):
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", (), None)
        token = request_id_var.set("req-1")
        try:
            CorrelationIdFilter().filter(record)
        finally:
            request_id_var.reset(token)

        assert record.request_id == "req-1"

    def test_filter_outside_request(self):
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", (), None)

        CorrelationIdFilter().filter(record)

        assert record.request_id == "-"


class TestCorsOptions:

    def test_defaults_to_dev_origins(self):
        options = cors_options(Settings(allowed_origins=""))

        assert options["allow_origins"] == DEV_ORIGINS
        assert "http://localhost:5173" in DEV_ORIGINS
        assert options["expose_headers"] == ["Location", "X-Request-ID"]

    def test_configured_origins(self):
        options = cors_options(Settings(allowed_origins="https://a.example, https://b.example,", environment="production"))

        assert options["allow_origins"] == ["https://a.example", "https://b.example"]
        assert options["max_age"] == 600

    def test_parse_origins_ignores_blanks(self):
        assert parse_origins(" , ") == []


class TestSafeCommit:

    def test_commits(self):
        session = MagicMock()

        safe_commit(session)

        session.commit.assert_called_once()
        session.rollback.assert_not_called()

    def test_rolls_back_and_reraises(self):
        session = MagicMock()
        session.commit.side_effect = RuntimeError("commit failed")

        with pytest.raises(RuntimeError):
            safe_commit(session)

        session.rollback.assert_called_once()
