"""
EMS Backend — Application-Level Tests
======================================

What we test:
    ✅ Health endpoint reports store connectivity (200 / 503)
    ✅ X-Request-ID is generated, echoed back, or replaced when malformed
    ✅ Access log lines are keyed by route template
    ✅ Services own the commit
    ✅ OpenAPI document and Swagger UI are served
    ✅ Settings validators reject bad values
"""

import logging

import pytest
from unittest.mock import AsyncMock, patch

from sqlalchemy.ext.asyncio import AsyncSession

from ems import __version__
from ems.config import Settings
from ems.database import Store
from ems.middleware.request_id import RequestIDLogFilter, request_id_var


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_connected(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"
        assert data["version"] == __version__

    @pytest.mark.asyncio
    async def test_health_store_unreachable(self, test_client, store_failure):
        with patch.object(Store, "ping", AsyncMock(side_effect=store_failure)):
            response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["database"] == "disconnected"


class TestRequestId:

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/admin/total-roles")

        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_request_id_echoed_in_header_and_error_body(self, test_client):
        response = await test_client.get("/employees/5", headers={"X-Request-ID": "trace-42"})

        assert response.headers["X-Request-ID"] == "trace-42"
        assert response.json()["request_id"] == "trace-42"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("header", ["x" * 65, "has space", "semi;colon"])
    async def test_malformed_client_id_replaced(self, test_client, header):
        response = await test_client.get("/admin/total-roles", headers={"X-Request-ID": header})

        rid = response.headers["X-Request-ID"]
        assert rid != header
        assert len(rid) == 8

    def test_log_filter_stamps_current_id(self):
        record = logging.LogRecord("ems", logging.INFO, __file__, 1, "msg", None, None)
        token = request_id_var.set("abc123")
        try:
            RequestIDLogFilter().filter(record)
        finally:
            request_id_var.reset(token)

        assert record.request_id == "abc123"

    def test_log_filter_outside_request(self):
        record = logging.LogRecord("ems", logging.INFO, __file__, 1, "msg", None, None)

        assert RequestIDLogFilter().filter(record) is True
        assert record.request_id == "-"


class TestAccessLog:

    @pytest.mark.asyncio
    async def test_logged_under_route_template(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="ems.access")

        await test_client.get("/employees/41")
        await test_client.get("/employees/42")

        routes = [r.route for r in caplog.records if r.name == "ems.access"]
        assert routes == ["/employees/{employee_id}", "/employees/{employee_id}"]
        assert all(r.levelno == logging.WARNING for r in caplog.records if r.name == "ems.access")

    @pytest.mark.asyncio
    async def test_health_and_docs_paths_not_logged(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="ems.access")

        await test_client.get("/health")
        await test_client.get("/openapi.json")

        assert [r for r in caplog.records if r.name == "ems.access"] == []


class TestCommitOwnership:
    """Each write is committed once, by the service; reads never commit."""

    @pytest.mark.asyncio
    async def test_commit_counts(self, test_client):
        commits = []
        real_commit = AsyncSession.commit

        async def counting_commit(session):
            commits.append(session)
            await real_commit(session)

        with patch.object(AsyncSession, "commit", counting_commit):
            await test_client.post(
                "/employees", json={"name": "Ana", "role": "eng", "status": "active"}
            )
            assert len(commits) == 1

            await test_client.get("/employees/1")
            await test_client.get("/admin/total-employees")
            assert len(commits) == 1

            await test_client.put("/admin/update-status/1", json={"status": "leave"})
            assert len(commits) == 2


class TestDocs:

    @pytest.mark.asyncio
    async def test_openapi_document(self, test_client):
        response = await test_client.get("/openapi.json")

        assert response.status_code == 200
        schema = response.json()
        assert schema["info"]["title"] == "Employee Management System API"
        assert "/employees/{employee_id}/details" in schema["paths"]
        assert "/admin/create-role" in schema["paths"]

    @pytest.mark.asyncio
    async def test_swagger_ui(self, test_client):
        response = await test_client.get("/api-docs")

        assert response.status_code == 200
        assert "swagger" in response.text.lower()


class TestSettings:

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValueError, match="Invalid log_level"):
            Settings(log_level="LOUD")

    def test_docs_url_must_be_absolute(self):
        with pytest.raises(ValueError, match="Invalid docs_url"):
            Settings(docs_url="api-docs")

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test")

        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
