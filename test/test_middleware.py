"""
Tests for correlation IDs and structured logging.
"""

import json
import logging

import pytest
from httpx import AsyncClient

from fish_follow.shared.logging import StructuredFormatter, correlation_id_var
from fish_follow.shared.middleware import CORRELATION_ID_HEADER


class TestCorrelationIdMiddleware:
    @pytest.mark.asyncio
    async def test_generated_when_absent(self, async_client: AsyncClient, auth_headers) -> None:
        response = await async_client.get("/contacts/fields", headers=auth_headers)

        assert response.headers[CORRELATION_ID_HEADER]

    @pytest.mark.asyncio
    async def test_propagated_when_present(self, async_client: AsyncClient, auth_headers) -> None:
        response = await async_client.get(
            "/contacts/fields",
            headers={**auth_headers, CORRELATION_ID_HEADER: "abc-123"},
        )

        assert response.headers[CORRELATION_ID_HEADER] == "abc-123"

    @pytest.mark.asyncio
    async def test_request_id_is_accepted(self, async_client: AsyncClient, auth_headers) -> None:
        response = await async_client.get(
            "/contacts/fields",
            headers={**auth_headers, "X-Request-ID": "req-9"},
        )

        assert response.headers[CORRELATION_ID_HEADER] == "req-9"

    @pytest.mark.asyncio
    async def test_health_is_excluded(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
        assert CORRELATION_ID_HEADER not in response.headers


class TestStructuredFormatter:
    def _record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord(
            name="fish_follow.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Contact search completed",
            args=(),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_json_with_extra_fields(self) -> None:
        output = json.loads(StructuredFormatter().format(self._record(match_count=3)))

        assert output["level"] == "INFO"
        assert output["logger"] == "fish_follow.test"
        assert output["message"] == "Contact search completed"
        assert output["match_count"] == 3
        assert "correlation_id" not in output

    def test_includes_correlation_id(self) -> None:
        token = correlation_id_var.set("corr-1")
        try:
            output = json.loads(StructuredFormatter().format(self._record()))
        finally:
            correlation_id_var.reset(token)

        assert output["correlation_id"] == "corr-1"

    def test_colliding_extra_is_prefixed(self) -> None:
        output = json.loads(StructuredFormatter().format(self._record(level="custom")))

        assert output["level"] == "INFO"
        assert output["extra_level"] == "custom"
