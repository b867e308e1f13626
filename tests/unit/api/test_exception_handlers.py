"""Unit tests for exception handlers."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from api.exception_handlers import setup_exception_handlers
from core.exceptions import ActivityLogNotFoundError, ImmutableLogError, InvalidIdError


def _create_test_app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)
    return app


class TestExceptionHandlers:
    @pytest.mark.asyncio
    async def test_not_found_returns_404(self) -> None:
        app = _create_test_app()

        @app.get("/raise-not-found")
        async def _() -> None:
            raise ActivityLogNotFoundError("some-id")

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/raise-not-found")

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "ACTIVITY_LOG_NOT_FOUND"
        assert body["message"] == "Activity log not found"
        assert body["details"]["id"] == "some-id"

    @pytest.mark.asyncio
    async def test_invalid_id_returns_400(self) -> None:
        app = _create_test_app()

        @app.get("/raise-invalid")
        async def _() -> None:
            raise InvalidIdError("abc")

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/raise-invalid")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid UUID format"

    @pytest.mark.asyncio
    async def test_immutable_log_returns_400(self) -> None:
        app = _create_test_app()

        @app.get("/raise-immutable")
        async def _() -> None:
            raise ImmutableLogError("some-id", "git_commit")

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/raise-immutable")

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "IMMUTABLE_LOG"
        assert body["message"] == "Can only modify manual log entries"

    @pytest.mark.asyncio
    async def test_http_exception_returns_standard_format(self) -> None:
        from starlette.exceptions import HTTPException

        app = _create_test_app()

        @app.get("/raise-http")
        async def _() -> None:
            raise HTTPException(status_code=403, detail="Forbidden")

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/raise-http")

        assert response.status_code == 403
        body = response.json()
        assert body["error_code"] == "HTTP_ERROR"
        assert body["message"] == "Forbidden"

    @pytest.mark.asyncio
    async def test_unknown_route_uses_not_found_code(self) -> None:
        app = _create_test_app()

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/missing")

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_validation_error_returns_400_with_field_details(self) -> None:
        from pydantic import BaseModel, Field

        app = _create_test_app()

        class Body(BaseModel):
            content: str = Field(..., min_length=1)

        @app.post("/validate")
        async def _(body: Body) -> dict[str, bool]:
            return {"ok": True}

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.post("/validate", json={"content": ""})

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert isinstance(body["details"], list)
        assert body["details"][0]["field"] == "body.content"

    @pytest.mark.asyncio
    async def test_unhandled_exception_hides_internals(self) -> None:
        app = _create_test_app()

        @app.get("/raise-unhandled")
        async def _() -> None:
            raise RuntimeError("connection string postgres://secret")

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/raise-unhandled")

        assert response.status_code == 500
        body = response.json()
        assert body["error_code"] == "INTERNAL_ERROR"
        assert body["message"] == "An unexpected error occurred"
        assert "secret" not in response.text
        assert set(body["details"]) == {"request_id"}
