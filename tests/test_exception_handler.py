"""Error mapping tests for the FastAPI exception handler."""
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from datasources.exceptions.errors import (
    BackendOperationError,
    DecodeError,
    QueryBuildError,
    UnitOfWorkClosedError,
)
from datasources.exceptions.handler import BusinessException, register_exception_handlers


def build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/config")
    async def config_error():
        raise QueryBuildError("update requires at least one set() assignment", operation="build_update_query")

    @app.get("/backend")
    async def backend_error():
        original = OperationalError("SELECT 1", {}, Exception("Lost connection"))
        raise BackendOperationError("error executing find_one", original=original,
                                    operation="find_one", target="courses")

    @app.get("/closed")
    async def closed_error():
        raise UnitOfWorkClosedError("unit of work already committed", operation="commit")

    @app.get("/decode")
    async def decode_error():
        raise DecodeError("row does not match Course", detail=[{"loc": ["seats"]}])

    @app.get("/business")
    async def business_error():
        raise BusinessException("Course not found: ALG1", code=404)

    return app


@pytest.fixture
async def error_client():
    transport = ASGITransport(app=build_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestExceptionHandler:
    """Each error kind maps to its own status and envelope."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path, status_code, code", [
        ("/config", 400, 400),
        ("/backend", 503, 503),
        ("/closed", 409, 409),
        ("/decode", 500, 500),
        ("/business", 200, 404),
    ])
    async def test_status_and_code(self, error_client: AsyncClient, path, status_code, code):
        response = await error_client.get(path)
        assert response.status_code == status_code
        assert response.json()["code"] == code

    @pytest.mark.asyncio
    async def test_backend_details_are_not_leaked(self, error_client: AsyncClient):
        body = (await error_client.get("/backend")).json()
        assert body["message"] == "Service temporarily unavailable"
        assert "Lost connection" not in str(body)

    @pytest.mark.asyncio
    async def test_configuration_message_is_returned(self, error_client: AsyncClient):
        body = (await error_client.get("/config")).json()
        assert body["message"] == "update requires at least one set() assignment"


class TestErrorTaxonomy:
    """Test DataAccessError formatting."""

    def test_str_includes_operation_and_target(self):
        error = BackendOperationError("error executing insert_one", operation="insert_one", target="courses")
        assert str(error) == "insert_one on courses: error executing insert_one"

    def test_code_override(self):
        assert QueryBuildError("bad", code=422).code == 422
        assert QueryBuildError("bad").code == 400
