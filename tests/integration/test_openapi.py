"""
Integration tests for OpenAPI documentation.

Verifies OpenAPI schema is correctly generated for the adapted endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from src.api.main import app


@pytest.fixture
def client() -> TestClient:
    """Create test client for the application."""
    return TestClient(app)


@pytest.fixture
def schema(client: TestClient) -> dict:
    """Fetch the generated OpenAPI schema."""
    response = client.get("/openapi.json")
    assert response.status_code == 200
    return response.json()


class TestOpenAPISchema:
    """Tests for OpenAPI schema generation."""

    def test_openapi_schema_accessible(self, schema: dict) -> None:
        """OpenAPI schema has the standard top-level keys."""
        assert "openapi" in schema
        assert "info" in schema
        assert "paths" in schema

    def test_openapi_title_and_version(self, schema: dict) -> None:
        """OpenAPI schema has the configured title and version."""
        assert schema["info"]["title"] == "typed-bind"
        assert schema["info"]["version"] == "0.1.0"

    def test_users_operations_in_schema(self, schema: dict) -> None:
        """All user operations are documented."""
        assert set(schema["paths"]["/users"]) == {"get", "post"}
        assert "get" in schema["paths"]["/users/{id}"]

    def test_summaries(self, schema: dict) -> None:
        """Operations carry their summaries."""
        assert schema["paths"]["/users"]["post"]["summary"] == "Create a user"
        assert schema["paths"]["/users/{id}"]["get"]["summary"] == "Get a user by id"

    def test_path_parameter_documented(self, schema: dict) -> None:
        """The id path parameter comes from the request model."""
        params = schema["paths"]["/users/{id}"]["get"]["parameters"]
        expected = {"name": "id", "in": "path", "required": True, "schema": {"type": "string"}}
        assert expected in params

    def test_query_parameter_documented(self, schema: dict) -> None:
        """The name query parameter comes from the request model."""
        params = schema["paths"]["/users"]["get"]["parameters"]
        assert [p["name"] for p in params] == ["name"]
        assert params[0]["in"] == "query"

    def test_response_model_documented(self, schema: dict) -> None:
        """The 200 response references the handler's response model."""
        ok = schema["paths"]["/users/{id}"]["get"]["responses"]["200"]
        ref = ok["content"]["application/json"]["schema"]["$ref"]
        assert ref.endswith("/GetUserResponse")

    @pytest.mark.parametrize("code", ["400", "404", "500"])
    def test_error_responses_documented(self, schema: dict, code: str) -> None:
        """Error codes reference the ErrorResponse model."""
        responses = schema["paths"]["/users/{id}"]["get"]["responses"]
        ref = responses[code]["content"]["application/json"]["schema"]["$ref"]
        assert ref.endswith("/ErrorResponse")

    def test_error_response_schema(self, schema: dict) -> None:
        """ErrorResponse has a single required error field."""
        error = schema["components"]["schemas"]["ErrorResponse"]
        assert error["required"] == ["error"]
        assert "error" in error["properties"]
