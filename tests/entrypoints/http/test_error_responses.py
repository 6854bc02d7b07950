"""Tests for REST error response models."""

from motoin.entrypoints.http.error_responses import ErrorDetail, ErrorResponse, error_responses


class TestErrorDetail:
    def test_serializes_to_dict(self) -> None:
        detail = ErrorDetail(field="make", message="Make is required", code="REQUIRED")

        assert detail.model_dump() == {"field": "make", "message": "Make is required", "code": "REQUIRED"}

    def test_code_is_optional(self) -> None:
        assert ErrorDetail(field="per_page", message="Must be <= 100").code is None


class TestErrorResponse:
    def test_simple_error(self) -> None:
        response = ErrorResponse(detail="Order not found", code="NOT_FOUND")

        assert response.model_dump(exclude_none=True) == {"detail": "Order not found", "code": "NOT_FOUND"}

    def test_with_field_errors(self) -> None:
        response = ErrorResponse(
            detail="Validation failed",
            code="VALIDATION_ERROR",
            errors=[ErrorDetail(field="items", message="Order has no items", code="REQUIRED")],
        )

        data = response.model_dump()
        assert data["errors"] == [{"field": "items", "message": "Order has no items", "code": "REQUIRED"}]

    def test_schema_has_examples(self) -> None:
        schema = ErrorResponse.model_json_schema()

        assert any(example["code"] == "TOKEN_EXPIRED" for example in schema["examples"])


class TestErrorResponsesHelper:
    def test_builds_entries_for_each_status(self) -> None:
        responses = error_responses(401, 404)

        assert set(responses) == {401, 404}
        assert responses[401]["model"] is ErrorResponse
        assert "token" in responses[401]["description"]
        assert responses[404]["description"] == "Resource not found"

    def test_unknown_status_gets_generic_description(self) -> None:
        assert error_responses(418)[418]["description"] == "Error"
