from __future__ import annotations

from src.domain.entities.errors import DomainError, InvalidCaseRequestError


def test_invalid_case_request_error_message() -> None:
    error = InvalidCaseRequestError("user_query")
    assert isinstance(error, DomainError)
    assert error.field_name == "user_query"
    assert error.message == "Field 'user_query' is required"
    assert str(error) == "Field 'user_query' is required"
    assert error.details == {}
