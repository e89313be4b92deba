"""Tests for sort fields and position token parsing."""

import pytest

from feedreader.pagination import MAX_TOKEN, MAX_BIGINT, PaginationField
from feedreader.pagination.fields import MIN_BIGINT
from feedreader.errors.problem_details import InvalidPaginationTokenError, BadRequestError


class TestPaginationField:
    """Test PaginationField parsing."""

    def test_columns(self):
        assert PaginationField.ID.column == "id"
        assert PaginationField.PUBLISHED.column == "published"
        assert PaginationField.READ_DATE.column == "read_date"

    def test_sentinel_maps_into_each_domain(self):
        assert PaginationField.PUBLISHED.parse(MAX_TOKEN) == MAX_TOKEN
        assert PaginationField.READ_DATE.parse(MAX_TOKEN) == MAX_TOKEN
        assert PaginationField.ID.parse(MAX_TOKEN) == MAX_BIGINT

    def test_sentinel_sorts_after_timestamps(self):
        assert MAX_TOKEN > "2999-12-31T23:59:59.999Z"

    @pytest.mark.parametrize("token", [
        "2024-01-01T12:00:00.000Z",
        "2024-01-01T12:00:00Z",
        "2024-01-01T12:00:00+02:00",
    ])
    def test_timestamp_tokens_pass_through_unchanged(self, token):
        assert PaginationField.PUBLISHED.parse(token) == token

    def test_integer_token(self):
        assert PaginationField.ID.parse("42") == 42

    def test_integer_bounds_are_accepted(self):
        assert PaginationField.ID.parse(str(2**63 - 1)) == MAX_BIGINT
        assert PaginationField.ID.parse(str(-2**63)) == MIN_BIGINT

    @pytest.mark.parametrize("field,token", [
        (PaginationField.PUBLISHED, "yesterday"),
        (PaginationField.READ_DATE, ""),
        (PaginationField.READ_DATE, "-1"),
        (PaginationField.ID, "abc"),
        (PaginationField.ID, "2024-01-01T12:00:00Z"),
        (PaginationField.ID, str(2**63)),
        (PaginationField.ID, str(-2**63 - 1)),
        (PaginationField.PUBLISHED, "20240101"),
        (PaginationField.PUBLISHED, "2024-01-01"),
        (PaginationField.PUBLISHED, "2024-01-01 10:00"),
        (PaginationField.PUBLISHED, "2024-01-01T10:00:00"),
        (PaginationField.READ_DATE, "2024-13-01T00:00:00Z"),
    ])
    def test_invalid_tokens_are_caller_errors(self, field, token):
        with pytest.raises(InvalidPaginationTokenError) as exc_info:
            field.parse(token)

        assert isinstance(exc_info.value, BadRequestError)
        assert exc_info.value.status == 400
        assert exc_info.value.extensions["field"] == field.column

    def test_token_of_row(self):
        assert PaginationField.ID.token_of({"id": 7}) == "7"
        assert PaginationField.PUBLISHED.token_of(
            {"published": "2024-01-01T12:00:00.000Z"}
        ) == "2024-01-01T12:00:00.000Z"
