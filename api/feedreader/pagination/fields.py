"""Sort fields that pages can be keyed on."""

import re
from datetime import datetime
from enum import Enum
from typing import Any, Union

from ..errors.problem_details import InvalidPaginationTokenError


# Reserved position token meaning "greater than any stored value".
MAX_TOKEN = "9999-12-31"

# Largest value a BIGINT column can hold.
MAX_BIGINT = 2**63 - 1
MIN_BIGINT = -2**63

# Shape of the timestamps the store writes, e.g. 2024-01-05T12:00:00.000Z
RFC3339_PATTERN = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})"
)

TokenValue = Union[str, int]


class PaginationField(Enum):
    """A keyset column together with the Python type its values compare as."""

    ID = ("id", int)
    PUBLISHED = ("published", str)
    READ_DATE = ("read_date", str)

    def __init__(self, column: str, value_type: type):
        self.column = column
        self.value_type = value_type

    @property
    def max_value(self) -> TokenValue:
        """The field's value for the MAX_TOKEN sentinel."""
        if self.value_type is int:
            return MAX_BIGINT
        return MAX_TOKEN

    def parse(self, token: str) -> TokenValue:
        """Convert a position token into a value comparable against the column.

        Raises:
            InvalidPaginationTokenError: If the token is not in the field's domain
        """
        if token is None:
            raise InvalidPaginationTokenError("None", self.column, "token is required")
        if token == MAX_TOKEN:
            return self.max_value

        if self.value_type is int:
            try:
                value = int(token)
            except ValueError:
                raise InvalidPaginationTokenError(token, self.column, "expected an integer")
            if not MIN_BIGINT <= value <= MAX_BIGINT:
                raise InvalidPaginationTokenError(token, self.column, "integer out of range")
            return value

        # Timestamps are compared as strings by the store, so the shape must match what it writes
        if not RFC3339_PATTERN.fullmatch(token):
            raise InvalidPaginationTokenError(token, self.column, "expected an RFC3339 timestamp")
        try:
            datetime.fromisoformat(token.replace("Z", "+00:00"))
        except ValueError:
            raise InvalidPaginationTokenError(token, self.column, "expected an RFC3339 timestamp")
        return token

    def value_of(self, row: Any) -> TokenValue:
        """Read this field from a row (asyncpg Record or mapping)."""
        return row[self.column]

    def token_of(self, row: Any) -> str:
        """Render this field of a row as a position token."""
        return str(self.value_of(row))
