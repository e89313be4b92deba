"""Error handling module for the Feed Reader service."""

from .problem_details import (
    ProblemDetail,
    ProblemDetailException,
    BadRequestError,
    InvalidPaginationTokenError,
    InvalidArticleFilterError,
    NotFoundError,
    ConflictError,
    InternalServerError,
    BadGatewayError,
    ServiceUnavailableError,
    create_problem_response
)
from .handlers import register_exception_handlers

__all__ = [
    "ProblemDetail",
    "ProblemDetailException",
    "BadRequestError",
    "InvalidPaginationTokenError",
    "InvalidArticleFilterError",
    "NotFoundError",
    "ConflictError",
    "InternalServerError",
    "BadGatewayError",
    "ServiceUnavailableError",
    "create_problem_response",
    "register_exception_handlers"
]
