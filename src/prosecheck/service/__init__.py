"""Request/response contract with the external checking service."""

from .base import (
    CheckingService,
    ValidationFailure,
    ValidationRequest,
    ValidationResponse,
    ValidationSuccess,
    build_validation_requests,
    response_to_action,
)

__all__ = [
    "CheckingService",
    "ValidationFailure",
    "ValidationRequest",
    "ValidationResponse",
    "ValidationSuccess",
    "build_validation_requests",
    "response_to_action",
]
