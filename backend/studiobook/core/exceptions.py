# backend/studiobook/core/exceptions.py
"""
Domain-specific exceptions for the Studiobook calendar.

These exceptions provide clear, business-focused error messages
that can be caught and handled appropriately at the API layer.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

from .constants import AVAILABILITY_UPDATE_FAILED_NOTICE


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def _detail(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "details": self.details,
        }

    def to_http_exception(self) -> HTTPException:
        """Default conversion to HTTPException (override in subclasses)."""
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=self._detail(),
        )


class ValidationException(DomainException):
    """Raised when business validation fails."""

    def to_http_exception(self) -> HTTPException:
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=self._detail())


class ServiceException(DomainException):
    """Raised when a service operation fails."""

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": self.message or "An error occurred processing your request",
                "code": self.code,
                "details": self.details if self.details else {},
            },
        )


# Specific calendar exceptions


class InvalidTimeSlotError(ValidationException):
    """Raised when a value is not one of the 48 half-hour slots of a day."""

    def __init__(self, value: Any):
        super().__init__(
            message=f"Invalid time slot: {value!r}",
            code="INVALID_TIME_SLOT",
            details={"value": str(value)},
        )


class AvailabilityPersistenceError(ServiceException):
    """
    Raised when the whole-map availability write is rejected.

    The in-memory calendar keeps the attempted state; callers show the
    notice and the next reload brings back what was actually stored.
    """

    def __init__(
        self,
        photographer_id: str,
        *,
        reason: Optional[str] = None,
    ):
        super().__init__(
            message=AVAILABILITY_UPDATE_FAILED_NOTICE,
            code="AVAILABILITY_PERSISTENCE_FAILED",
            details={"photographer_id": photographer_id, "reason": reason or "unknown"},
        )

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=self._detail(),
        )

