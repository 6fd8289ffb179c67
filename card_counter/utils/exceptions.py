"""Custom exceptions and warnings for the card counter application."""

from typing import Dict, Any, Optional

from fastapi import HTTPException, status


class CustomException(Exception):
    """Base custom exception class.

    Attributes:
        message: The error message
        status_code: HTTP status code
        headers: Optional HTTP headers
    """

    def __init__(
        self,
        message: Dict[str, Any],
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        headers: Optional[Dict[str, str]] = None
    ) -> None:
        """Initialize the custom exception.

        Args:
            message: The error message as a dictionary
            status_code: HTTP status code
            headers: Optional HTTP headers
        """
        self.message = message
        self.status_code = status_code
        self.headers = headers
        super().__init__(self.message)


class CustomHTTPException(HTTPException):
    """HTTP exception with custom message and headers.

    Attributes:
        message: The error message
        status_code: HTTP status code
        headers: Optional HTTP headers
    """

    def __init__(
        self,
        status_code: int,
        message: Dict[str, Any],
        headers: Optional[Dict[str, str]] = None
    ) -> None:
        self.message = message
        super().__init__(status_code=status_code, detail=message)
        self.headers = headers

    def to_json(self) -> Dict[str, str]:
        return self.headers if self.headers else {}


class CardCounterException(CustomException):
    """Base class of every error the card counter core raises.

    Subclasses fix the error kind and the HTTP status code so the API layer
    and the CLI can report them uniformly.
    """

    error: str = "card_counter_error"
    default_status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str, **context: Any) -> None:
        self.detail = detail
        message = {"error": self.error, "detail": detail}
        message.update(context)
        super().__init__(message=message, status_code=self.default_status_code)

    def __str__(self) -> str:
        return self.detail


class DateRangeError(CardCounterException):
    """Raised when a burndown range ends before it starts or is unparseable."""

    error = "date_range_error"
    default_status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class RepositoryUnavailable(CardCounterException):
    """Raised when the snapshot store cannot be read or written."""

    error = "repository_unavailable"
    default_status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class SourceUnavailable(CardCounterException):
    """Raised when the kanban source cannot be reached or refuses the request."""

    error = "source_unavailable"
    default_status_code = status.HTTP_502_BAD_GATEWAY


class BoardNotFound(CardCounterException):
    """Raised when the kanban source has no board with the requested id."""

    error = "board_not_found"
    default_status_code = status.HTTP_404_NOT_FOUND


class ParseWarning(UserWarning):
    """A card title carried a marker that could not be turned into a score."""


class FilterNoMatch(UserWarning):
    """The list filter removed every list of a board."""
