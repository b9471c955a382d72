"""
Error taxonomy for the admin API client.

Every failure an API call can produce is an ``ApiError``:

- ClientValidationError: a required argument was missing or invalid; raised
  before any network call and never notified.
- TransportError: the request did not complete (connection, timeout).
- ServerRejectedError: the server answered with a non-2xx status or an
  envelope with ``success: false``.
- OptimisticRollbackError: a mutation's server call failed after its
  optimistic cache edit was applied; the edit has been rolled back.
"""

from typing import Any, Iterable


class ApiError(RuntimeError):
    """
    Base error for the admin API client.

    Attributes:
        message: Human-readable message suitable for a toast.
        field_errors: Per-field errors as ``{"field", "message"}`` dicts.
        http_status: HTTP status code, when a response was received.
        notified: True once the message has been shown to the user.
    """

    def __init__(
        self,
        message: str,
        field_errors: Iterable[Any] | None = None,
        http_status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field_errors = normalize_field_errors(field_errors)
        self.http_status = http_status
        self.notified = False

    @property
    def retryable(self) -> bool:
        """Whether repeating the same request could succeed."""
        return False

    def to_dict(self) -> dict:
        return {
            "type": type(self).__name__,
            "message": self.message,
            "field_errors": self.field_errors,
            "http_status": self.http_status,
        }


class ClientValidationError(ApiError):
    """Raised locally when a call's arguments fail validation."""


class TransportError(ApiError):
    """Raised when the HTTP request did not complete."""

    @property
    def retryable(self) -> bool:
        return True


class ServerRejectedError(ApiError):
    """Raised when the server rejected the request."""

    @property
    def retryable(self) -> bool:
        return self.http_status is not None and self.http_status >= 500


class OptimisticRollbackError(ApiError):
    """Raised after an optimistic cache edit was rolled back."""

    @classmethod
    def from_error(cls, error: Exception) -> "OptimisticRollbackError":
        if isinstance(error, ApiError):
            rollback = cls(error.message, error.field_errors, error.http_status)
            rollback.notified = error.notified
            return rollback
        return cls(str(error) or "The change could not be saved")


def normalize_field_errors(raw: Iterable[Any] | None) -> list[dict[str, str]]:
    """
    Normalize the envelope's ``errors`` array.

    The backend sends either plain strings or validator objects
    (``{"msg", "param"}`` / ``{"message", "path"}``); both become
    ``{"field": ..., "message": ...}`` with an empty field for strings.
    """
    if not raw:
        return []
    if isinstance(raw, (str, dict)):
        raw = [raw]
    errors = []
    for item in raw:
        if isinstance(item, dict):
            errors.append(
                {
                    "field": str(
                        item.get("field") or item.get("path") or item.get("param") or ""
                    ),
                    "message": str(item.get("message") or item.get("msg") or ""),
                }
            )
        else:
            errors.append({"field": "", "message": str(item)})
    return errors
