"""
Base class for the admin REST resource clients.

Every resource module (customers, quotations, ...) extends ResourceApi,
which owns the HTTP round trip and its conventions:

- Query parameters whose value is None or "" are dropped
- Responses are unwrapped from the ``{success, data, pagination, message}``
  envelope; callers never see it
- Failures become ApiError subclasses and are reported to the Notifier
  once, using the server's message when it sent one
- Mutations report success with the server's message or a default
"""

from typing import Any, Collection, Mapping

import httpx

from mixer_admin.lib import logs
from mixer_admin.models.common import ListPage, Pagination
from mixer_admin.services.errors import (
    ApiError,
    ClientValidationError,
    ServerRejectedError,
    TransportError,
)
from mixer_admin.services.notifications import Notifier

LOG = logs.logger(__file__)

# Messages for statuses the server does not explain itself
_STATUS_MESSAGES = {
    401: "Session expired. Please login again.",
    404: "Resource not found.",
    429: "Too many requests. Please wait a moment.",
}
_SERVER_ERROR_MESSAGE = "Server error. Please try again later."


def clean_params(params: Mapping[str, Any] | None) -> dict[str, Any]:
    """Drop parameters whose value is None or an empty string."""
    if not params:
        return {}
    cleaned = {}
    for key, value in params.items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        cleaned[key] = value
    return cleaned


def require(value: Any, message: str) -> None:
    """
    Raise ClientValidationError when a required argument is missing.

    Zero is a valid value; None, empty strings and empty containers are not.
    """
    if value is None:
        raise ClientValidationError(message)
    if isinstance(value, str) and not value.strip():
        raise ClientValidationError(message)
    if isinstance(value, (list, tuple, dict, set)) and not value:
        raise ClientValidationError(message)


class ResourceApi:
    """
    Shared HTTP plumbing for one REST resource.

    Subclasses set ``base_path`` and use the ``_get``/``_send``/``_list``
    helpers, passing the fallback messages the user should see.

    Attributes:
        base_path: Path of the resource collection, e.g. ``/admin/customers``.
    """

    base_path = "/admin"

    def __init__(self, http: httpx.AsyncClient, notifier: Notifier | None = None) -> None:
        """
        Initialize the resource client.

        Args:
            http: AsyncClient rooted at the API base URL.
            notifier: Receives success/error notifications. A private
                      notifier is created when omitted.
        """
        self._http = http
        self.notifier = notifier or Notifier()

    def _path(self, *parts: Any) -> str:
        suffix = "/".join(str(part) for part in parts)
        return f"{self.base_path}/{suffix}" if suffix else self.base_path

    async def _request(
        self,
        method: str,
        path: str,
        *,
        error_message: str,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        files: Any = None,
        success_message: str | None = None,
        notify_errors: bool = True,
        quiet_statuses: Collection[int] = (),
    ) -> httpx.Response:
        """
        Issue one HTTP call and translate failures.

        Args:
            method: HTTP verb.
            path: Path relative to the API base URL.
            error_message: Message used when the server does not send one.
            params: Query parameters (cleaned before sending).
            json: JSON body.
            files: Multipart files.
            success_message: When set, a success notification is shown
                             using the server's message or this default.
            notify_errors: Whether failures are notified at all.
            quiet_statuses: Statuses that raise without notifying.

        Returns:
            The successful httpx.Response.

        Raises:
            TransportError: The request did not complete.
            ServerRejectedError: The server rejected the request.
        """
        query = clean_params(params)
        LOG.debug("%s %s params=%s", method, path, query)
        try:
            response = await self._http.request(
                method, path, params=query or None, json=json, files=files
            )
        except httpx.HTTPError as exc:
            LOG.warning("%s %s failed: %s", method, path, exc)
            error = TransportError(error_message)
            self._report(error, notify_errors)
            raise error from exc

        body = _json_body(response)
        rejected = response.is_error or (
            isinstance(body, dict) and body.get("success") is False
        )
        if rejected:
            status = response.status_code
            if status == 401:
                message = _STATUS_MESSAGES[401]
            else:
                message = (
                    _server_message(body) or _status_message(status) or error_message
                )
            LOG.warning("%s %s rejected (%s): %s", method, path, status, message)
            errors = body.get("errors") if isinstance(body, dict) else None
            error = ServerRejectedError(message, errors, status)
            self._report(error, notify_errors and status not in quiet_statuses)
            raise error

        if success_message is not None:
            self.notifier.success(_server_message(body) or success_message)
        return response

    def _report(self, error: ApiError, notify: bool) -> None:
        if notify and not error.notified:
            self.notifier.error(error.message)
            error.notified = True

    async def _send(self, method: str, path: str, **kwargs: Any) -> dict:
        """Issue a call and return the decoded envelope."""
        response = await self._request(method, path, **kwargs)
        body = _json_body(response)
        return body if isinstance(body, dict) else {"data": body}

    async def _get(self, path: str, **kwargs: Any) -> Any:
        """GET ``path`` and return the envelope's ``data``."""
        return (await self._send("GET", path, **kwargs)).get("data")

    async def _list(
        self,
        path: str,
        params: Mapping[str, Any],
        *,
        error_message: str,
    ) -> ListPage:
        """
        GET a list endpoint and normalize it into a ListPage.

        Args:
            path: List endpoint path.
            params: Query parameters including ``page`` and ``limit``.
            error_message: Fallback error message.
        """
        body = await self._send("GET", path, params=params, error_message=error_message)
        items = body.get("data") or []
        page = int(params.get("page") or 1)
        limit = int(params.get("limit") or 10)
        return ListPage(
            items=list(items),
            pagination=Pagination.from_response(
                body.get("pagination"), page=page, limit=limit, item_count=len(items)
            ),
            message=body.get("message"),
            filters=body.get("filters") or {},
        )


def _json_body(response: httpx.Response) -> Any:
    if not response.content:
        return {}
    content_type = response.headers.get("content-type", "")
    if "json" not in content_type:
        return {}
    try:
        return response.json()
    except ValueError:
        return {}


def _server_message(body: Any) -> str | None:
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None


def _status_message(status: int) -> str | None:
    if status >= 500:
        return _SERVER_ERROR_MESSAGE
    return _STATUS_MESSAGES.get(status)
