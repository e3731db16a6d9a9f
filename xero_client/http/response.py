"""Normalized response returned for every call that reached the server."""

from http import HTTPStatus

import httpx


# HTTPStatus names that don't camel-case to the names the API reports
_STATUS_NAME_OVERRIDES = {
    HTTPStatus.OK: "OK",
}


def status_name(status_code: int) -> str:
    """Return the CamelCase name of an HTTP status, e.g. ``ServiceUnavailable``.

    Codes without a registered name are returned as their number.
    """
    try:
        status = HTTPStatus(status_code)
    except ValueError:
        return str(status_code)
    if status in _STATUS_NAME_OVERRIDES:
        return _STATUS_NAME_OVERRIDES[status]
    return "".join(part.capitalize() for part in status.name.split("_"))


class Response:
    """Status, body and headers of one HTTP exchange."""

    def __init__(self, response: httpx.Response):
        self.status_code: int = response.status_code
        self.body: str = response.text
        self.content: bytes = response.content
        self._headers = response.headers

    @property
    def headers(self) -> httpx.Headers:
        """Case-insensitive response headers."""
        return self._headers

    @property
    def status_name(self) -> str:
        return status_name(self.status_code)

    def header(self, name: str, default: str | None = None) -> str | None:
        return self._headers.get(name, default)

    def __repr__(self) -> str:
        return f"<Response [{self.status_code} {self.status_name}]>"
