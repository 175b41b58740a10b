"""Errors raised by the botlist.space client."""

import httpx


class BotlistError(Exception):
    """Base class for every error this library raises on purpose."""


class MissingValueError(BotlistError, ValueError):
    """A required value (an ID, a token, a count) was not supplied."""


class Ratelimit(BotlistError):
    """The API answered with HTTP 429.

    Nothing is retried; ``retry_after`` (seconds) is parsed from the
    ``retry-after`` header when it is numeric so callers can back off.
    """

    def __init__(self, headers, route: str):
        self.headers = headers
        self.route = route
        self.retry_after = _parse_retry_after(headers)
        super().__init__(f"Ratelimited on {route}")


class FetchError(BotlistError):
    """The API returned a payload carrying a non-2xx ``code``."""

    def __init__(self, response: httpx.Response, message: str | None = None, code=None):
        self.response = response
        self.status = response.status_code
        self.code = code
        self.message = message or f"Request failed with status {response.status_code}"
        super().__init__(self.message)


def _parse_retry_after(headers) -> float | None:
    val = headers.get("retry-after") if headers is not None else None
    if val is None:
        return None
    try:
        return float(val)
    except ValueError:
        return None
