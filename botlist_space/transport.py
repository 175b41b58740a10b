"""HTTP transport for the botlist.space REST API using httpx."""

import json
import logging
import re

import httpx

from .errors import FetchError, Ratelimit

logger = logging.getLogger(__name__)

API_BASE = "https://api.botlist.space/v"
USER_AGENT = "botlist-space-python"

# An application `code` in the payload counts as success only when it is 2xx
OK_CODE = re.compile(r"2\d\d")


class Transport:
    """Thin async client: one request, one status check, no retries."""

    def __init__(self, client: httpx.AsyncClient | None = None, timeout: float = 30.0):
        self._client = client or httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            timeout=timeout,
        )

    @staticmethod
    def url(point: str, version: int, *suffix: str) -> str:
        return f"{API_BASE}{version}{point}{''.join(suffix)}"

    async def get(self, point: str, version: int, *suffix: str):
        """GET an unauthenticated route."""
        return await self._request("GET", point, version, suffix)

    async def auth_get(self, point: str, version: int, authorization: str, *suffix: str):
        """GET a route that needs the ``Authorization`` header."""
        return await self._request(
            "GET", point, version, suffix, headers={"Authorization": authorization}
        )

    async def post(self, point: str, version: int, authorization: str, body: dict):
        """POST a JSON body to an authenticated route."""
        return await self._request(
            "POST",
            point,
            version,
            (),
            headers={"Authorization": authorization, "Content-Type": "application/json"},
            content=json.dumps(body),
        )

    async def _request(self, method, point, version, suffix, headers=None, content=None):
        url = self.url(point, version, *suffix)
        route = f"{version}{point}"
        resp = await self._client.request(method, url, headers=headers, content=content)
        return self._handle(resp, route)

    def _handle(self, resp: httpx.Response, route: str):
        if resp.status_code == 429:
            logger.warning("Ratelimited on %s", route)
            raise Ratelimit(resp.headers, route)

        try:
            contents = resp.json()
        except ValueError as e:
            raise FetchError(resp, f"Invalid JSON from {route} (status {resp.status_code})") from e

        code = contents.get("code") if isinstance(contents, dict) else None
        if code and not OK_CODE.fullmatch(str(code)):
            logger.warning("%s returned code %s", route, code)
            raise FetchError(resp, contents.get("message"), code=code)
        return contents

    async def aclose(self):
        await self._client.aclose()
