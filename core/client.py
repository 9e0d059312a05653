# =============================================================================
# core/client.py  -  Authenticated HTTP Client for the Graylog REST API
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Sends one GET or POST to Graylog and classifies what came back:
#
#     2xx + JSON body        -> Success(parsed JSON)
#     DNS/refused/timeout    -> Failure(NetworkError)     message has the target URL
#     non-2xx status         -> Failure(GraylogHTTPError) message has status, reason, body
#     2xx but not JSON       -> Failure(DecodingError)
#
#   Callers branch on the returned value; request-level failures are never
#   raised out of get()/post().
#
# HEADERS ON EVERY REQUEST:
#   Authorization: Basic base64(username:password)
#   X-Requested-By: graylog-mcp     (Graylog's CSRF guard wants this header)
#   Accept: application/json         (GET)
#   Content-Type: application/json   (POST, set by httpx from json=)
#
# ONE CLIENT PER CALL:
#   Each request opens and closes its own httpx.AsyncClient.  No pooling,
#   no retries, no shared state between concurrent tool invocations.
# =============================================================================

import logging
from typing import Any, Mapping, Optional

import httpx

from core.config import GraylogConfig
from core.errors import DecodingError, Failure, GraylogHTTPError, NetworkError, Result, Success

logger = logging.getLogger(__name__)

REQUESTED_BY = "graylog-mcp"


def serialize_params(params: Mapping[str, Any]) -> dict[str, str]:
    """Stringify query parameters the way Graylog expects them.

    None values are skipped, lists are comma-joined, booleans become
    "true"/"false", everything else goes through str().
    """
    serialized: dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            serialized[key] = ",".join(str(item) for item in value)
        elif isinstance(value, bool):
            serialized[key] = "true" if value else "false"
        else:
            serialized[key] = str(value)
    return serialized


def _describe(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


class GraylogClient:
    """Thin async wrapper around the Graylog REST API."""

    def __init__(
        self,
        config: GraylogConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._config = config
        # Tests inject httpx.MockTransport here.
        self._transport = transport

    @property
    def config(self) -> GraylogConfig:
        return self._config

    def url_for(self, path: str) -> str:
        """Join the base URL and an API path ("/api/x" and "api/x" are equivalent)."""
        return f"{self._config.base_url}{path.removeprefix('/')}"

    async def get(self, path: str, params: Mapping[str, Any]) -> Result:
        return await self._send(
            "GET",
            path,
            params=serialize_params(params),
            headers={"Accept": "application/json"},
        )

    async def post(self, path: str, payload: Mapping[str, Any]) -> Result:
        return await self._send(
            "POST",
            path,
            json=dict(payload),
            headers={"Content-Type": "application/json"},
        )

    async def _send(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str],
        params: Optional[dict[str, str]] = None,
        json: Optional[dict[str, Any]] = None,
    ) -> Result:
        target = self.url_for(path)
        headers = {"X-Requested-By": REQUESTED_BY, **headers}

        async with httpx.AsyncClient(
            auth=(self._config.username, self._config.password),
            timeout=self._config.timeout,
            verify=self._config.verify_ssl,
            transport=self._transport,
        ) as client:
            try:
                request = client.build_request(method, target, params=params, json=json, headers=headers)
                target = str(request.url)
                logger.debug("%s %s", method, target)
                response = await client.send(request, stream=True)
            except (httpx.RequestError, httpx.InvalidURL) as exc:
                return _unreachable(target, exc)

            try:
                return await _classify(response, target)
            finally:
                await response.aclose()


def _unreachable(target: str, exc: Exception) -> Failure:
    logger.warning("Graylog unreachable at %s: %s", target, _describe(exc))
    return Failure(NetworkError(f"Failed to reach Graylog at {target}: {_describe(exc)}"))


async def _classify(response: httpx.Response, target: str) -> Result:
    # The body is read here, after the status line, so a broken error body
    # still reports the status.
    if not response.is_success:
        try:
            await response.aread()
            error_text = response.text or response.reason_phrase
        except httpx.RequestError as exc:
            logger.debug("Could not read error body from %s: %s", target, _describe(exc))
            error_text = response.reason_phrase
        logger.warning("Graylog answered %s %s for %s", response.status_code, response.reason_phrase, target)
        return Failure(
            GraylogHTTPError(
                f"Graylog request failed ({response.status_code} {response.reason_phrase}): {error_text}",
                status_code=response.status_code,
            )
        )

    try:
        await response.aread()
    except httpx.RequestError as exc:
        return _unreachable(target, exc)

    try:
        return Success(response.json())
    except ValueError as exc:
        return Failure(DecodingError(f"Graylog returned a non-JSON body from {target}: {_describe(exc)}"))
