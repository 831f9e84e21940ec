from __future__ import annotations

from typing import Any

import httpx
import structlog

from .exceptions import ApiError, InvalidResponseError, TransportError
from .logging_config import mask_token
from .request import RequestDescriptor, encode_query

logger = structlog.get_logger(__name__)


def _parse_body(response: httpx.Response) -> Any:
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_message(body: Any, response: httpx.Response) -> str:
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
        if isinstance(error, str):
            return error
    return f"{response.status_code} {response.reason_phrase}".strip()


class HttpExecutor:
    """Request executor backed by ``httpx.AsyncClient``.

    Args:
        api_endpoint: Base URL that descriptor URIs are appended to
        access_token: Bearer token sent with every request
        timeout: Request timeout in seconds
        client: Pre-built client; the executor will not close it
    """

    def __init__(
        self,
        api_endpoint: str,
        *,
        access_token: str | None = None,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_endpoint = api_endpoint.rstrip("/")
        self._access_token = access_token
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"
        return headers

    async def __call__(self, request: RequestDescriptor) -> tuple[Any, httpx.Response]:
        url = f"{self.api_endpoint}{request.uri}"
        params = encode_query(request.qs, request.use_querystring)
        logger.debug(
            "http_request",
            method=request.method,
            url=url,
            params=params,
            token=mask_token(self._access_token) if self._access_token else None,
        )

        try:
            response = await self._client.request(
                request.method,
                url,
                params=params,
                json=request.json,
                headers=self._headers(),
            )
        except httpx.HTTPError as exc:
            logger.warning("http_request_failed", method=request.method, url=url, error=str(exc))
            raise TransportError(f"request failed: {exc}") from exc

        body = _parse_body(response)
        if response.is_error:
            message = _error_message(body, response)
            logger.warning(
                "http_error_status",
                method=request.method,
                url=url,
                status_code=response.status_code,
                error=message,
            )
            raise ApiError(
                message,
                response=response,
                status_code=response.status_code,
                body=body,
            )
        if not isinstance(body, (dict, list)):
            logger.warning(
                "http_unparseable_body",
                method=request.method,
                url=url,
                status_code=response.status_code,
            )
            raise InvalidResponseError(
                "response body is not valid JSON",
                response=response,
                status_code=response.status_code,
            )
        return body, response

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpExecutor:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
