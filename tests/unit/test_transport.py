"""Tests for the httpx-backed request executor."""

from __future__ import annotations

import json

import httpx
import pytest

from bucket_iam import ApiError, Bucket, InvalidResponseError, RequestDescriptor, TransportError
from bucket_iam.transport import HttpExecutor

API = "https://storage.example.com/storage/v1"


def _executor(handler, **kwargs) -> HttpExecutor:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpExecutor(API, client=client, **kwargs)


@pytest.mark.asyncio
async def test_get_request_returns_body_and_response() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"bindings": []})

    executor = _executor(handler, access_token="ya29.secret-token-value")
    body, response = await executor(
        RequestDescriptor(uri="/b/my-bucket/iam", qs={"optionsRequestedPolicyVersion": 3})
    )

    assert body == {"bindings": []}
    assert isinstance(response, httpx.Response)
    assert response.status_code == 200
    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/storage/v1/b/my-bucket/iam"
    assert request.url.params["optionsRequestedPolicyVersion"] == "3"
    assert request.headers["Authorization"] == "Bearer ya29.secret-token-value"


@pytest.mark.asyncio
async def test_put_request_sends_json_body() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=json.loads(request.content))

    executor = _executor(handler)
    payload = {"bindings": [], "resourceId": "buckets/my-bucket"}
    body, _ = await executor(RequestDescriptor(uri="/b/my-bucket/iam", method="PUT", json=payload))

    assert seen[0].method == "PUT"
    assert body == payload
    assert "Authorization" not in seen[0].headers


@pytest.mark.asyncio
async def test_use_querystring_sends_repeated_keys() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    executor = _executor(handler)
    await executor(
        RequestDescriptor(
            uri="/b/my-bucket/iam/testPermissions",
            qs={"permissions": ["storage.buckets.get", "storage.buckets.delete"]},
            use_querystring=True,
        )
    )

    assert seen[0].url.params.get_list("permissions") == [
        "storage.buckets.get",
        "storage.buckets.delete",
    ]


@pytest.mark.asyncio
async def test_empty_body_parses_as_empty_dict() -> None:
    executor = _executor(lambda request: httpx.Response(204))
    body, response = await executor(RequestDescriptor(uri="/b/my-bucket/iam"))
    assert body == {}
    assert response.status_code == 204


@pytest.mark.asyncio
async def test_error_status_raises_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        message = "caller does not have storage.buckets.getIamPolicy"
        return httpx.Response(403, json={"error": {"code": 403, "message": message}})

    executor = _executor(handler)
    with pytest.raises(ApiError) as exc_info:
        await executor(RequestDescriptor(uri="/b/my-bucket/iam"))

    error = exc_info.value
    assert error.status_code == 403
    assert "storage.buckets.getIamPolicy" in str(error)
    assert error.response.status_code == 403
    assert error.body["error"]["code"] == 403


@pytest.mark.asyncio
async def test_network_failure_raises_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    executor = _executor(handler)
    with pytest.raises(TransportError) as exc_info:
        await executor(RequestDescriptor(uri="/b/my-bucket/iam"))

    assert not isinstance(exc_info.value, ApiError)
    assert exc_info.value.response is None
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_permission_check_end_to_end() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/storage/v1/b/my-bucket/iam/testPermissions"
        assert request.url.params["userProject"] == "billing-project"
        return httpx.Response(200, json={"permissions": ["storage.buckets.get"]})

    executor = _executor(handler)
    bucket = Bucket("my-bucket", executor, user_project="billing-project")
    result, response = await bucket.iam.test_permissions(
        ["storage.buckets.get", "storage.buckets.setIamPolicy"]
    )

    assert result == {"storage.buckets.get": True, "storage.buckets.setIamPolicy": False}
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_api_error_reaches_iam_caller_with_response() -> None:
    executor = _executor(lambda request: httpx.Response(404, json={"error": "Not Found"}))
    bucket = Bucket("missing-bucket", executor)

    with pytest.raises(ApiError) as exc_info:
        await bucket.iam.test_permissions("storage.buckets.get")

    assert str(exc_info.value) == "Not Found"
    assert exc_info.value.response.status_code == 404


@pytest.mark.asyncio
async def test_aclose_leaves_injected_client_open() -> None:
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    executor = HttpExecutor(API, client=client)
    await executor.aclose()
    assert client.is_closed is False
    await client.aclose()


@pytest.mark.asyncio
async def test_context_manager_closes_owned_client() -> None:
    async with HttpExecutor(API) as executor:
        client = executor._client
    assert client.is_closed is True


@pytest.mark.asyncio
async def test_non_json_success_body_raises_invalid_response() -> None:
    executor = _executor(lambda request: httpx.Response(200, text="<html>proxy login</html>"))

    with pytest.raises(InvalidResponseError) as exc_info:
        await executor(RequestDescriptor(uri="/b/my-bucket/iam"))

    assert exc_info.value.status_code == 200
    assert exc_info.value.response.text == "<html>proxy login</html>"
