"""Shared fixtures for unit tests.

``FakeExecutor`` stands in for the HTTP layer: it records every request it
receives and answers with a queued body or raises a queued exception.
"""

from __future__ import annotations

from typing import Any

import pytest

from bucket_iam import Bucket, RequestDescriptor


class FakeExecutor:
    def __init__(self) -> None:
        self.requests: list[RequestDescriptor] = []
        self.body: Any = {}
        self.response: Any = object()
        self.error: Exception | None = None

    async def __call__(self, request: RequestDescriptor) -> tuple[Any, Any]:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.body, self.response

    @property
    def last(self) -> RequestDescriptor:
        return self.requests[-1]


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def bucket(executor: FakeExecutor) -> Bucket:
    return Bucket("my-bucket", executor)
