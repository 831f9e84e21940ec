from __future__ import annotations

from typing import Any

from .exceptions import InvalidArgumentError
from .iam import Iam
from .request import RequestDescriptor, RequestExecutor


class Bucket:
    """A storage bucket, scoping requests to ``/b/<name>``.

    Args:
        name: Bucket name
        executor: Sends requests on behalf of this bucket
        user_project: Project billed for requests that do not name one
    """

    def __init__(
        self,
        name: str,
        executor: RequestExecutor,
        *,
        user_project: str | None = None,
    ) -> None:
        if not name or name.strip() == "":
            raise InvalidArgumentError("bucket name must be non-empty")
        self.name = name
        self.user_project = user_project
        self._executor = executor
        self.iam = Iam(self)

    @property
    def id(self) -> str:
        return self.name

    async def request(self, request: RequestDescriptor) -> tuple[Any, Any]:
        if self.user_project and "userProject" not in request.qs:
            request = request.with_query({**request.qs, "userProject": self.user_project})
        return await self._executor(request.with_uri_prefix(f"/b/{self.name}"))

    def __repr__(self) -> str:
        return f"Bucket(name={self.name!r})"
