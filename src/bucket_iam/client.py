from __future__ import annotations

import structlog

from . import config
from .bucket import Bucket
from .request import RequestExecutor
from .transport import HttpExecutor

logger = structlog.get_logger(__name__)


class Storage:
    """Entry point for talking to the storage service.

    Settings left as ``None`` are read from the environment (see
    ``bucket_iam.config``). Passing ``executor`` bypasses HTTP entirely,
    which is how tests drive buckets without a network.
    """

    def __init__(
        self,
        *,
        api_endpoint: str | None = None,
        access_token: str | None = None,
        user_project: str | None = None,
        timeout: float | None = None,
        executor: RequestExecutor | None = None,
    ) -> None:
        self.user_project = user_project or config.get_user_project()
        self._http: HttpExecutor | None = None
        if executor is None:
            self._http = HttpExecutor(
                api_endpoint or config.get_api_endpoint(),
                access_token=access_token or config.get_access_token(),
                timeout=timeout or config.get_timeout(),
            )
            executor = self._http
            logger.debug("storage_client_created", api_endpoint=self._http.api_endpoint)
        self._executor = executor

    def bucket(self, name: str) -> Bucket:
        return Bucket(name, self._executor, user_project=self.user_project)

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()

    async def __aenter__(self) -> Storage:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
