"""IAM accessor for a single bucket.

Reads and writes the bucket's IAM policy and checks which permissions the
caller holds. Requests go through the bucket's own request method, so
authentication, transport and error mapping are decided there.
"""

from __future__ import annotations

from collections.abc import Coroutine, Mapping
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from .exceptions import InvalidArgumentError, InvalidResponseError
from .models import GetPolicyOptions, PermissionResult, Policy, RequestOptions
from .request import RequestDescriptor, arrify

if TYPE_CHECKING:
    from .bucket import Bucket

logger = structlog.get_logger(__name__)


class Iam:
    """Access-control operations for one bucket.

    Every operation returns ``(result, raw_response)``. Errors raised while
    sending the request propagate unchanged. A success body of the wrong
    shape raises ``InvalidResponseError``, which is a ``TransportError``.
    """

    def __init__(self, bucket: Bucket) -> None:
        self._request = bucket.request
        self.resource_id = f"buckets/{bucket.id}"

    async def _send(self, operation: str, request: RequestDescriptor) -> tuple[Any, Any]:
        try:
            return await self._request(request)
        except Exception as exc:
            logger.warning(
                "iam_request_failed",
                operation=operation,
                resource_id=self.resource_id,
                error=str(exc),
            )
            raise

    def _parse_policy(self, operation: str, body: Any, response: Any) -> Policy:
        try:
            return Policy.model_validate(body)
        except ValidationError as exc:
            logger.warning(
                "iam_invalid_policy_response",
                operation=operation,
                resource_id=self.resource_id,
                error=str(exc),
            )
            raise InvalidResponseError(
                f"{operation} returned an invalid policy: {exc}",
                response=response,
                status_code=getattr(response, "status_code", None),
            ) from exc

    async def get_policy(self, options: GetPolicyOptions | None = None) -> tuple[Policy, Any]:
        """Fetch the bucket's IAM policy.

        Args:
            options: Billing project and requested policy version

        Returns:
            The policy and the raw response

        Raises:
            InvalidResponseError: If the service answers with something that is
                not a policy
        """
        options = options or GetPolicyOptions()
        logger.debug("iam_get_policy", resource_id=self.resource_id)
        body, response = await self._send(
            "get_policy", RequestDescriptor(uri="/iam", qs=options.to_query())
        )
        return self._parse_policy("get_policy", body, response), response

    def set_policy(
        self,
        policy: Policy | Mapping[str, Any],
        options: RequestOptions | None = None,
    ) -> Coroutine[Any, Any, tuple[Policy, Any]]:
        """Replace the bucket's IAM policy.

        Arguments are checked when this method is called, before the returned
        coroutine is awaited. The request body always carries this bucket's
        ``resourceId``, even if the supplied policy names another one.

        Args:
            policy: Policy model or a mapping in the service's JSON shape
            options: Billing project and extra query parameters

        Returns:
            A coroutine resolving to the updated policy and the raw response

        Raises:
            InvalidArgumentError: If ``policy`` is not a policy object
        """
        if isinstance(policy, Policy):
            fields = policy.to_body()
        elif isinstance(policy, Mapping):
            fields = dict(policy)
        else:
            raise InvalidArgumentError("A policy object is required.")

        body = {**fields, "resourceId": self.resource_id}
        return self._set_policy(body, options or RequestOptions())

    async def _set_policy(
        self, body: dict[str, Any], options: RequestOptions
    ) -> tuple[Policy, Any]:
        logger.debug(
            "iam_set_policy",
            resource_id=self.resource_id,
            bindings_count=len(body.get("bindings") or []),
        )
        updated, response = await self._send(
            "set_policy",
            RequestDescriptor(uri="/iam", method="PUT", qs=options.to_query(), json=body),
        )
        return self._parse_policy("set_policy", updated, response), response

    def test_permissions(
        self,
        permissions: str | list[str] | tuple[str, ...],
        options: RequestOptions | None = None,
    ) -> Coroutine[Any, Any, tuple[PermissionResult, Any]]:
        """Check which of the given permissions the caller holds on the bucket.

        Arguments are checked when this method is called, before the returned
        coroutine is awaited.

        Args:
            permissions: One permission name or a list of them
            options: Billing project and extra query parameters

        Returns:
            A coroutine resolving to a mapping of each requested permission to
            whether it is granted, and the raw response

        Raises:
            InvalidArgumentError: If ``permissions`` is not a string or a list
        """
        if isinstance(permissions, str):
            if not permissions:
                raise InvalidArgumentError("Permissions are required.")
        elif not isinstance(permissions, (list, tuple)):
            raise InvalidArgumentError("Permissions are required.")
        elif not all(isinstance(permission, str) for permission in permissions):
            raise InvalidArgumentError("Permissions must be strings.")

        return self._test_permissions(arrify(permissions), options or RequestOptions())

    async def _test_permissions(
        self, requested: list[str], options: RequestOptions
    ) -> tuple[PermissionResult, Any]:
        qs = {"permissions": requested, **options.to_query()}
        logger.debug(
            "iam_test_permissions",
            resource_id=self.resource_id,
            permissions_count=len(requested),
        )
        body, response = await self._send(
            "test_permissions",
            RequestDescriptor(uri="/iam/testPermissions", qs=qs, use_querystring=True),
        )
        if not isinstance(body, Mapping):
            raise InvalidResponseError(
                "test_permissions returned a body that is not an object",
                response=response,
                status_code=getattr(response, "status_code", None),
            )

        granted = set(arrify(body.get("permissions")))
        result: PermissionResult = {}
        for permission in requested:
            result[permission] = permission in granted
        return result, response
