from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Expr(BaseModel):
    """A condition attached to a binding.

    ``expression`` is written in CEL and is sent to the service as-is.
    """

    model_config = ConfigDict(extra="allow")

    title: str | None = None
    description: str | None = None
    expression: str

    @field_validator("expression")
    @classmethod
    def _expression_non_empty(cls, value: str) -> str:
        if not value or value.strip() == "":
            raise ValueError("expression must be non-empty")
        return value


class Binding(BaseModel):
    model_config = ConfigDict(extra="allow")

    role: str
    members: list[str] = Field(default_factory=list)
    condition: Expr | None = None

    @field_validator("role")
    @classmethod
    def _role_non_empty(cls, value: str) -> str:
        if not value or value.strip() == "":
            raise ValueError("role must be non-empty")
        return value


class Policy(BaseModel):
    """An IAM policy document.

    Fields the service returns that are not modelled here (``kind``,
    ``resourceId``) are kept so a fetched policy can be written back
    without losing them.
    """

    model_config = ConfigDict(extra="allow")

    bindings: list[Binding] = Field(default_factory=list)
    etag: str | None = None
    version: int | None = None

    def to_body(self) -> dict[str, Any]:
        """Return the JSON request body for this policy, without unset fields."""
        return self.model_dump(mode="json", exclude_none=True)


class GetPolicyOptions(BaseModel):
    """Options for reading a bucket policy.

    ``requested_policy_version`` must be 3 or higher to receive conditional
    bindings. Leaving it unset lets the service pick the version.
    """

    user_project: str | None = None
    requested_policy_version: int | None = None

    def to_query(self) -> dict[str, Any]:
        qs: dict[str, Any] = {}
        if self.user_project:
            qs["userProject"] = self.user_project
        if self.requested_policy_version is not None:
            qs["optionsRequestedPolicyVersion"] = self.requested_policy_version
        return qs


class RequestOptions(BaseModel):
    """Options for writing a policy or testing permissions.

    Any extra keyword is forwarded as a query parameter under its own name.
    """

    model_config = ConfigDict(extra="allow")

    user_project: str | None = None

    def to_query(self) -> dict[str, Any]:
        qs: dict[str, Any] = {}
        if self.user_project:
            qs["userProject"] = self.user_project
        for key, value in (self.model_extra or {}).items():
            if value is not None:
                qs[key] = value
        return qs


PermissionResult = dict[str, bool]
