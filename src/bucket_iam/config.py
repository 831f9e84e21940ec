"""Environment-based configuration for the storage client.

Values are read from the environment on every call so that tests and
long-running processes pick up changes without re-importing the module.
"""

from __future__ import annotations

import os

DEFAULT_API_ENDPOINT = "https://storage.googleapis.com/storage/v1"
DEFAULT_TIMEOUT = 60.0


def get_api_endpoint() -> str:
    """Get the JSON API base URL.

    STORAGE_EMULATOR_HOST takes precedence over STORAGE_API_ENDPOINT so a
    local emulator can be targeted without touching other settings.

    Returns:
        Base URL without a trailing slash
    """
    emulator_host = os.environ.get("STORAGE_EMULATOR_HOST")
    if emulator_host:
        if "://" not in emulator_host:
            emulator_host = f"http://{emulator_host}"
        return f"{emulator_host.rstrip('/')}/storage/v1"
    endpoint = os.environ.get("STORAGE_API_ENDPOINT") or DEFAULT_API_ENDPOINT
    return endpoint.rstrip("/")


def get_access_token() -> str | None:
    """Get the bearer token used to authenticate requests, if configured."""
    return os.environ.get("STORAGE_ACCESS_TOKEN") or None


def get_user_project() -> str | None:
    """Get the default project billed for requester-pays buckets."""
    return os.environ.get("STORAGE_USER_PROJECT") or None


def get_timeout() -> float:
    """Get the request timeout in seconds.

    Raises:
        RuntimeError: If STORAGE_TIMEOUT is not a positive number
    """
    raw = os.environ.get("STORAGE_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise RuntimeError(f"STORAGE_TIMEOUT must be a number, got {raw!r}") from exc
    if timeout <= 0:
        raise RuntimeError("STORAGE_TIMEOUT must be positive")
    return timeout
