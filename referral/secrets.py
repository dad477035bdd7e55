"""Bearer token storage for the referral link endpoint.

The token authenticates `GET /api/referral/link`. It lives in the OS keyring
under the `referral-tracker` service, with `REFERRAL_AUTH_TOKEN` in the
environment (or `.env`) as the fallback for headless hosts.
"""

import asyncio
import logging
import os

import keyring
from keyring.errors import KeyringError

logger = logging.getLogger(__name__)
SERVICE_NAME = "referral-tracker"
AUTH_TOKEN_SECRET = "REFERRAL_AUTH_TOKEN"
_BEARER_PREFIX = "bearer "


def _is_fail_backend() -> bool:
    try:
        from keyring.backends.fail import Keyring as FailKeyring

        return isinstance(keyring.get_keyring(), FailKeyring)
    except Exception:
        return True


def is_keyring_available() -> bool:
    """False on headless hosts where keyring falls back to its fail stub."""
    return not _is_fail_backend()


def normalize_token(raw: str | None) -> str | None:
    """Strip whitespace and a pasted `Bearer ` prefix; the API client adds its own."""
    if raw is None:
        return None
    token = raw.strip()
    if token.lower().startswith(_BEARER_PREFIX):
        token = token[len(_BEARER_PREFIX):].strip()
    return token or None


def get_secret(name: str) -> str | None:
    """Keyring first, then os.environ. Sync, for scripts and the wizard."""
    try:
        value = keyring.get_password(SERVICE_NAME, name)
        if value:
            return value
    except KeyringError:
        logger.debug("keyring lookup failed for %s, falling back to env", name)
    return os.environ.get(name)


async def get_secret_async(name: str) -> str | None:
    """Same lookup as get_secret, with keyring I/O moved off the event loop."""
    try:
        value = await asyncio.to_thread(keyring.get_password, SERVICE_NAME, name)
        if value:
            return value
    except KeyringError:
        logger.debug("keyring lookup failed for %s, falling back to env", name)
    return os.environ.get(name)


async def get_auth_token_async() -> str | None:
    """The bearer token for the link endpoint, or None when none is configured."""
    return normalize_token(await get_secret_async(AUTH_TOKEN_SECRET))


def set_secret(name: str, value: str) -> None:
    """Raises KeyringError if no backend is available."""
    keyring.set_password(SERVICE_NAME, name, value)


def delete_secret(name: str) -> None:
    try:
        keyring.delete_password(SERVICE_NAME, name)
    except KeyringError:
        pass
