"""Lightweight reachability probes for the referral backend."""

import asyncio
import logging

import httpx

from referral.api import LINK_PATH, VALIDATE_PATH

logger = logging.getLogger(__name__)

# Never a real code: fails the default pattern so it cannot be redeemed.
_PROBE_CODE = "__probe__"


async def probe_validate_endpoint(base_url: str, timeout: float = 10.0) -> tuple[bool, str]:
    """POST a dummy code to the validate endpoint.

    Any well-formed JSON answer counts as reachable; the code itself is
    expected to be rejected. Returns (success, message).
    """
    url = base_url.rstrip("/") + VALIDATE_PATH
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            resp = await client.post(url, json={"referralCode": _PROBE_CODE})
            if resp.status_code == 404:
                return False, "validate endpoint not found (HTTP 404)"
            if resp.status_code >= 500:
                return False, f"HTTP {resp.status_code}"
            data = resp.json()
            if not isinstance(data, dict) or "success" not in data:
                return False, "unexpected response shape"
            return True, "reachable"
    except httpx.TimeoutException:
        return False, "Connection timeout"
    except Exception as e:
        logger.debug("Probe failed: %s", e)
        return False, str(e)


async def probe_link_endpoint(
    base_url: str, token: str, timeout: float = 10.0
) -> tuple[bool, str]:
    """GET the referral link with the bearer token. Returns (success, message)."""
    url = base_url.rstrip("/") + LINK_PATH
    headers = {"Authorization": f"Bearer {token}"}
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            resp = await client.get(url, headers=headers)
            if resp.status_code in (401, 403):
                return False, "Invalid token"
            if resp.status_code >= 400:
                return False, f"HTTP {resp.status_code}"
            link = resp.json().get("referralLink")
            return True, f"link {link}" if link else "authenticated"
    except httpx.TimeoutException:
        return False, "Connection timeout"
    except Exception as e:
        logger.debug("Probe failed: %s", e)
        return False, str(e)


async def probe_all(base_url: str, token: str | None) -> dict[str, tuple[bool, str]]:
    """Probe every endpoint the configuration can reach. Returns name -> (ok, message)."""
    probes = {"validate": probe_validate_endpoint(base_url)}
    if token:
        probes["link"] = probe_link_endpoint(base_url, token)
    results = await asyncio.gather(*probes.values(), return_exceptions=True)
    out: dict[str, tuple[bool, str]] = {}
    for name, res in zip(probes, results):
        if isinstance(res, Exception):
            out[name] = (False, str(res))
        else:
            out[name] = res
    return out
