"""HTTP client for the referral backend (validate, register-attribution, link)."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from referral.models import (
    AttributionRequest,
    AttributionResponse,
    ReferralLink,
    ValidateRequest,
    ValidateResponse,
)

logger = logging.getLogger(__name__)

VALIDATE_PATH = "/api/public/referral/validate"
ATTRIBUTION_PATH = "/api/public/referral/register-attribution"
LINK_PATH = "/api/referral/link"


class ReferralApiClient:
    """ReferralApi implementation over httpx.

    Every call degrades to a negative result: network errors, non-200
    responses, malformed JSON and unexpected shapes are logged and reported
    as False/None.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout)

    async def _request_json(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Perform the request; return decoded JSON or None on any failure."""
        try:
            async with self._client() as client:
                response = await client.request(method, path, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.warning("Referral API %s %s failed: %s", method, path, e)
            return None
        if response.status_code != 200:
            logger.warning(
                "Referral API %s %s returned HTTP %d", method, path, response.status_code
            )
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.warning("Referral API %s %s returned malformed JSON: %s", method, path, e)
            return None

    async def validate_code(self, code: str) -> bool:
        """Ask the backend whether the code is valid."""
        body = ValidateRequest(referral_code=code).model_dump(by_alias=True)
        data = await self._request_json("POST", VALIDATE_PATH, json=body)
        if data is None:
            return False
        try:
            result = ValidateResponse.model_validate(data)
        except ValidationError as e:
            logger.warning("Unexpected validate response for %s: %s", code, e)
            return False
        logger.debug("Validate %s -> %s", code, result.accepted)
        return result.accepted

    async def register_attribution(
        self, code: str, device_id: str | None = None
    ) -> bool:
        """Record install attribution. deviceId is omitted when not given."""
        body = AttributionRequest(referral_code=code, device_id=device_id).model_dump(
            by_alias=True, exclude_none=True
        )
        data = await self._request_json("POST", ATTRIBUTION_PATH, json=body)
        if data is None:
            return False
        try:
            result = AttributionResponse.model_validate(data)
        except ValidationError as e:
            logger.warning("Unexpected attribution response for %s: %s", code, e)
            return False
        return result.accepted

    async def get_referral_link(self, token: str) -> ReferralLink | None:
        """Fetch the authenticated user's referral link."""
        headers = {"Authorization": f"Bearer {token}"}
        data = await self._request_json("GET", LINK_PATH, headers=headers)
        if data is None:
            return None
        try:
            return ReferralLink.model_validate(data)
        except ValidationError as e:
            logger.warning("Unexpected referral link response: %s", e)
            return None
