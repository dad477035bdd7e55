"""Ports the tracker depends on. Platform capabilities are injected, never imported.

Adapters are detected structurally via isinstance(obj, Protocol).
"""

from typing import Protocol, runtime_checkable

from referral.models import ReferralLink


@runtime_checkable
class ClipboardProvider(Protocol):
    """Platform capability: read current clipboard text."""

    async def read_text(self) -> str | None:
        """Current clipboard text, or None when empty/unavailable."""


@runtime_checkable
class KeyValueStore(Protocol):
    """Durable string storage keyed by name, independent of process lifetime."""

    async def get(self, key: str) -> str | None:
        """Stored value or None."""

    async def set(self, key: str, value: str) -> None:
        """Write value under key."""

    async def remove(self, key: str) -> None:
        """Delete key. No-op if absent."""


@runtime_checkable
class ReferralApi(Protocol):
    """Already-deployed backend. Negative results instead of exceptions."""

    async def validate_code(self, code: str) -> bool:
        """True iff the backend accepts the code."""

    async def register_attribution(
        self, code: str, device_id: str | None = None
    ) -> bool:
        """True iff the backend recorded the attribution."""

    async def get_referral_link(self, token: str) -> ReferralLink | None:
        """The authenticated user's own referral link."""
