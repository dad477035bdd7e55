"""Referral attribution tracker: clipboard discovery -> validation -> pending -> consumed.

Every operation degrades to "no referral code" on failure. Registration and
OTP verification must never be blocked by referral handling, so nothing
raises out of this class; failures are logged and swallowed.
"""

import asyncio
import json
import logging
import re

from referral.contract import ClipboardProvider, KeyValueStore, ReferralApi
from referral.launch_gate import FIRST_LAUNCH_AT_KEY, FIRST_LAUNCH_KEY, LaunchGate, OnceGate

logger = logging.getLogger(__name__)

PENDING_CODE_KEY = "pending_referral_code"
PROCESSED_CODES_KEY = "processed_referral_codes"

DEFAULT_CODE_PATTERN = r"^[A-Z0-9]{6}$"


class ReferralAttributionTracker:
    """Owns the local lifecycle of a single referral code.

    State lives entirely behind the injected KeyValueStore; the tracker keeps
    only the set of in-flight attribution tasks.
    """

    def __init__(
        self,
        store: KeyValueStore,
        clipboard: ClipboardProvider,
        api: ReferralApi,
        *,
        code_pattern: str | re.Pattern[str] = DEFAULT_CODE_PATTERN,
        launch_gate: LaunchGate | None = None,
    ) -> None:
        self._store = store
        self._clipboard = clipboard
        self._api = api
        self._pattern = re.compile(code_pattern) if isinstance(code_pattern, str) else code_pattern
        self._gate = launch_gate or OnceGate()
        self._attribution_tasks: set[asyncio.Task[bool]] = set()

    def matches(self, text: str | None) -> str | None:
        """Return the trimmed code if text is a referral code, else None."""
        if not text:
            return None
        candidate = text.strip()
        if candidate and self._pattern.fullmatch(candidate):
            return candidate
        return None

    async def scan_clipboard_on_first_launch(self) -> str | None:
        """Discover, validate and store a referral code from the clipboard.

        Returns the stored code, or None when nothing was found, the gate is
        spent, the code was already processed, or validation failed.
        """
        try:
            if not await self._gate.try_enter(self._store):
                logger.debug("Launch gate closed, skipping clipboard scan")
                return None
        except Exception as e:
            logger.warning("Launch gate check failed: %s", e)
            return None

        try:
            text = await self._clipboard.read_text()
        except Exception as e:
            logger.warning("Clipboard read failed: %s", e)
            return None

        code = self.matches(text)
        if code is None:
            logger.debug("No referral code on clipboard")
            return None

        try:
            processed = await self._load_processed()
            if code in processed:
                logger.info("Referral code %s already processed", code)
                return None

            if not await self._api.validate_code(code):
                logger.info("Referral code %s rejected by backend", code)
                return None

            await self._store.set(PENDING_CODE_KEY, code)
        except Exception as e:
            logger.warning("Referral code %s handling failed: %s", code, e)
            return None

        logger.info("Referral code %s stored as pending", code)
        # The return value must agree with get_pending_code() from here on.
        try:
            processed.append(code)
            await self._store.set(PROCESSED_CODES_KEY, json.dumps(processed))
        except Exception as e:
            logger.warning("Recording %s as processed failed: %s", code, e)
        return code

    async def get_pending_code(self) -> str | None:
        try:
            code = await self._store.get(PENDING_CODE_KEY)
        except Exception as e:
            logger.warning("Pending code read failed: %s", e)
            return None
        return code or None

    async def consume_on_registration_success(self, code: str | None) -> None:
        """Clear the pending code after the backend accepted a registration.

        Clears even when `code` is not the pending one. Call only after
        remote success.
        """
        pending = await self.get_pending_code()
        if pending is not None and code != pending:
            logger.info("Consumed code %s differs from pending %s; clearing anyway", code, pending)
        await self.clear_pending()

    async def clear_pending(self) -> None:
        try:
            await self._store.remove(PENDING_CODE_KEY)
        except Exception as e:
            logger.warning("Pending code clear failed: %s", e)

    def register_attribution(
        self, code: str, device_id: str | None = None
    ) -> asyncio.Task[bool]:
        """Fire-and-forget attribution call. Must be called from a running loop.

        The returned task never raises; its result is informational only.
        """
        task = asyncio.create_task(self._attribute(code, device_id))
        self._attribution_tasks.add(task)
        task.add_done_callback(self._attribution_tasks.discard)
        return task

    async def _attribute(self, code: str, device_id: str | None) -> bool:
        try:
            ok = await self._api.register_attribution(code, device_id)
        except Exception as e:
            logger.warning("Attribution for %s failed: %s", code, e)
            return False
        if ok:
            logger.info("Attribution registered for %s", code)
        else:
            logger.warning("Attribution for %s not accepted", code)
        return ok

    async def drain(self) -> None:
        """Wait for in-flight attribution tasks (shutdown helper)."""
        if self._attribution_tasks:
            await asyncio.gather(*list(self._attribution_tasks), return_exceptions=True)

    async def get_processed_codes(self) -> list[str]:
        try:
            return await self._load_processed()
        except Exception as e:
            logger.warning("Processed codes read failed: %s", e)
            return []

    async def reset(self) -> None:
        """Forget everything: pending code, processed set and the launch gate."""
        for key in (PENDING_CODE_KEY, PROCESSED_CODES_KEY, FIRST_LAUNCH_KEY, FIRST_LAUNCH_AT_KEY):
            try:
                await self._store.remove(key)
            except Exception as e:
                logger.warning("Reset of %s failed: %s", key, e)

    async def _load_processed(self) -> list[str]:
        raw = await self._store.get(PROCESSED_CODES_KEY)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Corrupt %s value, treating as empty", PROCESSED_CODES_KEY)
            return []
        if not isinstance(data, list):
            return []
        return [c for c in data if isinstance(c, str)]
