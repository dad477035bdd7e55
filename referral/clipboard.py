"""ClipboardProvider adapters."""

import asyncio
import logging

import pyperclip

logger = logging.getLogger(__name__)


class SystemClipboard:
    """Reads the OS clipboard through pyperclip in a worker thread."""

    name = "system"

    async def read_text(self) -> str | None:
        try:
            text = await asyncio.to_thread(pyperclip.paste)
        except pyperclip.PyperclipException as e:
            logger.warning("Clipboard unavailable: %s", e)
            return None
        return text or None


class StaticClipboard:
    """Fixed clipboard contents. Used by `scan --text` and tests."""

    name = "static"

    def __init__(self, text: str | None = None) -> None:
        self.text = text
        self.reads = 0

    async def read_text(self) -> str | None:
        self.reads += 1
        return self.text or None
