"""Tests for clipboard adapters."""

from unittest.mock import patch

import pyperclip
import pytest

from referral.clipboard import StaticClipboard, SystemClipboard
from referral.contract import ClipboardProvider


@pytest.mark.asyncio
async def test_system_clipboard_reads_pyperclip() -> None:
    with patch("referral.clipboard.pyperclip.paste", return_value="ABC123"):
        assert await SystemClipboard().read_text() == "ABC123"


@pytest.mark.asyncio
async def test_system_clipboard_empty_is_none() -> None:
    with patch("referral.clipboard.pyperclip.paste", return_value=""):
        assert await SystemClipboard().read_text() is None


@pytest.mark.asyncio
async def test_system_clipboard_unavailable_is_none() -> None:
    error = pyperclip.PyperclipException("no copy/paste mechanism")
    with patch("referral.clipboard.pyperclip.paste", side_effect=error):
        assert await SystemClipboard().read_text() is None


@pytest.mark.asyncio
async def test_static_clipboard_counts_reads() -> None:
    clipboard = StaticClipboard("hello")
    assert await clipboard.read_text() == "hello"
    assert await clipboard.read_text() == "hello"
    assert clipboard.reads == 2


def test_adapters_satisfy_protocol() -> None:
    assert isinstance(SystemClipboard(), ClipboardProvider)
    assert isinstance(StaticClipboard(), ClipboardProvider)
