"""Command-line entry: drive the tracker from a shell or a launcher hook."""

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from referral import secrets
from referral.config_check import is_configured
from referral.factory import create_tracker
from referral.logging_config import setup_logging
from referral.settings import load_settings

_PROJECT_ROOT = Path(__file__).resolve().parent.parent


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="referral-tracker",
        description="Clipboard-based deferred deep link referral tracker",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    scan = sub.add_parser("scan", help="Scan the clipboard for a referral code (first launch)")
    scan.add_argument("--text", default=None, help="Use this text instead of the system clipboard")

    sub.add_parser("pending", help="Print the pending referral code")

    consume = sub.add_parser("consume", help="Clear the pending code after registration success")
    consume.add_argument("code", nargs="?", default=None, help="Code sent with the registration")

    sub.add_parser("clear", help="Clear the pending code")

    attribute = sub.add_parser("attribute", help="Register install attribution for a code")
    attribute.add_argument("code")
    attribute.add_argument("--device-id", default=None)

    sub.add_parser("link", help="Fetch your referral link (needs REFERRAL_AUTH_TOKEN)")
    sub.add_parser("processed", help="List codes already processed")
    sub.add_parser("reset", help="Forget all referral state, including the first-launch flag")
    sub.add_parser("check", help="Validate config/settings.yaml")
    return parser


async def run_command(args: argparse.Namespace, settings: dict, project_root: Path) -> int:
    """Execute one subcommand. Returns the process exit code."""
    if args.command == "check":
        ok, reason = is_configured(project_root=project_root)
        print(reason)
        return 0 if ok else 1

    tracker, store, api = create_tracker(
        settings, project_root, clipboard_text=getattr(args, "text", None)
    )
    try:
        if args.command == "scan":
            code = await tracker.scan_clipboard_on_first_launch()
            if code:
                print(code)
        elif args.command == "pending":
            code = await tracker.get_pending_code()
            if code:
                print(code)
        elif args.command == "consume":
            code = args.code or await tracker.get_pending_code()
            await tracker.consume_on_registration_success(code)
        elif args.command == "clear":
            await tracker.clear_pending()
        elif args.command == "attribute":
            tracker.register_attribution(args.code, args.device_id)
            await tracker.drain()
        elif args.command == "link":
            token = await secrets.get_auth_token_async()
            if not token:
                print(f"{secrets.AUTH_TOKEN_SECRET} is not set", file=sys.stderr)
                return 1
            link = await api.get_referral_link(token)
            if link is None:
                return 1
            print(link.referral_link)
        elif args.command == "processed":
            for code in await tracker.get_processed_codes():
                print(code)
        elif args.command == "reset":
            await tracker.reset()
        return 0
    finally:
        await tracker.drain()
        await store.close()


def main(argv: list[str] | None = None) -> int:
    """Synchronous entry for `python -m referral` and the console script."""
    args = build_parser().parse_args(argv)
    load_dotenv(_PROJECT_ROOT / ".env")
    settings = load_settings()
    setup_logging(_PROJECT_ROOT, settings)
    try:
        return asyncio.run(run_command(args, settings, _PROJECT_ROOT))
    except KeyboardInterrupt:
        return 130


__all__ = ["main", "run_command", "build_parser"]
