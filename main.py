import argparse
import asyncio
import sys
from typing import List, Optional

from core import constants
from core.config import parse_telegram_credentials, resolve_store_path, settings
from core.exceptions import ConfigurationException, StoreException
from core.logger import get_logger, setup_logging
from models.run import RunMode, RunResult
from services.notification_service import NotificationService
from services.watch_service import WatchService

logger = get_logger(__name__)

PATH_HELP = f"Path to the hashes JSON file, default '{constants.DEFAULT_STORE_PATH}'"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doc-watcher",
        description="Catch documentation changes by fingerprinting watched page regions.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help=f"Console log level (default: {settings.LOG_LEVEL})",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser(
        "check", help="Load hashes and url/selector targets from --path and detect changes"
    )
    check.add_argument("--path", type=str, default=None, help=PATH_HELP)
    check.add_argument(
        "--telegram",
        type=str,
        default=None,
        help=(
            "Telegram bot token and chat ID to receive notifications on; format: 'token,chatID'. "
            "Ex: '123456:ABC-DEF1234ghIkl-zyx57W2,-1234567890'"
        ),
    )

    init = subparsers.add_parser(
        "init", help="Baseline run: report extracted blocks without alerting"
    )
    init.add_argument("--path", type=str, default=None, help=PATH_HELP)

    return parser


def exit_code_for(result: RunResult) -> int:
    if result.mode == RunMode.CHECK and result.changed:
        return constants.EXIT_CHANGED
    return constants.EXIT_OK


def build_service(args: argparse.Namespace) -> WatchService:
    """
    Raises:
        ConfigurationException: malformed --telegram value (before any fetch)
    """
    mode = RunMode(args.command)
    store_path = resolve_store_path(args.path or settings.STORE_PATH)

    notifier = None
    if mode == RunMode.CHECK:
        telegram_spec = args.telegram if args.telegram is not None else settings.TELEGRAM
        notifier = NotificationService.from_credentials(parse_telegram_credentials(telegram_spec))

    return WatchService(store_path, mode=mode, notifier=notifier)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(log_level=args.log_level)

    try:
        service = build_service(args)
        result = asyncio.run(service.run())
    except (ConfigurationException, StoreException) as e:
        logger.critical(f"{type(e).__name__}: {e}")
        return constants.EXIT_FATAL

    for error in result.errors:
        logger.warning(f"[RESULT] {error.outcome.value}: {error.message}")

    return exit_code_for(result)


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
