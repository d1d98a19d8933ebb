"""Application entry point for the eventdrop filter."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import IO, Optional

from art import text2art
from dotenv import load_dotenv
from rich.console import Console

from eventdrop import settings
from eventdrop.adapters.event_io import read_events, write_events
from eventdrop.adapters.rules_formatting import build_rules_table
from eventdrop.core.errors import ConfigError
from eventdrop.core.registry import ProcessorChain, build_chain, default_registry

NAME = "EVENTDROP"
FONT = "tarty-1"

CONFIG_ENV = "EVENTDROP_CONFIG"
LOG_LEVEL_ENV = "EVENTDROP_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _print_banner() -> None:
    # stdout is reserved for event output.
    print(text2art(NAME, font=FONT, space=1), file=sys.stderr)


def _file_handler(file_cfg: dict) -> logging.Handler:
    path = file_cfg.get("path", "logs/eventdrop.log")
    if not os.path.isabs(path):
        path = os.path.join(settings.PROJECT_ROOT, path)
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=int(file_cfg.get("max_bytes", 5 * 1024 * 1024)),
        backupCount=int(file_cfg.get("backup_count", 5)),
        encoding="utf-8",
    )


def _configure_logging(config: dict) -> None:
    if not config.get("enabled", False):
        return

    # Environment overrides config.json.
    level_name = str(os.getenv(LOG_LEVEL_ENV) or config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    handlers: list[logging.Handler] = []
    if config.get("console", True):
        # stderr, since stdout may carry events.
        handlers.append(logging.StreamHandler(sys.stderr))
    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        handlers.append(_file_handler(file_cfg))
    if not handlers:
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=handlers)


def _default_config_path() -> str:
    return os.getenv(CONFIG_ENV) or settings.CONFIG_PATH


def _load_chain(args: argparse.Namespace) -> ProcessorChain:
    app_settings = settings.load_settings(args.config)
    _configure_logging(app_settings.logging)
    return build_chain(
        app_settings.processors,
        default_registry(),
        logger=logging.getLogger("eventdrop.processors"),
        only=getattr(args, "processor", None),
    )


def _filter_stream(chain: ProcessorChain, source: IO[str], sink: IO[str]) -> tuple[int, int]:
    batch = read_events(source)
    received = sum(1 for event in batch if event is not None)
    kept = write_events(chain.apply(batch), sink)
    return received, kept


def _run(args: argparse.Namespace) -> None:
    chain = _load_chain(args)
    logger = logging.getLogger(__name__)
    logger.info("%s processors are loaded: %s", len(chain), ", ".join(chain.names))

    source = open(args.input, "r", encoding="utf-8") if args.input else sys.stdin
    sink = open(args.output, "w", encoding="utf-8") if args.output else sys.stdout
    try:
        received, kept = _filter_stream(chain, source, sink)
    finally:
        if source is not sys.stdin:
            source.close()
        if sink is not sys.stdout:
            sink.close()

    logger.info("Filter complete: received=%s, kept=%s, dropped=%s", received, kept, received - kept)


def _rules(args: argparse.Namespace) -> None:
    chain = _load_chain(args)
    Console().print(build_rules_table(chain))


def main(argv: Optional[list[str]] = None) -> None:
    load_dotenv()
    parser = argparse.ArgumentParser(prog="eventdrop")
    parser.add_argument("--no-banner", action="store_true", help="Do not print the banner")
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Filter a JSON Lines event stream")
    run_parser.add_argument("--config", default=_default_config_path(), help="Path to config.json")
    run_parser.add_argument("--input", help="Events file (defaults to stdin)")
    run_parser.add_argument("--output", help="Output file (defaults to stdout)")
    run_parser.add_argument(
        "--processor",
        action="append",
        help="Processor name to apply; repeat to chain several (defaults to all)",
    )

    rules_parser = subparsers.add_parser("rules", help="Show the configured processors")
    rules_parser.add_argument("--config", default=_default_config_path(), help="Path to config.json")

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return
    if not args.no_banner:
        _print_banner()

    try:
        if args.command == "rules":
            _rules(args)
            return
        _run(args)
    except (ConfigError, FileNotFoundError, ValueError) as exc:
        print(f"eventdrop: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc


if __name__ == "__main__":
    main()
