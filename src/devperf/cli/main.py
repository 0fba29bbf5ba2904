"""
Command-line interface for the devperf performance classifier.

Subcommands:
- info: initialization report and platform information
- classify: one-shot classification of the requested classes
- watch: continuous monitoring, one JSON line per event
"""

import argparse
import json
import logging
import queue
import signal
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..config import get_config, set_config_path
from ..orchestration import PerformanceMonitor
from ..validation import (
    ErrorSeverity,
    PerformanceError,
    ValidationError,
    handle_cli_error,
    validate_enum_choice,
    validate_positive_integer,
)

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="devperf",
        description="Classify device performance and monitor it continuously.",
    )
    parser.add_argument("--config", type=Path, help="Path to config.toml.")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Override monitor.general.log_level from the config.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("info", help="Show the initialization report and platform info.")

    classify = subparsers.add_parser("classify", help="Classify the device once.")
    classify.add_argument("classes", nargs="+", help="Performance classes, e.g. CPU MEMORY.")
    classify.add_argument(
        "--weight",
        action="append",
        default=[],
        metavar="CLASS=W",
        help="Weight of a class; switches to weighted classification.",
    )

    watch = subparsers.add_parser("watch", help="Monitor the device continuously.")
    watch.add_argument("classes", nargs="+", help="Performance classes, e.g. CPU MEMORY.")
    watch.add_argument(
        "--weight",
        action="append",
        default=[],
        metavar="CLASS=W",
        help="Weight of a class; switches to a weighted session.",
    )
    watch.add_argument("--interval-ms", type=int, help="Sampling interval in milliseconds.")
    watch.add_argument(
        "--count", type=int, help="Stop after this many events (default: run until interrupted)."
    )
    return parser


def parse_weights(classes: Sequence[str], weight_args: Sequence[str]) -> Optional[List[Dict[str, Any]]]:
    """
    Turn ``CLASS=W`` arguments into weighted class entries.

    Returns None when no weight was given. Classes without a weight count
    with weight 1.0.

    Raises:
        ValidationError: If an argument is malformed or names a class that
            was not requested.
    """
    if not weight_args:
        return None

    requested = [c.strip().upper() for c in classes]
    weights: Dict[str, str] = {}
    for arg in weight_args:
        name, sep, value = arg.partition("=")
        if not sep or not name.strip():
            raise ValidationError(
                f"--weight must look like CLASS=W, got {arg!r}",
                field_name="--weight",
                value=arg,
            )
        name = validate_enum_choice(
            name.strip().upper(), requested, field_name="--weight class"
        )
        weights[name] = value.strip()

    return [
        {"performance_class": name, "weight": weights.get(name, 1.0)}
        for name in requested
    ]


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, sort_keys=False), flush=True)


def _run_info(monitor: PerformanceMonitor) -> None:
    report = monitor.initialize()
    _print_json({"initialization": report.to_dict(), "platform": monitor.platform_info()})


def _run_classify(monitor: PerformanceMonitor, args: argparse.Namespace) -> None:
    weighted = parse_weights(args.classes, args.weight)
    if weighted is None:
        result = monitor.classify(args.classes)
    else:
        result = monitor.classify_weighted(weighted)
    _print_json(result.to_dict())


def _run_watch(monitor: PerformanceMonitor, args: argparse.Namespace) -> None:
    max_events = None
    if args.count is not None:
        max_events = validate_positive_integer(args.count, field_name="--count")

    events: "queue.Queue[Dict[str, Any]]" = queue.Queue()
    shutdown_requested = False

    def signal_handler(signum, frame):
        nonlocal shutdown_requested
        logger.info(f"Signal {signal.strsignal(signum)} received. Stopping monitoring...")
        shutdown_requested = True

    weighted = parse_weights(args.classes, args.weight)

    def on_result(result):
        events.put({"event": "result", **result.to_dict()})

    def on_error(message):
        events.put({"event": "error", "message": message})

    if weighted is None:
        session_id = monitor.start_session(args.classes, args.interval_ms, on_result, on_error)
    else:
        session_id = monitor.start_weighted_session(
            weighted, args.interval_ms, on_result, on_error
        )
    logger.info(f"Watching session {session_id}")

    previous_handlers = {
        signum: signal.signal(signum, signal_handler)
        for signum in (signal.SIGINT, signal.SIGTERM)
    }
    received = 0
    try:
        while not shutdown_requested and (max_events is None or received < max_events):
            try:
                event = events.get(timeout=0.2)
            except queue.Empty:
                continue
            _print_json({"sessionId": session_id, **event})
            received += 1
    finally:
        for signum, handler in previous_handlers.items():
            signal.signal(signum, handler)
        monitor.stop_session(session_id)


def main_cli(argv: Optional[Sequence[str]] = None) -> None:
    """
    Main command-line entry point.

    Loads the configuration, sets up logging and runs the chosen subcommand.

    Raises:
        SystemExit: On configuration errors, invalid arguments or a
            classification error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.config is not None:
        set_config_path(args.config)

    try:
        app_config = get_config()
    except Exception as e:
        _setup_logging("INFO")
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=1,
            severity=ErrorSeverity.CRITICAL,
            logger=logger,
        )

    _setup_logging(args.log_level or app_config.monitor.log_level)

    monitor = PerformanceMonitor(app_config)
    try:
        if args.command == "info":
            _run_info(monitor)
        elif args.command == "classify":
            _run_classify(monitor, args)
        elif args.command == "watch":
            _run_watch(monitor, args)
    except PerformanceError as e:
        print(f"{e.code}: {e.message}", file=sys.stderr)
        sys.exit(1)
    except ValidationError as e:
        handle_cli_error(
            error=e,
            context=f"{args.command} arguments",
            exit_code=2,
            logger=logger,
        )
    finally:
        monitor.shutdown()


if __name__ == "__main__":
    main_cli()
