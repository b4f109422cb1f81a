"""Command-line entry point for timestamp conversion and backward-jump checks."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Iterator

from codec.iso8601 import format_iso8601, parse_iso8601
from codec.unix import from_unix_time, to_unix_time
from codec.units import UnixTimeUnit
from guard.monotonic import MonotonicGuard, MonotonicResult
from infra.config import Settings, load_dotenv, load_settings
from infra.errors import TimestampError, TimestampFormatError
from infra.logging import get_logger

_UNIT_CHOICES = [unit.value for unit in UnixTimeUnit]


def run_startup_health_checks() -> tuple[bool, dict[str, bool]]:
    """Run lightweight startup checks for configuration, logging and the codec."""
    checks = {"config_loadable": False, "logger_writable": False, "codec_consistent": False}
    try:
        load_dotenv()
        settings = load_settings()
        checks["config_loadable"] = True
        logger = get_logger(path=settings.log_path, level=settings.log_level)
        logger.info("startup health checks completed", extra={"event_type": "health_check", "metadata": checks})
        checks["logger_writable"] = True
        checks["codec_consistent"] = _codec_self_check()
    except Exception:
        return False, checks
    return all(checks.values()), checks


def _codec_self_check() -> bool:
    known = from_unix_time(1234567890, UnixTimeUnit.SECONDS)
    return (
        format_iso8601(known) == "2009-02-13T23:31:30.0000000Z"
        and parse_iso8601("2009-02-13T18:31:30-05:00") == known
        and to_unix_time(known, UnixTimeUnit.MILLISECONDS) == 1234567890000
    )


def scan_for_backward_jumps(lines: Iterable[str], guard: MonotonicGuard) -> Iterator[tuple[int, MonotonicResult]]:
    """Check each non-blank line as a timestamp, yielding (line number, result)."""
    for line_no, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            current = parse_iso8601(line)
        except TimestampFormatError as exc:
            raise TimestampFormatError(f"line {line_no}: {exc}", text=line) from exc
        yield line_no, guard.check(current)


def _cmd_from_unix(args: argparse.Namespace, settings: Settings, logger: logging.Logger) -> int:
    unit = args.unit or settings.unit
    print(format_iso8601(from_unix_time(args.value, unit)))
    return 0


def _cmd_to_unix(args: argparse.Namespace, settings: Settings, logger: logging.Logger) -> int:
    unit = args.unit or settings.unit
    print(to_unix_time(parse_iso8601(args.timestamp), unit))
    return 0


def _cmd_normalize(args: argparse.Namespace, settings: Settings, logger: logging.Logger) -> int:
    print(format_iso8601(parse_iso8601(args.timestamp)))
    return 0


def _cmd_check(args: argparse.Namespace, settings: Settings, logger: logging.Logger) -> int:
    if args.file in (None, "-"):
        jumps = _report_backward_jumps(sys.stdin, logger)
    else:
        with open(args.file, encoding="utf-8") as handle:
            jumps = _report_backward_jumps(handle, logger)
    if jumps and settings.fail_on_backward_jump:
        return 1
    return 0


def _report_backward_jumps(lines: Iterable[str], logger: logging.Logger) -> int:
    jumps = 0
    for line_no, result in scan_for_backward_jumps(lines, MonotonicGuard()):
        if not result.is_backward_jump:
            continue
        jumps += 1
        assert result.previous is not None
        previous = format_iso8601(result.previous)
        current = format_iso8601(result.current)
        print(f"line {line_no}: backward jump of {-result.delta.total_seconds():.7f}s ({previous} -> {current})")
        logger.warning(
            "backward jump detected",
            extra={
                "event_type": "backward_jump",
                "metadata": {
                    "line": line_no,
                    "previous": previous,
                    "current": current,
                    "delta_ticks": result.delta.ticks,
                },
            },
        )
    return jumps


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="timestamp-tool")
    subparsers = parser.add_subparsers(dest="command", required=True)

    from_unix = subparsers.add_parser("from-unix", help="Render Unix time as ISO8601 UTC.")
    from_unix.add_argument("value", type=int)
    from_unix.add_argument("--unit", choices=_UNIT_CHOICES, default=None)
    from_unix.set_defaults(handler=_cmd_from_unix)

    to_unix = subparsers.add_parser("to-unix", help="Convert an ISO8601 timestamp to Unix time.")
    to_unix.add_argument("timestamp")
    to_unix.add_argument("--unit", choices=_UNIT_CHOICES, default=None)
    to_unix.set_defaults(handler=_cmd_to_unix)

    normalize = subparsers.add_parser("normalize", help="Re-render an ISO8601 timestamp in canonical UTC form.")
    normalize.add_argument("timestamp")
    normalize.set_defaults(handler=_cmd_normalize)

    check = subparsers.add_parser(
        "check",
        help="Report backward jumps in a file of ISO8601 timestamps, one per line.",
    )
    check.add_argument("file", nargs="?", default=None, help="Input file; stdin when omitted or '-'.")
    check.set_defaults(handler=_cmd_check)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    load_dotenv()
    try:
        settings = load_settings()
    except ValueError as exc:
        parser.error(str(exc))

    logger = get_logger(path=settings.log_path, level=settings.log_level)
    try:
        return args.handler(args, settings, logger)
    except TimestampError as exc:
        logger.error(
            "command failed",
            extra={"event_type": "command_failed", "metadata": {"command": args.command, "error": str(exc)}},
        )
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
