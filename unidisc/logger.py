"""Leveled logger: ENV=development prints colored lines to stderr, ENV=test is silent, any other ENV appends to logs/unidisc.log (or UNIDISC_LOG_FILE)."""

import os
import sys
import inspect
import datetime
from pathlib import Path
from typing import Optional, TypedDict, Literal

LoggerSeverity = Literal["debug", "info", "warn", "error"]


class CallSite(TypedDict):
    function: str
    file: str
    line: str


DEFAULT_LOG_FILE = Path(__file__).resolve().parents[1] / "logs" / "unidisc.log"

LEVELS = {
    "debug": 0,
    "info": 1,
    "warn": 2,
    "error": 3,
}

COLORS = {
    "debug": "\033[94m",
    "warn": "\033[33m",
    "error": "\033[31m",
    "reset": "\033[0m",
}


def log_file_path() -> Path:
    override = os.getenv("UNIDISC_LOG_FILE")
    return Path(override) if override else DEFAULT_LOG_FILE


def get_timestamp() -> str:
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.strftime("%Y-%m-%d-%H:%M:%S.%f")[:-3]


def get_call_site() -> CallSite:
    # 0 = get_call_site, 1 = _log, 2 = Logger method, 3 = caller
    stack = inspect.stack()
    if len(stack) <= 3:
        return {"function": "<unknown>", "file": "<unknown>", "line": "<unknown>"}

    frame = stack[3]
    return {
        "function": frame.function or "<anonymous>",
        "file": os.path.basename(frame.filename or "<unknown>"),
        "line": str(frame.lineno) if frame.lineno else "<unknown>",
    }


def should_log(level: LoggerSeverity) -> bool:
    threshold = os.getenv("LOG_LEVEL", "debug").lower()
    return LEVELS.get(level, 0) >= LEVELS.get(threshold, 0)


def format_message(
    level: LoggerSeverity, message: str, site: Optional[CallSite] = None
) -> str:
    timestamp = get_timestamp()
    if site is None or os.getenv("LOG_VERBOSITY", "detailed").lower() != "detailed":
        return f"[{timestamp}] {level.upper()}: {message}"

    return (
        f"[{timestamp}] {level.upper()} "
        f"[{site['function']}@{site['file']}:{site['line']}]: {message}"
    )


def _write_file(line: str) -> None:
    path = log_file_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(line + "\n")
    except OSError as err:
        print(f"Failed to write log to file: {err}", file=sys.stderr)
        print(line, file=sys.stderr)


def _log(level: LoggerSeverity, message: str) -> None:
    env = os.getenv("ENV", "development").lower()
    if env == "test" or not should_log(level):
        return

    line = format_message(level, message, get_call_site())

    if env == "development":
        if level in COLORS:
            print(COLORS[level] + line + COLORS["reset"], file=sys.stderr)
        else:
            print(line, file=sys.stderr)
    else:
        _write_file(line)


class Logger:
    @staticmethod
    def debug(message: str) -> None:
        _log("debug", message)

    @staticmethod
    def info(message: str) -> None:
        _log("info", message)

    @staticmethod
    def warn(message: str) -> None:
        _log("warn", message)

    @staticmethod
    def error(message: str) -> None:
        _log("error", message)


logger = Logger()
