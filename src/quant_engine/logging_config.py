"""Logging configuration for entry points.

Library modules never configure handlers; they only do
``logger = logging.getLogger(__name__)``. Applications (the CLI, notebooks,
scripts) call :func:`setup_logging` once.

The console handler attaches a filter that injects
``record.shortname = record.name.split(".")[-1]`` so ``%(shortname)s`` can be
used in console formats.
"""

from __future__ import annotations

import logging
from pathlib import Path

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(shortname)s - %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _AddShortNameFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.shortname = record.name.split(".")[-1]
        return True


class _ColorFormatter(logging.Formatter):
    """Colour only the level name; file logs stay plain."""

    _RESET = "\033[0m"
    _LEVEL_COLOR: dict[int, str] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self._LEVEL_COLOR.get(record.levelno)
        if not color:
            return super().format(record)

        original = record.levelname
        record.levelname = f"{color}{original}{self._RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def coerce_level(level: int | str) -> int:
    """Coerce ``"debug"``, ``"WARNING"``, ``"10"`` or ``10`` to a logging level."""
    if isinstance(level, int):
        return level

    s = str(level).strip().upper()
    if not s:
        raise ValueError("Empty logging level")
    if s.isdigit():
        return int(s)

    resolved = logging.getLevelNamesMapping().get(s)
    if resolved is None:
        raise ValueError(f"Unknown logging level: {level!r}")
    return resolved


def setup_logging(
    level: int | str = "WARNING",
    *,
    fmt_console: str = DEFAULT_FORMAT,
    log_file: str | Path | None = None,
    colored: bool = False,
    quiet_third_party: bool = True,
) -> None:
    """Configure root logging (call once from entry points).

    Uses ``force=True`` so repeated calls (notebooks, tests) replace handlers
    instead of stacking them.
    """
    root_level = coerce_level(level)

    console = logging.StreamHandler()
    console.addFilter(_AddShortNameFilter())
    formatter_cls = _ColorFormatter if colored else logging.Formatter
    console.setFormatter(formatter_cls(fmt_console, datefmt=DATE_FORMAT))
    handlers: list[logging.Handler] = [console]

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        handlers.append(fh)

    logging.basicConfig(level=root_level, handlers=handlers, force=True)

    if quiet_third_party:
        for name in ("urllib3", "requests"):
            logging.getLogger(name).setLevel(max(root_level, logging.WARNING))
