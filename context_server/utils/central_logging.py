"""
Central logging setup.

Console output always; when a log directory is configured also
- all.log      everything
- errors.log   ERROR and above
- mcp.log      context dispatch (context_server.mcp)
- access.log   per-request access lines (context_server.api)
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

FMT = "%(asctime)s|%(levelname)-8s|%(name)-25s|%(message)s"
FMT_DETAIL = "%(asctime)s|%(levelname)-8s|%(name)-25s|%(filename)s:%(lineno)d|%(message)s"
DATE_FMT = "%Y-%m-%d %H:%M:%S"
MAX_BYTES, BACKUP = 10 * 1024 * 1024, 5

# State
_init = {"central": False, "console": None, "log_dir": None}


class ColorFormatter(logging.Formatter):
    """Formatter with ANSI colors for console."""
    C = {10: '\033[36m', 20: '\033[32m', 30: '\033[33m', 40: '\033[31m', 50: '\033[35m'}
    R = '\033[0m'

    def format(self, r):
        return f"{self.C.get(r.levelno, '')}{super().format(r)}{self.R}"


def _handler(path: Path, level: int = logging.DEBUG) -> RotatingFileHandler:
    h = RotatingFileHandler(str(path), maxBytes=MAX_BYTES, backupCount=BACKUP, encoding='utf-8')
    h.setLevel(level)
    h.setFormatter(logging.Formatter(FMT_DETAIL, DATE_FMT))
    return h


def _level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    return level


def _add_file_handlers(app_logger: logging.Logger, log_dir: Union[str, Path]) -> None:
    target = Path(log_dir)
    target.mkdir(parents=True, exist_ok=True)
    app_logger.addHandler(_handler(target / "all.log"))
    app_logger.addHandler(_handler(target / "errors.log", logging.ERROR))
    for name, filename in [("mcp", "mcp.log"), ("api", "access.log")]:
        logging.getLogger(f"context_server.{name}").addHandler(_handler(target / filename))
    _init["log_dir"] = str(target)


def setup_central_logging(
    level: Union[int, str] = logging.INFO,
    log_dir: Optional[Union[str, Path]] = None,
) -> bool:
    """Initialize process-wide logging. Returns False if it was already set up.

    A repeated call only adjusts the console level and adds file handlers for a
    log directory when none was configured yet.
    """
    level = _level(level)
    app_logger = logging.getLogger("context_server")

    if _init["central"]:
        _init["console"].setLevel(level)
        if log_dir and not _init["log_dir"]:
            _add_file_handlers(app_logger, log_dir)
        return False

    app_logger.setLevel(logging.DEBUG)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(ColorFormatter(FMT, DATE_FMT) if sys.stdout.isatty() else logging.Formatter(FMT, DATE_FMT))
    app_logger.addHandler(console)
    _init["console"] = console

    if log_dir:
        _add_file_handlers(app_logger, log_dir)

    logging.getLogger("httpx").setLevel(logging.WARNING)

    _init["central"] = True
    app_logger.info(f"Logging initialized | level={logging.getLevelName(level)} | dir={log_dir or '-'}")
    return True
