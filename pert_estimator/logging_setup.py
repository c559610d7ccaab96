# pert_estimator/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

_configured = False


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable:
    - allow our own logs (pert_estimator.*, web_app, run_local)
    - Python warnings (captured as 'py.warnings') only at ERROR+
    - any third-party logger (streamlit, urllib3, ...) only at ERROR+
    """

    _OWN_PREFIXES = ("pert_estimator", "web_app", "run_local", "__main__")

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name.startswith(self._OWN_PREFIXES):
            return True
        return record.levelno >= logging.ERROR


def _parse_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(
    *,
    log_dir: str | Path = ".local/pert",
    console_level: int | str = logging.INFO,
    file_level: int | str = logging.DEBUG,
    force: bool = False,
) -> None:
    """
    Configure logging with:
    - Console handler: filtered, at console_level
    - File handler: everything from file_level up, in <log_dir>/pert.log

    Streamlit re-executes the page script on every interaction, so repeated
    calls are ignored unless force=True.
    """
    global _configured
    if _configured and not force:
        return

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "pert.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(_parse_level(console_level))
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(_parse_level(file_level))
    fh.setFormatter(fmt)
    root.addHandler(fh)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)

    _configured = True
