# logger_utils.py - logging setup and timing helpers

# Library modules only call logging.getLogger(__name__); front ends call
# setup_logging() once to decide where records go (rich console, optional file).

import logging
import time
from pathlib import Path
from typing import Optional, Union

from rich.logging import RichHandler

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"
PACKAGE_LOGGER = "predictive_keyboard"


def setup_logging(level: Union[int, str] = "INFO",
                  log_file: Optional[Union[str, Path]] = None,
                  console: bool = True) -> logging.Logger:
    """
    Configure the package logger.
     - console records are rendered by rich (colors, aligned columns)
     - log_file gets plain timestamped lines, one per record
    Calling it again replaces the previous handlers.
    """
    root = logging.getLogger(PACKAGE_LOGGER)
    root.setLevel(level.upper() if isinstance(level, str) else level)
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    if console:
        root.addHandler(RichHandler(show_path=False, rich_tracebacks=True, markup=False))

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setFormatter(logging.Formatter(LOG_FORMAT, "%Y-%m-%d %H:%M:%S"))
        root.addHandler(fh)

    root.propagate = False
    return root


class Log:
    """Small helpers shared by the loader and the front ends."""

    @staticmethod
    def time_block(label: str, logger: Optional[logging.Logger] = None) -> "_Timer":
        """
        Helper for measuring execution time of a code block.
        To use:
            with Log.time_block("dictionary load") as t:
                do_some_work()
            t.elapsed_ms
        It logs how long the block took at INFO level.
        """
        return _Timer(label, logger or logging.getLogger(PACKAGE_LOGGER))


class _Timer:
    """Context manager used internally to measure time for a code block."""

    def __init__(self, label: str, logger: logging.Logger):
        self.label = label
        self.logger = logger
        self.start = 0.0
        self.elapsed_ms = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed_ms = round((time.perf_counter() - self.start) * 1000.0, 1)
        self.logger.info("%s done in %.1fms", self.label, self.elapsed_ms)
        return False
