# utils.py
from __future__ import annotations

import logging
import tempfile
from pathlib import Path

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

# DEBUG log for every run, kept off the terminal.
log_path = Path(tempfile.gettempdir()) / "quickspace.log"


def configure_logging(verbose: bool = False) -> None:
    """
    File logging at DEBUG for every run.
    With ``verbose``, INFO and above are echoed to stderr as well.
    Does nothing when the root logger is already configured.
    """
    if logging.getLogger().handlers:
        return
    handlers: list[logging.Handler] = [logging.FileHandler(log_path, encoding="utf-8")]
    if verbose:
        stream = logging.StreamHandler()
        stream.setLevel(logging.INFO)
        handlers.append(stream)
    logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, handlers=handlers)
