"""Logging setup for the mdxdoc CLI"""

import logging
import sys


def configure_logging(log_level: int | str) -> logging.Logger:
    """Install a single stderr handler on the root logger at log_level and return the root logger."""
    level = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.WARNING)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root.addHandler(handler)
    return root
