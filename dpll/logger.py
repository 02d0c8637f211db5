import logging
import os


def init_logger(level=None):
    """Configure root logging; `level` wins over the LOGLEVEL environment variable."""
    level = level or os.environ.get("LOGLEVEL", "WARNING")
    logging.basicConfig(format='%(levelname)s: %(message)s', level=level.upper())
