# stitcher/utils.py
import logging
import os
import sys
from tqdm import tqdm as _tqdm

LOGGER_NAME = "stitcher"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

def setup_logging(log_file="event_videos.log", level=logging.INFO):
    """
    Route the "stitcher" logger to log_file only; the console belongs to
    tqdm and the per-event notices. Calling it again swaps the file.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    # undecodable path names must not break a log record
    fh = logging.FileHandler(log_file, mode="a", encoding="utf-8", errors="backslashreplace")
    fh.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(fh)
    logger.info("Logging initialized. Log file: %s", os.path.abspath(log_file))
    return logger

def get_logger():
    # no handlers until setup_logging(); importing the package never creates a log file
    return logging.getLogger(LOGGER_NAME)

def vprint(*args):
    get_logger().debug(" ".join(str(a) for a in args))

def get_tqdm(*args, **kwargs):
    return _tqdm(*args, **kwargs)

def display_path(path):
    """Printable form of a filesystem path; undecodable bytes come out as \\xNN."""
    return os.fsencode(path).decode("utf-8", "backslashreplace")

def notify(msg, err=False):
    # keeps an active tqdm bar intact
    _tqdm.write(msg, file=sys.stderr if err else sys.stdout)
