# stitcher/frames.py
"""
Frame timing helpers.

resolve_timestamp() picks a capture time out of file metadata,
estimate_framerate() turns consecutive frame timestamps into a playback rate
and choose_framerate() applies the sanity policy used by the video builder.
"""
import math
import os
import re

from stitcher.utils import get_logger, vprint
from stitcher import config

logger = get_logger()

FRAME_ORDERS = ("name", "time", "path")

_DIGITS_RE = re.compile(r"(\d+)")

def resolve_timestamp(meta):
    """
    Capture time of a file in seconds since the epoch.
    Creation time where the platform records it (st_birthtime), else the
    modification time. None when neither is available.
    """
    for attr in ("st_birthtime", "st_mtime"):
        value = getattr(meta, attr, None)
        if value is None:
            continue
        try:
            value = float(value)
        except (TypeError, ValueError):
            continue
        if math.isfinite(value):
            return value
    return None

def file_timestamp(path):
    try:
        meta = os.stat(path)
    except OSError as e:
        vprint("stat failed for", path, e)
        return None
    return resolve_timestamp(meta)

def estimate_framerate(image_paths):
    """
    1 / mean(delta) over consecutive frames, in the given order.

    Returns None with fewer than two frames or when any timestamp cannot be
    read. A zero mean gives math.inf and a negative mean a negative rate;
    callers validate the result (see choose_framerate).
    """
    if len(image_paths) < 2:
        return None

    deltas = []
    for prev, curr in zip(image_paths, image_paths[1:]):
        t_prev = file_timestamp(prev)
        t_curr = file_timestamp(curr)
        if t_prev is None or t_curr is None:
            return None
        deltas.append(t_curr - t_prev)

    mean = sum(deltas) / len(deltas)
    if mean == 0:
        return math.inf
    return 1.0 / mean

def choose_framerate(image_paths, default_fps=None, min_fps=None, max_fps=None):
    """
    Return (fps, used_default).
    Missing, non-finite or non-positive estimates fall back to default_fps,
    the rest is clamped into [min_fps, max_fps].
    """
    default_fps = config.DEFAULT_FPS if default_fps is None else default_fps
    min_fps = config.MIN_FPS if min_fps is None else min_fps
    max_fps = config.MAX_FPS if max_fps is None else max_fps

    fps = estimate_framerate(image_paths)
    if fps is None:
        logger.info("Cannot estimate frame rate from %d frames, using %s", len(image_paths), default_fps)
        return default_fps, True
    if not math.isfinite(fps) or fps <= 0:
        logger.warning("Rejected estimated frame rate %r, using %s", fps, default_fps)
        return default_fps, True
    clamped = min(max(fps, min_fps), max_fps)
    if clamped != fps:
        logger.warning("Estimated frame rate %r clamped to %r", fps, clamped)
    return clamped, False

def format_framerate(fps):
    # shortest round-trip text, integral values without the trailing ".0"
    text = repr(float(fps))
    if text.endswith(".0"):
        text = text[:-2]
    return text

def natural_key(path):
    name = os.path.basename(path)
    parts = _DIGITS_RE.split(name)
    key = []
    for i, part in enumerate(parts):
        if i % 2:
            key.append((0, int(part), ""))
        else:
            key.append((1, 0, part))
    return key, name

def sort_frames(image_paths, order=None):
    order = order or config.FRAME_ORDER
    if order == "path":
        return sorted(image_paths)
    if order == "name":
        return sorted(image_paths, key=natural_key)
    if order == "time":
        def time_key(p):
            ts = file_timestamp(p)
            return (ts is None, ts if ts is not None else 0.0, natural_key(p))
        return sorted(image_paths, key=time_key)
    raise ValueError(f"Unknown frame order: {order!r} (expected one of {', '.join(FRAME_ORDERS)})")
