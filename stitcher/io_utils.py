# stitcher/io_utils.py
import os
import re
import shutil
import tempfile
import threading
import atexit
import signal
import sys
from collections import namedtuple

from stitcher.utils import get_logger, vprint
from stitcher import config

_logger = get_logger()

_created = []
# reentrant: the signal handler may run cleanup while the main thread holds it
_lock = threading.RLock()

EVENT_NAME_RE = re.compile(r"[0-9]+")

FrameListing = namedtuple("FrameListing", ["paths", "skipped"])

def register_temp_path(path):
    with _lock:
        if path not in _created:
            _created.append(path)
            vprint("Registered temp path:", path)

def unregister_temp_path(path):
    with _lock:
        if path in _created:
            _created.remove(path)
            vprint("Unregistered temp path:", path)

def cleanup_all_temp_paths():
    with _lock:
        paths = list(_created)
    for p in reversed(paths):
        try:
            if os.path.isdir(p):
                shutil.rmtree(p)
                vprint("Removed temp folder:", p)
        except OSError as e:
            _logger.exception("Failed to cleanup temp folder %s: %s", p, e)
        finally:
            unregister_temp_path(p)

atexit.register(cleanup_all_temp_paths)

def _signal_handler(sig, frame):
    _logger.info("Signal %s received -> cleaning up temporaries.", sig)
    cleanup_all_temp_paths()
    sys.exit(128 + sig)

def install_signal_cleanup():
    for s in (signal.SIGINT, signal.SIGTERM):
        try:
            signal.signal(s, _signal_handler)
        except ValueError:
            # not in the main thread
            _logger.debug("Cannot install handler for signal %s", s)

def ensure_dir(path):
    os.makedirs(path, exist_ok=True)

def basename(path):
    return os.path.basename(os.path.normpath(path))

def is_event_dir_name(name):
    """True for non-empty names made only of ASCII decimal digits."""
    return EVENT_NAME_RE.fullmatch(name) is not None

def list_jpg_files(folder, ext=None):
    """
    Return FrameListing(paths, skipped) for the frames directly inside folder.
    Only names with the extension exactly `ext` are kept. Entries whose
    metadata cannot be read are counted in `skipped` and left out.
    OSError from listing the folder itself propagates.
    """
    ext = ext or config.FRAME_EXT
    paths = []
    skipped = 0
    with os.scandir(folder) as it:
        for entry in it:
            _, dot_ext = os.path.splitext(entry.name)
            if dot_ext[1:] != ext:
                continue
            try:
                entry.stat()
            except OSError as e:
                vprint("Unreadable frame entry", entry.path, e)
                skipped += 1
                continue
            paths.append(entry.path)
    if skipped:
        _logger.warning("Skipped %d unreadable frame entries in %s", skipped, folder)
    return FrameListing(paths, skipped)

# Try link/copy helpers
def create_link_or_copy(src, dest):
    try:
        os.link(src, dest)
        return True
    except OSError:
        pass
    try:
        os.symlink(os.path.abspath(src), dest)
        return True
    except OSError:
        pass
    try:
        shutil.copy2(src, dest)
        return True
    except OSError:
        return False

def stage_frames(src_files, temp_folder, template=None):
    """
    Link ordered frames into temp_folder as 0-capture.jpg, 1-capture.jpg, ...
    so an ffmpeg image2 pattern sees exactly these frames in this order.
    Returns the list of staged paths; frames that cannot be staged are skipped.
    """
    template = template or config.INPUT_TEMPLATE
    ensure_dir(temp_folder)
    staged = []
    for src in src_files:
        dest = os.path.join(temp_folder, template % len(staged))
        if not create_link_or_copy(src, dest):
            _logger.warning("Failed to link/copy %s -> %s", src, dest)
            continue
        staged.append(dest)
    return staged

def make_unique_tempdir(prefix="tmp_", base_dir=None):
    tmp = tempfile.mkdtemp(prefix=prefix, dir=base_dir)
    register_temp_path(tmp)
    return tmp

def remove_tempdir(path):
    try:
        if os.path.isdir(path):
            shutil.rmtree(path)
    except OSError as e:
        _logger.exception("Failed to remove temp folder %s: %s", path, e)
    finally:
        unregister_temp_path(path)
