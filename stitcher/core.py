# stitcher/core.py
"""
Main orchestration: the per-event video builder and the base directory walker.
"""
import os
from dataclasses import dataclass, field
from typing import List, Optional

from stitcher.utils import get_logger, get_tqdm, notify, display_path
from stitcher.io_utils import (ensure_dir, basename, is_event_dir_name, list_jpg_files,
                               make_unique_tempdir, stage_frames, remove_tempdir)
from stitcher.frames import sort_frames, choose_framerate
from stitcher.encoder import build_encoder_cmd, output_path_for, SubprocessRunner
from stitcher import config

logger = get_logger()

@dataclass
class EventOutcome:
    event_dir: str
    output_path: Optional[str] = None
    frames: int = 0
    skipped: int = 0
    fps: Optional[float] = None
    used_default_fps: bool = False
    success: bool = False
    error: Optional[str] = None

@dataclass
class RunSummary:
    videos_dir: str
    outcomes: List[EventOutcome] = field(default_factory=list)

    @property
    def succeeded(self):
        return sum(1 for o in self.outcomes if o.success)

    @property
    def failed(self):
        return sum(1 for o in self.outcomes if not o.success)

    @property
    def ok(self):
        return self.failed == 0

def create_event_video(event_dir, videos_dir, runner=None, order=None, default_fps=None,
                       ffmpeg=None, overwrite=False, throttle=None):
    """
    Build <videos_dir>/<event-id>-video.webm from the .jpg frames in event_dir.

    Encoder failure is reported (stderr notice + log) and returned in the
    outcome, never raised. OSError from listing event_dir propagates.
    """
    runner = runner or SubprocessRunner()
    listing = list_jpg_files(event_dir)
    frames = sort_frames(listing.paths, order)
    fps, used_default = choose_framerate(frames, default_fps=default_fps)
    out_path = output_path_for(event_dir, videos_dir)
    outcome = EventOutcome(event_dir=event_dir, output_path=out_path, frames=len(frames),
                           skipped=listing.skipped, fps=fps, used_default_fps=used_default)
    logger.info("Event %s: %d frames (%d skipped), %s fps%s", event_dir, len(frames), listing.skipped,
                fps, " (default)" if used_default else "")

    staging = make_unique_tempdir(prefix=f"{basename(event_dir)}_frames_", base_dir=videos_dir)
    try:
        staged = stage_frames(frames, staging)
        if len(staged) != len(frames):
            logger.warning("Staged %d of %d frames for %s", len(staged), len(frames), event_dir)
        pattern = os.path.join(staging, config.INPUT_TEMPLATE)
        cmd = build_encoder_cmd(fps, pattern, out_path, ffmpeg=ffmpeg, overwrite=overwrite)
        if throttle is not None:
            throttle.wait_for_capacity()
        outcome.success = bool(runner(cmd))
    finally:
        remove_tempdir(staging)

    if outcome.success:
        logger.info("Created video: %s", out_path)
        notify(f"Created video: {display_path(out_path)}")
    else:
        outcome.error = "encoder failed"
        logger.error("Failed to create video for %s", event_dir)
        notify(f"Failed to create video for {display_path(event_dir)}", err=True)
    return outcome

def find_event_dirs(base_dir):
    """Immediate subdirectories of base_dir with all-digit names, in filesystem order."""
    found = []
    with os.scandir(base_dir) as it:
        for entry in it:
            if is_event_dir_name(entry.name) and entry.is_dir():
                found.append(entry.path)
    return found

def process_event_directories(base_dir, runner=None, order=None, default_fps=None, ffmpeg=None,
                              overwrite=False, throttle=None, progress=False):
    videos_dir = os.path.join(base_dir, config.VIDEOS_DIRNAME)
    ensure_dir(videos_dir)
    event_dirs = find_event_dirs(base_dir)
    logger.info("Found %d event directories under %s", len(event_dirs), base_dir)

    runner = runner or SubprocessRunner(timeout=config.ENCODER_TIMEOUT)
    summary = RunSummary(videos_dir=videos_dir)
    for event_dir in get_tqdm(event_dirs, desc="Events", unit="event", disable=not progress):
        try:
            outcome = create_event_video(event_dir, videos_dir, runner=runner, order=order,
                                         default_fps=default_fps, ffmpeg=ffmpeg,
                                         overwrite=overwrite, throttle=throttle)
        except OSError as e:
            logger.exception("Cannot process event directory %s: %s", event_dir, e)
            notify(f"Failed to create video for {display_path(event_dir)}: {display_path(str(e))}", err=True)
            outcome = EventOutcome(event_dir=event_dir, error=str(e))
        summary.outcomes.append(outcome)

    logger.info("Done: %d succeeded, %d failed", summary.succeeded, summary.failed)
    return summary
