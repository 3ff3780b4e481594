#!/usr/bin/env python3
"""
event_videos.py - turn numbered event folders of JPEG frames into WebM videos.

Usage example:
  python event_videos.py /path/to/captures --order name --max-cpu 90 --log-file event_videos.log

Every immediate subfolder of the base folder with an all-digit name is an
event. Its .jpg frames are ordered, a frame rate is estimated from their
timestamps and ffmpeg writes <base>/videos/<event-id>-video.webm.
"""
import os
import math
import sys
import logging
import argparse

from stitcher.utils import setup_logging, get_logger, display_path
from stitcher.io_utils import install_signal_cleanup
from stitcher.frames import FRAME_ORDERS
from stitcher.encoder import find_encoder, SubprocessRunner
from stitcher.scheduler import make_throttle
from stitcher.core import process_event_directories
from stitcher import config

logger = get_logger()

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Stitch numbered event folders of JPEG frames into WebM videos with ffmpeg.")
    parser.add_argument("base_dir", help="Folder containing the numbered event folders.")
    parser.add_argument("--ffmpeg", default=config.FFMPEG_BIN, help="Encoder executable (default: %(default)s).")
    parser.add_argument("--default-fps", type=float, default=config.DEFAULT_FPS, help="Frame rate used when it cannot be estimated (default: %(default)s).")
    parser.add_argument("--order", choices=FRAME_ORDERS, default=config.FRAME_ORDER, help="Frame ordering: natural file name, capture time or plain path (default: %(default)s).")
    parser.add_argument("--overwrite", action="store_true", help="Overwrite existing videos (passes -y to ffmpeg).")
    parser.add_argument("--timeout", type=float, default=config.ENCODER_TIMEOUT, help="Seconds before an encoder run is killed (default: no timeout).")
    parser.add_argument("--max-cpu", type=float, default=config.MAX_CPU_PERCENT, help="Wait before each encode until CPU usage is below this percent, 0 disables (default: %(default)s).")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar over event folders.")
    parser.add_argument("--log-file", default=config.LOG_FILE, help="Log file path (default: %(default)s).")
    parser.add_argument("--verbose", "-v", action="store_true", default=config.VERBOSE, help="Debug level logging.")
    args = parser.parse_args(argv)
    if not math.isfinite(args.default_fps) or args.default_fps <= 0:
        parser.error("--default-fps must be a finite positive number")
    return args

def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_file, level=logging.DEBUG if args.verbose else logging.INFO)
    logger.info("event_videos.py started. Base=%s", args.base_dir)

    if not os.path.isdir(args.base_dir):
        print("Base folder does not exist:", display_path(args.base_dir), file=sys.stderr)
        return 2
    if find_encoder(args.ffmpeg) is None:
        print(f"{display_path(args.ffmpeg)} not found in PATH. Please install ffmpeg and add to PATH.", file=sys.stderr)
        return 2

    install_signal_cleanup()
    try:
        summary = process_event_directories(
            args.base_dir,
            runner=SubprocessRunner(timeout=args.timeout),
            order=args.order,
            default_fps=args.default_fps,
            ffmpeg=args.ffmpeg,
            overwrite=args.overwrite,
            throttle=make_throttle(args.max_cpu),
            progress=args.progress,
        )
    except OSError:
        logger.exception("Run aborted while preparing %s", args.base_dir)
        raise

    logger.info("All done. %d videos created, %d failed. Output: %s", summary.succeeded, summary.failed, summary.videos_dir)
    return 0 if summary.ok else 1

if __name__ == "__main__":
    sys.exit(main())
