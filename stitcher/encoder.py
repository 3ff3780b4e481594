# stitcher/encoder.py
import os
import shutil
import subprocess

from stitcher.utils import get_logger
from stitcher.frames import format_framerate
from stitcher import config

logger = get_logger()

def build_encoder_cmd(fps, input_pattern, out_path, ffmpeg=None, overwrite=False):
    ffmpeg = ffmpeg or config.FFMPEG_BIN
    cmd = [ffmpeg]
    if overwrite:
        cmd.append("-y")
    cmd += [
        "-framerate", format_framerate(fps),
        "-i", input_pattern,
        "-c:v", config.VIDEO_CODEC,
        "-pix_fmt", config.PIX_FMT,
        out_path,
    ]
    return cmd

def output_path_for(event_dir, videos_dir):
    name = os.path.basename(os.path.normpath(event_dir))
    return os.path.join(videos_dir, f"{name}{config.OUTPUT_SUFFIX}")

def find_encoder(ffmpeg=None):
    return shutil.which(ffmpeg or config.FFMPEG_BIN)

class SubprocessRunner:
    """
    Runs an encoder command line and reports success as a bool.
    Any callable with the same signature can stand in for it (tests use fakes).
    """
    def __init__(self, timeout=None):
        self.timeout = timeout

    def __call__(self, cmd):
        logger.info("Running: %s", subprocess.list2cmdline(cmd))
        try:
            proc = subprocess.run(cmd, stdin=subprocess.DEVNULL, timeout=self.timeout)
        except FileNotFoundError:
            logger.error("Encoder executable not found: %s", cmd[0])
            return False
        except subprocess.TimeoutExpired:
            logger.warning("Encoder timed out after %ss: %s", self.timeout, cmd[-1])
            return False
        except OSError as e:
            logger.exception("Failed to start encoder: %s", e)
            return False
        if proc.returncode != 0:
            logger.debug("Encoder exited with code %s", proc.returncode)
        return proc.returncode == 0
