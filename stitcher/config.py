# stitcher/config.py
# Configuration constants (tweak as needed, CLI flags override the runtime ones)

DEFAULT_FPS = 24.0
MIN_FPS = 0.01
MAX_FPS = 240.0
VIDEOS_DIRNAME = "videos"
FRAME_EXT = "jpg"
INPUT_TEMPLATE = "%d-capture.jpg"   # ffmpeg image2 pattern, staged frames are numbered from 0
OUTPUT_SUFFIX = "-video.webm"
VIDEO_CODEC = "libvpx-vp9"
PIX_FMT = "yuv420p"
FFMPEG_BIN = "ffmpeg"
FRAME_ORDER = "name"   # "name" (natural), "time" (capture timestamp) or "path" (plain string sort)
MAX_CPU_PERCENT = 0   # e.g. 90.0 waits for CPU headroom before each encode, 0 disables
THROTTLE_MAX_WAIT = 60.0   # seconds, then encode anyway
ENCODER_TIMEOUT = None
LOG_FILE = "event_videos.log"
VERBOSE = False
