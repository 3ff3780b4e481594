"""Unit tests for encoder command construction and the subprocess runner."""

import os
import subprocess
from unittest.mock import MagicMock, patch

from stitcher import encoder
from stitcher.encoder import SubprocessRunner, build_encoder_cmd, find_encoder, output_path_for


class TestBuildEncoderCmd:

    def test_fixed_argument_structure(self):
        cmd = build_encoder_cmd(1.0, "/base/42/%d-capture.jpg", "/base/videos/42-video.webm")
        assert cmd == [
            "ffmpeg",
            "-framerate", "1",
            "-i", "/base/42/%d-capture.jpg",
            "-c:v", "libvpx-vp9",
            "-pix_fmt", "yuv420p",
            "/base/videos/42-video.webm",
        ]

    def test_fractional_rate(self):
        cmd = build_encoder_cmd(0.5, "in/%d-capture.jpg", "out.webm")
        assert cmd[cmd.index("-framerate") + 1] == "0.5"

    def test_custom_binary_and_overwrite(self):
        cmd = build_encoder_cmd(24.0, "in/%d-capture.jpg", "out.webm", ffmpeg="/opt/ffmpeg/bin/ffmpeg", overwrite=True)
        assert cmd[:4] == ["/opt/ffmpeg/bin/ffmpeg", "-y", "-framerate", "24"]


def test_output_path_for():
    videos = os.path.join("base", "videos")
    assert output_path_for(os.path.join("base", "007"), videos) == os.path.join(videos, "007-video.webm")
    assert output_path_for(os.path.join("base", "42") + os.sep, videos) == os.path.join(videos, "42-video.webm")


def test_find_encoder_uses_which():
    with patch.object(encoder.shutil, "which", return_value="/usr/bin/ffmpeg") as which:
        assert find_encoder() == "/usr/bin/ffmpeg"
    which.assert_called_once_with("ffmpeg")


class TestSubprocessRunner:

    def test_success(self):
        with patch.object(encoder.subprocess, "run", return_value=MagicMock(returncode=0)) as run:
            assert SubprocessRunner()(["ffmpeg", "-version"]) is True
        args, kwargs = run.call_args
        assert args[0] == ["ffmpeg", "-version"]
        assert kwargs["stdin"] is subprocess.DEVNULL
        assert kwargs["timeout"] is None

    def test_nonzero_exit(self):
        with patch.object(encoder.subprocess, "run", return_value=MagicMock(returncode=1)):
            assert SubprocessRunner()(["ffmpeg"]) is False

    def test_missing_executable(self):
        assert SubprocessRunner()(["definitely-not-an-encoder-binary-xyz", "out.webm"]) is False

    def test_timeout(self):
        exc = subprocess.TimeoutExpired(cmd=["ffmpeg"], timeout=5)
        with patch.object(encoder.subprocess, "run", side_effect=exc) as run:
            assert SubprocessRunner(timeout=5)(["ffmpeg", "out.webm"]) is False
        assert run.call_args.kwargs["timeout"] == 5

    def test_permission_error(self):
        with patch.object(encoder.subprocess, "run", side_effect=PermissionError("denied")):
            assert SubprocessRunner()(["ffmpeg", "out.webm"]) is False
