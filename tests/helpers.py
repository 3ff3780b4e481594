"""Test helpers: a fake encoder runner and frame file factory."""

import os
from pathlib import Path


class FakeRunner:
    """Records encoder command lines instead of running ffmpeg."""

    def __init__(self, result=True):
        self.result = result
        self.calls = []
        self.staged = []

    def __call__(self, cmd):
        self.calls.append(list(cmd))
        pattern_dir = os.path.dirname(cmd[cmd.index("-i") + 1])
        self.staged.append(sorted(os.listdir(pattern_dir)) if os.path.isdir(pattern_dir) else None)
        if callable(self.result):
            return self.result(cmd)
        return self.result


def write_frames(folder, names, start=1_000_000.0, step=1.0):
    """Create tiny frame files in folder with modification times start, start+step, ..."""
    folder = Path(folder)
    folder.mkdir(parents=True, exist_ok=True)
    paths = []
    for i, name in enumerate(names):
        p = folder / name
        p.write_bytes(b"\xff\xd8\xff\xd9")
        t = start + i * step
        os.utime(p, (t, t))
        paths.append(str(p))
    return paths
