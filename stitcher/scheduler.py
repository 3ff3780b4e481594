# stitcher/scheduler.py
import psutil
import time
from stitcher.utils import get_logger
from stitcher import config
logger = get_logger()

class DispatcherThrottle:
    """
    Simple dispatcher throttle: before launching an encoder, call wait_for_capacity().
    Keeps CPU usage below max_cpu_percent (e.g., 90.0 => leaves ~10% free).
    Gives up after max_wait seconds so a busy host cannot stall the run.
    """
    def __init__(self, max_cpu_percent=90.0, check_interval=0.3, max_wait=None,
                 sleep=time.sleep, clock=time.monotonic):
        self.max_cpu = float(max_cpu_percent)
        self.check_interval = float(check_interval)
        self.max_wait = config.THROTTLE_MAX_WAIT if max_wait is None else float(max_wait)
        self._sleep = sleep
        self._clock = clock

    def wait_for_capacity(self):
        started = self._clock()
        waited = False
        while True:
            try:
                cpu = psutil.cpu_percent(interval=self.check_interval)
            except (OSError, RuntimeError):
                cpu = 0.0
            if cpu < self.max_cpu:
                if waited:
                    logger.info("CPU %.1f%% < %.1f%% -> resuming.", cpu, self.max_cpu)
                return cpu
            if self._clock() - started >= self.max_wait:
                logger.warning("CPU still %.1f%% after %.0fs -> encoding anyway.", cpu, self.max_wait)
                return cpu
            if not waited:
                logger.info("CPU %.1f%% >= %.1f%% -> waiting before next encode.", cpu, self.max_cpu)
                waited = True
            self._sleep(0.05)

def make_throttle(max_cpu_percent):
    if not max_cpu_percent or max_cpu_percent >= 100:
        return None
    return DispatcherThrottle(max_cpu_percent=max_cpu_percent)
