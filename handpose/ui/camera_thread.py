"""
Fixed-rate capture and processing thread separated from UI
"""
import logging
import threading
import time

from ..core.config import CAPTURE_PERIOD_MS, SHUTDOWN_TIMEOUT_S
from ..core.errors import InputError
from ..core.utils import FPSCounter

logger = logging.getLogger(__name__)


class CameraThread:
    """Captures and classifies one frame per tick on a worker thread"""

    def __init__(self, detector, capture, period_ms=CAPTURE_PERIOD_MS):
        """
        Args:
            detector: HandDetectorBase implementation
            capture: Callable returning a BGR frame or None to skip the tick
            period_ms: Tick period in milliseconds
        """
        self.detector = detector
        self.capture = capture
        self.period = period_ms / 1000.0

        self.thread = None
        self.error = None
        self.frames_processed = 0
        self.fps_counter = FPSCounter()

        self.current_result = None
        self.frame_lock = threading.Lock()
        self._stop_event = threading.Event()

    def start(self):
        """Start the worker thread, returns False if already running"""
        if self.is_running():
            return False

        self._stop_event.clear()
        self.error = None
        self.thread = threading.Thread(target=self._camera_loop, name="camera-thread", daemon=True)
        self.thread.start()
        logger.info("Camera thread started (period %.0f ms)", self.period * 1000)
        return True

    def stop(self, timeout=SHUTDOWN_TIMEOUT_S):
        """Stop the worker between frames and wait for it"""
        self._stop_event.set()
        if self.thread is not None:
            self.thread.join(timeout=timeout)
            if self.thread.is_alive():
                logger.warning("Camera thread did not stop within %.1f s", timeout)
                return False
            self.thread = None
        return True

    def is_running(self):
        return self.thread is not None and self.thread.is_alive()

    def get_latest_result(self):
        """Latest detector output dict, or None before the first frame"""
        with self.frame_lock:
            return self.current_result

    def process_tick(self):
        """
        Run one capture + detection step

        Returns:
            bool: True if a frame was processed, False if the tick was skipped
        """
        frame = self.capture()
        if frame is None:
            return False

        try:
            result = self.detector.process_frame(frame, fps=self.fps_counter.get_fps())
        except InputError as e:
            logger.warning("Skipping malformed frame: %s", e)
            return False

        self.fps_counter.update()
        with self.frame_lock:
            self.current_result = result
        self.frames_processed += 1
        return True

    def _camera_loop(self):
        next_tick = time.perf_counter()
        while not self._stop_event.is_set():
            try:
                self.process_tick()
            except Exception as e:
                logger.exception("Camera thread stopped by processing error")
                self.error = e
                break

            next_tick += self.period
            delay = next_tick - time.perf_counter()
            if delay < 0:
                # fell behind, drop missed ticks instead of bursting
                next_tick = time.perf_counter()
                delay = 0
            self._stop_event.wait(delay)
