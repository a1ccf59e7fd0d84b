"""
Utility functions for the hand pose system
"""
import logging
import logging.handlers
import os
import platform
import time

import cv2

from .config import CAMERA_MAX_ATTEMPTS, LOG_MAX_SIZE_MB, LOG_BACKUP_COUNT

logger = logging.getLogger(__name__)


def setup_logging(level="INFO", log_file=None, max_size_mb=LOG_MAX_SIZE_MB,
                  backup_count=LOG_BACKUP_COUNT):
    """
    Configure console logging and an optional rotating log file

    Args:
        level: Root log level name (DEBUG, INFO, ...)
        log_file: Path of the rotating log file, or None for console only
        max_size_mb: Size at which the log file rotates
        backup_count: Number of rotated files kept

    Returns:
        The configured root logger
    """
    console_format = "%(asctime)s  %(levelname)-5s  %(message)s"
    file_format = "%(asctime)s [%(levelname)-7s] %(name)-30s | %(message)s"
    date_format = "%H:%M:%S"

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(console_format, datefmt=date_format))
    root_logger.addHandler(console)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(file_format, datefmt=date_format))
        root_logger.addHandler(file_handler)

    return root_logger


def find_camera(max_attempts=CAMERA_MAX_ATTEMPTS, camera_index=None):
    """
    Find and open an available camera with OS-specific backends

    Args:
        max_attempts: Maximum number of camera indices to try
        camera_index: Only try this index when given

    Returns:
        cv2.VideoCapture object or None if no camera found
    """
    os_name = platform.system()

    if os_name == 'Darwin':
        backends = [cv2.CAP_AVFOUNDATION]
    elif os_name == 'Windows':
        backends = [cv2.CAP_DSHOW, cv2.CAP_ANY]
    else:
        backends = [cv2.CAP_V4L2, cv2.CAP_ANY]

    indices = [camera_index] if camera_index is not None else range(max_attempts)

    for index in indices:
        for backend in backends:
            test_cap = cv2.VideoCapture(index, backend)
            if not test_cap.isOpened():
                test_cap.release()
                continue

            ret, _ = test_cap.read()
            if ret:
                logger.info("Opened camera %d (backend %d)", index, backend)
                return test_cap
            test_cap.release()

    return None


def setup_camera(cap, width=640, height=480, fps=30):
    """Request capture resolution and frame rate from the camera"""
    cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
    cap.set(cv2.CAP_PROP_FPS, fps)


def ensure_bgr(image):
    """
    Convert a raw camera image to a 3-channel BGR frame

    Args:
        image: Grayscale (H, W) / (H, W, 1), BGRA (H, W, 4) or BGR image

    Returns:
        BGR frame; already-BGR input is returned as is
    """
    if image.ndim == 2 or (image.ndim == 3 and image.shape[2] == 1):
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    elif image.ndim == 3 and image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    return image


class FPSCounter:
    """Calculate and smooth FPS over time"""

    def __init__(self, smoothing=0.9):
        self.fps = 0
        self.prev_time = time.time()
        self.smoothing = smoothing

    def update(self):
        curr_time = time.time()
        if curr_time - self.prev_time > 0:
            instant_fps = 1 / (curr_time - self.prev_time)
            self.fps = self.fps * self.smoothing + instant_fps * (1 - self.smoothing)
        self.prev_time = curr_time
        return self.fps

    def get_fps(self):
        return int(self.fps)
