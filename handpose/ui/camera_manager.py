"""
Camera acquisition and display conversion
"""
import logging
import threading

import cv2
from PIL import Image, ImageTk

from ..core.config import CAMERA_WIDTH, CAMERA_HEIGHT, CAMERA_FPS, MIRROR_FRAME
from ..core.utils import find_camera, setup_camera, ensure_bgr

logger = logging.getLogger(__name__)


class CameraManager:
    """Owns the webcam and hands out BGR frames"""

    def __init__(self, camera_index=None, mirror=MIRROR_FRAME):
        self.camera_index = camera_index
        self.mirror = mirror
        self.cap = None
        self._lock = threading.Lock()

    def start_camera(self):
        """
        Open and configure the camera

        Returns:
            bool: True if a camera was opened
        """
        cap = find_camera(camera_index=self.camera_index)
        if cap is None:
            logger.error("No webcam found")
            return False

        setup_camera(cap, CAMERA_WIDTH, CAMERA_HEIGHT, CAMERA_FPS)
        with self._lock:
            self.cap = cap
        return True

    def capture_frame(self):
        """
        Capture a single BGR frame

        Returns:
            Frame, or None when the camera is closed or the read failed
        """
        with self._lock:
            if self.cap is None or not self.cap.isOpened():
                return None

            ret, frame = self.cap.read()

        if not ret or frame is None:
            return None

        frame = ensure_bgr(frame)
        if self.mirror:
            frame = cv2.flip(frame, 1)
        return frame

    def stop_camera(self):
        """Release the camera"""
        with self._lock:
            if self.cap is not None:
                self.cap.release()
                self.cap = None
                logger.info("Camera released")

    @staticmethod
    def prepare_frame_for_display(frame, display_width=None):
        """Convert a BGR frame to a Tkinter image, optionally resized"""
        if frame is None:
            return None

        img = Image.fromarray(cv2.cvtColor(frame, cv2.COLOR_BGR2RGB))

        if display_width is not None and display_width != img.width:
            aspect_ratio = img.height / img.width
            display_height = int(display_width * aspect_ratio)
            img = img.resize((display_width, display_height), Image.Resampling.LANCZOS)

        return ImageTk.PhotoImage(image=img)
