"""
Tkinter window showing the annotated camera feed and current gesture
"""
import logging
import tkinter as tk
from tkinter import messagebox

from ..core.config import (
    UI_WINDOW_TITLE, UI_WINDOW_WIDTH, UI_WINDOW_HEIGHT, UI_REFRESH_MS
)
from ..detectors import CVDetector
from .camera_manager import CameraManager
from .camera_thread import CameraThread

logger = logging.getLogger(__name__)


class GestureApp:
    """Window showing the annotated camera feed and the current gesture"""

    def __init__(self, root, detector=None, camera=None):
        self.root = root
        root.title(UI_WINDOW_TITLE)
        root.geometry(f"{UI_WINDOW_WIDTH}x{UI_WINDOW_HEIGHT + 30}")

        self.detector = detector if detector is not None else CVDetector()
        self.camera = camera if camera is not None else CameraManager()
        self.camera_thread = CameraThread(self.detector, self.camera.capture_frame)
        self.closed = False

        self.create_widgets()
        root.protocol("WM_DELETE_WINDOW", self.on_close)

    def create_widgets(self):
        self.video_label = tk.Label(self.root, bg="black")
        self.video_label.pack(fill=tk.BOTH, expand=True)

        self.status_label = tk.Label(self.root, text="Gesture: -", font=("Arial", 11), anchor="w")
        self.status_label.pack(fill=tk.X, padx=5, pady=2)

    def start(self):
        """Open the camera and start the worker; False if no camera"""
        if not self.camera.start_camera():
            self.status_label.configure(text="No webcam found")
            messagebox.showerror("Camera Error", "No webcam found.")
            return False

        self.camera_thread.start()
        self.update_ui()
        return True

    def update_ui(self):
        if self.closed:
            return

        if self.camera_thread.error is not None:
            self.status_label.configure(text=f"Processing stopped: {self.camera_thread.error}")
            return

        result = self.camera_thread.get_latest_result()
        if result is not None:
            imgtk = CameraManager.prepare_frame_for_display(result['annotated_frame'])
            # keep a reference or Tk drops the image
            self.video_label.imgtk = imgtk
            self.video_label.configure(image=imgtk)

            if result['detected']:
                text = f"Gesture: {result['gesture']}  (defects: {result['defect_count']})"
            else:
                text = "Gesture: no hand"
            fps = self.camera_thread.fps_counter.get_fps()
            self.status_label.configure(text=f"{text}   {fps} FPS")

        self.root.after(UI_REFRESH_MS, self.update_ui)

    def cleanup(self):
        self.camera_thread.stop()
        self.camera.stop_camera()
        self.detector.cleanup()

    def on_close(self):
        if self.closed:
            return
        self.closed = True
        logger.info("Shutting down")
        self.cleanup()
        self.root.destroy()
