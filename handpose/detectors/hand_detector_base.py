"""
Base class for hand detection methods
"""
from abc import ABC, abstractmethod


class HandDetectorBase(ABC):

    @abstractmethod
    def process_frame(self, frame, fps=None):
        """
        Process a frame and classify the hand pose

        Args:
            frame: BGR image from camera
            fps: Current frame rate, for overlays

        Returns:
            dict with keys:
                - 'detected': bool, whether a hand was found
                - 'gesture': str, gesture label
                - 'defect_count': int, number of finger valleys
                - 'result': GestureResult with the overlay geometry
                - 'annotated_frame': BGR image with annotations
        """
        pass

    @abstractmethod
    def cleanup(self):
        pass
