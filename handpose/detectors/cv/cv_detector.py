"""
CV hand pose detector built on the per-frame pipeline
"""
import logging

from ..hand_detector_base import HandDetectorBase
from .config_loader import load_pipeline_config
from .detection_pipeline import classify_frame
from .visualization import draw_debug_overlay

logger = logging.getLogger(__name__)


class CVDetector(HandDetectorBase):
    """Skin color + convexity defect detector"""

    def __init__(self, config=None, show_debug=False):
        self.config = config if config is not None else load_pipeline_config()
        self.show_debug_overlay = show_debug

    def process_frame(self, frame, fps=None):
        """
        Classify a frame on a private copy

        The caller's buffer is never drawn on, so it can be reused for the next
        capture while the annotated copy is being displayed.
        """
        annotated, result = classify_frame(frame.copy(), self.config)

        if self.show_debug_overlay:
            annotated = draw_debug_overlay(annotated, result, fps)

        return {
            'detected': result.hand_detected,
            'gesture': result.label,
            'defect_count': result.defect_count,
            'result': result,
            'annotated_frame': annotated
        }

    def update_config(self, config):
        """Swap pipeline tunables, takes effect on the next frame"""
        self.config = config.validate()
        logger.info("Pipeline config updated")

    def cleanup(self):
        pass
