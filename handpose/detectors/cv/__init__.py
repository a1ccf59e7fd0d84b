"""
CV-based hand pose module
Split into logical components for maintainability
"""
from ...core.config import CLOSED_FIST, OPEN_HAND, UNKNOWN
from .config_loader import PipelineConfig, load_pipeline_config, save_pipeline_config
from .detection_pipeline import GestureResult, classify_frame, detect_gesture
from .cv_detector import CVDetector

__all__ = [
    'CVDetector', 'GestureResult', 'PipelineConfig',
    'classify_frame', 'detect_gesture',
    'load_pipeline_config', 'save_pipeline_config',
    'CLOSED_FIST', 'OPEN_HAND', 'UNKNOWN',
]
