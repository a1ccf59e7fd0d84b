"""Hand pose recognition - Core package"""
from .core.errors import HandPoseError, InputError, ConfigError
from .detectors import HandDetectorBase, CVDetector
from .detectors.cv import (
    classify_frame, GestureResult, PipelineConfig, load_pipeline_config,
    CLOSED_FIST, OPEN_HAND, UNKNOWN
)

__version__ = "1.0.0"
