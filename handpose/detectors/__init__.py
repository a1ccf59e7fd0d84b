"""Hand detector implementations"""
from .hand_detector_base import HandDetectorBase
from .cv import CVDetector

__all__ = ['HandDetectorBase', 'CVDetector']
