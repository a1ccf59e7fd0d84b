"""
Error types for the hand pose pipeline

Only malformed input and broken configuration are errors.
A frame without a hand is a normal result, see GestureResult.hand_detected.
"""


class HandPoseError(Exception):
    """Base class for all handpose errors"""


class InputError(HandPoseError, ValueError):
    """Frame has the wrong shape, channel count or dtype"""


class ConfigError(HandPoseError, ValueError):
    """Configuration file or tunable value is invalid"""
