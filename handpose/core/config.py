"""
Configuration constants for the hand pose system
"""
from pathlib import Path

# Camera settings
CAMERA_WIDTH = 640
CAMERA_HEIGHT = 480
CAMERA_FPS = 30
CAMERA_MAX_ATTEMPTS = 5
MIRROR_FRAME = False

# Fixed-rate capture period of the worker thread (~30 FPS)
CAPTURE_PERIOD_MS = 33
SHUTDOWN_TIMEOUT_S = 1.0

# Skin color bounds in OpenCV HSV (H: 0-179, S: 0-255, V: 0-255), inclusive
SKIN_LOWER = (0, 48, 80)
SKIN_UPPER = (20, 255, 255)

# Morphology: structuring element used for opening then closing
KERNEL_SHAPE = "ellipse"
KERNEL_SIZE = 7

# MIN_CONTOUR_AREA: a contour must be strictly larger than this (px^2)
# to be considered a hand. Smaller blobs are noise or far-away skin.
MIN_CONTOUR_AREA = 10000

# DEFECT_DEPTH_THRESHOLD: convexity defects must be strictly deeper than this
# (pixels) to count as a valley between two fingers
DEFECT_DEPTH_THRESHOLD = 20

# Defect count -> gesture thresholds
FIST_MAX_DEFECTS = 1    # 0 or 1 valley visible
OPEN_HAND_DEFECTS = 4   # 4 valleys between 5 spread fingers

# Gesture labels
CLOSED_FIST = "Closed Fist"
OPEN_HAND = "Open Hand"
UNKNOWN = "Unknown"

# UI settings
UI_WINDOW_TITLE = "Hand Gesture Recognition"
UI_WINDOW_WIDTH = 640
UI_WINDOW_HEIGHT = 480
UI_REFRESH_MS = 16

# Logging
LOG_LEVEL = "INFO"
LOG_MAX_SIZE_MB = 10
LOG_BACKUP_COUNT = 3

# File paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_FILE = PROJECT_ROOT / "handpose_config.json"
