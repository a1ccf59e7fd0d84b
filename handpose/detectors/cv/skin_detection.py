"""
Skin segmentation, mask cleanup and hand contour selection
"""
import logging

import cv2
import numpy as np

from ...core.config import SKIN_LOWER, SKIN_UPPER, KERNEL_SIZE, MIN_CONTOUR_AREA
from ...core.errors import InputError

logger = logging.getLogger(__name__)


def validate_frame(frame):
    """
    Check that a frame can go through the pipeline

    Args:
        frame: Candidate BGR frame

    Raises:
        InputError: if the frame is not a non-empty, contiguous (H, W, 3) uint8 array
    """
    if frame is None:
        raise InputError("Frame is None")
    if not isinstance(frame, np.ndarray):
        raise InputError(f"Frame must be a numpy array, got {type(frame).__name__}")
    if frame.ndim != 3 or frame.shape[2] != 3:
        raise InputError(f"Frame must have 3 channels, got shape {frame.shape}")
    if frame.shape[0] == 0 or frame.shape[1] == 0:
        raise InputError(f"Frame has zero dimension: {frame.shape}")
    if frame.dtype != np.uint8:
        raise InputError(f"Frame must be uint8, got {frame.dtype}")
    if not frame.flags["C_CONTIGUOUS"]:
        raise InputError("Frame must be a contiguous array, use np.ascontiguousarray on views")


def segment_skin(frame, lower=SKIN_LOWER, upper=SKIN_UPPER):
    """
    Detect skin pixels by thresholding in HSV

    Args:
        frame: Input BGR frame
        lower: Inclusive lower HSV bound
        upper: Inclusive upper HSV bound

    Returns:
        Binary mask (0 or 255), same height and width as the frame

    Raises:
        InputError: if the frame is malformed
    """
    validate_frame(frame)

    hsv = cv2.cvtColor(frame, cv2.COLOR_BGR2HSV)
    return cv2.inRange(hsv,
                       np.asarray(lower, dtype=np.uint8),
                       np.asarray(upper, dtype=np.uint8))


def clean_mask(mask, kernel_shape=cv2.MORPH_ELLIPSE, kernel_size=KERNEL_SIZE):
    """
    Remove speckles and fill small holes in a binary mask

    Opening (erode, dilate) drops isolated foreground noise, then closing
    (dilate, erode) fills gaps inside the remaining blobs.

    Args:
        mask: Binary mask
        kernel_shape: cv2.MORPH_* structuring element shape
        kernel_size: Width and height of the structuring element

    Returns:
        New cleaned mask
    """
    kernel = cv2.getStructuringElement(kernel_shape, (int(kernel_size), int(kernel_size)))

    opened = cv2.morphologyEx(mask, cv2.MORPH_OPEN, kernel)
    return cv2.morphologyEx(opened, cv2.MORPH_CLOSE, kernel)


def find_hand_contours(mask):
    """
    Find the outer boundary of every connected foreground region

    Returns:
        List of simplified contours, order unspecified
    """
    # older OpenCV releases modify the source image
    contours, _ = cv2.findContours(mask.copy(), cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
    return list(contours)


def select_hand_contour(contours, min_area=MIN_CONTOUR_AREA):
    """
    Pick the contour most likely to be the hand

    The largest contour whose area is strictly above min_area wins. On ties the
    first one in the given order is kept.

    Args:
        contours: Contours from find_hand_contours
        min_area: Minimum area in px^2 (exclusive)

    Returns:
        (contour, area), or (None, 0.0) when no contour qualifies
    """
    best_contour = None
    best_area = 0.0

    for contour in contours:
        if len(contour) < 3:
            continue

        area = cv2.contourArea(contour)
        if area > min_area and area > best_area:
            best_area = area
            best_contour = contour

    if best_contour is None:
        logger.debug("No contour above %.0f px^2 among %d candidates", min_area, len(contours))
        return None, 0.0

    return best_contour, best_area
