"""
Convex hull and convexity defect analysis
Counts the valleys between fingers and maps the count to a gesture

A closed fist is close to convex and shows 0-1 deep concavities. A spread
open hand shows one deep valley between each pair of neighbouring fingers.
"""
import logging
from dataclasses import dataclass, field

import cv2
import numpy as np

from ...core.config import (
    DEFECT_DEPTH_THRESHOLD, FIST_MAX_DEFECTS, OPEN_HAND_DEFECTS,
    CLOSED_FIST, OPEN_HAND, UNKNOWN
)

logger = logging.getLogger(__name__)

# cv2.convexityDefects reports depth as fixed point with 8 fractional bits
DEPTH_FIXED_POINT_SCALE = 256.0


@dataclass(frozen=True)
class ConvexityDefect:
    """One concavity between two hull vertices"""
    start_index: int
    end_index: int
    far_index: int
    depth: float
    start: tuple
    end: tuple
    far: tuple


@dataclass
class DefectAnalysis:
    """Hull and counting defects of a single contour"""
    hull_indices: np.ndarray
    hull_points: np.ndarray
    defects: list = field(default_factory=list)

    @property
    def defect_count(self):
        return len(self.defects)

    @property
    def far_points(self):
        return [d.far for d in self.defects]


def _empty_analysis():
    return DefectAnalysis(
        hull_indices=np.empty(0, dtype=np.int32),
        hull_points=np.empty((0, 1, 2), dtype=np.int32),
    )


def compute_hull_indices(contour):
    """
    Convex hull of a contour as indices into its points

    The indices are sorted so the hull visits points in the same order as the
    contour, which cv2.convexityDefects requires.

    Args:
        contour: (N, 1, 2) int32 contour

    Returns:
        Strictly increasing int32 index array (empty for < 3 points)
    """
    if contour is None or len(contour) < 3:
        return np.empty(0, dtype=np.int32)

    hull = cv2.convexHull(contour, returnPoints=False)
    if hull is None:
        return np.empty(0, dtype=np.int32)
    return np.unique(hull.reshape(-1)).astype(np.int32)


def find_convexity_defects(contour, hull_indices):
    """
    All convexity defects of a contour, one per hull edge with a concavity

    Args:
        contour: (N, 1, 2) int32 contour
        hull_indices: Output of compute_hull_indices

    Returns:
        List of ConvexityDefect with depth in pixels, empty for degenerate input
    """
    if len(contour) < 3 or len(hull_indices) < 3:
        return []

    try:
        raw = cv2.convexityDefects(contour, hull_indices.reshape(-1, 1))
    except cv2.error as e:
        # self-intersecting contours can still be rejected by OpenCV
        logger.warning("Convexity defects failed on %d-point contour: %s", len(contour), e)
        return []

    if raw is None:
        return []

    points = contour.reshape(-1, 2)
    defects = []
    for s, e, f, d in raw.reshape(-1, 4):
        defects.append(ConvexityDefect(
            start_index=int(s),
            end_index=int(e),
            far_index=int(f),
            depth=d / DEPTH_FIXED_POINT_SCALE,
            start=(int(points[s][0]), int(points[s][1])),
            end=(int(points[e][0]), int(points[e][1])),
            far=(int(points[f][0]), int(points[f][1])),
        ))
    return defects


def analyze_defects(contour, depth_threshold=DEFECT_DEPTH_THRESHOLD):
    """
    Compute hull and finger-valley defects of a hand contour

    Args:
        contour: Selected hand contour
        depth_threshold: Defects must be strictly deeper than this (pixels)

    Returns:
        DefectAnalysis holding only the defects that count
    """
    hull_indices = compute_hull_indices(contour)
    if len(hull_indices) < 3:
        logger.debug("Degenerate hull (%d points), no defects", len(hull_indices))
        return _empty_analysis()

    hull_points = contour[hull_indices]

    candidates = find_convexity_defects(contour, hull_indices)
    counting = [d for d in candidates if d.depth > depth_threshold]

    logger.debug("Defects: %d candidates, %d deeper than %s",
                 len(candidates), len(counting), depth_threshold)

    return DefectAnalysis(hull_indices=hull_indices, hull_points=hull_points,
                          defects=counting)


def classify_defect_count(defect_count, fist_max=FIST_MAX_DEFECTS,
                          open_hand_count=OPEN_HAND_DEFECTS):
    """
    Map number of finger valleys to a gesture label

    Args:
        defect_count: Number of counting defects
        fist_max: Highest count still read as a closed fist
        open_hand_count: Exact count read as an open hand

    Returns:
        str: CLOSED_FIST, OPEN_HAND or UNKNOWN
    """
    if defect_count <= fist_max:
        return CLOSED_FIST
    elif defect_count == open_hand_count:
        return OPEN_HAND
    return UNKNOWN
