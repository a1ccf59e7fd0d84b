"""
Per-frame detection pipeline
Segment skin, clean the mask, select the hand, count defects, classify, annotate

Every call is independent: nothing is kept between frames, so the pipeline can
be driven from a single worker thread without locking.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from ...core.config import UNKNOWN
from .config_loader import DEFAULT_CONFIG
from .skin_detection import (segment_skin, clean_mask,
                             find_hand_contours, select_hand_contour)
from .defect_analysis import ConvexityDefect, analyze_defects, classify_defect_count
from .visualization import annotate_frame

logger = logging.getLogger(__name__)


@dataclass
class GestureResult:
    """Outcome of classifying one frame"""
    label: str
    defect_count: int = 0
    contour: Optional[np.ndarray] = None
    hull: Optional[np.ndarray] = None
    defect_points: List[Tuple[int, int]] = field(default_factory=list)
    defects: List[ConvexityDefect] = field(default_factory=list)
    contour_area: float = 0.0

    @property
    def hand_detected(self) -> bool:
        """False means no contour qualified as a hand"""
        return self.contour is not None

    @staticmethod
    def no_hand() -> "GestureResult":
        return GestureResult(label=UNKNOWN)


def detect_gesture(frame, config=DEFAULT_CONFIG):
    """
    Run segmentation through classification without drawing

    Args:
        frame: BGR uint8 frame, (H, W, 3)
        config: PipelineConfig

    Returns:
        GestureResult

    Raises:
        InputError: if the frame is malformed
    """
    mask = segment_skin(frame, config.lower_bound, config.upper_bound)
    mask = clean_mask(mask, config.morph_shape, config.kernel_size)

    contours = find_hand_contours(mask)
    contour, area = select_hand_contour(contours, config.min_contour_area)
    if contour is None:
        return GestureResult.no_hand()

    analysis = analyze_defects(contour, config.defect_depth_threshold)
    label = classify_defect_count(analysis.defect_count,
                                  config.fist_max_defects,
                                  config.open_hand_defects)

    logger.debug("Hand area %.0f px, %d defects -> %s", area, analysis.defect_count, label)

    return GestureResult(
        label=label,
        defect_count=analysis.defect_count,
        contour=contour,
        hull=analysis.hull_points,
        defect_points=analysis.far_points,
        defects=analysis.defects,
        contour_area=area,
    )


def classify_frame(frame, config=None):
    """
    Classify the hand pose in a frame and draw the result onto it

    Args:
        frame: BGR uint8 frame, modified in place when a hand is found
        config: PipelineConfig, defaults when None

    Returns:
        (annotated_frame, GestureResult); annotated_frame is the input object

    Raises:
        InputError: if the frame is malformed
    """
    if config is None:
        config = DEFAULT_CONFIG

    result = detect_gesture(frame, config)
    return annotate_frame(frame, result), result
