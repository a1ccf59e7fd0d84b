"""
End-to-end tests for the per-frame pipeline and annotator
"""
import cv2
import numpy as np
import pytest

from handpose import classify_frame, GestureResult, PipelineConfig, InputError
from handpose.core.config import CLOSED_FIST, OPEN_HAND, UNKNOWN
from handpose.detectors.cv.detection_pipeline import detect_gesture
from handpose.detectors.cv.visualization import annotate_frame, DEFECT_COLOR
from tests.conftest import FAN_VALLEYS


def has_color(frame, bgr):
    return bool(np.all(frame == np.array(bgr, dtype=np.uint8), axis=2).any())


class TestNoHand:

    def test_empty_frame_is_unknown_and_untouched(self, empty_frame):
        original = empty_frame.copy()

        annotated, result = classify_frame(empty_frame)

        assert result.label == UNKNOWN
        assert not result.hand_detected
        assert result.defect_count == 0
        assert result.contour is None
        assert result.hull is None
        assert result.defect_points == []
        assert annotated is empty_frame
        assert np.array_equal(annotated, original)

    def test_only_small_blob_is_not_a_hand(self, empty_frame):
        cv2.rectangle(empty_frame, (20, 20), (69, 119), (80, 120, 200), -1)
        original = empty_frame.copy()

        annotated, result = classify_frame(empty_frame)

        assert result.label == UNKNOWN
        assert np.array_equal(annotated, original)

    def test_non_skin_object_is_ignored(self, empty_frame):
        cv2.circle(empty_frame, (320, 240), 150, (255, 0, 0), -1)

        _, result = classify_frame(empty_frame)

        assert not result.hand_detected


class TestScenarios:

    def test_filled_circle_is_closed_fist(self, circle_frame):
        annotated, result = classify_frame(circle_frame)

        assert result.hand_detected
        assert result.defect_count == 0
        assert result.label == CLOSED_FIST
        assert result.contour_area == pytest.approx(np.pi * 150 ** 2, rel=0.05)
        assert len(result.hull) >= 3

    def test_four_valleys_is_open_hand(self, fan_frame):
        _, result = classify_frame(fan_frame)

        assert result.defect_count == 4
        assert result.label == OPEN_HAND
        for (x, y), (vx, vy) in zip(sorted(result.defect_points), sorted(FAN_VALLEYS)):
            assert abs(x - vx) <= 10 and abs(y - vy) <= 10
        assert all(d.depth > 20 for d in result.defects)

    def test_largest_of_two_blobs_is_selected(self, two_blob_frame):
        result = detect_gesture(two_blob_frame)

        x, y, w, h = cv2.boundingRect(result.contour)
        assert result.hand_detected
        assert 40000 < result.contour_area < 51000
        assert 295 <= x <= 305 and 95 <= y <= 105
        assert result.label == CLOSED_FIST


class TestConfiguration:

    def test_deeper_threshold_turns_open_hand_into_fist(self, fan_frame):
        _, result = classify_frame(fan_frame, PipelineConfig(defect_depth_threshold=200))

        assert result.defect_count == 0
        assert result.label == CLOSED_FIST

    def test_larger_min_area_rejects_hand(self, circle_frame):
        _, result = classify_frame(circle_frame, PipelineConfig(min_contour_area=100000))

        assert result.label == UNKNOWN
        assert not result.hand_detected

    def test_custom_label_thresholds(self, fan_frame):
        config = PipelineConfig(fist_max_defects=0, open_hand_defects=5)

        _, result = classify_frame(fan_frame, config)

        assert result.defect_count == 4
        assert result.label == UNKNOWN


class TestProperties:

    def test_identical_input_gives_identical_output(self, fan_frame):
        first_frame = fan_frame.copy()
        second_frame = fan_frame.copy()

        first_annotated, first = classify_frame(first_frame)
        second_annotated, second = classify_frame(second_frame)

        assert np.array_equal(first_annotated, second_annotated)
        assert first.label == second.label
        assert first.defect_count == second.defect_count
        assert first.defect_points == second.defect_points
        assert np.array_equal(first.contour, second.contour)
        assert np.array_equal(first.hull, second.hull)

    def test_defect_count_monotonic_in_threshold(self, fan_frame):
        counts = [
            detect_gesture(fan_frame, PipelineConfig(defect_depth_threshold=t)).defect_count
            for t in (300, 150, 100, 50, 20, 5, 0)
        ]

        assert counts == sorted(counts)

    def test_hull_points_are_contour_points_in_order(self, fan_frame):
        result = detect_gesture(fan_frame)

        contour = [tuple(p) for p in result.contour.reshape(-1, 2)]
        hull = [tuple(p) for p in result.hull.reshape(-1, 2)]
        positions = [contour.index(p) for p in hull]

        assert positions == sorted(positions)


class TestInputErrors:

    @pytest.mark.parametrize("frame", [
        None,
        np.zeros((480, 640), dtype=np.uint8),
        np.zeros((480, 640, 4), dtype=np.uint8),
        np.zeros((0, 0, 3), dtype=np.uint8),
    ])
    def test_malformed_frames_raise(self, frame):
        with pytest.raises(InputError):
            classify_frame(frame)

    def test_non_contiguous_view_raises(self, fan_frame):
        with pytest.raises(InputError):
            classify_frame(fan_frame[:, ::-1])

    def test_contiguous_copy_of_view_is_classified(self, fan_frame):
        mirrored = np.ascontiguousarray(fan_frame[:, ::-1])

        _, result = classify_frame(mirrored)

        assert result.label == OPEN_HAND


class TestAnnotateFrame:

    def test_hand_is_drawn(self, fan_frame):
        result = detect_gesture(fan_frame)
        frame = fan_frame.copy()

        annotated = annotate_frame(frame, result)

        assert annotated is frame
        assert not np.array_equal(annotated, fan_frame)
        assert has_color(annotated, DEFECT_COLOR)

    def test_no_hand_draws_nothing(self, empty_frame):
        original = empty_frame.copy()

        annotate_frame(empty_frame, GestureResult.no_hand())

        assert np.array_equal(empty_frame, original)

    def test_label_text_is_drawn_for_fist(self, circle_frame):
        result = detect_gesture(circle_frame)
        frame = circle_frame.copy()

        annotate_frame(frame, result)

        # label sits at (10, 50), well outside the circle
        assert frame[20:60, 10:300].any()
        assert not circle_frame[20:60, 10:300].any()
