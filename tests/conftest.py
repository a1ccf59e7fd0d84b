"""
Synthetic frames and contours shared by the test suites
"""
import cv2
import numpy as np
import pytest

FRAME_WIDTH = 640
FRAME_HEIGHT = 480

# BGR color that lands inside the default HSV skin bounds (H=10, S=153, V=200)
SKIN_BGR = (80, 120, 200)
# Pure blue, H=120, far outside the skin hue range
NON_SKIN_BGR = (255, 0, 0)

# Five fingertips on a radius-280 arc around (320, 400), four valleys on a
# radius-110 arc between them, closed by a flat wrist edge at the bottom.
# Each valley lies ~157 px inside the hull chord joining its neighbours.
FAN_POLYGON = [
    (57, 304), (233, 333), (159, 171), (287, 295), (320, 120),
    (353, 295), (481, 171), (407, 333), (583, 304), (560, 470), (80, 470),
]
FAN_VALLEYS = [(233, 333), (287, 295), (353, 295), (407, 333)]


def blank_frame(width=FRAME_WIDTH, height=FRAME_HEIGHT):
    return np.zeros((height, width, 3), dtype=np.uint8)


def as_contour(points):
    return np.array(points, dtype=np.int32).reshape(-1, 1, 2)


def square_contour(x, y, side):
    return as_contour([(x, y), (x + side, y), (x + side, y + side), (x, y + side)])


@pytest.fixture
def empty_frame():
    return blank_frame()


@pytest.fixture
def circle_frame():
    """Filled skin-colored circle, radius 150, in the frame center"""
    frame = blank_frame()
    cv2.circle(frame, (320, 240), 150, SKIN_BGR, -1)
    return frame


@pytest.fixture
def fan_frame():
    """Open-hand-like fan with four deep valleys"""
    frame = blank_frame()
    cv2.fillPoly(frame, [as_contour(FAN_POLYGON)], SKIN_BGR)
    return frame


@pytest.fixture
def fan_contour():
    return as_contour(FAN_POLYGON)


@pytest.fixture
def two_blob_frame():
    """Small blob (~5,000 px^2) on the left, large blob (~50,000 px^2) on the right"""
    frame = blank_frame()
    cv2.rectangle(frame, (20, 20), (69, 119), SKIN_BGR, -1)
    cv2.rectangle(frame, (300, 100), (549, 299), SKIN_BGR, -1)
    return frame
