"""
Annotation and debug overlay for the CV pipeline
"""
import cv2

CONTOUR_COLOR = (255, 0, 0)
HULL_COLOR = (0, 255, 0)
DEFECT_COLOR = (0, 0, 255)
LABEL_COLOR = (0, 255, 0)
LINE_THICKNESS = 2
DEFECT_RADIUS = 5
LABEL_POSITION = (10, 50)
LABEL_FONT = cv2.FONT_HERSHEY_SIMPLEX
LABEL_SCALE = 1


def annotate_frame(frame, result):
    """
    Draw the detected hand and gesture onto the frame in place

    Nothing is drawn when no hand was selected.

    Args:
        frame: BGR frame to draw on
        result: GestureResult of the same frame

    Returns:
        The same frame object
    """
    if not result.hand_detected:
        return frame

    for far in result.defect_points:
        cv2.circle(frame, far, DEFECT_RADIUS, DEFECT_COLOR, -1)

    cv2.putText(frame, f"GESTURE: {result.label}", LABEL_POSITION,
                LABEL_FONT, LABEL_SCALE, LABEL_COLOR, LINE_THICKNESS)

    cv2.drawContours(frame, [result.contour], -1, CONTOUR_COLOR, LINE_THICKNESS)
    if result.hull is not None and len(result.hull) >= 3:
        cv2.drawContours(frame, [result.hull], -1, HULL_COLOR, LINE_THICKNESS)

    return frame


def draw_debug_overlay(frame, result, fps=None):
    """
    Draw contour area, defect depths and FPS in the lower left corner

    Args:
        frame: Frame to draw on
        result: GestureResult of the frame
        fps: Optional frames per second to show

    Returns:
        Modified frame
    """
    h = frame.shape[0]
    lines = [f"Hand: {'yes' if result.hand_detected else 'no'}"]
    if result.hand_detected:
        lines.append(f"Area: {int(result.contour_area)} px")
        depths = ', '.join(f"{d.depth:.0f}" for d in result.defects)
        lines.append(f"Defects: {result.defect_count} [{depths}]")
    if fps is not None:
        lines.append(f"FPS: {int(fps)}")

    y = h - 10 - 20 * (len(lines) - 1)
    for line in lines:
        cv2.putText(frame, line, (10, y), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)
        y += 20

    return frame
