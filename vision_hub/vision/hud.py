import cv2
import numpy as np

# Panel opacity: overlay weight 120/255, base image keeps the rest
PANEL_ALPHA = 120.0 / 255.0
PANEL_BETA = 1.0 - PANEL_ALPHA

FONT_FACE = cv2.FONT_HERSHEY_SIMPLEX
FONT_SCALE = 0.6
THICKNESS = 2

TEXT_COLOR = (255, 255, 255)
PANEL_COLOR = (0, 0, 0)
RETICLE_COLOR = (0, 255, 0)
OUTLINE_COLOR = (0, 0, 0)

RETICLE_HALF = 10  # 20 px segments
OUTLINE_THICKNESS = 4


def _is_blank(image):
    return image is None or image.size == 0


def format_timestamp(timestamp) -> str:
    """YYYY-MM-DD HH:MM:SS.mmm"""
    return timestamp.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]


def format_info(frame, fps) -> str:
    return f"FPS: {fps:.1f} | Res: {frame.width}x{frame.height} | Frame: {frame.frame_index}"


def panel_rects(image_shape, time_str, info_str):
    """
    Compute the two HUD panels for an image.

    Returns:
        tuple: ((x0, y0, x1, y1) time panel top-right, (x0, y0, x1, y1) info panel bottom-left)
    """
    rows, cols = image_shape[:2]

    (time_w, time_h), _ = cv2.getTextSize(time_str, FONT_FACE, FONT_SCALE, THICKNESS)
    time_rect = (cols - time_w - 20, 10, cols - 10, 10 + time_h + 15)

    (info_w, info_h), _ = cv2.getTextSize(info_str, FONT_FACE, FONT_SCALE, THICKNESS)
    info_rect = (10, rows - info_h - 20, 10 + info_w + 10, rows - 10)

    return time_rect, info_rect


def overlay_hud(image: np.ndarray, frame, fps: float):
    """
    Draw the status panels in place: timestamp top-right, FPS / resolution / frame index bottom-left.

    The panels are blended onto the image, the text is drawn afterwards so it stays crisp.

    Args:
        image (np.ndarray): (H,W,3) uint8 image, modified in place
        frame (UnifiedFrame): Frame metadata (timestamp, width, height, frame_index)
        fps (float): Current FPS estimate
    """
    if _is_blank(image):
        return

    time_str = format_timestamp(frame.timestamp)
    info_str = format_info(frame, fps)
    time_rect, info_rect = panel_rects(image.shape, time_str, info_str)

    overlay = image.copy()
    for x0, y0, x1, y1 in (time_rect, info_rect):
        # Exclusive end corner, same extent as a cv::Rect of these bounds
        cv2.rectangle(overlay, (x0, y0), (x1 - 1, y1 - 1), PANEL_COLOR, -1)

    cv2.addWeighted(overlay, PANEL_ALPHA, image, PANEL_BETA, 0.0, dst=image)
    del overlay

    for text, (x0, _, _, y1) in ((time_str, time_rect), (info_str, info_rect)):
        cv2.putText(image, text, (x0 + 5, y1 - 8), FONT_FACE, FONT_SCALE, TEXT_COLOR, THICKNESS)


def label_origin(image_shape, label):
    rows, cols = image_shape[:2]
    cx, cy = cols // 2, rows // 2
    (label_w, label_h), _ = cv2.getTextSize(label, FONT_FACE, FONT_SCALE, THICKNESS)
    return cx - label_w // 2, cy + RETICLE_HALF + 10 + label_h


def draw_center_distance(image: np.ndarray, frame, distance_m: float):
    """
    Draw a crosshair at the image center with the distance label below it.

    A distance of 0.0 means there was no depth reading.
    """
    if _is_blank(image):
        return

    rows, cols = image.shape[:2]
    cx, cy = cols // 2, rows // 2

    cv2.line(image, (cx - RETICLE_HALF, cy), (cx + RETICLE_HALF, cy), RETICLE_COLOR, THICKNESS)
    cv2.line(image, (cx, cy - RETICLE_HALF), (cx, cy + RETICLE_HALF), RETICLE_COLOR, THICKNESS)

    label = f"Dist: {distance_m:.2f}m"
    origin = label_origin(image.shape, label)
    # Outline first, fill on top
    cv2.putText(image, label, origin, FONT_FACE, FONT_SCALE, OUTLINE_COLOR, OUTLINE_THICKNESS)
    cv2.putText(image, label, origin, FONT_FACE, FONT_SCALE, RETICLE_COLOR, THICKNESS)
