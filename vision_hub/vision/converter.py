import cv2
import numpy as np

from .errors import InvalidBufferSize


def convert_color(color_view: np.ndarray) -> np.ndarray:
    """
    Reorder an RGB view into OpenCV's native BGR.

    The view may borrow driver memory, so the result is always a new array.

    Args:
        color_view (np.ndarray): (H,W,3) uint8 RGB image

    Returns:
        np.ndarray: owned (H,W,3) uint8 BGR image
    """
    if color_view.ndim != 3 or color_view.shape[2] != 3:
        raise InvalidBufferSize(3, color_view.shape[-1] if color_view.ndim == 3 else 1,
                                what="color channels")
    return cv2.cvtColor(color_view, cv2.COLOR_RGB2BGR)
