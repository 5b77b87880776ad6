import cv2
import numpy as np

# Depth that saturates the color map (red end). Fixed so clipping does not
# depend on scene content.
DEPTH_MAX_MM = 4000


def colorize_depth(depth_view: np.ndarray, depth_max_mm=DEPTH_MAX_MM) -> np.ndarray:
    """
    Map a uint16 depth image (mm) to a JET pseudo-color image.

    0 mm lands on the blue end of the map, depth_max_mm and beyond on the red end.

    Args:
        depth_view (np.ndarray): (H,W) uint16 depth in millimeters
        depth_max_mm (int): Depth mapped to 255

    Returns:
        np.ndarray: owned (H,W,3) uint8 BGR image
    """
    if depth_max_mm <= 0:
        raise ValueError(f"depth_max_mm must be positive, got {depth_max_mm}")

    depth_normalized = cv2.convertScaleAbs(depth_view, alpha=255.0 / depth_max_mm)
    return cv2.applyColorMap(depth_normalized, cv2.COLORMAP_JET)
