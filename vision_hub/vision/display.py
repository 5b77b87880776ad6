import logging

import cv2

from .errors import ReleaseErrors

ESC_KEY = 27


class Screen:
    """
    Two OpenCV windows showing the color and depth streams side by side.

    Must be created and rendered from the same thread (HighGUI owns its windows per thread).
    """
    def __init__(self, color_title = "RealSense RGB Stream - Vision Hub",
                 depth_title = "RealSense Depth Stream - Vision Hub"):
        self.color_title = color_title
        self.depth_title = depth_title
        self.running = True
        self.display_logger = logging.getLogger(self.__class__.__name__)

        cv2.namedWindow(self.color_title, cv2.WINDOW_AUTOSIZE)
        cv2.namedWindow(self.depth_title, cv2.WINDOW_AUTOSIZE)
        self.display_logger.info("Windows created")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.close()
            return False
        # Already unwinding, a window that will not close must not mask the original error
        try:
            self.close()
        except ReleaseErrors as e:
            self.display_logger.error(f"Failed to close windows: {e}")
        return False

    def render(self, color_image, depth_image):
        if color_image is None or depth_image is None or color_image.size == 0 or depth_image.size == 0:
            return

        cv2.imshow(self.color_title, color_image)
        cv2.imshow(self.depth_title, depth_image)

        # waitKey pumps the HighGUI event loop, without it nothing is painted
        key = cv2.waitKey(1) & 0xFF
        if key in (ESC_KEY, ord('q')):
            self.display_logger.info("Quit requested from window")
            self.running = False

    def close(self):
        errors = []
        for title in (self.color_title, self.depth_title):
            try:
                cv2.destroyWindow(title)
            except cv2.error as e:
                errors.append(e)
        self.running = False

        if errors:
            raise ReleaseErrors(errors)
        self.display_logger.info("Windows closed")
