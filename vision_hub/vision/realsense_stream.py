import logging
from datetime import datetime

import pyrealsense2 as rs

from .errors import DeviceError, FrameTimeout
from .frame import UnifiedFrame
from .realsense_frame import realsense_get_frame, realsense_init


class RealSenseStream:
    """
    RealSenseStream class to start the camera and fetch aligned color + depth samples
    """
    def __init__(self, width = 640, height = 480, fps = 30, bag_file = None):
        self._width = width
        self._height = height
        self._fps = fps
        self._bag_file = bag_file
        self.pipeline = None
        self.align = None
        self._playback = None
        self._last_timestamp = None
        self.running = False
        self.cam_logger = logging.getLogger(self.__class__.__name__)

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False

    def start(self):
        try:
            self.pipeline, self.align, profile = realsense_init(
                self._width, self._height, self._fps, self._bag_file)
        except RuntimeError as e:
            raise DeviceError(f"Failed to start RealSense pipeline: {e}") from e

        if self._bag_file is not None:
            self._playback = profile.get_device().as_playback()
            self.cam_logger.info(f"Playing {self._bag_file}")

        self.running = True
        self.cam_logger.info(f"Pipeline started {self._width}x{self._height}@{self._fps}")

    def stop(self):
        if not self.running:
            return
        self.running = False
        self.pipeline.stop()
        self.cam_logger.info("Pipeline stopped")

    def fetch(self, timeout_ms = 1000) -> UnifiedFrame:
        """
        Block until the next aligned sample arrives.

        The returned frame borrows the driver buffers; call frame.release() once done with it.

        Raises:
            FrameTimeout: nothing arrived within timeout_ms
            DeviceError: pipeline not running, driver failure or end of recording
        """
        if not self.running:
            raise DeviceError("Pipeline is not running")

        if self._playback is not None and self._playback.current_status() == rs.playback_status.stopped:
            raise DeviceError(f"End of recording {self._bag_file}")

        try:
            result = realsense_get_frame(self.pipeline, self.align, timeout_ms)
        except RuntimeError as e:
            raise DeviceError(f"RealSense fetch failed: {e}") from e

        if result is None:
            raise FrameTimeout(f"No aligned frameset within {timeout_ms} ms")

        frameset, color_frame, depth_frame = result
        return UnifiedFrame(
            raw_color=memoryview(color_frame.get_data()).cast("B"),
            raw_depth=memoryview(depth_frame.get_data()).cast("B"),
            width=color_frame.get_width(),
            height=color_frame.get_height(),
            timestamp=self._next_timestamp(),
            frame_index=0,
            source=frameset,
        )

    def _next_timestamp(self):
        # Wall clock can step back (NTP), frames must not
        now = datetime.now()
        if self._last_timestamp is not None and now < self._last_timestamp:
            now = self._last_timestamp
        self._last_timestamp = now
        return now

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    @property
    def fps(self):
        return self._fps
