import logging
import time

from .colorizer import colorize_depth
from .converter import convert_color
from .errors import FrameTimeout, InvalidBufferSize, ReleaseErrors
from .extractor import get_center_distance
from .frame_view import PixelLayout, to_view
from .hud import draw_center_distance, overlay_hud


class FpsTracker:
    """
    Frame counter plus an FPS estimate refreshed every `window` frames.

    fps is window / seconds elapsed since the previous refresh, 0.0 until the first one.
    """
    def __init__(self, window=10, clock=time.perf_counter):
        self.window = window
        self.clock = clock
        self.frame_count = 0
        self.fps = 0.0
        self._last_mark = clock()

    def tick(self) -> int:
        self.frame_count += 1
        if self.frame_count % self.window == 0:
            now = self.clock()
            elapsed = now - self._last_mark
            if elapsed > 0:
                self.fps = self.window / elapsed
            self._last_mark = now
        return self.frame_count


class CycleArena:
    """
    Owns everything allocated during one cycle and releases it on exit, on every path.

    Release failures are collected and logged, never raised.
    """
    def __init__(self):
        self._images = []
        self._releases = []
        self.closed = False
        self.errors = []
        self.arena_logger = logging.getLogger(self.__class__.__name__)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def adopt(self, image):
        self._images.append(image)
        return image

    def defer(self, callback):
        self._releases.append(callback)
        return callback

    @property
    def held(self):
        return len(self._images) + len(self._releases)

    def close(self):
        if self.closed:
            return self.errors
        self.closed = True
        self._images.clear()

        while self._releases:
            callback = self._releases.pop()
            try:
                callback()
            except Exception as e:
                self.errors.append(e)

        if self.errors:
            self.arena_logger.error(str(ReleaseErrors(self.errors)))
        return self.errors


class CycleOrchestrator:
    """
    Fetch -> Process -> Present -> Cleanup, one frame per cycle, on the calling thread.

    Args:
        source: object with fetch(timeout_ms) -> UnifiedFrame
        sink: object with render(color_image, depth_image)
        config (HubConfig): fetch timeout, depth ceiling and FPS window
        clock: time source for the FPS estimate
    """
    def __init__(self, source, sink, config, clock=time.perf_counter):
        self.source = source
        self.sink = sink
        self.config = config
        self.fps_tracker = FpsTracker(window=config.fps_window, clock=clock)
        self.dropped = 0
        self.orch_logger = logging.getLogger(self.__class__.__name__)

    @property
    def frame_count(self):
        return self.fps_tracker.frame_count

    @property
    def fps(self):
        return self.fps_tracker.fps

    def run_once(self) -> bool:
        """
        Run one cycle.

        Returns:
            bool: True when a frame was presented, False when it was skipped

        Raises:
            DeviceError: from the frame source, the loop cannot continue
        """
        try:
            frame = self.source.fetch(self.config.fetch_timeout_ms)
        except FrameTimeout as e:
            self.dropped += 1
            self.orch_logger.warning(f"Failed to fetch frame: {e}")
            return False

        with CycleArena() as arena:
            arena.defer(frame.release)
            try:
                self._process_and_present(frame, arena)
            except InvalidBufferSize as e:
                self.dropped += 1
                self.orch_logger.warning(f"Dropping malformed frame: {e}")
                return False
        return True

    def _process_and_present(self, frame, arena):
        frame.validate()

        color_view = to_view(frame.raw_color, frame.width, frame.height, PixelLayout.RGB8)
        depth_view = to_view(frame.raw_depth, frame.width, frame.height, PixelLayout.Z16)

        color_image = arena.adopt(convert_color(color_view))
        depth_image = arena.adopt(colorize_depth(depth_view, self.config.depth_max_mm))
        # Views borrow the driver buffers, nothing past this point may hold them
        del color_view, depth_view
        distance = get_center_distance(frame.raw_depth, frame.width, frame.height)

        previous_fps = self.fps_tracker.fps
        frame.frame_index = self.fps_tracker.tick()
        fps = self.fps_tracker.fps
        if fps != previous_fps:
            self.orch_logger.debug(f"FPS {fps:.1f} at frame {frame.frame_index}")

        for image in (color_image, depth_image):
            overlay_hud(image, frame, fps)
            draw_center_distance(image, frame, distance)

        self.sink.render(color_image, depth_image)

    def run(self, stop_event=None, max_frames=None):
        """
        Loop until stop_event is set, the sink stops running, or max_frames frames were presented.

        Returns:
            int: number of frames presented
        """
        self.orch_logger.info("Render loop started")
        presented = 0
        while True:
            if stop_event is not None and stop_event.is_set():
                break
            if not getattr(self.sink, "running", True):
                break
            if max_frames is not None and presented >= max_frames:
                break
            if self.run_once():
                presented += 1

        self.orch_logger.info(f"Render loop stopped: {presented} frames, {self.dropped} dropped")
        return presented
