from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from .errors import InvalidBufferSize
from .frame_view import buffer_nbytes

COLOR_BYTES_PER_PIXEL = 3
DEPTH_BYTES_PER_PIXEL = 2


@dataclass
class UnifiedFrame:
    """
    One synchronized color + depth sample.

    Attributes:
        raw_color: RGB8 bytes, width * height * 3
        raw_depth: Z16 little-endian bytes in millimeters, width * height * 2
        width (int): Frame width, shared by both streams (depth aligned to color)
        height (int): Frame height
        timestamp (datetime): Capture instant
        frame_index (int): Pipeline-local counter, filled in by the orchestrator
        source: Driver handle backing the raw buffers, dropped by release()
    """
    raw_color: Any
    raw_depth: Any
    width: int
    height: int
    timestamp: datetime = field(default_factory=datetime.now)
    frame_index: int = 0
    source: Optional[Any] = field(default=None, repr=False)

    def validate(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidBufferSize(0, 0, what=f"frame {self.width}x{self.height}")

        expected_color = self.width * self.height * COLOR_BYTES_PER_PIXEL
        expected_depth = self.width * self.height * DEPTH_BYTES_PER_PIXEL
        color_len = buffer_nbytes(self.raw_color)
        depth_len = buffer_nbytes(self.raw_depth)

        if color_len != expected_color:
            raise InvalidBufferSize(expected_color, color_len, what="raw_color")
        if depth_len != expected_depth:
            raise InvalidBufferSize(expected_depth, depth_len, what="raw_depth")

    def release(self):
        """Drop the driver frameset. Views built on the raw buffers must not be used afterwards."""
        if self.source is None:
            return
        buffers = (self.raw_color, self.raw_depth)
        self.source = None
        self.raw_color = None
        self.raw_depth = None
        for buffer in buffers:
            if isinstance(buffer, memoryview):
                buffer.release()
