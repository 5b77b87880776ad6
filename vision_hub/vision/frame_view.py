from enum import Enum

import numpy as np

from .errors import InvalidBufferSize


class PixelLayout(Enum):
    RGB8 = "rgb8"  # 3 x uint8
    Z16 = "z16"    # 1 x uint16, little-endian


_LAYOUTS = {
    PixelLayout.RGB8: (np.dtype(np.uint8), 3),
    PixelLayout.Z16: (np.dtype("<u2"), 1),
}


def bytes_per_pixel(layout: PixelLayout) -> int:
    dtype, channels = _LAYOUTS[layout]
    return dtype.itemsize * channels


def buffer_nbytes(buffer) -> int:
    if buffer is None:
        return 0
    return memoryview(buffer).nbytes


def to_view(buffer, width, height, layout: PixelLayout) -> np.ndarray:
    """
    Interpret a raw byte buffer as an image without copying it.

    Args:
        buffer: bytes, bytearray or memoryview holding the pixels
        width (int): Image width
        height (int): Image height
        layout (PixelLayout): Pixel format of the buffer

    Returns:
        np.ndarray: read-only (H,W,3) uint8 or (H,W) uint16 view sharing memory with buffer
    """
    if width <= 0 or height <= 0:
        raise InvalidBufferSize(0, 0, what=f"view {width}x{height}")

    dtype, channels = _LAYOUTS[layout]
    expected = width * height * bytes_per_pixel(layout)
    actual = buffer_nbytes(buffer)
    if actual != expected:
        raise InvalidBufferSize(expected, actual, what=f"{layout.value} view")

    view = np.frombuffer(buffer, dtype=dtype)
    if channels == 1:
        view = view.reshape(height, width)
    else:
        view = view.reshape(height, width, channels)
    view.flags.writeable = False
    return view
