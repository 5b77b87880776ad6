from datetime import datetime

import numpy as np
import pytest

from vision_hub.vision.hud import (
    PANEL_BETA,
    draw_center_distance,
    format_info,
    format_timestamp,
    label_origin,
    overlay_hud,
    panel_rects,
)


@pytest.fixture
def frame(frame_factory):
    frame = frame_factory(width=640, height=480)
    frame.frame_index = 12345
    return frame


def black(width=640, height=480):
    return np.zeros((height, width, 3), dtype=np.uint8)


def test_format_timestamp_milliseconds():
    ts = datetime(2024, 1, 2, 3, 4, 5, 678901)
    assert format_timestamp(ts) == "2024-01-02 03:04:05.678"


def test_format_info(frame):
    assert format_info(frame, 30.46) == "FPS: 30.5 | Res: 640x480 | Frame: 12345"


def test_panel_geometry(frame):
    time_rect, info_rect = panel_rects((480, 640, 3), format_timestamp(frame.timestamp), format_info(frame, 0))

    assert time_rect[1] == 10
    assert time_rect[2] == 640 - 10
    assert time_rect[0] < time_rect[2]
    assert info_rect[0] == 10
    assert info_rect[3] == 480 - 10
    assert info_rect[1] < info_rect[3]


def test_overlay_hud_changes_black_image(frame):
    img = black()
    original = img.copy()

    overlay_hud(img, frame, 30.5)

    assert img.shape == (480, 640, 3)
    assert img.dtype == np.uint8
    assert np.count_nonzero(np.abs(img.astype(int) - original)) > 0


def test_overlay_hud_text_is_not_blended(frame):
    img = black()
    overlay_hud(img, frame, 30.5)

    _, info_rect = panel_rects(img.shape, format_timestamp(frame.timestamp), format_info(frame, 30.5))
    x0, y0, x1, y1 = info_rect
    assert img[y0:y1, x0:x1].max() == 255


def test_overlay_hud_panels_are_translucent(frame):
    img = np.full((480, 640, 3), 255, dtype=np.uint8)
    overlay_hud(img, frame, 30.5)

    time_rect, _ = panel_rects(img.shape, format_timestamp(frame.timestamp), format_info(frame, 30.5))
    x0, y0, _, _ = time_rect
    expected = round(255 * PANEL_BETA)
    assert img[y0 + 1, x0 + 1].tolist() == pytest.approx([expected] * 3, abs=1)
    # Outside the panels the image is untouched
    assert img[240, 320].tolist() == [255, 255, 255]


def test_overlay_hud_idempotent_on_pristine_copy(frame):
    base = np.random.default_rng(7).integers(0, 256, (480, 640, 3), dtype=np.uint8)
    first = base.copy()
    second = base.copy()

    overlay_hud(first, frame, 12.0)
    overlay_hud(second, frame, 12.0)

    assert np.array_equal(first, second)


def test_overlay_hud_none_and_empty(frame):
    overlay_hud(None, frame, 0)

    empty = np.zeros((0, 0, 3), dtype=np.uint8)
    overlay_hud(empty, frame, 0)
    assert empty.size == 0


def test_draw_center_distance_crosshair(frame):
    img = black()
    draw_center_distance(img, frame, 1.0)

    assert img[240, 320].tolist() == [0, 255, 0]
    assert img[240, 320 - 9].tolist() == [0, 255, 0]
    assert img[240 + 9, 320].tolist() == [0, 255, 0]
    assert img[240, 320 + 40].tolist() == [0, 0, 0]


def test_draw_center_distance_label_below_crosshair(frame):
    img = black()
    draw_center_distance(img, frame, 2.0)

    x, y = label_origin(img.shape, "Dist: 2.00m")
    assert y > 240 + 10
    region = img[y - 20:y + 5, max(x - 5, 0):x + 150]
    assert (region[:, :, 1] == 255).any()


def test_draw_center_distance_none_and_empty(frame):
    draw_center_distance(None, frame, 1.0)

    empty = np.zeros((0, 0, 3), dtype=np.uint8)
    draw_center_distance(empty, frame, 1.0)
    assert empty.size == 0


def test_panel_end_corner_is_exclusive(frame):
    img = np.full((480, 640, 3), 255, dtype=np.uint8)
    overlay_hud(img, frame, 30.5)

    time_rect, info_rect = panel_rects(img.shape, format_timestamp(frame.timestamp), format_info(frame, 30.5))
    x0, y0, x1, y1 = time_rect
    assert img[y0, x1 - 1].tolist() == pytest.approx([round(255 * PANEL_BETA)] * 3, abs=1)
    assert img[y0, x1].tolist() == [255, 255, 255]

    x0, y0, x1, y1 = info_rect
    assert img[y1 - 1, x0].tolist() == pytest.approx([round(255 * PANEL_BETA)] * 3, abs=1)
    assert img[y1, x0].tolist() == [255, 255, 255]
