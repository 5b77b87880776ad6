import argparse
from dataclasses import dataclass
from typing import Optional

from vision_hub.vision.colorizer import DEPTH_MAX_MM


@dataclass
class HubConfig:
    """
    Runtime settings of the vision hub.

    width, height and fps go to the camera unchanged. depth_max_mm sets the
    depth that saturates the color map.
    """
    width: int = 640
    height: int = 480
    fps: int = 30
    fetch_timeout_ms: int = 1000
    depth_max_mm: int = DEPTH_MAX_MM
    fps_window: int = 10
    bag_file: Optional[str] = None
    color_window: str = "RealSense RGB Stream - Vision Hub"
    depth_window: str = "RealSense Depth Stream - Vision Hub"
    log_level: str = "INFO"

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Resolution must be positive, got {self.width}x{self.height}")
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if self.fetch_timeout_ms <= 0:
            raise ValueError(f"fetch_timeout_ms must be positive, got {self.fetch_timeout_ms}")
        if self.depth_max_mm <= 0:
            raise ValueError(f"depth_max_mm must be positive, got {self.depth_max_mm}")
        if self.fps_window <= 0:
            raise ValueError(f"fps_window must be positive, got {self.fps_window}")

    @classmethod
    def from_args(cls, argv=None):
        parser = build_parser()
        args = parser.parse_args(argv)
        return cls(
            width=args.width,
            height=args.height,
            fps=args.fps,
            fetch_timeout_ms=args.timeout_ms,
            depth_max_mm=args.depth_max_mm,
            bag_file=args.bag,
            log_level=args.log_level,
        )


def build_parser():
    defaults = HubConfig()
    parser = argparse.ArgumentParser(
        description="Live RealSense color + depth viewer with HUD overlay")
    parser.add_argument("--width", type=int, default=defaults.width, help="Capture width")
    parser.add_argument("--height", type=int, default=defaults.height, help="Capture height")
    parser.add_argument("--fps", type=int, default=defaults.fps, help="Capture frame rate")
    parser.add_argument("--timeout-ms", type=int, default=defaults.fetch_timeout_ms,
                        help="Max wait for one aligned frameset")
    parser.add_argument("--depth-max-mm", type=int, default=defaults.depth_max_mm,
                        help="Depth mapped to the far end of the color map")
    parser.add_argument("--bag", default=None, help="Play a recorded .bag file instead of a live camera")
    parser.add_argument("--log-level", default=defaults.log_level,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser
