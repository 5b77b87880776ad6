import logging
import sys

from vision_hub.utils.config import HubConfig
from vision_hub.vision.display import Screen
from vision_hub.vision.errors import DeviceError, ReleaseErrors
from vision_hub.vision.orchestrator import CycleOrchestrator
from vision_hub.vision.realsense_stream import RealSenseStream


def main(argv=None):
    config = HubConfig.from_args(argv)
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    logging.info("[Main] Initializing RealSense stream...")
    try:
        with RealSenseStream(config.width, config.height, config.fps, config.bag_file) as camera, \
                Screen(config.color_window, config.depth_window) as screen:
            logging.info("[Main] Starting render loop...")
            orchestrator = CycleOrchestrator(camera, screen, config)
            orchestrator.run()
    except KeyboardInterrupt:
        logging.info("[Main] Ended via keyboard interrupt")
    except DeviceError as e:
        logging.error(f"[Main] Camera failure: {e}")
        return 1
    except ReleaseErrors as e:
        logging.error(f"[Main] Cleanup incomplete: {e}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
