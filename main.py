"""
Hand Gesture Recognition - Main Entry Point
Shows the webcam feed with the detected hand and "Closed Fist" / "Open Hand" label
"""
import argparse
import logging
import sys
import tkinter as tk

from handpose.core.config import LOG_LEVEL
from handpose.core.errors import ConfigError
from handpose.core.utils import setup_logging
from handpose.detectors import CVDetector
from handpose.detectors.cv import load_pipeline_config
from handpose.ui.camera_manager import CameraManager
from handpose.ui.gesture_app import GestureApp

logger = logging.getLogger("handpose")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Real-time hand gesture recognition')
    parser.add_argument('--camera', type=int, default=None,
                        help='Camera index (default: first camera that opens)')
    parser.add_argument('--config', default=None,
                        help='Pipeline config JSON (default: handpose_config.json if present)')
    parser.add_argument('--mirror', action='store_true', help='Mirror the camera image')
    parser.add_argument('--debug', action='store_true', help='Draw debug overlay')
    parser.add_argument('--log-level', default=LOG_LEVEL, help='Log level')
    parser.add_argument('--log-file', default=None, help='Rotating log file')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        config = load_pipeline_config(args.config)
    except ConfigError as e:
        logger.error("%s", e)
        return 2

    detector = CVDetector(config=config, show_debug=args.debug)
    camera = CameraManager(camera_index=args.camera, mirror=args.mirror)

    root = tk.Tk()
    app = GestureApp(root, detector=detector, camera=camera)
    if not app.start():
        app.on_close()
        return 1

    root.mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
