"""
Entry point for the webcam sign-language recognizer.

Usage examples:
    python -m signbridge                          # config.json in the working dir
    python -m signbridge --config my.json --no-speech
    signbridge --camera 1 --model models/hand_landmarker.task
"""

from __future__ import annotations

import argparse
import logging
import sys

from .helpers import SignBridgeError, load_config, setup_logging

logger = logging.getLogger("signbridge")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sign-language gesture to speech")
    parser.add_argument("--config", default="config.json", help="Path to the JSON config file.")
    parser.add_argument("--camera", type=int, help="Camera index (overrides config).")
    parser.add_argument("--model", help="Path to hand_landmarker.task (overrides config).")
    parser.add_argument("--no-speech", action="store_true", help="Start with speech output off.")
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging level (overrides config).",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> dict:
    cfg = load_config(args.config)
    if args.camera is not None:
        cfg["camera"]["index"] = args.camera
    if args.model:
        cfg["tracker"]["model_path"] = args.model
    if args.no_speech:
        cfg["speech"]["enabled"] = False
    if args.log_level:
        cfg["logging"]["level"] = args.log_level
    return cfg


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level or "INFO")
    cfg = build_config(args)
    logging.getLogger().setLevel(cfg["logging"].get("level", "INFO"))

    from .main_loop import run

    try:
        run(cfg)
    except SignBridgeError as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    return 0


if __name__ == "__main__":
    sys.exit(main())
