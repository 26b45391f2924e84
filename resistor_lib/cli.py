"""
CLI Module - Command-Line Entry Point
=====================================

Reads the color bands of a resistor photograph and prints the decoded value.

Usage:
    resistor-read photo.jpg
    resistor-read photo.jpg --json --config resistor_config.json
"""

import argparse
import json
import logging
import sys

from .config import DEFAULT_CONFIG_PATH, load_config
from .decoding import REASON_MESSAGES, failure_reason, format_ohms, is_standard_value
from .io import ImageError
from .pipeline import read_resistor

logger = logging.getLogger(__name__)


def setup_logging(debug=False):
    """Configure root logging for command-line use."""
    level = logging.DEBUG if debug else logging.INFO
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logging.basicConfig(level=level, handlers=[handler], force=True)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="resistor-read",
        description="Decode the color bands of an axial resistor photograph.",
    )
    parser.add_argument("image", help="Path to the resistor photograph")
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"JSON configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--mode",
        choices=["vote", "center", "mean"],
        help="Column classification mode (overrides the config)",
    )
    parser.add_argument("--width", type=int, help="Canonical sampling width (overrides the config)")
    parser.add_argument("--json", action="store_true", help="Print the reading as JSON")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.debug)

    config = load_config(args.config)
    if args.mode:
        config["sampling"]["mode"] = args.mode
    if args.width:
        config["preprocess"]["width"] = args.width

    try:
        reading = read_resistor(args.image, config=config)
    except FileNotFoundError as e:
        logger.error("%s", e)
        return 2
    except ImageError as e:
        logger.error("Could not read image %s: %s", args.image, e)
        return 2

    if args.json:
        out = reading.to_dict()
        if reading.decoded:
            out["display_value"], out["part_value"] = format_ohms(reading.value_ohms)
            out["is_standard_value"] = is_standard_value(reading.value_ohms)
        else:
            reason = failure_reason(reading.bands)
            out["reason"] = reason
            out["message"] = REASON_MESSAGES.get(reason)
        print(json.dumps(out, ensure_ascii=False))
    else:
        print(reading.describe())
        if reading.decoded and not is_standard_value(reading.value_ohms):
            logger.warning("%s is not an E24 value; check the band colors", reading.value_ohms)

    return 0


if __name__ == "__main__":
    sys.exit(main())
