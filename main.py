"""
Description:
Main entry point for the yaml-nested converter.

Handles configuration loading, logging setup, and running one conversion.
"""

import logging
import sys

import yaml

from yaml_nested.config import get_config
from yaml_nested.converter import DocumentConverter
from yaml_nested.exceptions import ConversionError


def setup_logging(level: str):
    root = logging.getLogger()
    # Remove default handlers
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    # Console handler; stdout is reserved for the converted document
    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(logging.Formatter("%(asctime)s %(levelname)-5s %(name)s: %(message)s"))
    root.addHandler(ch)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


def main():
    try:
        cfg = get_config()
    except (FileNotFoundError, ValueError):
        logging.exception("Could not load configuration")
        sys.exit(1)

    setup_logging(cfg.logging.level)
    logging.info("Starting yaml-nested converter in %s mode", cfg.converter.mode)

    converter = DocumentConverter(cfg)
    try:
        converter.run()
    except KeyboardInterrupt:
        logging.info("Converter interrupted by user, shutting down")
    except (ConversionError, TypeError, ValueError, OSError, yaml.YAMLError):
        logging.exception("Fatal error in converter")
        sys.exit(1)


if __name__ == '__main__':
    main()
