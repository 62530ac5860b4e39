"""
parsebone CLI - print the request configuration for a Parse class.

Usage:
    parsebone ChatMessage                    # settings from ./.env
    parsebone users --env /path/.env         # built-in class, alternate .env
    parsebone ChatMessage --config app.json  # settings from a config.json "parse" block
    parsebone ChatMessage --debug            # verbose output
    parsebone --version
"""

import sys
import json
import logging
import argparse

from . import __version__
from .config import build_config
from .settings import load_config_file, load_settings


def mask(secret: str) -> str:
    """Hide all but the last 4 characters of a credential."""
    if not secret:
        return ""
    if len(secret) <= 4:
        return "*" * len(secret)
    return "*" * (len(secret) - 4) + secret[-4:]


def main(argv=None):
    """Parse CLI arguments and print the config as JSON."""
    parser = argparse.ArgumentParser(
        description="parsebone - Parse REST configuration for generic models"
    )
    parser.add_argument("class_name", nargs="?", help="Parse class name (e.g. ChatMessage, users)")
    parser.add_argument("--env", "-e", default="./.env", help="Path to .env file")
    parser.add_argument("--config", "-c", help="Path to a config.json with a \"parse\" block")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--show-secrets", action="store_true", help="Print credentials unmasked")
    parser.add_argument("--version", "-v", action="store_true", help="Show version and exit")

    args = parser.parse_args(argv)

    if args.version:
        print(f"parsebone {__version__}")
        sys.exit(0)

    if not args.class_name:
        parser.error("class_name is required")

    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(name)s - %(levelname)s - %(message)s'
        )

    if args.config:
        settings = load_config_file(args.config)
    else:
        settings = load_settings(args.env)

    if settings is not None:
        if args.debug:
            settings.debug = True
        if not settings.validate():
            print("Error: Parse configuration incomplete, check your .env or config.json")
            sys.exit(1)

    config = build_config(args.class_name, settings)
    if not config:
        print("Error: parse settings missing, check your configuration")
        sys.exit(1)

    output = config.to_dict()
    if not args.show_secrets:
        output["headers"] = {name: mask(value) for name, value in output["headers"].items()}

    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
