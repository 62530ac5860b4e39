"""
Settings - Parse connection values for parsebone.

Settings are loaded once at startup and passed explicitly to build_config()
and ModelRegistry. Two sources are supported:

  1. Environment variables, optionally read from a .env file (load_settings)
  2. The "parse" block of an application config.json (settings_from_config)

Settings reference:
  PARSE_API_URL   Base REST URL (default: https://api.parse.com/1/)
  PARSE_APP_ID    Sent as X-Parse-Application-Id
  PARSE_API_KEY   Sent as X-Parse-REST-API-Key
  PARSE_DEBUG     Whether the restapi transport prints requests (default: False).
                  true/1/yes/on (any case) enable it, anything else disables it.
"""

import os
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    "PARSE_API_URL": "https://api.parse.com/1/",
    "PARSE_DEBUG": False,
}

# Parse's built-in classes live at the API root instead of under classes/
BUILTIN_CLASSES = (
    "installations",
    "sessions",
    "roles",
    "users",
    "files",
    "events",
    "functions",
    "jobs",
    "push",
)


@dataclass
class ParseSettings:
    api_url: str = DEFAULT_SETTINGS["PARSE_API_URL"]
    debug: bool = DEFAULT_SETTINGS["PARSE_DEBUG"]
    app_id: str = ""
    api_key: str = ""

    def validate(self) -> bool:
        """Log every missing required value. Returns True when all are set."""
        missing = []
        if not self.api_url:
            missing.append("PARSE_API_URL")
        if not self.app_id:
            missing.append("PARSE_APP_ID")
        if not self.api_key:
            missing.append("PARSE_API_KEY")

        for name in missing:
            logger.error("Missing required setting: %s", name)

        return not missing


TRUE_VALUES = ("true", "1", "yes", "on")


def _as_bool(value: Any) -> bool:
    """True for True, 1 and "true" / "1" / "yes" / "on" (any case). Anything else is False."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_VALUES


def load_settings(env_file: str = "./.env") -> ParseSettings:
    """Build ParseSettings from the environment.

    Args:
        env_file: Path to a .env file. If the file exists, it is loaded via
                  python-dotenv. Otherwise, falls back to system environment.
    """
    env_path = Path(env_file)
    if env_path.exists():
        load_dotenv(env_path)
        logger.info("Loaded configuration from: %s", env_file)
    else:
        logger.warning("%s not found, using defaults/environment", env_file)

    return ParseSettings(
        api_url=os.getenv("PARSE_API_URL", DEFAULT_SETTINGS["PARSE_API_URL"]),
        debug=_as_bool(os.getenv("PARSE_DEBUG", str(DEFAULT_SETTINGS["PARSE_DEBUG"]))),
        app_id=os.getenv("PARSE_APP_ID", ""),
        api_key=os.getenv("PARSE_API_KEY", ""),
    )


def settings_from_config(config: Optional[Dict[str, Any]]) -> Optional[ParseSettings]:
    """Read the "parse" block of an application config.

    Expected shape:
        {"parse": {"api-url": ..., "debug": ..., "app-id": ..., "api-key": ...}}

    Returns None when the block is absent so build_config() can report it.
    """
    block = (config or {}).get("parse")
    if not block:
        return None

    return ParseSettings(
        api_url=block.get("api-url") or DEFAULT_SETTINGS["PARSE_API_URL"],
        debug=_as_bool(block.get("debug", DEFAULT_SETTINGS["PARSE_DEBUG"])),
        app_id=block.get("app-id") or "",
        api_key=block.get("api-key") or "",
    )


def load_config_file(path: str) -> Optional[ParseSettings]:
    """Load settings from a JSON config file with a "parse" block."""
    with open(path, "r") as f:
        config = json.load(f)
    return settings_from_config(config)
