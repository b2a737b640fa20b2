"""Global configuration: policy constants, wall ids, settings loading."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Current KitchenState schema revision
SCHEMA_VERSION = "0.1.0"

# Minimum empty distance between an object and each room wall (mm)
MIN_WALL_CLEARANCE_MM = 0

# Minimum free passage between two facing objects (mm)
MIN_PASSAGE_MM = 900

# Swing depth used for doors that carry no swing radius (mm)
DEFAULT_DOOR_SWING_MM = 900

# Recognised wall identifiers; north/south run along the room width,
# east/west along the room depth.
WALL_IDS = ("north", "south", "east", "west")

# All known configuration keys with defaults
_CONFIG_KEYS: dict[str, dict[str, Any]] = {
    "PLANFORGE_ENV": {"default": "development", "description": "Environment profile"},
    "PLANFORGE_LOG_LEVEL": {"default": "INFO", "description": "Logging level"},
    "PLANFORGE_MIN_PASSAGE_MM": {
        "default": MIN_PASSAGE_MM,
        "description": "Minimum passage width between objects (mm)",
    },
    "PLANFORGE_MIN_WALL_CLEARANCE_MM": {
        "default": MIN_WALL_CLEARANCE_MM,
        "description": "Minimum clearance between objects and walls (mm)",
    },
    "PLANFORGE_DOOR_SWING_MM": {
        "default": DEFAULT_DOOR_SWING_MM,
        "description": "Default door swing depth (mm)",
    },
}

_PROFILES: dict[str, dict[str, str]] = {
    "development": {
        "PLANFORGE_ENV": "development",
        "PLANFORGE_LOG_LEVEL": "DEBUG",
    },
    "production": {
        "PLANFORGE_ENV": "production",
        "PLANFORGE_LOG_LEVEL": "WARNING",
    },
    "testing": {
        "PLANFORGE_ENV": "testing",
        "PLANFORGE_LOG_LEVEL": "DEBUG",
    },
}


def wall_length(width: int, depth: int, wall_id: str) -> int | None:
    """Axis length of a wall, or None for an unrecognised wall id."""
    if wall_id in ("north", "south"):
        return width
    if wall_id in ("east", "west"):
        return depth
    return None


class ValidationPolicy(BaseModel):
    """Numeric policy constants consumed by the constraint rules."""

    min_wall_clearance_mm: int = Field(default=MIN_WALL_CLEARANCE_MM, ge=0)
    min_passage_mm: int = Field(default=MIN_PASSAGE_MM, ge=0)
    default_door_swing_mm: int = Field(default=DEFAULT_DOOR_SWING_MM, ge=0)

    @classmethod
    def from_config(cls, config: Mapping[str, str]) -> ValidationPolicy:
        """Build a policy from a flat settings mapping (see :func:`load_config`)."""
        return cls(
            min_wall_clearance_mm=int(
                config.get("PLANFORGE_MIN_WALL_CLEARANCE_MM", MIN_WALL_CLEARANCE_MM)
            ),
            min_passage_mm=int(config.get("PLANFORGE_MIN_PASSAGE_MM", MIN_PASSAGE_MM)),
            default_door_swing_mm=int(
                config.get("PLANFORGE_DOOR_SWING_MM", DEFAULT_DOOR_SWING_MM)
            ),
        )


def generate_env_template(project_path: str | Path) -> Path:
    """Create .env.example with all config keys.

    Returns the path to the generated file.
    """
    root = Path(project_path)
    env_path = root / ".env.example"

    lines = ["# planforge configuration template", "# Copy to .env and fill in values", ""]
    for key, info in _CONFIG_KEYS.items():
        lines.append(f"# {info['description']}")
        lines.append(f"{key}={info['default']}")
        lines.append("")

    env_path.write_text("\n".join(lines), encoding="utf-8")
    return env_path


def load_config(project_path: str | Path = ".") -> dict[str, str]:
    """Load merged config: defaults -> profile -> config.json -> .env -> env vars.

    Returns a flat dict of configuration values.
    """
    root = Path(project_path)
    config: dict[str, str] = {}

    # 1. Defaults
    for key, info in _CONFIG_KEYS.items():
        config[key] = str(info["default"])

    # 2. Profile overrides
    env_name = os.environ.get("PLANFORGE_ENV", config["PLANFORGE_ENV"])
    config.update(_PROFILES.get(env_name, {}))

    # 3. .planforge/config.json
    config_json = root / ".planforge" / "config.json"
    if config_json.is_file():
        try:
            data = json.loads(config_json.read_text(encoding="utf-8"))
            for k, v in data.items():
                config[k] = str(v)
        except (json.JSONDecodeError, OSError):
            logger.debug("Could not read config.json", exc_info=True)

    # 4. .env file
    env_file = root / ".env"
    if env_file.is_file():
        try:
            for line in env_file.read_text(encoding="utf-8").splitlines():
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                if "=" in line:
                    k, v = line.split("=", 1)
                    config[k.strip()] = v.strip()
        except OSError:
            logger.debug("Could not read .env", exc_info=True)

    # 5. Environment variables override all
    for key in _CONFIG_KEYS:
        env_val = os.environ.get(key)
        if env_val is not None:
            config[key] = env_val

    return config
