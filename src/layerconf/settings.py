"""Settings of the layerconf command line tool, loaded from layerconf.yaml."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import ClassVar, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, model_validator

from layerconf.common.enums import Destination

# Load environment variables from .env file(s)
load_dotenv()


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class StoreSettings(BaseModel):
    """Where the tool finds its configuration files and how it treats them.

    Every field has a default, so the tool runs without a settings file.
    """

    # Default search paths for the settings file
    DEFAULT_SETTINGS_PATHS: ClassVar[list[Path]] = [
        Path("layerconf.yaml"),
        Path("~/.config/layerconf/layerconf.yaml").expanduser(),
        Path("/etc/layerconf/layerconf.yaml"),
    ]

    # Files
    local_file: Path = Field(Path("config.ini"), description="Local (overriding) configuration file")
    global_file: Path | None = Field(None, description="Global (shared) configuration file")

    # Behavior
    strict: bool = Field(
        False, description="Reject malformed lines and values instead of skipping them"
    )
    default_destination: Destination = Field(
        Destination.LOCAL, description="Tier receiving writes when none is given"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    @model_validator(mode="after")
    def check_distinct_files(self) -> StoreSettings:
        if self.global_file is not None and self.global_file == self.local_file:
            raise ValueError("local_file and global_file cannot be the same file")
        return self

    @classmethod
    def load(cls, path: Path | None = None) -> StoreSettings:
        """Load settings from a YAML file.

        Args:
            path: Path to settings file (optional, searches default locations
                if None and falls back to defaults when nothing is found)

        Returns:
            Validated StoreSettings object

        Raises:
            FileNotFoundError: If a requested settings file does not exist
            RuntimeError: If the settings file cannot be parsed or is invalid
        """
        if path is None:
            # Check environment variable first
            env_path = os.environ.get("LAYERCONF_SETTINGS")
            if env_path:
                path = Path(env_path)
                if not path.exists():
                    raise FileNotFoundError(f"Settings file from LAYERCONF_SETTINGS not found: {path}")
            else:
                for default_path in cls.DEFAULT_SETTINGS_PATHS:
                    if default_path.exists():
                        path = default_path
                        break
                else:
                    return cls()
        elif not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")

        import yaml  # local import to avoid hard dep for callers

        try:
            raw = _interpolate_env(path.read_text())
            data = yaml.safe_load(raw)
        except Exception as exc:  # pragma: no cover
            raise RuntimeError(f"Unable to read settings YAML: {exc}") from exc

        try:
            return cls.model_validate(data or {})
        except ValidationError as err:
            raise RuntimeError(f"Invalid settings:\n{err}") from err
