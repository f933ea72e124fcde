"""osximg runtime configuration and settings."""
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from osximg.core.errors import ConfigError

VERSION = "v0.1.4"
USAGE = f"osximg version {VERSION}\n\nUsage: osximg {{list|clone|write}}"

# Config search paths (ordered by proximity to current run)
CONFIG_PATHS = [
    "./osximg.yml",
    str(Path.home() / ".config" / "osximg" / "osximg.yml"),
    "/etc/osximg/osximg.yml",
]

_ENV_PREFIX = "OSXIMG_"


def _describe_errors(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    )


class OsximgConfig(BaseModel):
    """External tools and copy settings.

    Attributes:
        diskutil: Disk enumeration tool (default: diskutil)
        plutil: Property list converter (default: plutil)
        dd: Block copy tool (default: dd)
        pv: Progress meter (default: pv)
        block_size: dd block size argument (default: 1m)
        use_sudo: Run the copy pipeline through sudo (default: True)
    """

    model_config = ConfigDict(extra='forbid', frozen=True)

    diskutil: str = "diskutil"
    plutil: str = "plutil"
    dd: str = "dd"
    pv: str = "pv"
    block_size: str = "1m"
    use_sudo: bool = True

    @field_validator('block_size', mode='before')
    @classmethod
    def block_size_as_text(cls, v):
        """YAML reads `block_size: 1048576` as an int; dd takes it either way."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OsximgConfig":
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid config: {_describe_errors(e)}") from e

    @classmethod
    def from_file(cls, path: Path) -> "OsximgConfig":
        """Load config from a YAML file. An empty file yields defaults."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return cls.from_dict(data)

    def with_env(self) -> "OsximgConfig":
        """Return a copy with OSXIMG_* environment variables applied.

        Environment variables:
            OSXIMG_DISKUTIL, OSXIMG_PLUTIL, OSXIMG_DD, OSXIMG_PV: tool paths
            OSXIMG_BLOCK_SIZE: dd block size
            OSXIMG_USE_SUDO: 1/0, true/false, yes/no, on/off
        """
        overrides = {
            name: os.environ[_ENV_PREFIX + name.upper()]
            for name in type(self).model_fields
            if _ENV_PREFIX + name.upper() in os.environ
        }
        if not overrides:
            return self
        return self.from_dict({**self.model_dump(), **overrides})


def find_config(config_path: Optional[str] = None) -> Optional[Path]:
    """Locate the active config file, or None when there is none."""
    if config_path:
        return Path(config_path)

    if env_config := os.environ.get("OSXIMG_CONFIG"):
        return Path(env_config)

    for path in CONFIG_PATHS:
        if Path(path).exists():
            return Path(path)

    return None


def load_config(config_path: Optional[str] = None) -> OsximgConfig:
    """Build the effective config: defaults, then file, then environment."""
    path = find_config(config_path)
    config = OsximgConfig.from_file(path) if path else OsximgConfig()
    return config.with_env()
