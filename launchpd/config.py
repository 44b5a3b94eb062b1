"""Runtime settings for launchpd

Settings are resolved from built-in defaults, then the optional
``config.yaml`` in the config directory, then environment variables.
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .api.exceptions import ConfigError
from .constants import (
    DEFAULT_CONFIG_DIR,
    DEFAULT_DOMAIN,
    DEFAULT_TIMEOUT,
    ENV_API_KEY,
    ENV_API_SECRET,
    ENV_CONFIG_DIR,
    ENV_DEBUG,
    ENV_DOMAIN,
    REGISTER_URL_TEMPLATE,
    SETTINGS_FILE,
    STATUS_URL_TEMPLATE,
)

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Resolved CLI settings"""
    domain: str = DEFAULT_DOMAIN
    api_url: Optional[str] = None
    api_key: Optional[str] = None
    api_secret: Optional[str] = None
    debug: bool = False
    timeout: float = DEFAULT_TIMEOUT
    config_dir: Path = field(default_factory=lambda: Path(DEFAULT_CONFIG_DIR).expanduser())

    def __post_init__(self):
        self.config_dir = Path(self.config_dir).expanduser()
        if not self.api_url:
            self.api_url = f"https://api.{self.domain}"
        self.api_url = self.api_url.rstrip("/")

    def site_url(self, subdomain: str) -> str:
        """Public URL of a deployed subdomain"""
        return f"https://{subdomain}.{self.domain}"

    @property
    def register_url(self) -> str:
        return REGISTER_URL_TEMPLATE.format(domain=self.domain)

    @property
    def status_url(self) -> str:
        return STATUS_URL_TEMPLATE.format(domain=self.domain)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, hiding the secret"""
        return {
            "domain": self.domain,
            "api_url": self.api_url,
            "api_key": self.api_key,
            "api_secret": "***" if self.api_secret else None,
            "debug": self.debug,
            "timeout": self.timeout,
            "config_dir": str(self.config_dir),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Settings':
        """Create from dictionary, ignoring unknown keys"""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.debug(f"Ignoring unknown settings: {', '.join(sorted(unknown))}")
        return cls(**{k: v for k, v in data.items() if k in known and v is not None})

    @classmethod
    def load(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        """Resolve settings from defaults, config file and environment

        Args:
            environ: Environment mapping (defaults to ``os.environ``)

        Returns:
            Settings instance
        """
        env = os.environ if environ is None else environ

        config_dir = Path(env.get(ENV_CONFIG_DIR) or DEFAULT_CONFIG_DIR).expanduser()
        data = load_settings_file(config_dir / SETTINGS_FILE)
        data["config_dir"] = config_dir

        if env.get(ENV_DOMAIN):
            data["domain"] = env[ENV_DOMAIN]
            # An explicit domain override wins over a file-level api_url
            data.pop("api_url", None)
        if env.get(ENV_API_KEY):
            data["api_key"] = env[ENV_API_KEY]
        if env.get(ENV_API_SECRET):
            data["api_secret"] = env[ENV_API_SECRET]
        if env.get(ENV_DEBUG):
            data["debug"] = env[ENV_DEBUG].strip().lower() in _TRUE_VALUES

        if "timeout" in data:
            try:
                data["timeout"] = float(data["timeout"])
            except (TypeError, ValueError):
                raise ConfigError(f"Invalid timeout value: {data['timeout']!r}")

        return cls.from_dict(data)


def load_settings_file(path: Path) -> Dict[str, Any]:
    """Load the optional YAML settings file

    Environment variables referenced in the file are expanded before parsing.

    Args:
        path: Path to config.yaml

    Returns:
        Parsed mapping (empty when the file does not exist)
    """
    if not path.exists():
        return {}

    try:
        content = os.path.expandvars(path.read_text(encoding="utf-8"))
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid settings file {path}: {e}")
    except OSError as e:
        raise ConfigError(f"Cannot read settings file {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")

    logger.debug(f"Loaded settings from {path}")
    return dict(data)
