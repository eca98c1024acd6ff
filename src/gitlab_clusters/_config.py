"""Configuration management for gitlab-clusters.

Supports:
- Environment variables (GITLAB_URL, GITLAB_TOKEN, etc.)
- Config file (~/.gitlab-clusters/config.toml)
- Programmatic configuration
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


DEFAULT_BASE_URL = "https://gitlab.com"
DEFAULT_TIMEOUT = 60.0
DEFAULT_MAX_RETRIES = 3

CONFIG_DIR = Path.home() / ".gitlab-clusters"
CONFIG_FILE = CONFIG_DIR / "config.toml"


@dataclass
class AuthConfig:
    """Authentication configuration from config file."""

    type: str | None = None  # "private_token", "oauth", or "job_token"
    token: str | None = None


@dataclass
class GitLabConfig:
    """Client configuration."""

    private_token: str | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES

    debug: bool = False
    verify_ssl: bool = True

    # From the [auth] section
    auth: AuthConfig = field(default_factory=AuthConfig)

    @classmethod
    def from_env(cls) -> GitLabConfig:
        """Load configuration from environment variables."""
        return cls(
            private_token=os.getenv("GITLAB_TOKEN"),
            base_url=os.getenv("GITLAB_URL", DEFAULT_BASE_URL),
            timeout=float(os.getenv("GITLAB_TIMEOUT", DEFAULT_TIMEOUT)),
            max_retries=int(os.getenv("GITLAB_MAX_RETRIES", DEFAULT_MAX_RETRIES)),
            debug=os.getenv("GITLAB_DEBUG", "").lower() in ("1", "true", "yes"),
            verify_ssl=os.getenv("GITLAB_VERIFY_SSL", "true").lower() not in ("0", "false", "no"),
        )

    @classmethod
    def from_file(cls, path: Path | None = None) -> GitLabConfig:
        """Load configuration from TOML file."""
        config_path = path or CONFIG_FILE

        if not config_path.exists():
            return cls()

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        auth_data = data.get("auth", {})
        auth_config = AuthConfig(
            type=auth_data.get("type"),
            token=auth_data.get("token"),
        )

        return cls(
            private_token=data.get("private_token"),
            base_url=data.get("url", DEFAULT_BASE_URL),
            timeout=float(data.get("timeout", DEFAULT_TIMEOUT)),
            max_retries=int(data.get("max_retries", DEFAULT_MAX_RETRIES)),
            debug=data.get("debug", False),
            verify_ssl=data.get("verify_ssl", True),
            auth=auth_config,
        )

    @classmethod
    def load(cls) -> GitLabConfig:
        """Load configuration with precedence: env > file > defaults."""
        config = cls.from_file()
        env_config = cls.from_env()

        if env_config.private_token:
            config.private_token = env_config.private_token
        if os.getenv("GITLAB_URL"):
            config.base_url = env_config.base_url
        if os.getenv("GITLAB_TIMEOUT"):
            config.timeout = env_config.timeout
        if os.getenv("GITLAB_MAX_RETRIES"):
            config.max_retries = env_config.max_retries
        if os.getenv("GITLAB_DEBUG"):
            config.debug = env_config.debug
        if os.getenv("GITLAB_VERIFY_SSL"):
            config.verify_ssl = env_config.verify_ssl

        return config


def save_config(config: dict[str, Any], path: Path | None = None) -> None:
    """Save configuration to TOML file.

    The file is chmod 0o600 since it may hold access tokens.
    """
    import tomli_w

    config_path = path or CONFIG_FILE
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    config_path.chmod(0o600)


def get_config_value(key: str) -> Any:
    """Get a single config value. ``auth.<name>`` reads the [auth] section."""
    config = GitLabConfig.load()
    if key.startswith("auth."):
        return getattr(config.auth, key[len("auth.") :], None)
    key_mapping = {
        "url": "base_url",
    }
    attr_name = key_mapping.get(key, key)
    return getattr(config, attr_name, None)


def set_config_value(key: str, value: Any) -> None:
    """Set a single config value in the config file.

    Dotted keys such as ``auth.token`` are written into their section.
    """
    config_path = CONFIG_FILE

    if config_path.exists():
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    else:
        data = {}

    if "." in key:
        section, name = key.split(".", 1)
        data.setdefault(section, {})[name] = value
    else:
        data[key] = value
    save_config(data, config_path)
