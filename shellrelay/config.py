"""Configuration loading and validation using Pydantic."""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

CONFIG_PATH_ENV = "SHELLRELAY_CONFIG_PATH"
DEFAULT_CONFIG_PATH = "config.yaml"


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    heartbeat_interval: float = Field(default=25.0, ge=0)


class TerminalConfig(BaseModel):
    """Defaults for newly opened shells."""

    cols: int = Field(default=80, ge=1, le=1000)
    rows: int = Field(default=24, ge=1, le=500)
    term_type: str = "xterm-256color"


class SSHConfig(BaseModel):
    """Outbound SSH connection settings."""

    connect_timeout: float = Field(default=10.0, gt=0)
    keepalive_interval: float = Field(default=15.0, ge=0)
    keepalive_count_max: int = Field(default=3, ge=1)
    # Path to a known_hosts file; None accepts any host key
    known_hosts: str | None = None


class LimitsConfig(BaseModel):
    """Session limits. Zero means unlimited."""

    max_sessions_per_connection: int = Field(default=32, ge=0)
    max_total_sessions: int = Field(default=256, ge=0)
    max_input_size: int = Field(default=4096, ge=1)


class Config(BaseModel):
    """Application configuration."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    terminal: TerminalConfig = Field(default_factory=TerminalConfig)
    ssh: SSHConfig = Field(default_factory=SSHConfig)
    limits: LimitsConfig = Field(default_factory=LimitsConfig)


def load_config(config_path: Path | str = DEFAULT_CONFIG_PATH) -> Config:
    """Load configuration from a YAML file.

    A missing file yields the defaults.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        data = {}
    else:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    return Config.model_validate(data)


def config_path_from_env() -> str:
    """Config file path from the environment."""
    return os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH)
