"""Configuration management for podlink.

Supports TOML configuration format with auto-discovery. The URI scheme is
fixed and deliberately not part of the configuration.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, replace
from pathlib import Path

CONFIG_FILENAME = "podlink.toml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ServerConfig:
    """Intake server configuration."""

    host: str = "127.0.0.1"
    port: int = 8765

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"


@dataclass
class ClientConfig:
    """Forwarding client configuration."""

    timeout: float = 5.0


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    logging: LoggingConfig
    client: ClientConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for podlink.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls.default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def default(cls) -> Config:
        """Create config with all defaults."""
        return cls(server=ServerConfig(), logging=LoggingConfig(), client=ClientConfig())

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        return cls(
            server=cls._parse_server(data.get("server")),
            logging=cls._parse_logging(data.get("logging")),
            client=cls._parse_client(data.get("client")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8765)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_logging(cls, data: object) -> LoggingConfig:
        if data is None:
            return LoggingConfig()

        if not isinstance(data, dict):
            raise ValueError("logging section must be a dictionary")

        level = data.get("level", "INFO")
        if not isinstance(level, str):
            raise ValueError("logging.level must be a string")
        level = level.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"logging.level must be one of: {', '.join(LOG_LEVELS)}")

        return LoggingConfig(level=level)

    @classmethod
    def _parse_client(cls, data: object) -> ClientConfig:
        if data is None:
            return ClientConfig()

        if not isinstance(data, dict):
            raise ValueError("client section must be a dictionary")

        timeout = data.get("timeout", 5.0)
        if not isinstance(timeout, int | float) or isinstance(timeout, bool):
            raise ValueError("client.timeout must be a number")
        if timeout <= 0:
            raise ValueError("client.timeout must be positive")

        return ClientConfig(timeout=float(timeout))

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        log_level: str | None = None,
    ) -> Config:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            log_level: Override logging.level

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        logging_config = self.logging
        if log_level is not None:
            logging_config = replace(self.logging, level=log_level.upper())

        return replace(self, server=server, logging=logging_config)
