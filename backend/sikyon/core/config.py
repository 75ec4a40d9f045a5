"""Application settings and configuration management.

This module provides Pydantic-based settings management that loads
configuration from environment variables or a .env file. Settings include
the directory holding per-layer GeoJSON files, the file extensions that
count as layer files, an optional layer configuration file, CORS origins,
and the log level.

Example:
    Settings can be accessed via the cached get_settings() function:
        >>> from sikyon.core.config import get_settings
        >>> settings = get_settings()
        >>> print(settings.data_dir)

    Environment variables can override defaults:
        >>> DATA_DIR=/srv/sikyon/data
        >>> LAYER_CONFIG_FILE=/etc/sikyon/layers.json
        >>> LOG_LEVEL=DEBUG
"""

import functools
import pathlib

import pydantic_settings


class Settings(pydantic_settings.BaseSettings):
    """Runtime configuration pulled from environment variables or defaults.

    All settings can be overridden via environment variables or .env file.
    Settings are read once per process; changing the data directory or the
    layer configuration requires a restart.

    Attributes:
        data_dir: Directory with one GeoJSON file per layer.
        layer_file_suffixes: File extensions recognized as layer files.
        layer_config_file: Optional JSON file with a LayerConfig. When unset,
            the built-in configuration is used.
        allow_origins: List of allowed CORS origins.
        log_level: Minimum level for the stderr log sink.

    Example:
        Create settings with custom values:
            >>> settings = Settings(
            ...     data_dir=Path("/srv/sikyon/data"),
            ...     allow_origins=["https://survey.example.org"],
            ... )
    """

    data_dir: pathlib.Path = pathlib.Path("public/data")
    layer_file_suffixes: list[str] = [".geojson"]
    layer_config_file: pathlib.Path | None = None
    allow_origins: list[str] = ["http://localhost:3100"]
    log_level: str = "INFO"

    model_config = pydantic_settings.SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    def layer_path(self, layer_id: str) -> pathlib.Path | None:
        """Return the first existing file backing ``layer_id``, if any.

        Args:
            layer_id: Layer identifier (file name without extension).

        Returns:
            Path of the layer file, or None when no recognized file exists.
        """
        if not layer_id or pathlib.PurePath(layer_id).name != layer_id:
            return None
        for suffix in self.layer_file_suffixes:
            candidate = self.data_dir / f"{layer_id}{suffix}"
            if candidate.is_file():
                return candidate
        return None


@functools.lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded from environment variables or .env file and cached
    for the lifetime of the application. Subsequent calls return the same
    cached instance.

    Returns:
        Settings instance with all configuration values populated.
    """
    return Settings()
