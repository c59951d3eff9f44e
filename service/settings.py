"""Configuration management using Pydantic Settings."""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

VERSION = '0.1.0'

MIGRATIONS_DIR = Path(__file__).resolve().parent / 'migrations'


class Settings(BaseSettings):
    """Application settings loaded from DM_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix='DM_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
    )

    # Database
    db_path: Path = Path('dm.db')
    migrations_dir: Path = MIGRATIONS_DIR

    # HTTP
    http_host: str = '127.0.0.1'
    http_port: int = 7001
    http_timeout: float = 5.0

    # Logging
    log_level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR'] = 'INFO'
    log_format: Literal['json', 'console'] = 'console'


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings (tests change the environment)."""
    global _settings
    _settings = None
