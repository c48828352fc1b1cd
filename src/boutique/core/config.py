# src/boutique/core/config.py
"""
APPLICATION CONFIGURATION
Read from environment variables, with per-platform defaults for the data directory.
"""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

SUPPORTED_LOCALES = ("fr", "en")
SUPPORTED_RENDER_MODES = ("html", "layout")


def default_data_path() -> Path:
    """Windows: %APPDATA%/Boutique, Linux/macOS: ~/.boutique"""
    if os.name == 'nt':
        appdata = os.getenv('APPDATA')
        if not appdata:
            appdata = os.path.expanduser('~\\AppData\\Roaming')
        return Path(appdata) / 'Boutique'
    return Path(os.path.expanduser('~')) / '.boutique'


class AppConfig(BaseModel):
    """Runtime configuration"""
    data_dir: Path = Field(default_factory=default_data_path)
    locale: str = "fr"
    render_mode: str = "html"
    log_level: str = "INFO"
    env: str = "production"

    @field_validator('locale')
    def locale_supported(cls, v):
        v = v.strip().lower()
        if v not in SUPPORTED_LOCALES:
            raise ValueError(f"Unsupported locale: {v}")
        return v

    @field_validator('render_mode')
    def render_mode_supported(cls, v):
        v = v.strip().lower()
        if v not in SUPPORTED_RENDER_MODES:
            raise ValueError(f"Unsupported render mode: {v}")
        return v

    @field_validator('log_level')
    def log_level_upper(cls, v):
        return v.strip().upper()

    @property
    def log_dir(self) -> Path:
        return self.data_dir / 'logs'

    @property
    def exports_dir(self) -> Path:
        return self.data_dir / 'exports'

    @property
    def is_development(self) -> bool:
        return self.env == "development"


def load_config(data_dir: Optional[Path] = None, **overrides) -> AppConfig:
    """
    Build the configuration from BOUTIQUE_* environment variables.

    Args:
        data_dir: Explicit data directory (wins over BOUTIQUE_DATA_DIR)
        overrides: Any other AppConfig field

    Returns:
        AppConfig instance
    """
    values = {}
    env_dir = os.getenv("BOUTIQUE_DATA_DIR")
    if data_dir is not None:
        values["data_dir"] = Path(data_dir)
    elif env_dir:
        values["data_dir"] = Path(env_dir)

    for field, var in (
        ("locale", "BOUTIQUE_LOCALE"),
        ("render_mode", "BOUTIQUE_RENDER_MODE"),
        ("log_level", "BOUTIQUE_LOG_LEVEL"),
        ("env", "ENV"),
    ):
        value = os.getenv(var)
        if value:
            values[field] = value

    values.update(overrides)
    return AppConfig(**values)
