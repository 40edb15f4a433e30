"""
Configuration management using Pydantic Settings.

Architecture Decision: Why pydantic-settings?
- Type-safe configuration with validation
- Supports multiple sources (YAML, env vars, defaults)
- Easy to test with different configurations
"""

import logging
from pathlib import Path
from typing import Optional
import yaml

from pydantic import BaseModel, Field, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class DisplayPreferences(BaseModel):
    """
    User preferences for the command line output.

    Loaded from ``settings.yaml`` in the data directory.
    """
    model_config = ConfigDict(from_attributes=True)

    timestamp_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="strftime format for session start/end columns"
    )
    status_time_format: str = Field(default="%H:%M:%S", description="strftime format used by 'status'")
    sort_report: bool = Field(default=False, description="Rank report rows by total time")
    confirm_delete: bool = Field(default=True, description="Ask before deleting a project")


class Settings(BaseSettings):
    """
    Application settings with multiple sources:
    1. Default values (hardcoded)
    2. YAML config file (display preferences)
    3. Environment variables (highest priority)
    """
    model_config = SettingsConfigDict(
        env_prefix='PTRACKER_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'
    )

    # Application paths
    app_name: str = "ptracker"
    data_dir: Optional[Path] = None
    data_file_name: str = "data.json"
    log_file_name: str = "ptracker.log"
    config_file_name: str = "settings.yaml"

    # Logging
    log_level: str = "INFO"

    # User preferences
    preferences: DisplayPreferences = Field(default_factory=DisplayPreferences)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._init_paths()
        self._load_yaml_config()

    def _init_paths(self):
        """Resolve the data directory (~/.ptracker by default) and create it"""
        if self.data_dir is None:
            self.data_dir = Path.home() / f".{self.app_name.lower()}"
        self.data_dir = self.data_dir.expanduser()
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _load_yaml_config(self):
        """Load display preferences from the YAML file, if present"""
        config_file = self.config_file
        if config_file.exists():
            with open(config_file, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f)
                if config_data:
                    self.preferences = DisplayPreferences(**config_data)

    @property
    def data_file(self) -> Path:
        return self.data_dir / self.data_file_name

    @property
    def log_file(self) -> Path:
        return self.data_dir / self.log_file_name

    @property
    def config_file(self) -> Path:
        return self.data_dir / self.config_file_name

    @property
    def log_level_value(self) -> int:
        """Numeric logging level, falling back to INFO for unknown names"""
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings

