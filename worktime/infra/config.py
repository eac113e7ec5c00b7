"""
Configuration management using Pydantic Settings.

Architecture Decision: Why pydantic-settings?
- Type-safe configuration with validation
- Supports multiple sources (YAML, env vars, defaults)
- Easy to test with different configurations
"""

import os
from pathlib import Path
from typing import Optional
import yaml

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from worktime.domain.models import UserPreferences


class Settings(BaseSettings):
    """
    Application settings with multiple sources:
    1. Default values (hardcoded)
    2. YAML config file
    3. Environment variables (highest priority)
    """
    model_config = SettingsConfigDict(
        env_prefix='WORKTIME_',
        env_file='.env',
        env_file_encoding='utf-8'
    )

    # Application paths
    app_name: str = "WorkTimeTracker"
    config_dir: Optional[Path] = None
    data_dir: Optional[Path] = None

    # Persistence
    state_file_name: str = "worktimetracker_state.json"

    # User preferences
    preferences: UserPreferences = Field(default_factory=UserPreferences)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._init_paths()
        self._load_yaml_config()

    def _init_paths(self):
        """Initialize default paths based on OS"""
        if self.config_dir is None:
            if os.name == 'nt':  # Windows
                base = Path(os.getenv('APPDATA'))
            else:  # Linux/Mac
                base = Path.home() / '.config'
            self.config_dir = base / self.app_name.lower()

        if self.data_dir is None:
            if os.name == 'nt':  # Windows
                base = Path(os.getenv('LOCALAPPDATA') or os.getenv('APPDATA'))
            else:  # Linux/Mac
                base = Path.home() / '.local' / 'share'
            self.data_dir = base / self.app_name.lower()

        # Create directories if they don't exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _load_yaml_config(self):
        """Load configuration from YAML file"""
        # First check in workspace config folder
        config_file = Path("config/settings.yaml")
        if not config_file.exists():
            # Then check in user's config directory
            config_file = self.config_dir / "settings.yaml"

        if config_file.exists():
            with open(config_file, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f)
                if config_data:
                    # Update preferences with YAML data
                    self.preferences = UserPreferences(**config_data)

    def save_preferences(self):
        """Save current preferences to YAML file"""
        config_file = self.config_dir / "settings.yaml"
        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.dump(self.preferences.model_dump(), f, default_flow_style=False)

    @property
    def state_file_path(self) -> Path:
        """The single JSON document holding the saved task list"""
        return self.data_dir / self.state_file_name

    @property
    def export_dir(self) -> Path:
        """Directory for auto-named text exports"""
        if self.preferences.export_directory:
            return Path(self.preferences.export_directory)
        return self.data_dir / 'exports'

    @property
    def log_dir(self) -> Path:
        return self.data_dir / 'logs'


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
