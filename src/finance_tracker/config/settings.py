from dataclasses import dataclass
from pathlib import Path
import json
import os
from typing import Dict, Any

from finance_tracker.domain.errors import FinanceTrackerError

# Package defaults (bundled with code)
PACKAGE_CONFIG_DIR = Path(__file__).parent / "defaults"

# User configs (in project root, gitignored)
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
USER_CONFIG_DIR = PROJECT_ROOT / "config"

# Environment overrides, applied on top of whichever file was loaded
ENV_OVERRIDES = {
    "FINANCE_TRACKER_DB_PATH": "db_path",
    "FINANCE_TRACKER_LOG_LEVEL": "log_level",
}

class ConfigError(FinanceTrackerError, ValueError):
    """Raised when a config file exists but can't be used."""
    pass

class ConfigLoader:
    """Load configuration with user overrides"""

    @staticmethod
    def load_config(config_name: str) -> Dict[str, Any]:
        """
        Load config with fallback: user config -> default config

        Args:
            config_name: Name of the config file (e.g., 'settings.json')

        Raises:
            FileNotFoundError: If no config file was found
            ConfigError: If the file isn't a JSON object

        Returns:
            Parsed JSON configuration
        """
        user_config_path = USER_CONFIG_DIR / config_name
        if user_config_path.exists():
            return ConfigLoader._read_json(user_config_path)

        default_config_path = PACKAGE_CONFIG_DIR / config_name
        if default_config_path.exists():
            return ConfigLoader._read_json(default_config_path)

        raise FileNotFoundError(
            f"Config file '{config_name}' not found in:\n"
            f" - {user_config_path}\n"
            f" - {default_config_path}"
        )

    @staticmethod
    def _read_json(path: Path) -> Dict[str, Any]:
        with open(path) as f:
            try:
                config = json.load(f)
            except ValueError as e:
                raise ConfigError(f"Config file '{path}' is not valid JSON: {e}") from e
        if not isinstance(config, dict):
            raise ConfigError(f"Config file '{path}' must contain a JSON object")
        return config

    @staticmethod
    def load_settings_config() -> Dict[str, Any]:
        """Load application settings, with environment overrides applied"""
        config = dict(ConfigLoader.load_config('settings.json'))
        for env_name, key in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value and value.strip():
                config[key] = value.strip()
        return config

@dataclass(frozen=True)
class Settings:
    """Resolved application settings"""
    db_path: Path
    log_level: str = "WARNING"
    transactions_key: str = "transactions"
    theme_key: str = "appTheme"

    @classmethod
    def load(cls) -> "Settings":
        config = ConfigLoader.load_settings_config()
        if not config.get("db_path"):
            raise ConfigError("Config is missing 'db_path'")
        return cls(
            db_path=Path(config["db_path"]),
            log_level=str(config.get("log_level", cls.log_level)),
            transactions_key=config.get("transactions_key", cls.transactions_key),
            theme_key=config.get("theme_key", cls.theme_key),
        )
