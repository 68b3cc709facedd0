"""Configuration service for managing FocusFlow CLI configuration.

This module provides the ConfigService class, the single source of truth for
configuration in FocusFlow CLI. It handles:

- Loading and saving config.json (created with defaults on first run)
- Dotted-key access for the ``config`` commands
- Environment overrides for the backend URL and API key
- Credential management for the signed-in user
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from json import JSONDecodeError
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel

from focusflow.models.config_models import AppConfig
from focusflow.utils.logger import get_logger

ENV_BACKEND_URL = "FOCUSFLOW_BACKEND_URL"
ENV_ANON_KEY = "FOCUSFLOW_ANON_KEY"


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self):
        """Initialize the config service."""

        self.config_dir = Path(user_config_dir("focusflow"))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir("focusflow"))
        self.credentials_path = self.data_dir / "credentials.json"

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def settings_path(self) -> Path:
        """Location of the timer duration settings file."""
        return self.config_dir / "timer_settings.json"

    def load_config(self) -> AppConfig:
        """Load configuration from storage."""
        if self._config is not None:
            return self._config  # Return cached config if already loaded

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run
            self._config = AppConfig()
            self.save_config()
        except Exception as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        self._apply_env_overrides(self._config)
        return self._config

    @staticmethod
    def _apply_env_overrides(config: AppConfig) -> None:
        url = os.environ.get(ENV_BACKEND_URL)
        if url:
            config.backend.url = url.strip().rstrip("/")
        anon_key = os.environ.get(ENV_ANON_KEY)
        if anon_key:
            config.backend.anon_key = anon_key

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        if self._config is None:
            raise RuntimeError("No configuration to save")

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self._config.model_dump_json(indent=4))

            self.config_path.chmod(0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        value: Any = self.config
        for k in key.split("."):
            if isinstance(value, BaseModel) and k in type(value).model_fields:
                value = getattr(value, k)
            else:
                return None
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not name an existing setting
            pydantic.ValidationError: If the value is not valid for the key
        """
        if self.get(key) is None or isinstance(self.get(key), BaseModel):
            raise KeyError(key)

        keys = key.split(".")
        config_dict = self.config.model_dump()
        current = config_dict
        for k in keys[:-1]:
            current = current[k]
        current[keys[-1]] = value

        self._config = AppConfig.model_validate(config_dict)
        self.save_config()
        get_logger().info("Config %s updated", key)

    def reset(self, key: str | None = None) -> None:
        """Reset configuration (or one key) to defaults."""
        if key is None:
            self._config = AppConfig()
            self.save_config()
            return

        default_value: Any = AppConfig()
        for k in key.split("."):
            default_value = getattr(default_value, k, None)
        if default_value is None:
            raise KeyError(key)
        self.set(key, default_value)

    def load_credentials(self) -> dict | None:
        """Load credentials of the signed-in user.

        Returns:
            dict with 'token', 'user_id' and optionally 'refresh_token', or None
        """
        if not self.credentials_path.exists():
            return None

        try:
            with open(self.credentials_path, encoding="utf-8") as f:
                return json.load(f)
        except JSONDecodeError:
            get_logger().warning("Ignoring corrupted credentials file %s", self.credentials_path)
            return None

    def save_credentials(
        self,
        access_token: str,
        user_id: str,
        refresh_token: str | None = None,
        email: str | None = None,
    ) -> None:
        """Save credentials for the signed-in user."""
        cred_data = {"token": access_token, "user_id": user_id}
        if refresh_token:
            cred_data["refresh_token"] = refresh_token
        if email:
            cred_data["email"] = email

        self.credentials_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.credentials_path, "w", encoding="utf-8") as f:
            json.dump(cred_data, f, indent=2)

        # Set secure file permissions
        self.credentials_path.chmod(0o600)

    def clear_credentials(self) -> None:
        """Forget the signed-in user."""
        if self.credentials_path.exists():
            self.credentials_path.unlink()


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
