"""
Configuration management for the dataset page controller.
Handles loading, validating, and providing access to application settings.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass


@dataclass
class AppConfig:
    """Application configuration settings."""
    bind_addr: str
    debug: bool
    site_domain: str
    pattern_library_assets_path: str
    default_language: str


@dataclass
class ServicesConfig:
    """Upstream service URLs."""
    zebedee_url: str
    renderer_url: str
    dataset_api_url: str
    filter_api_url: str


@dataclass
class FeedbackConfig:
    """Feedback form and feedback API settings."""
    enable_feedback_api: bool
    feedback_api_url: str
    mail_host: str
    mail_port: str
    mail_user: str
    mail_password: str
    feedback_to: str
    feedback_from: str


def _env_flag(value: str) -> bool:
    return value.lower() == "true"


class ConfigManager:
    """Manages application configuration loading and access."""

    # Environment variable -> (section, key, converter)
    ENV_OVERRIDES = {
        "BIND_ADDR": ("app", "bind_addr", str),
        "DEBUG": ("app", "debug", _env_flag),
        "SITE_DOMAIN": ("app", "site_domain", str),
        "PATTERN_LIBRARY_ASSETS_PATH": ("app", "pattern_library_assets_path", str),
        "DEFAULT_LANGUAGE": ("app", "default_language", str),
        "ZEBEDEE_URL": ("services", "zebedee_url", str),
        "RENDERER_URL": ("services", "renderer_url", str),
        "DATASET_API_URL": ("services", "dataset_api_url", str),
        "FILTER_API_URL": ("services", "filter_api_url", str),
        "ENABLE_FEEDBACK_API": ("feedback", "enable_feedback_api", _env_flag),
        "FEEDBACK_API_URL": ("feedback", "feedback_api_url", str),
        "MAIL_HOST": ("feedback", "mail_host", str),
        "MAIL_PORT": ("feedback", "mail_port", str),
        "MAIL_USER": ("feedback", "mail_user", str),
        "MAIL_PASSWORD": ("feedback", "mail_password", str),
        "FEEDBACK_TO": ("feedback", "feedback_to", str),
        "FEEDBACK_FROM": ("feedback", "feedback_from", str),
    }

    def __init__(self, config_file: str = "dataset_controller_config.json"):
        self.config_file = Path(config_file)
        self._config: Optional[Dict[str, Any]] = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file and environment variables."""
        # Start with default config
        self._config = self._get_default_config()

        # Load base config from file
        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
                    self._merge_config(file_config)
            except (json.JSONDecodeError, FileNotFoundError):
                # Keep default config if file is invalid or not found
                pass

        # Override with environment variables
        self._override_with_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "app": {
                "bind_addr": ":20200",
                "debug": False,
                "site_domain": "localhost",
                "pattern_library_assets_path": "//cdn.ons.gov.uk/sixteens/f816ac8",
                "default_language": "en"
            },
            "services": {
                "zebedee_url": "http://localhost:8082",
                "renderer_url": "http://localhost:20010",
                "dataset_api_url": "http://localhost:22000",
                "filter_api_url": "http://localhost:22100"
            },
            "feedback": {
                "enable_feedback_api": False,
                "feedback_api_url": "http://localhost:23200/v1/feedback",
                "mail_host": "",
                "mail_port": "",
                "mail_user": "",
                "mail_password": "",
                "feedback_to": "",
                "feedback_from": ""
            }
        }

    def _merge_config(self, file_config: Dict[str, Any]) -> None:
        """Merge file configuration with current config."""
        if not isinstance(file_config, dict):
            return
        for section, values in file_config.items():
            if section in self._config:
                # Known sections only take key/value overrides
                if isinstance(values, dict):
                    self._config[section].update(values)
            else:
                self._config[section] = values

    def _override_with_env(self) -> None:
        """Override configuration with environment variables."""
        for env_name, (section, key, convert) in self.ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value:
                self._config[section][key] = convert(value)

    def get_app_config(self) -> AppConfig:
        """Get application configuration."""
        app_config = self._config["app"]
        return AppConfig(
            bind_addr=app_config["bind_addr"],
            debug=app_config["debug"],
            site_domain=app_config["site_domain"],
            pattern_library_assets_path=app_config["pattern_library_assets_path"],
            default_language=app_config["default_language"]
        )

    def get_services_config(self) -> ServicesConfig:
        """Get upstream services configuration."""
        services_config = self._config["services"]
        return ServicesConfig(
            zebedee_url=services_config["zebedee_url"],
            renderer_url=services_config["renderer_url"],
            dataset_api_url=services_config["dataset_api_url"],
            filter_api_url=services_config["filter_api_url"]
        )

    def get_feedback_config(self) -> FeedbackConfig:
        """Get feedback configuration."""
        feedback_config = self._config["feedback"]
        return FeedbackConfig(
            enable_feedback_api=feedback_config["enable_feedback_api"],
            feedback_api_url=feedback_config["feedback_api_url"],
            mail_host=feedback_config["mail_host"],
            mail_port=feedback_config["mail_port"],
            mail_user=feedback_config["mail_user"],
            mail_password=feedback_config["mail_password"],
            feedback_to=feedback_config["feedback_to"],
            feedback_from=feedback_config["feedback_from"]
        )

    def get_config(self) -> Dict[str, Any]:
        """Get raw configuration dictionary."""
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()


# Global configuration instance
config_manager = ConfigManager()


def get_app_config() -> AppConfig:
    """Get application configuration."""
    return config_manager.get_app_config()


def get_services_config() -> ServicesConfig:
    """Get upstream services configuration."""
    return config_manager.get_services_config()


def get_feedback_config() -> FeedbackConfig:
    """Get feedback configuration."""
    return config_manager.get_feedback_config()


def reload_config() -> None:
    """Reload configuration."""
    config_manager.reload()
