"""
Configuration management for the Umbra Builder.
Handles loading, validating, and providing access to builder settings.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass


@dataclass
class BuilderConfig:
    """Source loading configuration settings."""
    manifest_url: str
    fetch_timeout: float
    max_workers: int
    proxy_url: Optional[str]
    output_name: str
    allow_local_sources: bool
    max_cached_scripts: int


@dataclass
class AppConfig:
    """Application configuration settings."""
    host: str
    port: int
    debug: bool


@dataclass
class PostProcessConfig:
    """Default post-processing of compiled output."""
    minify: bool
    format: bool


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class ConfigManager:
    """Manages builder configuration loading and access."""

    def __init__(self, config_file: str = "builder_config.json"):
        self.config_file = Path(config_file)
        self._config: Optional[Dict[str, Any]] = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file and environment variables."""
        self._config = self._get_default_config()

        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
                    self._merge_config(file_config)
            except (json.JSONDecodeError, FileNotFoundError):
                # Keep default config if file is invalid or not found
                pass

        self._override_with_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "builder": {
                "manifest_url": "/api/api.json",
                "fetch_timeout": 10.0,
                "max_workers": 4,
                "proxy_url": None,
                "output_name": "umbra.js",
                "allow_local_sources": False,
                "max_cached_scripts": 32
            },
            "app": {
                "host": "0.0.0.0",
                "port": 22582,
                "debug": False
            },
            "postprocess": {
                "minify": False,
                "format": False
            }
        }

    def _merge_config(self, file_config: Dict[str, Any]) -> None:
        """Merge file configuration with current config."""
        for section, values in file_config.items():
            if section in self._config and isinstance(values, dict):
                self._config[section].update(values)
            else:
                self._config[section] = values

    def _override_with_env(self) -> None:
        """Override configuration with environment variables."""
        # Builder settings
        if os.getenv("BUILDER_MANIFEST_URL"):
            self._config["builder"]["manifest_url"] = os.getenv("BUILDER_MANIFEST_URL")

        if os.getenv("BUILDER_FETCH_TIMEOUT"):
            self._config["builder"]["fetch_timeout"] = float(os.getenv("BUILDER_FETCH_TIMEOUT"))

        if os.getenv("BUILDER_MAX_WORKERS"):
            self._config["builder"]["max_workers"] = int(os.getenv("BUILDER_MAX_WORKERS"))

        if os.getenv("BUILDER_PROXY_URL"):
            self._config["builder"]["proxy_url"] = os.getenv("BUILDER_PROXY_URL")

        if os.getenv("BUILDER_OUTPUT_NAME"):
            self._config["builder"]["output_name"] = os.getenv("BUILDER_OUTPUT_NAME")

        if os.getenv("BUILDER_ALLOW_LOCAL_SOURCES"):
            self._config["builder"]["allow_local_sources"] = _env_flag(os.getenv("BUILDER_ALLOW_LOCAL_SOURCES"))

        if os.getenv("BUILDER_MAX_CACHED_SCRIPTS"):
            self._config["builder"]["max_cached_scripts"] = int(os.getenv("BUILDER_MAX_CACHED_SCRIPTS"))

        # App settings
        if os.getenv("APP_HOST"):
            self._config["app"]["host"] = os.getenv("APP_HOST")

        if os.getenv("APP_PORT"):
            self._config["app"]["port"] = int(os.getenv("APP_PORT"))

        if os.getenv("APP_DEBUG"):
            self._config["app"]["debug"] = os.getenv("APP_DEBUG").lower() == "true"

        # Post-processing defaults
        if os.getenv("BUILDER_MINIFY"):
            self._config["postprocess"]["minify"] = _env_flag(os.getenv("BUILDER_MINIFY"))

        if os.getenv("BUILDER_FORMAT"):
            self._config["postprocess"]["format"] = _env_flag(os.getenv("BUILDER_FORMAT"))

    def get_builder_config(self) -> BuilderConfig:
        """Get builder configuration."""
        builder_config = self._config["builder"]
        return BuilderConfig(
            manifest_url=builder_config["manifest_url"],
            fetch_timeout=float(builder_config["fetch_timeout"]),
            max_workers=int(builder_config["max_workers"]),
            proxy_url=builder_config.get("proxy_url") or None,
            output_name=builder_config["output_name"],
            allow_local_sources=bool(builder_config.get("allow_local_sources", False)),
            max_cached_scripts=int(builder_config.get("max_cached_scripts", 32))
        )

    def get_app_config(self) -> AppConfig:
        """Get application configuration."""
        app_config = self._config["app"]
        return AppConfig(
            host=app_config["host"],
            port=app_config["port"],
            debug=app_config["debug"]
        )

    def get_postprocess_config(self) -> PostProcessConfig:
        """Get post-processing defaults."""
        pp_config = self._config["postprocess"]
        return PostProcessConfig(
            minify=bool(pp_config["minify"]),
            format=bool(pp_config["format"])
        )

    def get_config(self) -> Dict[str, Any]:
        """Get raw configuration dictionary."""
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    def save_config(self) -> None:
        """Save current configuration to file."""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)


# Global configuration instance
config_manager = ConfigManager()


def get_builder_config() -> BuilderConfig:
    """Get builder configuration."""
    return config_manager.get_builder_config()


def get_app_config() -> AppConfig:
    """Get application configuration."""
    return config_manager.get_app_config()


def get_postprocess_config() -> PostProcessConfig:
    """Get post-processing defaults."""
    return config_manager.get_postprocess_config()


def reload_config() -> None:
    """Reload configuration."""
    config_manager.reload()


def save_config() -> None:
    """Save configuration to file."""
    config_manager.save_config()
