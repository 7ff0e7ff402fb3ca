"""Configuration system with layered loading and validation.

Implements a hierarchical configuration system with the following precedence:
1. Default values (lowest priority)
2. JSON configuration file (config/assessment.json)
3. Environment variables (a .env file is honoured)
4. Command-line arguments (highest priority)

Configuration is deep-merged across all sources, allowing partial overrides
at any level of the configuration hierarchy.
"""
from __future__ import annotations

import argparse
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv
from loguru import logger

from core.exceptions import ConfigurationError

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class AssessmentConfig:
    """Pronunciation assessment configuration.

    Attributes:
        language: Language of the reference text (e.g. "en-US", "zh-CN")
        enable_miscue: Detect omissions and insertions against the reference
        segmented_languages: Languages whose reference text needs segmentation
        pair_substitutions: Report substituted words as modified instead of deleted + inserted
    """
    language: str = "en-US"
    enable_miscue: bool = True
    segmented_languages: Tuple[str, ...] = ("zh-CN", "ja-JP")
    pair_substitutions: bool = False

    def __post_init__(self):
        if not self.language:
            raise ConfigurationError("language must not be empty")
        # JSON sources deliver lists
        object.__setattr__(self, "segmented_languages", tuple(self.segmented_languages))


@dataclass(frozen=True)
class SessionConfig:
    """Session runtime configuration.

    Attributes:
        event_queue_size: Capacity of the bounded recognition event queue
        completion_timeout_s: Maximum wait for the end of a session (None waits forever)
        log_dir: Directory for per-session log files (None disables them)
    """
    event_queue_size: int = 256
    completion_timeout_s: Optional[float] = None
    log_dir: Optional[str] = None

    def __post_init__(self):
        if self.event_queue_size <= 0:
            raise ConfigurationError(f"Invalid event_queue_size: {self.event_queue_size}")
        if self.completion_timeout_s is not None and self.completion_timeout_s <= 0:
            raise ConfigurationError(f"Invalid completion_timeout_s: {self.completion_timeout_s}")


@dataclass(frozen=True)
class EssayScorerConfig:
    """Chat-based essay scorer configuration.

    Attributes:
        resource_name: Azure OpenAI resource name
        deployment: Chat deployment name
        api_version: API version query parameter
        api_key: API key (usually from the environment)
        timeout_s: HTTP timeout in seconds
        default_title: Essay title used when none is given
    """
    resource_name: str = ""
    deployment: str = ""
    api_version: str = "2024-02-01"
    api_key: str = ""
    timeout_s: float = 30.0
    default_title: str = "the season of the fall"

    def __post_init__(self):
        if self.timeout_s <= 0:
            raise ConfigurationError(f"Invalid timeout_s: {self.timeout_s}")

    @property
    def enabled(self) -> bool:
        return bool(self.resource_name and self.deployment and self.api_key)


@dataclass(frozen=True)
class AppConfig:
    """Complete application configuration."""
    assessment: AssessmentConfig
    session: SessionConfig
    essay: EssayScorerConfig
    debug: bool = False
    log_level: str = "INFO"

    def __post_init__(self):
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid log_level: {self.log_level}")


class ConfigLoader:
    """Centralized configuration loader with validation and hierarchy."""

    CONFIG_FILE = "assessment.json"

    def __init__(self, config_dir: Path = Path("config")):
        self.config_dir = config_dir

    def load(self, argv: List[str]) -> Tuple[AppConfig, List[str]]:
        """Load configuration with proper hierarchy: defaults → file → env → CLI.

        Args:
            argv: Command-line arguments to parse

        Returns:
            Tuple of (AppConfig instance, unknown CLI arguments)
        """
        config_dict = self._get_defaults()
        self._deep_update(config_dict, self._load_json_config())
        self._deep_update(config_dict, self._load_env_overrides())
        cli_overrides, unknown_args = self._parse_cli_args(argv)
        self._deep_update(config_dict, cli_overrides)
        return self._build_config(config_dict), unknown_args

    def _get_defaults(self) -> Dict[str, Any]:
        return {
            "assessment": {
                "language": "en-US",
                "enable_miscue": True,
                "segmented_languages": ["zh-CN", "ja-JP"],
                "pair_substitutions": False,
            },
            "session": {
                "event_queue_size": 256,
                "completion_timeout_s": None,
                "log_dir": None,
            },
            "essay": {
                "resource_name": "",
                "deployment": "",
                "api_version": "2024-02-01",
                "api_key": "",
                "timeout_s": 30.0,
                "default_title": "the season of the fall",
            },
            "debug": False,
            "log_level": "INFO",
        }

    def _load_json_config(self) -> Dict[str, Any]:
        """Load the optional JSON configuration file."""
        file_path = self.config_dir / self.CONFIG_FILE
        if not file_path.exists():
            return {}
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Failed to load {file_path}: {e}")
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{file_path} must contain a JSON object")
        return data

    def _load_env_overrides(self) -> Dict[str, Any]:
        """Load configuration overrides from environment variables.

        Supported environment variables:
        - ASSESSMENT_LANGUAGE: Reference text language
        - ASSESSMENT_ENABLE_MISCUE: Enable/disable miscue detection
        - AZURE_OPENAI_RESOURCE / AZURE_OPENAI_DEPLOYMENT /
          AZURE_OPENAI_API_VERSION / AZURE_OPENAI_API_KEY: Essay scorer
        - DEBUG: Enable debug mode
        - LOG_LEVEL: Set logging level
        """
        load_dotenv()
        overrides: Dict[str, Any] = {}

        language = os.getenv("ASSESSMENT_LANGUAGE")
        if language:
            overrides.setdefault("assessment", {})["language"] = language

        if os.getenv("ASSESSMENT_ENABLE_MISCUE") is not None:
            overrides.setdefault("assessment", {})["enable_miscue"] = self._env_bool("ASSESSMENT_ENABLE_MISCUE")

        essay_env = {
            "resource_name": "AZURE_OPENAI_RESOURCE",
            "deployment": "AZURE_OPENAI_DEPLOYMENT",
            "api_version": "AZURE_OPENAI_API_VERSION",
            "api_key": "AZURE_OPENAI_API_KEY",
        }
        for key, env_name in essay_env.items():
            value = os.getenv(env_name)
            if value:
                overrides.setdefault("essay", {})[key] = value

        if self._env_bool("DEBUG"):
            overrides["debug"] = True

        log_level = os.getenv("LOG_LEVEL")
        if log_level:
            overrides["log_level"] = log_level.upper()

        return overrides

    def _parse_cli_args(self, argv: List[str]) -> Tuple[Dict[str, Any], List[str]]:
        """Parse CLI arguments.

        Returns:
            Tuple of (overrides dictionary, unknown arguments)
        """
        parser = argparse.ArgumentParser(description="Read-aloud pronunciation assessment")
        parser.add_argument("--language", help="Reference text language (e.g. en-US, zh-CN)")
        parser.add_argument("--no-miscue", action="store_true", help="Disable omission/insertion detection")
        parser.add_argument(
            "--pair-substitutions",
            action="store_true",
            help="Report substituted words as modified instead of omitted + inserted",
        )
        parser.add_argument("--essay-title", help="Title used for content scoring")
        parser.add_argument("--session-log-dir", help="Directory for per-session log files")
        parser.add_argument("--debug", action="store_true", help="Enable debug mode")
        parser.add_argument("--log-level", choices=list(LOG_LEVELS), help="Set logging level")

        known, unknown = parser.parse_known_args(argv)

        overrides: Dict[str, Any] = {}
        if known.language:
            overrides.setdefault("assessment", {})["language"] = known.language
        if known.no_miscue:
            overrides.setdefault("assessment", {})["enable_miscue"] = False
        if known.pair_substitutions:
            overrides.setdefault("assessment", {})["pair_substitutions"] = True
        if known.essay_title:
            overrides.setdefault("essay", {})["default_title"] = known.essay_title
        if known.session_log_dir:
            overrides.setdefault("session", {})["log_dir"] = known.session_log_dir
        if known.debug:
            overrides["debug"] = True
        if known.log_level:
            overrides["log_level"] = known.log_level

        return overrides, unknown

    def _build_config(self, config_dict: Dict[str, Any]) -> AppConfig:
        """Build and validate the final configuration object.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        try:
            return AppConfig(
                assessment=AssessmentConfig(**config_dict.get("assessment", {})),
                session=SessionConfig(**config_dict.get("session", {})),
                essay=EssayScorerConfig(**config_dict.get("essay", {})),
                debug=config_dict.get("debug", False),
                log_level=config_dict.get("log_level", "INFO"),
            )
        except TypeError as e:
            raise ConfigurationError(f"Unknown configuration key: {e}") from e

    @staticmethod
    def _env_bool(name: str, default: bool = False) -> bool:
        """Parse boolean from environment variable ("1", "true", "yes", "y", "on")."""
        val = os.getenv(name)
        if val is None:
            return default
        return val.strip().lower() in {"1", "true", "yes", "y", "on"}

    @staticmethod
    def _deep_update(target: Dict[str, Any], updates: Dict[str, Any]) -> None:
        """Recursively update mapping 'target' with 'updates' without clobbering nested dicts."""
        for key, new_val in updates.items():
            if isinstance(new_val, dict) and isinstance(target.get(key), dict):
                ConfigLoader._deep_update(target[key], new_val)  # type: ignore[index]
            else:
                target[key] = new_val


def parse_app_args(argv: List[str]) -> Tuple[AppConfig, List[str]]:
    """Convenience function for creating a ConfigLoader and loading configuration."""
    loader = ConfigLoader()
    return loader.load(argv)


__all__ = [
    "AppConfig",
    "AssessmentConfig",
    "SessionConfig",
    "EssayScorerConfig",
    "ConfigLoader",
    "parse_app_args",
]
