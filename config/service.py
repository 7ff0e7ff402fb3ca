"""Configuration service facade for simplified configuration access.

Provides a flat, read-only view over the nested AppConfig so client code
does not reach through several attribute levels.
"""
from __future__ import annotations

from typing import Any, Optional, Tuple

from config.config import AppConfig, ConfigLoader


class ConfigurationService:
    """Facade for application configuration management.

    Example:
        config_service = ConfigurationService(config)
        language = config_service.language  # Instead of config.assessment.language
    """

    def __init__(self, config: AppConfig):
        self._config = config

    # Assessment configuration shortcuts
    @property
    def language(self) -> str:
        return self._config.assessment.language

    @property
    def enable_miscue(self) -> bool:
        return self._config.assessment.enable_miscue

    @property
    def segmented_languages(self) -> Tuple[str, ...]:
        return self._config.assessment.segmented_languages

    @property
    def pair_substitutions(self) -> bool:
        return self._config.assessment.pair_substitutions

    # Session configuration
    @property
    def event_queue_size(self) -> int:
        return self._config.session.event_queue_size

    @property
    def completion_timeout_s(self) -> Optional[float]:
        return self._config.session.completion_timeout_s

    @property
    def session_log_dir(self) -> Optional[str]:
        return self._config.session.log_dir

    # Essay scorer configuration
    @property
    def essay_enabled(self) -> bool:
        return self._config.essay.enabled

    @property
    def essay_title(self) -> str:
        return self._config.essay.default_title

    # General configuration
    @property
    def debug(self) -> bool:
        return self._config.debug

    @property
    def log_level(self) -> str:
        return self._config.log_level

    @property
    def raw_config(self) -> AppConfig:
        """Underlying AppConfig instance for direct access."""
        return self._config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary for session logs.

        The essay scorer API key is never included.
        """
        essay = self._config.essay
        return {
            "assessment": {
                "language": self.language,
                "enable_miscue": self.enable_miscue,
                "segmented_languages": list(self.segmented_languages),
                "pair_substitutions": self.pair_substitutions,
            },
            "session": {
                "event_queue_size": self.event_queue_size,
                "completion_timeout_s": self.completion_timeout_s,
                "log_dir": self.session_log_dir,
            },
            "essay": {
                "resource_name": essay.resource_name,
                "deployment": essay.deployment,
                "api_version": essay.api_version,
                "enabled": self.essay_enabled,
                "default_title": self.essay_title,
            },
            "debug": self.debug,
            "log_level": self.log_level,
        }


class ConfigurationServiceFactory:
    """Static factory methods for common ConfigurationService creation patterns."""

    @staticmethod
    def create_from_args(args: list[str]) -> tuple[ConfigurationService, list[str]]:
        """Create configuration service from command-line arguments.

        Returns:
            Tuple of (ConfigurationService, unknown_args)
        """
        loader = ConfigLoader()
        config, unknown_args = loader.load(args)
        return ConfigurationService(config), unknown_args

    @staticmethod
    def create_from_config(config: AppConfig) -> ConfigurationService:
        return ConfigurationService(config)

    @staticmethod
    def create_default() -> ConfigurationService:
        loader = ConfigLoader()
        config, _ = loader.load([])
        return ConfigurationService(config)
