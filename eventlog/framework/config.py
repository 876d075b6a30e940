"""
Configuration for the telemetry core.

Provides typed configuration classes with environment variable
injection and validation.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Any

from eventlog.utils.errors import ConfigurationError


DEFAULT_REDACTION_MARKER = "<REDACTED>"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class EmitterConfig:
    """Emitter behaviour configuration."""
    enabled: bool = field(default_factory=lambda: _env_flag("EVENTLOG_ENABLED", "true"))
    redaction_marker: str = field(default_factory=lambda: os.getenv("EVENTLOG_REDACTION_MARKER", DEFAULT_REDACTION_MARKER))
    fail_on_unbound_rule: bool = field(default_factory=lambda: _env_flag("EVENTLOG_FAIL_ON_UNBOUND_RULE", "true"))

    def __post_init__(self):
        if not self.redaction_marker:
            raise ConfigurationError(
                "Redaction marker must not be empty",
                config_key="EVENTLOG_REDACTION_MARKER",
                config_value=self.redaction_marker,
            )


@dataclass
class ObservabilityConfig:
    """Observability configuration."""
    log_level: str = field(default_factory=lambda: os.getenv("EVENTLOG_LOG_LEVEL", "info"))
    log_format: str = field(default_factory=lambda: os.getenv("EVENTLOG_LOG_FORMAT", "json"))
    metrics_enabled: bool = field(default_factory=lambda: _env_flag("EVENTLOG_METRICS_ENABLED", "true"))

    def __post_init__(self):
        if self.log_level.lower() not in ["debug", "info", "warning", "error", "critical"]:
            raise ConfigurationError(
                f"Invalid log level: {self.log_level}",
                config_key="EVENTLOG_LOG_LEVEL",
                config_value=self.log_level,
            )
        if self.log_format not in ["json", "console"]:
            raise ConfigurationError(
                f"Invalid log format: {self.log_format}",
                config_key="EVENTLOG_LOG_FORMAT",
                config_value=self.log_format,
            )


@dataclass
class TelemetryConfig:
    """Top-level telemetry configuration."""
    service_name: str
    debug: bool = field(default_factory=lambda: _env_flag("EVENTLOG_DEBUG", "false"))

    emitter: EmitterConfig = field(default_factory=EmitterConfig)
    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.service_name:
            raise ConfigurationError("service_name is required", config_key="service_name")

    @classmethod
    def from_env(cls, service_name: str) -> "TelemetryConfig":
        """Create configuration from environment variables."""
        return cls(service_name=service_name)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "service_name": self.service_name,
            "debug": self.debug,
            "emitter": {
                "enabled": self.emitter.enabled,
                "redaction_marker": self.emitter.redaction_marker,
                "fail_on_unbound_rule": self.emitter.fail_on_unbound_rule,
            },
            "observability": {
                "log_level": self.observability.log_level,
                "log_format": self.observability.log_format,
                "metrics_enabled": self.observability.metrics_enabled,
            },
        }
