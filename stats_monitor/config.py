"""
Configuration for the statistics monitor

Values come from, in priority order: command-line flags, environment
variables (STATS_MONITOR_*), built-in defaults.
"""
import logging
import os
import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from stats_monitor.errors import ConfigError

DEFAULT_URL = 'http://srv.msk01.gigacorp.local/_stats'
DEFAULT_INTERVAL = '1s'

# Seconds per Go-style duration unit
DURATION_UNITS = {
    'ns': 1e-9,
    'us': 1e-6,
    'µs': 1e-6,
    'μs': 1e-6,
    'ms': 1e-3,
    's': 1.0,
    'm': 60.0,
    'h': 3600.0,
}

_DURATION_PART_RE = re.compile(r'(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)')
_NUMBER_RE = re.compile(r'[+-]?(\d+(?:\.\d*)?|\.\d+)')


def parse_duration(text: str) -> float:
    """
    Parse a duration into seconds.

    Accepts Go-style durations ("500ms", "1s", "1m30s", "-1.5h") and bare
    numbers, which are taken as seconds ("2.5").

    Raises:
        ConfigError: if the text is not a valid duration
    """
    value = text.strip()
    if not value:
        raise ConfigError("empty duration")

    if _NUMBER_RE.fullmatch(value):
        return float(value)

    sign = 1.0
    if value[0] in '+-':
        sign = -1.0 if value[0] == '-' else 1.0
        value = value[1:]

    total = 0.0
    pos = 0
    while pos < len(value):
        match = _DURATION_PART_RE.match(value, pos)
        if not match:
            raise ConfigError(f"invalid duration {text!r}")
        total += float(match.group(1)) * DURATION_UNITS[match.group(2)]
        pos = match.end()

    if pos == 0:
        raise ConfigError(f"invalid duration {text!r}")

    return sign * total


class MonitorConfig(BaseModel):
    """Configuration for the poll driver"""

    # Environment-sourced defaults go through the same validators
    model_config = ConfigDict(validate_default=True)

    # Statistics endpoint
    url: str = Field(
        default_factory=lambda: os.getenv('STATS_MONITOR_URL', DEFAULT_URL)
    )

    # Pause between poll cycles
    interval_seconds: float = Field(
        default_factory=lambda: parse_duration(
            os.getenv('STATS_MONITOR_INTERVAL', DEFAULT_INTERVAL)
        )
    )

    # Upper bound on a single fetch
    timeout_seconds: float = 5.0

    # Consecutive fetch failures before the diagnostic is printed
    failure_threshold: int = 3

    log_level: str = Field(
        default_factory=lambda: os.getenv('STATS_MONITOR_LOG_LEVEL', 'WARNING')
    )

    @field_validator('url')
    @classmethod
    def validate_url(cls, v: str) -> str:
        v = v.strip()
        if not re.match(r'https?://[^/\s]+', v, re.IGNORECASE):
            raise ValueError(f"url must be an http(s) URL, got {v!r}")
        return v

    @field_validator('interval_seconds', 'timeout_seconds')
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @field_validator('failure_threshold')
    @classmethod
    def validate_threshold(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {v!r}")
        return level

    @classmethod
    def create(cls, **overrides: Any) -> 'MonitorConfig':
        """
        Build a config, turning validation failures into ConfigError.

        Args:
            **overrides: Field values; None values fall back to env/defaults

        Returns:
            MonitorConfig instance
        """
        values = {k: v for k, v in overrides.items() if v is not None}
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError(str(e)) from e

    @classmethod
    def from_args(cls, args: Any) -> 'MonitorConfig':
        """
        Build a config from parsed command-line arguments.

        Args:
            args: argparse Namespace with url, interval and log_level

        Returns:
            MonitorConfig instance
        """
        interval: Optional[float] = None
        if getattr(args, 'interval', None) is not None:
            interval = parse_duration(args.interval)

        return cls.create(
            url=getattr(args, 'url', None),
            interval_seconds=interval,
            log_level=getattr(args, 'log_level', None),
        )
