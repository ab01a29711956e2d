"""
senml_config.py - Configuration for the SenML tools

Settings come from, lowest to highest priority:
    1. Defaults
    2. A YAML config file
    3. Environment variables (SENML_MAX_RECORDS)
    4. Command line flags (applied by the caller)

Example senml.yaml:

    max_records: 5000
    indent: 2
    now: 1320078429   # fixed reference time, Unix seconds
    verbose: false

Usage:
    from senml_config import load_config

    config = load_config('senml.yaml')
    records = parse_json(text, config.reference_time(), config.max_records)
"""

import math
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from senml_time import SenMLTime, convert_senml_time

DEFAULT_MAX_RECORDS = 100_000

ENV_MAX_RECORDS = 'SENML_MAX_RECORDS'


class ConfigError(ValueError):
    """Invalid configuration file or value."""
    pass


@dataclass
class SenMLConfig:
    """Settings for parsing and printing SenML packs."""
    max_records: Optional[int] = DEFAULT_MAX_RECORDS
    indent: Optional[int] = None
    now: Optional[float] = None
    verbose: bool = False

    def __post_init__(self):
        if self.max_records is not None:
            if isinstance(self.max_records, bool) or not isinstance(self.max_records, int) \
                    or self.max_records < 1:
                raise ConfigError(f"max_records must be a positive integer, got {self.max_records!r}")
        if self.indent is not None:
            if isinstance(self.indent, bool) or not isinstance(self.indent, int) or self.indent < 0:
                raise ConfigError(f"indent must be a non-negative integer, got {self.indent!r}")
        if self.now is not None:
            if isinstance(self.now, bool) or not isinstance(self.now, (int, float)) \
                    or not math.isfinite(self.now):
                raise ConfigError(f"now must be a finite number, got {self.now!r}")
        if not isinstance(self.verbose, bool):
            raise ConfigError(f"verbose must be a boolean, got {self.verbose!r}")

    def reference_time(self) -> SenMLTime:
        """The configured reference time, or the current time."""
        if self.now is None:
            return SenMLTime.now()
        result = convert_senml_time(float(self.now), SenMLTime(0))
        if result is None:
            raise ConfigError(f"now is out of range: {self.now!r}")
        return result

    def merged(self, **overrides: Any) -> 'SenMLConfig':
        """Copy with every override that is not None applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


def config_from_dict(data: Dict[str, Any]) -> SenMLConfig:
    """Build a config from a mapping, rejecting unknown keys."""
    known = {f.name for f in fields(SenMLConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
    return SenMLConfig(**data)


def apply_environment(config: SenMLConfig, environ: Optional[Dict[str, str]] = None) -> SenMLConfig:
    """Apply environment variable overrides."""
    environ = os.environ if environ is None else environ
    raw = environ.get(ENV_MAX_RECORDS)
    if raw:
        try:
            max_records = int(raw)
        except ValueError:
            raise ConfigError(f"{ENV_MAX_RECORDS} must be an integer, got {raw!r}") from None
        config = replace(config, max_records=max_records)
    return config


def load_config(path: Optional[Union[str, Path]] = None,
                environ: Optional[Dict[str, str]] = None) -> SenMLConfig:
    """
    Load configuration from a YAML file and the environment.

    Args:
        path: YAML config file; defaults only if None
        environ: Environment mapping (default: os.environ)

    Raises:
        ConfigError: the file is unreadable, not a mapping, or has invalid values
    """
    config = SenMLConfig()
    if path is not None:
        try:
            with open(path, 'r') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read config {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config {path} must be a YAML mapping")
        config = config_from_dict(data)

    return apply_environment(config, environ)
