"""
Loading and saving of the contact form configuration file.

Configuration files are JSON documents validated against CONFIG_JSON_SCHEMA.
Values missing from a file fall back to DEFAULT_CONFIG; writes are atomic.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema

from .config import CONFIG_JSON_SCHEMA, DEFAULT_CONFIG, SCHEMA_VERSION, get_config_path
from .errors import ConfigError, ErrorCode
from .validation import ValidationRules

logger = logging.getLogger(__name__)

_RULE_KEYS = (
    "name_min_length",
    "name_max_length",
    "message_min_length",
    "message_max_length",
    "message_warn_length",
)


@dataclass(frozen=True)
class FormConfig:
    """Runtime configuration of the contact form."""

    rules: ValidationRules = field(default_factory=ValidationRules)
    send_delay_ms: int = DEFAULT_CONFIG["send_delay_ms"]
    log_level: str = DEFAULT_CONFIG["log_level"]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FormConfig:
        """Build a FormConfig from a (partial) configuration mapping."""
        merged = {**DEFAULT_CONFIG, **data}
        rules = ValidationRules(**{key: int(merged[key]) for key in _RULE_KEYS})

        if rules.name_min_length > rules.name_max_length:
            raise ConfigError(
                code=ErrorCode.CONFIG_INVALID,
                user_message="name_min_length cannot exceed name_max_length",
                context={"name_min_length": rules.name_min_length, "name_max_length": rules.name_max_length},
            )
        if rules.message_min_length > rules.message_max_length:
            raise ConfigError(
                code=ErrorCode.CONFIG_INVALID,
                user_message="message_min_length cannot exceed message_max_length",
                context={
                    "message_min_length": rules.message_min_length,
                    "message_max_length": rules.message_max_length,
                },
            )
        if rules.message_warn_length > rules.message_max_length:
            raise ConfigError(
                code=ErrorCode.CONFIG_INVALID,
                user_message="message_warn_length cannot exceed message_max_length",
                context={
                    "message_warn_length": rules.message_warn_length,
                    "message_max_length": rules.message_max_length,
                },
            )

        return cls(rules=rules, send_delay_ms=int(merged["send_delay_ms"]), log_level=str(merged["log_level"]))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {key: getattr(self.rules, key) for key in _RULE_KEYS}
        data["send_delay_ms"] = self.send_delay_ms
        data["log_level"] = self.log_level
        return data


def load_form_config(path: Path | None = None) -> FormConfig:
    """
    Load the configuration file.

    Args:
        path: File to read (defaults to the per-user configuration file)

    Returns:
        FormConfig with file values merged over the defaults

    Raises:
        ConfigError: If the file cannot be read or fails validation
    """
    path = path or get_config_path()

    if not path.exists():
        logger.debug(f"No configuration file at {path}, using defaults")
        return FormConfig()

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            user_message=f"Configuration file is not valid JSON: {path}",
            technical_message=str(e),
        ) from e
    except OSError as e:
        raise ConfigError(
            code=ErrorCode.CONFIG_IO_ERROR,
            user_message=f"Failed to read configuration file: {path}",
            technical_message=str(e),
        ) from e

    try:
        jsonschema.validate(data, CONFIG_JSON_SCHEMA)
    except jsonschema.ValidationError as e:
        raise ConfigError(
            code=ErrorCode.CONFIG_INVALID,
            user_message=f"Configuration file is invalid: {e.message}",
            technical_message=str(e),
        ) from e

    config = FormConfig.from_dict(data["config"])
    logger.info(f"Loaded configuration from {path}")
    return config


def save_form_config(config: FormConfig, path: Path | None = None) -> Path:
    """
    Write the configuration file atomically.

    Args:
        config: Configuration to write
        path: Destination (defaults to the per-user configuration file)

    Returns:
        Path the configuration was written to

    Raises:
        ConfigError: If the data is invalid or the file cannot be written
    """
    path = path or get_config_path()
    document = {"schema_version": SCHEMA_VERSION, "config": config.to_dict()}

    try:
        jsonschema.validate(document, CONFIG_JSON_SCHEMA)
    except jsonschema.ValidationError as e:
        raise ConfigError(
            code=ErrorCode.CONFIG_INVALID,
            user_message=f"Configuration validation failed: {e.message}",
            technical_message=str(e),
        ) from e

    temp_path: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".json", dir=path.parent, delete=False, encoding="utf-8"
        ) as temp_file:
            temp_path = temp_file.name
            json.dump(document, temp_file, ensure_ascii=False, indent=2, sort_keys=True)

        # Atomic move to final location
        os.replace(temp_path, path)
    except OSError as e:
        if temp_path is not None and os.path.exists(temp_path):
            os.unlink(temp_path)
        raise ConfigError(
            code=ErrorCode.CONFIG_IO_ERROR,
            user_message=f"Failed to save configuration: {path}",
            technical_message=str(e),
        ) from e

    logger.info(f"Saved configuration to {path}")
    return path
