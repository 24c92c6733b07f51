"""
Configuration schema and defaults for the contact form application.

This module provides application identifiers, default settings, the JSON
schema used to validate configuration files, and Qt standard-path helpers.
"""

from pathlib import Path
from typing import Any

from PySide6.QtCore import QCoreApplication, QStandardPaths

# Application identifiers for QSettings and standard paths
APP_ORGANIZATION = "ContactForm"
APP_NAME = "GUI"

# JSON Schema version for configuration compatibility
SCHEMA_VERSION = "1.0.0"

CONFIG_FILENAME = "form.json"

# Default configuration with all supported keys and JSON-serializable types
DEFAULT_CONFIG: dict[str, Any] = {
    # Submission settings
    "send_delay_ms": 1000,
    # Validation limits
    "name_min_length": 2,
    "name_max_length": 50,
    "message_min_length": 10,
    "message_max_length": 500,
    "message_warn_length": 450,
    # Debug settings
    "log_level": "INFO",  # Options: "DEBUG", "INFO", "WARNING", "ERROR"
}

# JSON Schema for configuration files (draft-07)
CONFIG_JSON_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Contact Form Configuration",
    "description": "Settings for the contact form GUI application",
    "type": "object",
    "required": ["schema_version", "config"],
    "additionalProperties": False,
    "properties": {
        "schema_version": {
            "type": "string",
            "const": SCHEMA_VERSION,
            "description": "Schema version for compatibility checking",
        },
        "config": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "send_delay_ms": {"type": "integer", "minimum": 0, "maximum": 60000},
                "name_min_length": {"type": "integer", "minimum": 1},
                "name_max_length": {"type": "integer", "minimum": 1},
                "message_min_length": {"type": "integer", "minimum": 1},
                "message_max_length": {"type": "integer", "minimum": 1},
                "message_warn_length": {"type": "integer", "minimum": 1},
                "log_level": {"type": "string", "enum": ["DEBUG", "INFO", "WARNING", "ERROR"]},
            },
        },
    },
}


def get_app_config_dir() -> Path:
    """
    Get the application configuration directory using QStandardPaths.

    Returns:
        Path to the writable configuration directory for this application
    """
    config_location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.ConfigLocation)
    return Path(config_location) / APP_ORGANIZATION / APP_NAME


def get_config_path() -> Path:
    """Get the path of the configuration file."""
    return get_app_config_dir() / CONFIG_FILENAME


def setup_qsettings() -> None:
    """
    Configure application identifiers.

    This should be called early in application startup so QSettings and
    QStandardPaths use the correct organization and application names.
    """
    QCoreApplication.setOrganizationName(APP_ORGANIZATION)
    QCoreApplication.setApplicationName(APP_NAME)
