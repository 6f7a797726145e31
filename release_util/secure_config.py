"""
Secure Configuration Management

Provides centralized, validated configuration for the application.
Replaces weak os.getenv() calls with strict validation and fail-fast behavior.

Usage:
    from release_util.secure_config import get_config

    config = get_config()
    ado_config = config.get_ado_config("https://tfs.contoso.com/tfs/DefaultCollection")
    print(ado_config.organization_url)

Security Features:
    - Strict validation of all configuration values
    - Fail-fast on missing/invalid configuration
    - Placeholder detection (e.g., "your_pat_here")
    - Length/format validation for credentials

Raises:
    ConfigurationError: If configuration is missing or invalid
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
TRUTHY_VALUES = ("1", "true", "yes", "on")


class ConfigurationError(Exception):
    """Raised when configuration is missing or invalid."""

    pass


@dataclass
class AzureDevOpsConfig:
    """
    Validated release service configuration.

    organization_url is the project collection URL given on the command
    line, either Azure DevOps Services (https://dev.azure.com/org) or an
    on-premises collection (http://tfs:8080/tfs/DefaultCollection).
    """

    organization_url: str
    pat: str

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        """
        Validate release service configuration.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not self.organization_url:
            raise ConfigurationError("Project collection URL is required")

        if not re.match(r"^https?://[^\s/]+", self.organization_url):
            raise ConfigurationError(f"Project collection URL must be an http(s) URL: {self.organization_url}")

        if not self.pat:
            raise ConfigurationError("ADO_PAT is required")

        if len(self.pat) < 20:
            raise ConfigurationError(f"ADO_PAT appears invalid (too short: {len(self.pat)} chars, expected >=20)")

        placeholders = ["your_pat", "your_token", "example", "placeholder", "xxx", "replace_me"]
        if any(placeholder in self.pat.lower() for placeholder in placeholders):
            raise ConfigurationError("ADO_PAT contains a placeholder value - please set a real Personal Access Token")


@dataclass
class LoggingConfig:
    """
    Validated logging configuration.
    """

    level: str = "WARNING"
    log_file: Optional[Path] = None
    json_output: bool = False

    def __post_init__(self):
        self.level = self.level.upper()
        if self.level not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"RELEASE_UTIL_LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}: {self.level}"
            )


class SecureConfig:
    """
    Centralized secure configuration manager.

    Loads and validates all application configuration from environment variables.
    Provides fail-fast behavior to catch configuration issues early.
    """

    def __init__(self):
        """Initialize configuration (loads .env file)."""
        load_dotenv()

    def get_ado_config(self, project_collection_url: str) -> AzureDevOpsConfig:
        """
        Get validated release service configuration.

        Args:
            project_collection_url: Collection URL from --project-collection-url

        Returns:
            AzureDevOpsConfig: Validated configuration with ADO_PAT

        Raises:
            ConfigurationError: If the URL or ADO_PAT is missing or invalid
        """
        return AzureDevOpsConfig(organization_url=project_collection_url or "", pat=os.getenv("ADO_PAT") or "")

    def get_logging_config(self) -> LoggingConfig:
        """
        Get validated logging configuration.

        Returns:
            LoggingConfig: Validated configuration

        Raises:
            ConfigurationError: If RELEASE_UTIL_LOG_LEVEL is not a known level
        """
        log_file = os.getenv("RELEASE_UTIL_LOG_FILE")
        json_output = os.getenv("RELEASE_UTIL_JSON_LOGS", "").strip().lower() in TRUTHY_VALUES

        return LoggingConfig(
            level=os.getenv("RELEASE_UTIL_LOG_LEVEL", "WARNING"),
            log_file=Path(log_file) if log_file else None,
            json_output=json_output,
        )


_config_instance = None


def get_config() -> SecureConfig:
    """
    Get the global configuration instance (singleton pattern).

    Returns:
        SecureConfig: The configuration manager
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = SecureConfig()
    return _config_instance
