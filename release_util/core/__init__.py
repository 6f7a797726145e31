"""
Core Infrastructure - Secure Configuration and Logging

This package provides centralized infrastructure utilities that should be used
throughout the application instead of direct library calls.

Usage:
    from release_util.core import get_config, get_logger

    config = get_config()
    ado_config = config.get_ado_config(project_collection_url)

    logger = get_logger(__name__)
"""

from ..secure_config import (
    AzureDevOpsConfig,
    ConfigurationError,
    LoggingConfig,
    SecureConfig,
    get_config,
)
from .logging_config import get_logger, log_with_context, setup_logging

__all__ = [
    # Configuration
    "get_config",
    "ConfigurationError",
    "SecureConfig",
    "AzureDevOpsConfig",
    "LoggingConfig",
    # Logging
    "get_logger",
    "log_with_context",
    "setup_logging",
]
