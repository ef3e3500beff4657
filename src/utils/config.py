"""
Configuration and secrets management for the Provider Directory app.

Values come from Streamlit's secrets (``.streamlit/secrets.toml``) with a
default for every key, so the app runs without any secrets file.

Usage:
    from src.utils.config import get_dataset_config, get_geocoding_config

    dataset_path = get_dataset_config()["path"]
    user_agent = get_geocoding_config()["nominatim_user_agent"]
"""

import logging
from typing import Any, Dict, List

import streamlit as st

from src.utils.validation import validate_max_distance

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DISTANCE_OPTIONS_KM = [2, 5, 10, 20, 50]


def get_secret(key_path: str, default: Any = None) -> Any:
    """
    Safely retrieve a secret from Streamlit's secrets management.

    Args:
        key_path: Dot-notation path to the secret (e.g., 'dataset.path')
        default: Default value if secret is not found

    Returns:
        The secret value or default if not found

    Examples:
        >>> get_secret('dataset.path', 'data/providers.json')
        >>> get_secret('app.log_level', 'INFO')
    """
    try:
        keys = key_path.split(".")
        value = st.secrets

        for key in keys:
            try:
                value = value[key]
            except Exception:
                return default

        return value
    except Exception as e:
        logger.warning(f"Failed to retrieve secret '{key_path}': {e}")
        return default


def get_app_config() -> Dict[str, Any]:
    """
    Get general application configuration.

    Returns:
        Dictionary containing app configuration
    """
    return {
        "environment": get_secret("app.environment", "production"),
        "debug_mode": get_secret("app.debug_mode", False),
        "log_level": get_secret("app.log_level", "INFO"),
        "default_language": get_secret("app.default_language", "vi"),
    }


def get_dataset_config() -> Dict[str, Any]:
    return {
        "path": get_secret("dataset.path", "data/providers.json"),
    }


def get_geocoding_config() -> Dict[str, Any]:
    return {
        "nominatim_user_agent": get_secret("geocoding.nominatim_user_agent", "provider_directory"),
        "request_timeout": get_secret("geocoding.request_timeout", 10),
        "rate_limit_delay": get_secret("geocoding.rate_limit_delay", 1.0),
        "max_retries": get_secret("geocoding.max_retries", 2),
        "enabled": get_secret("geocoding.enabled", True),
    }


def get_search_config() -> Dict[str, Any]:
    options: List[float] = get_secret("search.distance_options_km", DEFAULT_DISTANCE_OPTIONS_KM)
    return {
        "distance_options_km": list(options),
    }


def is_api_enabled(api_name: str) -> bool:
    """
    Check if a specific external service is enabled and properly configured.

    Args:
        api_name: Name of the service to check

    Returns:
        True if the service is enabled and has required configuration
    """
    if api_name == "geocoding":
        config = get_geocoding_config()
        return bool(config["enabled"]) and bool(config["nominatim_user_agent"])
    return False


def validate_configuration() -> Dict[str, str]:
    """
    Validate the application configuration and return any warnings or errors.

    Returns:
        Dictionary with configuration validation results
    """
    issues = {}

    app_config = get_app_config()
    if app_config["environment"] not in ["development", "staging", "production"]:
        issues["app"] = f"Unknown environment: {app_config['environment']}"
    if app_config["default_language"] not in ("vi", "en"):
        issues["language"] = f"Unsupported default language: {app_config['default_language']}"

    if not get_dataset_config()["path"]:
        issues["dataset"] = "No dataset path configured"

    options = get_search_config()["distance_options_km"]
    if not options or not all(o is not None and validate_max_distance(o)[0] for o in options):
        issues["search"] = "Distance options must be positive numbers"

    return issues


def configure_logging() -> None:
    """Apply the configured log level and format to the root logger."""
    level_name = str(get_app_config()["log_level"]).upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logger.debug(f"Logging configured at {level_name}")
