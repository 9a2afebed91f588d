"""Configuration management and environment variable utilities."""

import os

from dotenv import load_dotenv

from altitrace.errors import ConfigurationError


# Load environment variables from .env file
load_dotenv()


def get_required_env(key: str) -> str:
    """Get a required environment variable.

    Args:
        key: Environment variable name

    Returns:
        Environment variable value

    Raises:
        ConfigurationError: If the environment variable is not set

    Example:
        ```python
        from altitrace.helpers.config import get_required_env

        rpc_url = get_required_env("HYPEREVM_RPC_URL")
        ```
    """
    value = os.getenv(key)
    if not value:
        msg = f"{key} environment variable is not set"
        raise ConfigurationError(msg, key)
    return value


def get_optional_env(key: str, default: str | None = None) -> str | None:
    """Get an optional environment variable with a default value.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    return os.getenv(key, default)


def get_api_url(api_url: str | None = None) -> str:
    """Get the simulation API base URL from parameter or environment.

    Args:
        api_url: Optional API URL to use directly

    Returns:
        API base URL

    Raises:
        ConfigurationError: If the URL is not provided and ALTITRACE_API_URL
            is not set
    """
    if api_url:
        return api_url

    env_api_url = os.getenv("ALTITRACE_API_URL")
    if not env_api_url:
        msg = "ALTITRACE_API_URL must be provided or set in environment variables"
        raise ConfigurationError(msg, "api_url")

    return env_api_url


__all__ = [
    "get_api_url",
    "get_optional_env",
    "get_required_env",
]
