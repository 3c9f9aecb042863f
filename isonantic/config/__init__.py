"""Centralized configuration management for isonantic.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from isonantic.config import EnvVar, get_environment
    >>>
    >>> strict = get_environment(EnvVar.ISONANTIC_STRICT_PATTERNS)  # Returns bool
    >>> level = get_log_level()  # Returns int: logging.WARNING
    >>>
    >>> for var in list_environment_variables("schema"):
    ...     info = get_environment_info(var)
    ...     print(f"{info.name}: {info.description}")

Environment Variable Categories:
    logging: Log output configuration
    schema: Schema construction behavior (pattern strictness)
"""

from .lib import (
    # Core types
    EnvConfig,
    EnvVar,
    # Main interface
    get_environment,
    get_environment_info,
    get_log_level,
    # Introspection
    list_environment_variables,
    strict_patterns_enabled,
)

__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Convenience functions
    "get_log_level",
    "strict_patterns_enabled",
    # Introspection
    "list_environment_variables",
]
