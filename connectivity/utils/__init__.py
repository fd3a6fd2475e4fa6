"""
Connectivity Utilities Package

Helper functions for configuration parsing and validation.
"""

from connectivity.utils.config_utils import (
    ms_to_seconds,
    parse_bool,
    parse_status_codes,
    validate_positive_ms,
    validate_status_codes,
    validate_url,
)

__all__ = [
    "ms_to_seconds",
    "parse_bool",
    "parse_status_codes",
    "validate_positive_ms",
    "validate_status_codes",
    "validate_url",
]
