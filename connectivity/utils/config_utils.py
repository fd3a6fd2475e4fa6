"""
Configuration Utilities

Parsing and validation helpers for connectivity options.
"""

from typing import Iterable, Union
from urllib.parse import urlparse

from connectivity.constants import ALLOWED_URL_SCHEMES


def ms_to_seconds(milliseconds: Union[int, float]) -> float:
    """
    Convert a millisecond option to the seconds used by timers and requests.

    Example:
        ms_to_seconds(1500)  # 1.5
    """
    return milliseconds / 1000.0


def parse_bool(value: Union[str, bool]) -> bool:
    """
    Parse a boolean from a command-line or environment string.

    Accepts: true/false, yes/no, on/off, 1/0 (case-insensitive)

    Raises:
        ValueError: If the string is not recognised
    """
    if isinstance(value, bool):
        return value

    normalized = value.strip().lower()
    if normalized in ("1", "true", "yes", "on"):
        return True
    if normalized in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Invalid boolean: {value!r}")


def parse_status_codes(value: Union[str, int, Iterable[int]]) -> frozenset:
    """
    Normalize expected status codes to a frozenset of ints.

    Args:
        value: "204", "200,204", a single int, or any iterable of ints

    Returns:
        frozenset of status codes

    Raises:
        ValueError: If a code is not an integer
    """
    if isinstance(value, str):
        parts = [part.strip() for part in value.split(",") if part.strip()]
        try:
            return frozenset(int(part) for part in parts)
        except ValueError as e:
            raise ValueError(f"Invalid status code list: {value!r}") from e

    if isinstance(value, int) and not isinstance(value, bool):
        return frozenset({value})

    try:
        codes = frozenset(value)
    except TypeError as e:
        raise ValueError(f"Invalid status codes: {value!r}") from e

    for code in codes:
        if isinstance(code, bool) or not isinstance(code, int):
            raise ValueError(f"Invalid status code: {code!r}")
    return codes


def validate_positive_ms(name: str, value: Union[int, float]) -> None:
    """
    Check that a millisecond option is a positive number.

    Raises:
        ValueError: If value is not a number > 0
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Invalid {name}: {value!r}. Expected milliseconds")
    if value <= 0:
        raise ValueError(f"Invalid {name}: {value}. Must be > 0 ms")


def validate_url(url: str) -> None:
    """
    Check that the reachability URL is an absolute http(s) URL.

    Raises:
        ValueError: If the scheme or host is missing or unsupported
    """
    if not isinstance(url, str) or not url:
        raise ValueError(f"Invalid reachability_url: {url!r}")

    parsed = urlparse(url)
    if parsed.scheme not in ALLOWED_URL_SCHEMES or not parsed.netloc:
        raise ValueError(
            f"Invalid reachability_url: {url!r}. "
            f"Expected {' or '.join(ALLOWED_URL_SCHEMES)} URL with a host",
        )


def validate_status_codes(codes: frozenset) -> None:
    """
    Check that at least one plausible HTTP status code is expected.

    Raises:
        ValueError: If the set is empty or holds codes outside 100-599
    """
    if not codes:
        raise ValueError("expected_response_status must not be empty")

    invalid = sorted(code for code in codes if not 100 <= code <= 599)
    if invalid:
        raise ValueError(f"Invalid HTTP status code(s): {invalid}")
