"""
Safe input handling utilities for bit-string analysis.

Provides bounds-checked ranges, lenient numeric parsing for filter bounds,
and payload validation with logging and graceful fallbacks.
"""

import logging
import math
from typing import Any, Optional, Tuple

from Utilities.detectors_utils import is_binary

logger = logging.getLogger(__name__)


def parse_optional_int(value: Any) -> Optional[int]:
    """
    Interpret a filter bound, treating blanks and non-numeric input as absent.

    Non-finite values ('inf', '1e400', NaN) are absent as well.

    Args:
        value: int, float, numeric string, '' or None

    Returns:
        The integer value, or None when there is no usable bound

    Example:
        >>> parse_optional_int(" 12 ")
        12
        >>> parse_optional_int("abc") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                return None
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    return None


def normalize_range(total_length: int, start: int = 0,
                    end: Optional[int] = None) -> Optional[Tuple[int, int]]:
    """
    Clamp an inclusive ``[start, end]`` range to a payload of ``total_length``.

    Args:
        total_length: Payload length
        start: First index (inclusive)
        end: Last index (inclusive); None means the last index

    Returns:
        (start, end) with ``0 <= start < end < total_length``, or None when
        the range is empty, inverted or outside the payload
    """
    if end is None:
        end = total_length - 1
    if start is None:
        start = 0
    start = max(0, int(start))
    end = min(total_length - 1, int(end))
    if start >= end:
        return None
    return start, end


def validate_bitstring_input(bits: Any) -> str:
    """
    Validate a payload before analysis.

    Args:
        bits: Candidate payload

    Returns:
        The payload as a str ('' for None)

    Raises:
        TypeError: If ``bits`` is neither None nor a str
        ValueError: If ``bits`` contains characters other than '0' and '1'
    """
    if bits is None:
        return ''
    if not isinstance(bits, str):
        raise TypeError(f"Bit payload must be a str, got {type(bits).__name__}")
    if not is_binary(bits):
        bad = sorted(set(bits) - {'0', '1'})
        raise ValueError(f"Invalid bit payload: unexpected characters {bad[:5]}")
    return bits


def limit_scan_length(bits: str, limit: Optional[int], detector_name: str) -> str:
    """
    Return the leading ``limit`` bits of ``bits`` and log when truncating.

    Args:
        bits: Payload
        limit: Maximum bits to scan; None disables the cap
        detector_name: Used in the warning message
    """
    if limit is None or len(bits) <= limit:
        return bits
    logger.warning(f"{detector_name}: payload of {len(bits):,} bits exceeds scan limit, "
                   f"scanning leading {limit:,} bits only")
    return bits[:limit]
