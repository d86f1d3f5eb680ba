"""
┌──────────────────────────────────────────────────────────────────────────────┐
│ Severity Classifier - Map detector findings onto low / medium / high         │
├──────────────────────────────────────────────────────────────────────────────┤
│ Pure functions; thresholds live in Utilities/config/severity.py              │
└──────────────────────────────────────────────────────────────────────────────┘
"""
from Utilities.config.severity import (
    SEVERITY_LOW,
    SEVERITY_MEDIUM,
    SEVERITY_HIGH,
    SEVERITY_THRESHOLDS,
    DENSITY_HIGH_SEVERITY_LOW_PCT,
    DENSITY_HIGH_SEVERITY_HIGH_PCT,
    FIXED_SEVERITIES,
)


def classify_severity(detector_key: str, magnitude: float) -> str:
    """
    Classify a magnitude (length or repeat count) for a threshold detector.

    Args:
        detector_key: Key in SEVERITY_THRESHOLDS (e.g. 'palindrome')
        magnitude: The detector's quantitative finding

    Returns:
        'high', 'medium' or 'low'

    Raises:
        KeyError: If the detector has no magnitude thresholds

    Example:
        >>> classify_severity('long_run', 51)
        'high'
        >>> classify_severity('long_run', 50)
        'medium'
    """
    thresholds = SEVERITY_THRESHOLDS[detector_key]
    if magnitude > thresholds['high']:
        return SEVERITY_HIGH
    if magnitude > thresholds['medium']:
        return SEVERITY_MEDIUM
    return SEVERITY_LOW


def classify_density_severity(ones_percent: float) -> str:
    """Severity of a flagged density window given its ones percentage (0-100)."""
    if ones_percent < DENSITY_HIGH_SEVERITY_LOW_PCT or ones_percent > DENSITY_HIGH_SEVERITY_HIGH_PCT:
        return SEVERITY_HIGH
    return SEVERITY_MEDIUM


def fixed_severity(detector_key: str) -> str:
    return FIXED_SEVERITIES[detector_key]
