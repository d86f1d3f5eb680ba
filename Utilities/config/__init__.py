"""
Configuration modules for BitAnomalyFinder.

This package contains all configuration constants including:
- analysis: Scan limits and per-detector defaults
- severity: Detector-specific severity thresholds
- anomaly_taxonomy: Canonical anomaly type names and categories
"""

from .anomaly_taxonomy import (
    ANOMALY_TYPES,
    VALID_TYPES,
    VALID_SEVERITIES,
    is_valid_severity,
)

__all__ = [
    'ANOMALY_TYPES',
    'VALID_TYPES',
    'VALID_SEVERITIES',
    'is_valid_severity',
]
