"""
╔══════════════════════════════════════════════════════════════════════════════╗
║                    CANONICAL ANOMALY TAXONOMY                                ║
║              Single Source of Truth for Anomaly Type Names                   ║
╚══════════════════════════════════════════════════════════════════════════════╝

MODULE: config/anomaly_taxonomy.py

DESCRIPTION:
    Defines, per detector key, the anomaly type the built-in detector emits,
    its category and description, and the display name and fixed severity
    of the matching default registry definition. Detectors and the registry
    defaults both take their labels from here.

USAGE:
    >>> from Utilities.config.anomaly_taxonomy import ANOMALY_TYPES, VALID_TYPES
    >>> ANOMALY_TYPES['long_run']['type']
    'Long Run'
"""

from typing import Dict, FrozenSet

from .severity import SEVERITY_LEVELS

# =============================================================================
# CANONICAL ANOMALY CLASSIFICATION
# =============================================================================
# 'type' labels built-in detector records; 'name' and 'severity' label the
# default registry definition, which reports a fixed severity.

ANOMALY_TYPES: Dict[str, Dict[str, str]] = {
    'palindrome': {
        'type': 'Palindrome',
        'name': 'Palindrome',
        'category': 'Pattern',
        'severity': 'medium',
        'description': 'Detects palindromic bit sequences',
    },
    'repeating_pattern': {
        'type': 'Repeating Pattern',
        'name': 'Repeating Pattern',
        'category': 'Pattern',
        'severity': 'medium',
        'description': 'Detects sequences that repeat consecutively',
    },
    'alternating': {
        'type': 'Alternating Sequence',
        'name': 'Alternating Sequence',
        'category': 'Pattern',
        'severity': 'low',
        'description': 'Detects alternating 0101... or 1010... patterns',
    },
    'long_run': {
        'type': 'Long Run',
        'name': 'Long Run',
        'category': 'Run',
        'severity': 'high',
        'description': 'Detects long sequences of consecutive identical bits',
    },
    'sparse_region': {
        'type': 'Sparse Region',
        'name': 'Sparse Region',
        'category': 'Density',
        'severity': 'medium',
        'description': 'Detects regions with extremely low or high bit density',
    },
    'byte_misalignment': {
        'type': 'Byte Alignment',
        'name': 'Byte Misalignment',
        'category': 'Structure',
        'severity': 'low',
        'description': 'Detects when data is not aligned to byte boundaries',
    },
}

# =============================================================================
# DERIVED SETS
# =============================================================================

VALID_TYPES: FrozenSet[str] = frozenset(entry['type'] for entry in ANOMALY_TYPES.values())

VALID_SEVERITIES: FrozenSet[str] = frozenset(SEVERITY_LEVELS)


def is_valid_severity(severity: str) -> bool:
    return severity in VALID_SEVERITIES
