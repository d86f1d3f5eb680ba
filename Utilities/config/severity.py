"""
Severity thresholds for BitAnomalyFinder detectors.

Each detector maps one measured quantity onto the three severity levels.
Thresholds are strict ("greater than") and intentionally differ between
detectors; do not normalise them.

┌───────────────────┬──────────────┬─────────┬──────────┐
│ Detector          │ Quantity     │ medium  │ high     │
├───────────────────┼──────────────┼─────────┼──────────┤
│ palindrome        │ length       │ > 10    │ > 20     │
│ repeating_pattern │ repeat count │ > 3     │ > 5      │
│ alternating       │ length       │ > 15    │ > 30     │
│ long_run          │ length       │ > 25    │ > 50     │
│ sparse_region     │ ones %       │ always  │ <5 / >95 │
│ byte_misalignment │ -            │ always  │ never    │
└───────────────────┴──────────────┴─────────┴──────────┘
"""

SEVERITY_LOW = 'low'
SEVERITY_MEDIUM = 'medium'
SEVERITY_HIGH = 'high'

SEVERITY_LEVELS = (SEVERITY_LOW, SEVERITY_MEDIUM, SEVERITY_HIGH)

# Magnitude-based detectors: value > high -> high, value > medium -> medium
SEVERITY_THRESHOLDS = {
    'palindrome': {'medium': 10, 'high': 20},
    'repeating_pattern': {'medium': 3, 'high': 5},
    'alternating': {'medium': 15, 'high': 30},
    'long_run': {'medium': 25, 'high': 50},
}

# Density detector: flagged windows are medium unless beyond these percentages
DENSITY_HIGH_SEVERITY_LOW_PCT = 5.0
DENSITY_HIGH_SEVERITY_HIGH_PCT = 95.0

# Detectors whose severity never depends on the finding
FIXED_SEVERITIES = {
    'byte_misalignment': SEVERITY_MEDIUM,
}
