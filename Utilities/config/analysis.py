"""
Analysis configuration for BitAnomalyFinder.

This module contains analysis parameters:
- Scan limits for the pattern detectors
- Per-detector default parameters
- Record preview settings
- Boundary synthesis defaults
- Ideality display settings

SCAN LIMIT
----------
Palindrome and Repeating Pattern detectors can emit a record for nearly
every start position on degenerate payloads (all-zero, all-one, short
periods). Payloads longer than ``max_pattern_scan_bits`` are scanned only
over their leading ``max_pattern_scan_bits`` bits and a warning is logged.
Set the value to ``None`` to scan the full payload.

PERFORMANCE BEHAVIOR
--------------------
- Run, alternating, density and alignment detectors: O(n), numpy vectorised
- Palindrome: O(n) centre expansion (Manacher)
- Repeating Pattern: O(n x L_max) numpy block comparison
- Ideality: O(n^2 / 2) numpy block comparison over all window sizes
"""

# ==================== ANALYSIS PARAMETERS ====================
ANALYSIS_CONFIG = {
    # Scan limits
    'max_pattern_scan_bits': 1_000_000,   # Leading bits scanned by palindrome/repeat detectors (None = no cap)
    'min_analyzable_bits': 2,             # Shorter payloads produce no anomalies

    # Record formatting
    'preview_length': 20,                 # Characters kept in AnomalyRecord.sequence previews
    'preview_suffix': '...',              # Appended when a preview is truncated

    # Boundary synthesis
    'default_boundary_min_length': 8,     # Shortest generated boundary (bits)
    'default_boundary_max_length': 32,    # Longest generated boundary (bits)
    'unique_palindrome_min_length': 8,    # Palindrome boundary suggestions start at this length
    'max_boundary_search_length': 62,     # k-gram search encodes candidates in an int64
    'default_boundary_color': '#FF00FF',  # Display tag for new boundaries

    # Ideality
    'min_ideality_window': 1,             # Smallest candidate window size
    'top_ideality_windows': 10,           # Default N for get_top_ideality_windows
}

# ==================== DETECTOR DEFAULTS ====================
# Defaults used by the built-in detectors when no min_length is passed
DETECTOR_DEFAULTS = {
    'palindrome': {
        'min_length': 5,
    },
    'repeating_pattern': {
        'min_length': 4,          # Shortest pattern length tried
        'max_pattern_length': 20, # Longest pattern length tried
        'min_repeats': 3,
    },
    'alternating': {
        'min_length': 8,
    },
    'long_run': {
        'min_length': 10,
    },
    'sparse_region': {
        'min_length': 64,         # Window size; stride is half a window
        'low_density_pct': 15.0,
        'high_density_pct': 85.0,
    },
    'byte_misalignment': {
        'min_length': 1,
        'byte_size': 8,
    },
}

# Order in which built-in detectors run; ties in position keep this order
BUILTIN_DETECTOR_ORDER = [
    'palindrome',
    'repeating_pattern',
    'alternating',
    'long_run',
    'sparse_region',
    'byte_misalignment',
]
