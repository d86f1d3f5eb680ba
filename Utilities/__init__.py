"""
Utilities package for BitAnomalyFinder.

Contains utility modules for:
- Configuration (config/)
- Core data types (core/)
- Main scanner API (bitscanner.py)
- Pluggable detector registry (anomaly_registry.py)
- Ideality metrics (ideality.py)
- Unique boundary synthesis (boundary.py)
- Severity classification (severity.py)
- Detector utilities (detectors_utils.py)
- Input safety helpers (safety.py)
"""
