"""
Consolidated Bit-String Anomaly Detectors Module

All detector classes are re-exported here.

Contains the abstract base and six built-in detectors:
BaseAnomalyDetector, PalindromeDetector, RepeatingPatternDetector,
AlternatingRunDetector, LongRunDetector, DensityAnomalyDetector,
ByteAlignmentDetector
"""

# Import base detector
from Detectors.base.base_detector import BaseAnomalyDetector

# Import all detector classes from submodules
from Detectors.palindrome.detector import PalindromeDetector
from Detectors.repeats.detector import RepeatingPatternDetector
from Detectors.alternating.detector import AlternatingRunDetector
from Detectors.runs.detector import LongRunDetector
from Detectors.density.detector import DensityAnomalyDetector
from Detectors.alignment.detector import ByteAlignmentDetector

__all__ = [
    "BaseAnomalyDetector",
    "PalindromeDetector",
    "RepeatingPatternDetector",
    "AlternatingRunDetector",
    "LongRunDetector",
    "DensityAnomalyDetector",
    "ByteAlignmentDetector",
]

__version__ = "2026.1"
