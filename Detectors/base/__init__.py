"""Base detector module - Abstract base class for all anomaly detectors"""

from Detectors.base.base_detector import BaseAnomalyDetector

__all__ = ["BaseAnomalyDetector"]
