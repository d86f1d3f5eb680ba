"""
Density Anomaly Subpackage

Classes:
--------
- DensityAnomalyDetector: Sliding-window sparse/dense region detector
"""

from .detector import DensityAnomalyDetector

__all__ = ['DensityAnomalyDetector']
