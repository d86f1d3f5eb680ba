"""Core modules for BitAnomalyFinder"""

from .anomaly_record import AnomalyRecord
from .bit_context import BitContext

__all__ = [
    'AnomalyRecord',
    'BitContext',
]
