from .detector import LongRunDetector

__all__ = ['LongRunDetector']
