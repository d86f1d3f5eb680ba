from .detector import AlternatingRunDetector

__all__ = ['AlternatingRunDetector']
