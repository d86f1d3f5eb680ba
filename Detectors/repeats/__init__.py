"""Repeating pattern (tandem repeat) detection subpackage."""

from .detector import RepeatingPatternDetector, repeat_counts

__all__ = ['RepeatingPatternDetector', 'repeat_counts']
