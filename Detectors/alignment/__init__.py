from .detector import ByteAlignmentDetector

__all__ = ['ByteAlignmentDetector']
