"""Byte alignment check: trailing bits that do not fill a whole byte."""
# IMPORTS
from typing import List, Dict, Any, Optional

from ..base.base_detector import BaseAnomalyDetector, BitsLike
from Utilities.core.anomaly_record import AnomalyRecord
from Utilities.core.bit_context import BitContext
from Utilities.detectors_utils import preview_region
from Utilities.severity import fixed_severity


class ByteAlignmentDetector(BaseAnomalyDetector):
    """Emits a single record when the payload length is not a multiple of a byte."""

    DETECTOR_KEY = 'byte_misalignment'

    def scan(self, bits: BitsLike, min_length: Optional[int] = None) -> List[Dict[str, Any]]:
        n = BitContext.of(bits).length
        remainder = n % self.params['byte_size']
        if remainder == 0 or remainder < self._resolve_min_length(min_length):
            return []
        return [{'position': n - remainder, 'length': remainder}]

    def build_record(self, ctx: BitContext, hit: Dict[str, Any]) -> AnomalyRecord:
        start, length = hit['position'], hit['length']
        return self.make_record(
            hit,
            sequence=preview_region(ctx.bits, start, length),
            description=f"Data not byte-aligned ({length} extra bits)",
            severity=fixed_severity(self.DETECTOR_KEY),
        )
