"""Alternating sequence detector: maximal runs where every neighbour pair differs."""
# IMPORTS
from typing import List, Dict, Any, Optional

import numpy as np

from ..base.base_detector import BaseAnomalyDetector, BitsLike
from Utilities.core.anomaly_record import AnomalyRecord
from Utilities.core.bit_context import BitContext
from Utilities.detectors_utils import alternating_runs, preview_region
from Utilities.severity import classify_severity


class AlternatingRunDetector(BaseAnomalyDetector):
    """Detects 0101... / 1010... stretches of at least ``min_length`` bits."""

    DETECTOR_KEY = 'alternating'

    def scan(self, bits: BitsLike, min_length: Optional[int] = None) -> List[Dict[str, Any]]:
        min_length = self._resolve_min_length(min_length)
        starts, lengths = alternating_runs(BitContext.of(bits).array)
        keep = np.flatnonzero(lengths >= min_length)
        return [{'position': int(starts[i]), 'length': int(lengths[i])} for i in keep]

    def build_record(self, ctx: BitContext, hit: Dict[str, Any]) -> AnomalyRecord:
        start, length = hit['position'], hit['length']
        return self.make_record(
            hit,
            sequence=preview_region(ctx.bits, start, length),
            description=f"Alternating pattern of {length} bits",
            severity=classify_severity(self.DETECTOR_KEY, length),
        )
