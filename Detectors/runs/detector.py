"""Long run detector: maximal runs of one repeated bit."""
# IMPORTS
from typing import List, Dict, Any, Optional

import numpy as np

from ..base.base_detector import BaseAnomalyDetector, BitsLike
from Utilities.config.analysis import ANALYSIS_CONFIG
from Utilities.core.anomaly_record import AnomalyRecord
from Utilities.core.bit_context import BitContext
from Utilities.detectors_utils import identical_runs, make_preview
from Utilities.severity import classify_severity


class LongRunDetector(BaseAnomalyDetector):
    """Detects runs of identical bits of at least ``min_length``."""

    DETECTOR_KEY = 'long_run'

    def scan(self, bits: BitsLike, min_length: Optional[int] = None) -> List[Dict[str, Any]]:
        min_length = self._resolve_min_length(min_length)
        ctx = BitContext.of(bits)
        starts, lengths = identical_runs(ctx.array)
        keep = np.flatnonzero(lengths >= min_length)
        return [
            {'position': int(starts[i]), 'length': int(lengths[i]), 'bit': ctx.bits[starts[i]]}
            for i in keep
        ]

    def build_record(self, ctx: BitContext, hit: Dict[str, Any]) -> AnomalyRecord:
        length = hit['length']
        bit = hit.get('bit') or ctx.bits[hit['position']]
        shown = ANALYSIS_CONFIG['preview_length']
        return self.make_record(
            hit,
            sequence=make_preview(bit * min(length, shown), truncated=length > shown),
            description=f"Run of {length} consecutive {bit}s",
            severity=classify_severity(self.DETECTOR_KEY, length),
        )
