"""
┌──────────────────────────────────────────────────────────────────────────────┐
│ Density Anomaly Detector                                                     │
├──────────────────────────────────────────────────────────────────────────────┤
│ Sliding window over the ones count; flags sparse and dense regions           │
└──────────────────────────────────────────────────────────────────────────────┘
"""
# ═══════════════════════════════════════════════════════════════════════════════
# IMPORTS
# ═══════════════════════════════════════════════════════════════════════════════
from typing import List, Dict, Any, Optional

from ..base.base_detector import BaseAnomalyDetector, BitsLike
from Utilities.core.anomaly_record import AnomalyRecord
from Utilities.core.bit_context import BitContext
from Utilities.detectors_utils import preview_region
from Utilities.severity import classify_density_severity


class DensityAnomalyDetector(BaseAnomalyDetector):
    """
    Sparse / dense region detector.

    A window of ``min_length`` bits (default 64) slides with a stride of half
    a window. A window whose ones fraction is below ``low_density_pct`` or
    above ``high_density_pct`` is flagged and the cursor then jumps a full
    window, so one sparse stretch is not reported by every overlapping window.
    """

    DETECTOR_KEY = 'sparse_region'

    def __init__(self, min_length: Optional[int] = None, low_density_pct: Optional[float] = None,
                 high_density_pct: Optional[float] = None):
        super().__init__(min_length)
        if low_density_pct is not None:
            self.params['low_density_pct'] = low_density_pct
        if high_density_pct is not None:
            self.params['high_density_pct'] = high_density_pct

    def scan(self, bits: BitsLike, min_length: Optional[int] = None) -> List[Dict[str, Any]]:
        window = self._resolve_min_length(min_length)
        if window < 1:
            return []
        ctx = BitContext.of(bits)
        n = ctx.length
        stride = max(1, window // 2)
        low, high = self.params['low_density_pct'], self.params['high_density_pct']

        hits = []
        i = 0
        while i <= n - window:
            ones = ctx.ones_count(i, i + window)
            pct = ones / window * 100
            if pct < low or pct > high:
                hits.append({'position': i, 'length': window, 'ones': ones, 'density_pct': pct})
                i += window
            else:
                i += stride
        return hits

    def build_record(self, ctx: BitContext, hit: Dict[str, Any]) -> AnomalyRecord:
        start, length = hit['position'], hit['length']
        ones = hit.get('ones')
        if ones is None:
            ones = ctx.ones_count(start, start + length)
        pct = hit.get('density_pct', ones / length * 100 if length else 0.0)
        return self.make_record(
            hit,
            sequence=preview_region(ctx.bits, start, length),
            description=f"Region with {pct:.1f}% ones ({ones}/{length})",
            severity=classify_density_severity(pct),
        )
