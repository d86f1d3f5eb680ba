"""
┌──────────────────────────────────────────────────────────────────────────────┐
│ Repeating Pattern Detector                                                   │
├──────────────────────────────────────────────────────────────────────────────┤
│ Tandem repeats: a pattern immediately followed by identical copies           │
└──────────────────────────────────────────────────────────────────────────────┘
"""
# ═══════════════════════════════════════════════════════════════════════════════
# IMPORTS
# ═══════════════════════════════════════════════════════════════════════════════
from typing import List, Dict, Any, Optional

import numpy as np

from ..base.base_detector import BaseAnomalyDetector, BitsLike
from Utilities.config.analysis import ANALYSIS_CONFIG
from Utilities.core.anomaly_record import AnomalyRecord
from Utilities.core.bit_context import BitContext
from Utilities.detectors_utils import block_matches, forward_true_run, make_preview
from Utilities.safety import limit_scan_length
from Utilities.severity import classify_severity


def repeat_counts(arr: np.ndarray, pattern_length: int) -> np.ndarray:
    """
    Number of consecutive copies of the ``pattern_length``-bit block starting
    at each index (1 = no immediate repeat).

    Returns:
        int64 array of length ``len(arr) - pattern_length + 1`` (empty if the
        payload is shorter than one block)
    """
    n = len(arr)
    size = n - pattern_length + 1
    if size <= 0:
        return np.zeros(0, dtype=np.int64)
    counts = np.ones(size, dtype=np.int64)
    matches = block_matches(arr, pattern_length)
    if len(matches) == 0:
        return counts
    # block i == block i+L chains along stride L
    for residue in range(min(pattern_length, len(matches))):
        counts[residue:len(matches):pattern_length] += forward_true_run(matches[residue::pattern_length])
    return counts


class RepeatingPatternDetector(BaseAnomalyDetector):
    """
    Detect patterns of length ``min_length``..``max_pattern_length`` repeated
    at least ``min_repeats`` times back to back.

    Every start offset is tested for every pattern length, so a long tandem
    repeat is reported at each of its internal offsets that still holds
    ``min_repeats`` copies.
    """

    DETECTOR_KEY = 'repeating_pattern'

    def __init__(self, min_length: Optional[int] = None, min_repeats: Optional[int] = None,
                 max_pattern_length: Optional[int] = None,
                 max_scan_bits: Optional[int] = ANALYSIS_CONFIG['max_pattern_scan_bits']):
        super().__init__(min_length)
        if min_repeats is not None:
            self.params['min_repeats'] = min_repeats
        if max_pattern_length is not None:
            self.params['max_pattern_length'] = max_pattern_length
        self.max_scan_bits = max_scan_bits

    def scan(self, bits: BitsLike, min_length: Optional[int] = None) -> List[Dict[str, Any]]:
        """Hits ordered by pattern length, then start offset."""
        min_length = max(1, self._resolve_min_length(min_length))
        min_repeats = self.params['min_repeats']
        ctx = BitContext.of(bits)
        seq = limit_scan_length(ctx.bits, self.max_scan_bits, self.DETECTOR_KEY)
        arr = ctx.array[:len(seq)]
        n = len(seq)

        hits = []
        for pattern_length in range(min_length, self.params['max_pattern_length'] + 1):
            last_start = n - pattern_length * min_repeats
            if last_start < 0:
                break
            counts = repeat_counts(arr, pattern_length)[:last_start + 1]
            for i in np.flatnonzero(counts >= min_repeats).tolist():
                repeats = int(counts[i])
                hits.append({
                    'position': i,
                    'length': pattern_length * repeats,
                    'pattern': seq[i:i + pattern_length],
                    'repeats': repeats,
                })
        return hits

    def build_record(self, ctx: BitContext, hit: Dict[str, Any]) -> AnomalyRecord:
        pattern = hit.get('pattern') or ctx.bits[hit['position']:hit['position'] + hit['length']]
        repeats = hit.get('repeats', 1)
        return self.make_record(
            hit,
            sequence=make_preview(pattern),
            description=f'Pattern "{pattern}" repeated {repeats} times',
            severity=classify_severity(self.DETECTOR_KEY, repeats),
        )
