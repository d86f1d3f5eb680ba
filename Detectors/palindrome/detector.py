"""Palindrome detector using linear-time centre expansion."""
# IMPORTS
from typing import List, Dict, Any, Optional

from ..base.base_detector import BaseAnomalyDetector, BitsLike
from Utilities.config.analysis import ANALYSIS_CONFIG
from Utilities.core.anomaly_record import AnomalyRecord
from Utilities.core.bit_context import BitContext
from Utilities.detectors_utils import preview_region
from Utilities.safety import limit_scan_length
from Utilities.severity import classify_severity


def odd_radii(bits: str) -> List[int]:
    """
    For each centre ``i`` the number ``k`` of odd palindromes centred there,
    i.e. ``bits[i-k+1:i+k]`` is the maximal odd palindrome (length 2k-1).
    """
    n = len(bits)
    radii = [0] * n
    left, right = 0, -1
    for i in range(n):
        k = 1 if i > right else min(radii[left + right - i], right - i + 1)
        while i - k >= 0 and i + k < n and bits[i - k] == bits[i + k]:
            k += 1
        radii[i] = k
        if i + k - 1 > right:
            left, right = i - k + 1, i + k - 1
    return radii


def even_radii(bits: str) -> List[int]:
    """
    For each ``i`` the half-length ``k`` of the maximal even palindrome whose
    right half starts at ``i``, i.e. ``bits[i-k:i+k]``.
    """
    n = len(bits)
    radii = [0] * n
    left, right = 0, -1
    for i in range(n):
        k = 0 if i > right else min(radii[left + right - i + 1], right - i + 1)
        while i - k - 1 >= 0 and i + k < n and bits[i - k - 1] == bits[i + k]:
            k += 1
        radii[i] = k
        if i + k - 1 > right:
            left, right = i - k, i + k - 1
    return radii


class PalindromeDetector(BaseAnomalyDetector):
    """Maximal odd- and even-length palindromes around every centre."""

    DETECTOR_KEY = 'palindrome'

    def __init__(self, min_length: Optional[int] = None,
                 max_scan_bits: Optional[int] = ANALYSIS_CONFIG['max_pattern_scan_bits']):
        super().__init__(min_length)
        self.max_scan_bits = max_scan_bits

    def scan(self, bits: BitsLike, min_length: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Report the maximal palindrome at each centre, odd centre first.

        For centre ``i`` the odd palindrome is centred on ``i``; the even one
        is centred between ``i`` and ``i + 1``.
        """
        min_length = self._resolve_min_length(min_length)
        seq = limit_scan_length(BitContext.of(bits).bits, self.max_scan_bits, self.DETECTOR_KEY)
        n = len(seq)
        odd = odd_radii(seq)
        even = even_radii(seq)

        hits = []
        for i in range(n):
            k = odd[i]
            if 2 * k - 1 >= min_length:
                hits.append({'position': i - k + 1, 'length': 2 * k - 1, 'parity': 'odd'})
            k = even[i + 1] if i + 1 < n else 0
            if 2 * k >= min_length:
                hits.append({'position': i - k + 1, 'length': 2 * k, 'parity': 'even'})
        return hits

    def build_record(self, ctx: BitContext, hit: Dict[str, Any]) -> AnomalyRecord:
        start, length = hit['position'], hit['length']
        parity = hit.get('parity', 'odd' if length % 2 else 'even').capitalize()
        record = self.make_record(
            hit,
            sequence=preview_region(ctx.bits, start, length),
            description=f"{parity}-length palindrome of {length} bits",
            severity=classify_severity(self.DETECTOR_KEY, length),
        )
        return record
