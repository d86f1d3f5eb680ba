"""
┌──────────────────────────────────────────────────────────────────────────────┐
│ Ideality Calculator - Share of a bit range explained by tandem repeats       │
├──────────────────────────────────────────────────────────────────────────────┤
│ Larger windows claim bits first; each bit is credited to one window at most  │
└──────────────────────────────────────────────────────────────────────────────┘

DESCRIPTION:
    For a window size ``w`` a block ``bits[p:p+w]`` is ideal when it is
    immediately followed by an identical block. Chains of copies are
    followed greedily left to right, and every bit of a chain is covered.

    Window sizes are evaluated from ``total_bits // 2`` down to 1. Bits
    covered at a larger size are claimed; a smaller size is credited only
    with covered bits that are still unclaimed. The ``ideal_bit_indices`` of
    all sizes are therefore pairwise disjoint.

USAGE::

    from Utilities.ideality import calculate_ideality, calculate_all_idealities

    result = calculate_ideality("10101010", start=0, end=7, window_size=4)
    result.ideality_percentage   # 100
"""
# ═══════════════════════════════════════════════════════════════════════════════
# IMPORTS
# ═══════════════════════════════════════════════════════════════════════════════
import logging
from dataclasses import dataclass, field
from typing import List, Tuple, Optional, Iterator

import numpy as np

from Utilities.config.analysis import ANALYSIS_CONFIG
from Utilities.detectors_utils import block_matches, to_bit_array
from Utilities.safety import normalize_range

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdealityResult:
    window_size: int
    ideality_percentage: int
    repeating_count: int
    total_bits: int
    ideal_bit_indices: Tuple[int, ...] = field(default=(), repr=False)

    def to_dict(self) -> dict:
        return {
            'window_size': self.window_size,
            'ideality_percentage': self.ideality_percentage,
            'repeating_count': self.repeating_count,
            'total_bits': self.total_bits,
            'ideal_bit_indices': list(self.ideal_bit_indices),
        }


def _empty_result(window_size: int, total_bits: int = 0) -> IdealityResult:
    return IdealityResult(window_size=window_size, ideality_percentage=0,
                          repeating_count=0, total_bits=total_bits)


def repeat_coverage(arr: np.ndarray, window_size: int) -> np.ndarray:
    """
    Boolean mask of the bits covered by greedy tandem-repeat chains of
    ``window_size``.

    Scanning left to right, the first block equal to its successor starts a
    chain; the chain extends while the next block is another copy, and the
    scan resumes after the chain's last copy.
    """
    n = len(arr)
    covered = np.zeros(n, dtype=bool)
    matches = block_matches(arr, window_size)
    if len(matches) == 0:
        return covered
    starts = np.flatnonzero(matches)
    ptr = 0
    cursor = 0
    while ptr < len(starts):
        j = int(starts[ptr])
        if j < cursor:
            ptr = int(np.searchsorted(starts, cursor))
            continue
        copies = 2
        nxt = j + window_size
        while nxt < len(matches) and matches[nxt]:
            copies += 1
            nxt += window_size
        cursor = j + copies * window_size
        covered[j:cursor] = True
        ptr += 1
    return covered


def _hierarchical_claims(arr: np.ndarray, min_window: int) -> Iterator[Tuple[int, np.ndarray]]:
    """Yield ``(window_size, local_indices)`` from the largest size down to ``min_window``."""
    claimed = np.zeros(len(arr), dtype=bool)
    for window_size in range(len(arr) // 2, min_window - 1, -1):
        credited = repeat_coverage(arr, window_size) & ~claimed
        claimed |= credited
        yield window_size, np.flatnonzero(credited)


def _build_result(window_size: int, local: np.ndarray, offset: int, total_bits: int) -> IdealityResult:
    count = int(len(local))
    return IdealityResult(
        window_size=window_size,
        ideality_percentage=int(count * 100 // total_bits) if total_bits else 0,
        repeating_count=count,
        total_bits=total_bits,
        ideal_bit_indices=tuple((local + offset).tolist()),
    )


def _section(bits: str, start: int, end: Optional[int]) -> Optional[Tuple[np.ndarray, int]]:
    bounds = normalize_range(len(bits or ''), start, end)
    if bounds is None:
        return None
    lo, hi = bounds
    return to_bit_array(bits[lo:hi + 1]), lo


def calculate_all_idealities(bits: str, start: int = 0, end: Optional[int] = None) -> List[IdealityResult]:
    """
    Ideality for every window size ``1 .. total_bits // 2`` over ``[start, end]``.

    Args:
        bits: '0'/'1' payload
        start: First index (inclusive)
        end: Last index (inclusive); None means the last bit

    Returns:
        Results in ascending window order; [] for an empty or invalid range
    """
    section = _section(bits, start, end)
    if section is None:
        return []
    arr, offset = section
    total = len(arr)
    min_window = ANALYSIS_CONFIG['min_ideality_window']
    results = [_build_result(w, local, offset, total) for w, local in _hierarchical_claims(arr, min_window)]
    results.reverse()
    logger.debug(f"Ideality over {total:,} bits: {len(results)} window sizes")
    return results


def calculate_ideality(bits: str, start: int = 0, end: Optional[int] = None,
                       window_size: int = 1) -> IdealityResult:
    """
    Ideality at one window size, after larger windows have claimed their bits.

    A window size below 1 or None (reported as window 0), an empty or
    inverted range, or a window too large for two blocks to fit gives a
    zero result instead of an error.

    Example:
        >>> calculate_ideality("10101010", 0, 7, 4).ideality_percentage
        100
    """
    if window_size is None or window_size < 1:
        return _empty_result(0)
    section = _section(bits, start, end)
    if section is None:
        return _empty_result(window_size)
    arr, offset = section
    total = len(arr)
    if window_size > total // 2:
        return _empty_result(window_size, total)
    for w, local in _hierarchical_claims(arr, window_size):
        if w == window_size:
            return _build_result(w, local, offset, total)
    return _empty_result(window_size, total)


def get_top_ideality_windows(bits: str, top_n: Optional[int] = None, start: int = 0,
                             end: Optional[int] = None) -> List[IdealityResult]:
    """Highest-ideality window sizes, best first; ties keep ascending window order."""
    if top_n is None:
        top_n = ANALYSIS_CONFIG['top_ideality_windows']
    results = calculate_all_idealities(bits, start, end)
    results.sort(key=lambda r: r.ideality_percentage, reverse=True)
    return results[:max(0, top_n)]
