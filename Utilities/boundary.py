"""
┌──────────────────────────────────────────────────────────────────────────────┐
│ Unique Boundary Synthesizer                                                  │
├──────────────────────────────────────────────────────────────────────────────┤
│ Generate and validate delimiter sequences that do not collide with a payload │
└──────────────────────────────────────────────────────────────────────────────┘

DESCRIPTION:
    A boundary is a bit sequence used as a delimiter inside a payload. A new
    boundary must not already occur in the payload; a sequence that occurs
    exactly once can serve as an existing landmark; more than one occurrence
    makes it ambiguous.

    Generation tries two pigeonhole candidates first (one bit longer than the
    longest run of zeros, then of ones). If neither fits the requested length
    range, every k-gram of the payload is encoded as an integer for each
    length k in range and the smallest absent value is returned.

    Splicing a boundary into the payload is left to the caller.
"""
# ═══════════════════════════════════════════════════════════════════════════════
# IMPORTS
# ═══════════════════════════════════════════════════════════════════════════════
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

import numpy as np

from Detectors.palindrome.detector import odd_radii, even_radii
from Utilities.config.analysis import ANALYSIS_CONFIG
from Utilities.detectors_utils import (
    is_binary,
    to_bit_array,
    find_occurrences,
    count_occurrences,
    longest_run,
)
from Utilities.safety import limit_scan_length

logger = logging.getLogger(__name__)


@dataclass
class Boundary:
    sequence: str
    description: str = ''
    color: str = ANALYSIS_CONFIG['default_boundary_color']
    positions: List[int] = field(default_factory=list)
    id: str = ''


@dataclass(frozen=True)
class BoundaryValidation:
    """
    Outcome of ``validate_boundary``.

    ``valid`` is False for malformed candidates and ambiguous ones (more
    than one occurrence); ``reason`` explains every non-trivial outcome.
    """
    valid: bool
    occurrences: int
    reason: Optional[str] = None
    positions: List[int] = field(default_factory=list)


# ═══════════════════════════════════════════════════════════════════════════════
# GENERATION
# ═══════════════════════════════════════════════════════════════════════════════

def kgram_values(arr: np.ndarray, k: int) -> np.ndarray:
    """Integer value of every ``k``-bit window of ``arr`` (most significant bit first)."""
    count = len(arr) - k + 1
    if count <= 0:
        return np.zeros(0, dtype=np.int64)
    values = np.zeros(count, dtype=np.int64)
    wide = arr.astype(np.int64)
    for j in range(k):
        values = (values << 1) | wide[j:j + count]
    return values


def smallest_absent_kgram(arr: np.ndarray, k: int) -> Optional[str]:
    """
    The lexicographically smallest ``k``-bit string that is not a window of
    ``arr``, or None when every ``k``-bit string occurs.
    """
    present = np.unique(kgram_values(arr, k))
    if len(present) >= (1 << k):
        return None
    gaps = np.flatnonzero(present != np.arange(len(present), dtype=np.int64))
    value = int(gaps[0]) if len(gaps) else len(present)
    return format(value, f'0{k}b')


def generate_unique_boundary(bits: str, min_len: Optional[int] = None,
                             max_len: Optional[int] = None) -> Optional[str]:
    """
    Produce a sequence of ``min_len``..``max_len`` bits that does not occur in ``bits``.

    Args:
        bits: '0'/'1' payload
        min_len: Shortest acceptable length (default 8)
        max_len: Longest acceptable length (default 32)

    Returns:
        The boundary, or None for invalid lengths, a non-binary payload or
        a payload that contains every candidate

    Example:
        >>> generate_unique_boundary("0001000", 2, 8)
        '0000'
    """
    if min_len is None:
        min_len = ANALYSIS_CONFIG['default_boundary_min_length']
    if max_len is None:
        max_len = ANALYSIS_CONFIG['default_boundary_max_length']
    bits = bits or ''
    if min_len < 1 or max_len < min_len:
        logger.warning(f"Invalid boundary length range [{min_len}, {max_len}]")
        return None
    if not is_binary(bits):
        logger.warning("Cannot generate a boundary for a non-binary payload")
        return None

    for bit in ('0', '1'):
        candidate_len = max(longest_run(bits, bit) + 1, min_len)
        if candidate_len <= max_len:
            return bit * candidate_len

    # Both runs are too long for the range; search k-grams instead
    arr = to_bit_array(bits)
    search_max = min(max_len, ANALYSIS_CONFIG['max_boundary_search_length'])
    for k in range(min_len, search_max + 1):
        candidate = smallest_absent_kgram(arr, k)
        if candidate is not None:
            logger.debug(f"Unique {k}-bit boundary found by k-gram search")
            return candidate

    logger.warning(f"No absent sequence of {min_len}-{max_len} bits in payload of {len(bits):,} bits")
    return None


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION
# ═══════════════════════════════════════════════════════════════════════════════

def validate_boundary(bits: str, candidate: str, allow_existing: bool = False) -> BoundaryValidation:
    """
    Classify ``candidate`` as a boundary for ``bits``.

    - malformed (empty or not '0'/'1') -> invalid
    - 0 occurrences -> valid new boundary
    - 1 occurrence -> valid only with ``allow_existing`` (existing landmark)
    - more than 1 -> invalid, ambiguous as a delimiter

    Occurrences are counted with overlaps.
    """
    if not candidate:
        return BoundaryValidation(valid=False, occurrences=0, reason="Boundary sequence is empty")
    if not isinstance(candidate, str) or not is_binary(candidate):
        return BoundaryValidation(valid=False, occurrences=0,
                                  reason="Boundary must contain only '0' and '1' characters")

    positions = find_occurrences(bits or '', candidate)
    occurrences = len(positions)
    if occurrences == 0:
        return BoundaryValidation(valid=True, occurrences=0, positions=positions)
    if occurrences == 1:
        if allow_existing:
            return BoundaryValidation(valid=True, occurrences=1,
                                      reason="Sequence already occurs once; usable as an existing landmark",
                                      positions=positions)
        return BoundaryValidation(valid=False, occurrences=1,
                                  reason="Sequence already occurs in the payload; inserting it would create a duplicate",
                                  positions=positions)
    return BoundaryValidation(valid=False, occurrences=occurrences,
                              reason=f"Sequence occurs {occurrences} times; ambiguous as a delimiter",
                              positions=positions)


def create_boundary(bits: str, sequence: str, description: str = '', color: Optional[str] = None,
                    boundary_id: Optional[str] = None) -> Boundary:
    """Build a Boundary with its current occurrence positions in ``bits``."""
    return Boundary(
        sequence=sequence,
        description=description,
        color=color or ANALYSIS_CONFIG['default_boundary_color'],
        positions=find_occurrences(bits or '', sequence),
        id=boundary_id or f"boundary_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}",
    )


def refresh_boundary_positions(bits: str, boundaries: List[Boundary]) -> List[Boundary]:
    """Recompute ``positions`` of every boundary after the payload changed (in place)."""
    for boundary in boundaries:
        boundary.positions = find_occurrences(bits or '', boundary.sequence)
    return boundaries


def has_multiple_occurrences(boundary: Boundary) -> bool:
    return len(boundary.positions) > 1


# ═══════════════════════════════════════════════════════════════════════════════
# SUGGESTIONS
# ═══════════════════════════════════════════════════════════════════════════════

def find_unique_palindrome(bits: str, min_length: Optional[int] = None) -> Optional[Dict[str, Any]]:
    """
    Longest maximal palindrome of at least ``min_length`` bits that occurs
    exactly once in ``bits``.

    Returns:
        {'sequence': str, 'position': int} or None
    """
    if min_length is None:
        min_length = ANALYSIS_CONFIG['unique_palindrome_min_length']
    seq = limit_scan_length(bits or '', ANALYSIS_CONFIG['max_pattern_scan_bits'], 'unique_palindrome')
    n = len(seq)
    odd, even = odd_radii(seq), even_radii(seq)

    candidates = []
    for i in range(n):
        k = odd[i]
        if 2 * k - 1 >= min_length:
            candidates.append((2 * k - 1, i - k + 1))
        k = even[i + 1] if i + 1 < n else 0
        if 2 * k >= min_length:
            candidates.append((2 * k, i - k + 1))
    # longest first; equal lengths keep scan order
    candidates.sort(key=lambda c: -c[0])

    checked = set()
    for length, position in candidates:
        sequence = seq[position:position + length]
        if sequence in checked:
            continue
        checked.add(sequence)
        if count_occurrences(bits, sequence) == 1:
            return {'sequence': sequence, 'position': position}
    return None


def suggest_boundaries(bits: str) -> Dict[str, Any]:
    """
    Three data-derived boundary suggestions.

    Returns:
        {'zero_run': '0' * (longest zero run + 1),
         'one_run': '1' * (longest one run + 1),
         'palindrome': find_unique_palindrome(bits)}
    """
    bits = bits or ''
    return {
        'zero_run': '0' * (longest_run(bits, '0') + 1),
        'one_run': '1' * (longest_run(bits, '1') + 1),
        'palindrome': find_unique_palindrome(bits),
    }
