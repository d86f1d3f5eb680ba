"""
┌──────────────────────────────────────────────────────────────────────────────┐
│ Detectors Utils - Shared bit-string primitives for anomaly detectors         │
├──────────────────────────────────────────────────────────────────────────────┤
│ Common functions used by detectors, ideality and boundary synthesis          │
└──────────────────────────────────────────────────────────────────────────────┘
"""
# ═══════════════════════════════════════════════════════════════════════════════
# IMPORTS
# ═══════════════════════════════════════════════════════════════════════════════
from typing import List, Tuple

import numpy as np

from Utilities.config.analysis import ANALYSIS_CONFIG

# ═══════════════════════════════════════════════════════════════════════════════
# TUNABLE PARAMETERS
# ═══════════════════════════════════════════════════════════════════════════════
BINARY_CHARS = frozenset('01')
_ASCII_ZERO = ord('0')
# ═══════════════════════════════════════════════════════════════════════════════


def is_binary(bits: str) -> bool:
    """
    Return True when every character of ``bits`` is '0' or '1'.

    The empty string is considered binary.

    Example:
        >>> is_binary("0110")
        True
        >>> is_binary("10201")
        False
    """
    return not (set(bits) - BINARY_CHARS)


def to_bit_array(bits: str) -> np.ndarray:
    """
    Convert a '0'/'1' string into a uint8 numpy array of 0/1 values.

    Args:
        bits: Binary string (caller guarantees it is binary)

    Returns:
        1-D uint8 array with one element per bit
    """
    if not bits:
        return np.zeros(0, dtype=np.uint8)
    return np.frombuffer(bits.encode('ascii'), dtype=np.uint8) - _ASCII_ZERO


def make_preview(sequence: str, length: int = None, truncated: bool = None) -> str:
    """
    Shorten a matched sequence to ``length`` characters plus a '...' suffix.

    Args:
        sequence: Sequence to preview
        length: Characters kept (default ANALYSIS_CONFIG['preview_length'])
        truncated: Force the suffix on or off; by default it is added only
            when the sequence is longer than ``length``

    Example:
        >>> make_preview("0" * 30, 4)
        '0000...'
    """
    if length is None:
        length = ANALYSIS_CONFIG['preview_length']
    if truncated is None:
        truncated = len(sequence) > length
    return sequence[:length] + (ANALYSIS_CONFIG['preview_suffix'] if truncated else '')


def preview_region(bits: str, start: int, length: int) -> str:
    """Preview of ``bits[start:start + length]`` without slicing the whole region."""
    shown = ANALYSIS_CONFIG['preview_length']
    return make_preview(bits[start:start + min(length, shown)], truncated=length > shown)


def identical_runs(arr: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split a bit array into maximal runs of identical bits.

    Returns:
        (starts, lengths) arrays in positional order
    """
    n = len(arr)
    if n == 0:
        return np.zeros(0, dtype=np.int64), np.zeros(0, dtype=np.int64)
    breaks = np.flatnonzero(arr[1:] != arr[:-1]) + 1
    starts = np.concatenate(([0], breaks)).astype(np.int64)
    lengths = np.diff(np.concatenate((starts, [n])))
    return starts, lengths


def alternating_runs(arr: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split a bit array into maximal runs where every adjacent pair differs.

    A new run starts at every index whose bit equals its predecessor.

    Returns:
        (starts, lengths) arrays in positional order
    """
    n = len(arr)
    if n == 0:
        return np.zeros(0, dtype=np.int64), np.zeros(0, dtype=np.int64)
    breaks = np.flatnonzero(arr[1:] == arr[:-1]) + 1
    starts = np.concatenate(([0], breaks)).astype(np.int64)
    lengths = np.diff(np.concatenate((starts, [n])))
    return starts, lengths


def forward_true_run(mask: np.ndarray) -> np.ndarray:
    """
    For each index, count consecutive True values starting at that index.

    Example:
        >>> forward_true_run(np.array([True, True, False, True])).tolist()
        [2, 1, 0, 1]
    """
    n = len(mask)
    if n == 0:
        return np.zeros(0, dtype=np.int64)
    pos = np.arange(n, dtype=np.int64)
    false_at = np.where(mask, n, pos)
    next_false = np.minimum.accumulate(false_at[::-1])[::-1]
    return next_false - pos


def block_matches(arr: np.ndarray, width: int) -> np.ndarray:
    """
    Boolean array ``m`` where ``m[i]`` is True when the ``width``-bit block at
    ``i`` equals the block at ``i + width``.

    ``len(m) == len(arr) - 2 * width + 1`` (empty when the payload is too
    short to hold two blocks).
    """
    n = len(arr)
    count = n - 2 * width + 1
    if width < 1 or count <= 0:
        return np.zeros(0, dtype=bool)
    equal = (arr[:n - width] == arr[width:]).astype(np.int64)
    csum = np.concatenate(([0], np.cumsum(equal)))
    return (csum[width:width + count] - csum[:count]) == width


def find_occurrences(bits: str, pattern: str) -> List[int]:
    """
    Return every start offset of ``pattern`` in ``bits``, overlaps included.

    Example:
        >>> find_occurrences("0000", "00")
        [0, 1, 2]
    """
    if not pattern:
        return []
    positions = []
    idx = bits.find(pattern)
    while idx != -1:
        positions.append(idx)
        idx = bits.find(pattern, idx + 1)
    return positions


def count_occurrences(bits: str, pattern: str) -> int:
    """Number of (possibly overlapping) occurrences of ``pattern`` in ``bits``."""
    return len(find_occurrences(bits, pattern))


def longest_run(bits: str, bit: str) -> int:
    """Length of the longest run of ``bit`` ('0' or '1'); 0 when absent."""
    arr = to_bit_array(bits)
    starts, lengths = identical_runs(arr)
    if len(starts) == 0:
        return 0
    selected = lengths[arr[starts] == int(bit)]
    return int(selected.max()) if len(selected) else 0
