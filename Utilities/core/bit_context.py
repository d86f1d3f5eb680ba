"""
┌──────────────────────────────────────────────────────────────────────────────┐
│ BitContext - Shared Preprocessing Context for Detectors                      │
├──────────────────────────────────────────────────────────────────────────────┤
│ One numpy conversion per scan, shared by every detector                      │
└──────────────────────────────────────────────────────────────────────────────┘

DESCRIPTION:
    Encapsulates a bit payload with all one-time preprocessing already applied.

    Instead of each detector independently converting the '0'/'1' string to
    a numpy array, a single ``BitContext`` is created per scan and shared
    across all detectors that run on it.

    Benefits:
        - String → uint8 array conversion performed exactly once per scan
        - Payload length cached
        - Ones prefix-sum built lazily for density queries in O(1)

USAGE::

    from Utilities.core.bit_context import BitContext

    ctx = BitContext("0011011100")
    print(ctx.length)            # 10
    print(ctx.ones_count(2, 8))  # 5
"""

from __future__ import annotations

from typing import Optional, Union

import numpy as np

from Utilities.detectors_utils import to_bit_array


class BitContext:
    """
    Preprocessed bit payload shared across all detectors for one scan.

    Attributes
    ----------
    bits : str
        The payload as a '0'/'1' string.
    length : int
        Length of ``bits``.
    array : np.ndarray
        uint8 array of 0/1 values, same length as ``bits``.
    """

    __slots__ = ("bits", "length", "array", "_ones_prefix")

    def __init__(self, bits: str) -> None:
        self.bits: str = bits
        self.length: int = len(bits)
        self.array: np.ndarray = to_bit_array(bits)
        self._ones_prefix: Optional[np.ndarray] = None

    @classmethod
    def of(cls, bits: Union[str, "BitContext"]) -> "BitContext":
        """Return ``bits`` unchanged when it is already a context."""
        if isinstance(bits, BitContext):
            return bits
        return cls(bits)

    # ------------------------------------------------------------------
    # Density helpers
    # ------------------------------------------------------------------

    @property
    def ones_prefix(self) -> np.ndarray:
        """Cumulative ones count of shape ``(length + 1,)``."""
        if self._ones_prefix is None:
            prefix = np.zeros(self.length + 1, dtype=np.int64)
            np.cumsum(self.array, out=prefix[1:])
            self._ones_prefix = prefix
        return self._ones_prefix

    def ones_count(self, start: int = 0, end: Optional[int] = None) -> int:
        """
        Number of '1' bits in ``bits[start:end]``.

        Args:
            start: Inclusive start index (default 0).
            end:   Exclusive end index (default ``length``).
        """
        if end is None:
            end = self.length
        if end <= start:
            return 0
        return int(self.ones_prefix[end] - self.ones_prefix[start])

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return f"BitContext(length={self.length:,})"

    def __len__(self) -> int:
        return self.length
