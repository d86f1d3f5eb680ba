"""
AnomalyRecord - one detected anomaly instance.

Records are created fresh on every scan and never mutated. ``to_dict`` hands
them to presentation and export collaborators as plain dictionaries.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class AnomalyRecord:
    """
    Attributes:
        type: Anomaly type name (e.g. 'Long Run') or pluggable definition name
        position: Start index, inclusive
        length: Number of bits covered
        sequence: Matched substring, or a preview ending in '...'
        description: Human-readable explanation
        severity: 'low' | 'medium' | 'high'
        id: Identifier made of the detector key and position
    """
    type: str
    position: int
    length: int
    sequence: str
    description: str
    severity: str
    id: str = ''

    @property
    def end(self) -> int:
        """Exclusive end index."""
        return self.position + self.length

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
