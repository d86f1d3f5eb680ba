"""Abstract base class for all bit-string anomaly detectors."""
# IMPORTS
import logging
from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional, Union

from Utilities.config.analysis import ANALYSIS_CONFIG, DETECTOR_DEFAULTS
from Utilities.config.anomaly_taxonomy import ANOMALY_TYPES
from Utilities.core.anomaly_record import AnomalyRecord
from Utilities.core.bit_context import BitContext

logger = logging.getLogger(__name__)

BitsLike = Union[str, BitContext]


class BaseAnomalyDetector(ABC):
    """
    Abstract base class for all anomaly detectors.

    Subclasses implement two steps:

    ``scan(bits, min_length)``
        Return raw hits ``[{'position': int, 'length': int, ...}]``. This is
        the narrow interface shared with pluggable registry definitions.
    ``build_record(ctx, hit)``
        Turn one hit into an ``AnomalyRecord`` with a computed severity.

    ``detect_anomalies`` runs both and drops repeated ``(position, length)``
    regions so a detector never reports the same region twice.
    """

    DETECTOR_KEY = 'Override in subclass'

    def __init__(self, min_length: Optional[int] = None):
        self.params: Dict[str, Any] = dict(DETECTOR_DEFAULTS.get(self.DETECTOR_KEY, {}))
        if min_length is not None:
            self.params['min_length'] = min_length
        self.audit = {
            'invoked': False,
            'bits_scanned': 0,
            'candidates_seen': 0,
            'duplicates_dropped': 0,
            'reported': 0,
        }

    @abstractmethod
    def scan(self, bits: BitsLike, min_length: Optional[int] = None) -> List[Dict[str, Any]]:
        """Return raw hits for ``bits``; each hit has 'position' and 'length'."""

    @abstractmethod
    def build_record(self, ctx: BitContext, hit: Dict[str, Any]) -> AnomalyRecord:
        """Turn a raw hit into an AnomalyRecord."""

    def get_anomaly_type_name(self) -> str:
        """Return the anomaly type name (e.g., 'Long Run')."""
        return ANOMALY_TYPES[self.DETECTOR_KEY]['type']

    def get_category(self) -> str:
        return ANOMALY_TYPES[self.DETECTOR_KEY]['category']

    def get_description(self) -> str:
        return ANOMALY_TYPES[self.DETECTOR_KEY]['description']

    @property
    def min_length(self) -> int:
        return self.params['min_length']

    def _resolve_min_length(self, min_length: Optional[int]) -> int:
        return self.min_length if min_length is None else min_length

    def detect_anomalies(self, bits: BitsLike, min_length: Optional[int] = None) -> List[AnomalyRecord]:
        """Scan ``bits`` and return de-duplicated AnomalyRecords in scan order."""
        ctx = BitContext.of(bits)
        self.audit['invoked'] = True
        self.audit['bits_scanned'] = ctx.length
        self.audit['candidates_seen'] = 0
        self.audit['duplicates_dropped'] = 0
        self.audit['reported'] = 0

        if ctx.length < ANALYSIS_CONFIG['min_analyzable_bits']:
            return []

        records = []
        seen = set()
        for hit in self.scan(ctx, min_length):
            self.audit['candidates_seen'] += 1
            key = (hit['position'], hit['length'])
            if key in seen:
                self.audit['duplicates_dropped'] += 1
                continue
            seen.add(key)
            records.append(self.build_record(ctx, hit))

        self.audit['reported'] = len(records)
        logger.debug(f"{self.DETECTOR_KEY}: {self.audit['candidates_seen']} hits -> "
                     f"{len(records)} records over {ctx.length:,} bits")
        return records

    def make_record(self, hit: Dict[str, Any], sequence: str, description: str,
                    severity: str) -> AnomalyRecord:
        return AnomalyRecord(
            type=self.get_anomaly_type_name(),
            position=int(hit['position']),
            length=int(hit['length']),
            sequence=sequence,
            description=description,
            severity=severity,
            id=f"{self.DETECTOR_KEY}-{hit['position']}",
        )

    def get_statistics(self) -> Dict[str, Any]:
        """Get detector statistics"""
        return {
            'detector': self.DETECTOR_KEY,
            'anomaly_type': self.get_anomaly_type_name(),
            'category': self.get_category(),
            'parameters': dict(self.params),
        }

    def get_audit_info(self) -> Dict[str, Any]:
        """Get detector execution audit information"""
        return self.audit.copy()
