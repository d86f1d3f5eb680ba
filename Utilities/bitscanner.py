"""
┌──────────────────────────────────────────────────────────────────────────────┐
│ BitScanner - Anomaly aggregation over a bit-string payload                   │
├──────────────────────────────────────────────────────────────────────────────┤
│ Runs built-in detectors or registry definitions, then filters / summarises   │
└──────────────────────────────────────────────────────────────────────────────┘
"""
# ═══════════════════════════════════════════════════════════════════════════════
# IMPORTS
# ═══════════════════════════════════════════════════════════════════════════════
import argparse
import logging
import sys
import time
from collections import Counter
from typing import List, Dict, Any, Optional

import pandas as pd

from Detectors import (
    PalindromeDetector,
    RepeatingPatternDetector,
    AlternatingRunDetector,
    LongRunDetector,
    DensityAnomalyDetector,
    ByteAlignmentDetector,
)
from Utilities.anomaly_registry import AnomalyRegistry, AnomalyDefinition
from Utilities.config.analysis import ANALYSIS_CONFIG, BUILTIN_DETECTOR_ORDER
from Utilities.core.anomaly_record import AnomalyRecord
from Utilities.core.bit_context import BitContext
from Utilities.detectors_utils import preview_region
from Utilities.safety import parse_optional_int, validate_bitstring_input

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# TUNABLE PARAMETERS
# ═══════════════════════════════════════════════════════════════════════════════
__version__ = "2026.1"

MODE_BUILTIN = 'builtin'
MODE_REGISTRY = 'registry'
SCAN_MODES = (MODE_BUILTIN, MODE_REGISTRY)

RECORD_COLUMNS = ['id', 'type', 'position', 'length', 'sequence', 'description', 'severity']
# ═══════════════════════════════════════════════════════════════════════════════


class BitScanner:
    """
    Aggregates anomaly records over one payload.

    Built-in mode runs the six detectors in a fixed order. Registry mode runs
    the enabled definitions of an ``AnomalyRegistry`` (snapshot taken at scan
    start) and relabels their raw hits with each definition's fixed name,
    description and severity. Either way the concatenated records are sorted
    by position; the sort is stable so ties keep detector order.
    """

    def __init__(self, registry: Optional[AnomalyRegistry] = None):
        detectors = {
            'palindrome': PalindromeDetector(),
            'repeating_pattern': RepeatingPatternDetector(),
            'alternating': AlternatingRunDetector(),
            'long_run': LongRunDetector(),
            'sparse_region': DensityAnomalyDetector(),
            'byte_misalignment': ByteAlignmentDetector(),
        }
        self.detectors = {key: detectors[key] for key in BUILTIN_DETECTOR_ORDER}
        self.registry = registry
        self.last_timings: Dict[str, float] = {}

    def analyze_bits(self, bits: Optional[str], mode: str = MODE_BUILTIN) -> List[AnomalyRecord]:
        """
        Detect anomalies in ``bits``.

        Args:
            bits: '0'/'1' payload; None or '' yields []
            mode: 'builtin' or 'registry'

        Returns:
            AnomalyRecords sorted ascending by position

        Raises:
            TypeError: If ``bits`` is not a str
            ValueError: If ``bits`` is not binary or ``mode`` is unknown
        """
        if mode not in SCAN_MODES:
            raise ValueError(f"Unknown scan mode {mode!r}; expected one of {SCAN_MODES}")
        bits = validate_bitstring_input(bits)
        self.last_timings = {}
        if len(bits) < ANALYSIS_CONFIG['min_analyzable_bits']:
            return []

        ctx = BitContext(bits)
        if mode == MODE_REGISTRY:
            if self.registry is None:
                self.registry = AnomalyRegistry()
            records = self._run_registry(ctx)
        else:
            records = self._run_builtin(ctx)

        records.sort(key=lambda r: r.position)
        logger.debug(f"{mode} scan of {ctx.length:,} bits produced {len(records)} records")
        return records

    def _run_builtin(self, ctx: BitContext) -> List[AnomalyRecord]:
        records = []
        for detector_name, detector in self.detectors.items():
            start_time = time.time()
            records.extend(detector.detect_anomalies(ctx))
            self.last_timings[detector_name] = time.time() - start_time
        return records

    def _run_registry(self, ctx: BitContext) -> List[AnomalyRecord]:
        records = []
        for definition in self.registry.list_enabled():
            if definition.scan is None:
                continue
            start_time = time.time()
            try:
                hits = definition.scan(ctx.bits, definition.min_length) or []
                records.extend(self._relabel_hits(ctx, definition, hits))
            except Exception as e:
                logger.error(f"Error in anomaly definition '{definition.name}': {e}")
            self.last_timings[definition.id] = time.time() - start_time
        return records

    @staticmethod
    def _relabel_hits(ctx: BitContext, definition: AnomalyDefinition,
                      hits: List[Dict[str, Any]]) -> List[AnomalyRecord]:
        records = []
        seen = set()
        for hit in hits:
            try:
                position, length = int(hit['position']), int(hit['length'])
            except (KeyError, TypeError, ValueError):
                logger.warning(f"Skipping malformed hit from '{definition.id}': {hit!r}")
                continue
            if position < 0 or length < 0 or position > ctx.length:
                logger.warning(f"Skipping out-of-range hit from '{definition.id}': {hit!r}")
                continue
            if (position, length) in seen:
                continue
            seen.add((position, length))
            records.append(AnomalyRecord(
                type=definition.name,
                position=position,
                length=length,
                sequence=preview_region(ctx.bits, position, length),
                description=definition.description,
                severity=definition.severity,
                id=f"{definition.id}-{position}",
            ))
        return records

    def get_detector_info(self) -> Dict[str, Any]:
        info = {'total_detectors': len(self.detectors), 'detectors': {}}
        for name, detector in self.detectors.items():
            info['detectors'][name] = detector.get_statistics()
        return info


def detect_anomalies(bits: Optional[str], mode: str = MODE_BUILTIN,
                     registry: Optional[AnomalyRegistry] = None) -> List[AnomalyRecord]:
    """Detect anomalies in ``bits``; see ``BitScanner.analyze_bits``."""
    return BitScanner(registry=registry).analyze_bits(bits, mode=mode)


def filter_anomalies(records: List[AnomalyRecord], type: Optional[str] = None,
                     severity: Optional[str] = None, min_length: Any = None,
                     max_length: Any = None, min_position: Any = None,
                     max_position: Any = None) -> List[AnomalyRecord]:
    """
    Filter records on any combination of axes.

    ``type`` and ``severity`` match exactly ('all' or None disables them).
    Length and position bounds are inclusive; a blank or non-numeric bound
    places no constraint on its axis.
    """
    min_len, max_len = parse_optional_int(min_length), parse_optional_int(max_length)
    min_pos, max_pos = parse_optional_int(min_position), parse_optional_int(max_position)

    def keep(record: AnomalyRecord) -> bool:
        if type not in (None, 'all') and record.type != type:
            return False
        if severity not in (None, 'all') and record.severity != severity:
            return False
        if min_len is not None and record.length < min_len:
            return False
        if max_len is not None and record.length > max_len:
            return False
        if min_pos is not None and record.position < min_pos:
            return False
        if max_pos is not None and record.position > max_pos:
            return False
        return True

    return [r for r in records if keep(r)]


def summarize(records: List[AnomalyRecord], total_bits: int) -> Dict[str, Any]:
    """
    Summary statistics over an unfiltered record set.

    ``total_affected_bits`` sums lengths across detectors, so overlapping
    records count once per detector and coverage can exceed 100.

    Returns:
        {'total', 'by_type', 'by_severity', 'mean_length',
         'total_affected_bits', 'coverage_percent'}
    """
    total_affected = sum(r.length for r in records)
    return {
        'total': len(records),
        'by_type': dict(Counter(r.type for r in records)),
        'by_severity': dict(Counter(r.severity for r in records)),
        'mean_length': round(total_affected / len(records), 2) if records else 0,
        'total_affected_bits': total_affected,
        'coverage_percent': round(total_affected / total_bits * 100, 2) if total_bits > 0 else 0,
    }


def get_unique_types(records: List[AnomalyRecord]) -> List[str]:
    """Distinct record types in first-seen order (for type filter choices)."""
    return list(dict.fromkeys(r.type for r in records))


def records_to_dataframe(records: List[AnomalyRecord]) -> pd.DataFrame:
    """Records as a DataFrame with a fixed column order."""
    if not records:
        return pd.DataFrame(columns=RECORD_COLUMNS)
    return pd.DataFrame([r.to_dict() for r in records])[RECORD_COLUMNS]


def summary_to_dataframe(summary: Dict[str, Any]) -> pd.DataFrame:
    """
    Flatten a ``summarize`` result into a two-column Metric/Value table.

    Per-type and per-severity counts appear as 'type:<name>' and
    'severity:<level>' rows.
    """
    rows = [
        ('total', summary['total']),
        ('mean_length', summary['mean_length']),
        ('total_affected_bits', summary['total_affected_bits']),
        ('coverage_percent', summary['coverage_percent']),
    ]
    rows.extend((f"type:{name}", count) for name, count in summary['by_type'].items())
    rows.extend((f"severity:{level}", count) for level, count in summary['by_severity'].items())
    return pd.DataFrame(rows, columns=['Metric', 'Value'])


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Scan a '0'/'1' text file for bit-pattern anomalies")
    parser.add_argument('path', nargs='?', help="File holding the bit-string (whitespace ignored)")
    parser.add_argument('--mode', choices=SCAN_MODES, default=MODE_BUILTIN)
    parser.add_argument('--limit', type=int, default=10, help="Records to print")
    parser.add_argument('--detectors', action='store_true', help="List built-in detectors and exit")
    args = parser.parse_args(argv)

    if args.detectors:
        info = BitScanner().get_detector_info()
        print(f"Built-in detectors: {info['total_detectors']}")
        for name, stats in info['detectors'].items():
            print(f"  {name:<18} {stats['anomaly_type']:<22} min_length={stats['parameters']['min_length']}")
        return 0

    if args.path:
        with open(args.path, 'r') as handle:
            bits = ''.join(handle.read().split())
    else:
        bits = "1010101010" + "0" * 30 + "110011001100" + "1" * 12 + "01"

    try:
        records = detect_anomalies(bits, mode=args.mode)
    except (TypeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"{'='*70}\nBitScanner - Bit Pattern Anomaly Detection\nVersion {__version__}\n{'='*70}")
    print(f"Payload: {len(bits):,} bits | Mode: {args.mode} | Records: {len(records)}")
    print(records_to_dataframe(records).head(args.limit).to_string(index=False))
    print()
    print(summary_to_dataframe(summarize(records, len(bits))).to_string(index=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
