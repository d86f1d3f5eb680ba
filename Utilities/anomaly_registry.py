"""
┌──────────────────────────────────────────────────────────────────────────────┐
│ Anomaly Registry - Pluggable detector definitions                            │
├──────────────────────────────────────────────────────────────────────────────┤
│ Owned collection of AnomalyDefinition entries with enable/disable toggles    │
└──────────────────────────────────────────────────────────────────────────────┘

DESCRIPTION:
    A registry holds detector definitions that the aggregator can run instead
    of the built-in detector set. Each definition carries fixed display data
    (name, description, category, severity) and a plain callable

        scan(bits: str, min_length: int) -> [{'position': int, 'length': int, ...}]

    The registry never evaluates code strings; callers hand in callables.

    A fresh registry is seeded with six default definitions backed by the
    built-in detectors' ``scan`` routines.

USAGE::

    registry = AnomalyRegistry()
    registry.set_enabled('sparse_region', False)
    registry.register_detector(AnomalyDefinition(
        id='', name='Marker', description='0xFF byte', category='Custom',
        severity='low', min_length=8, scan=my_scan))
    records = detect_anomalies(bits, mode='registry', registry=registry)
"""
# ═══════════════════════════════════════════════════════════════════════════════
# IMPORTS
# ═══════════════════════════════════════════════════════════════════════════════
import logging
import random
import string
import threading
import time
from dataclasses import dataclass, field, fields, replace
from typing import List, Dict, Any, Optional, Callable

from Detectors import (
    PalindromeDetector,
    RepeatingPatternDetector,
    AlternatingRunDetector,
    LongRunDetector,
    DensityAnomalyDetector,
    ByteAlignmentDetector,
)
from Utilities.config.analysis import DETECTOR_DEFAULTS
from Utilities.config.anomaly_taxonomy import ANOMALY_TYPES, is_valid_severity

logger = logging.getLogger(__name__)

ScanFn = Callable[[str, int], List[Dict[str, Any]]]

# ═══════════════════════════════════════════════════════════════════════════════
# TUNABLE PARAMETERS
# ═══════════════════════════════════════════════════════════════════════════════
CUSTOM_ID_PREFIX = 'custom'
CUSTOM_ID_SUFFIX_LENGTH = 9
_ID_ALPHABET = string.ascii_lowercase + string.digits

# id -> built-in detector backing the default definition; labels come from ANOMALY_TYPES
DEFAULT_DEFINITIONS = {
    'palindrome': PalindromeDetector,
    'repeating_pattern': RepeatingPatternDetector,
    'alternating': AlternatingRunDetector,
    'long_run': LongRunDetector,
    'sparse_region': DensityAnomalyDetector,
    'byte_misalignment': ByteAlignmentDetector,
}
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass
class AnomalyDefinition:
    """One pluggable detector: fixed display data plus a scan callable."""
    id: str
    name: str
    description: str
    category: str
    severity: str
    min_length: int
    scan: Optional[ScanFn] = field(default=None, repr=False, compare=False)
    enabled: bool = True

    def to_record(self) -> Dict[str, Any]:
        """Plain dict without the scan callable."""
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name != 'scan'}


def generate_definition_id() -> str:
    """``custom_<millis>_<random>`` id for definitions registered without one."""
    suffix = ''.join(random.choice(_ID_ALPHABET) for _ in range(CUSTOM_ID_SUFFIX_LENGTH))
    return f"{CUSTOM_ID_PREFIX}_{int(time.time() * 1000)}_{suffix}"


def build_default_definitions() -> List[AnomalyDefinition]:
    """The six default definitions, each backed by a fresh built-in detector."""
    definitions = []
    for def_id, detector_cls in DEFAULT_DEFINITIONS.items():
        labels = ANOMALY_TYPES[def_id]
        definitions.append(AnomalyDefinition(
            id=def_id,
            name=labels['name'],
            description=labels['description'],
            category=labels['category'],
            severity=labels['severity'],
            min_length=DETECTOR_DEFAULTS[def_id]['min_length'],
            scan=detector_cls().scan,
        ))
    return definitions


class AnomalyRegistry:
    """
    Ordered, lock-guarded collection of AnomalyDefinition entries.

    Edits are last-writer-wins. Readers get copies, so a scan iterating over
    ``list_enabled()`` is unaffected by concurrent edits.
    """

    def __init__(self, definitions: Optional[List[AnomalyDefinition]] = None):
        self._lock = threading.Lock()
        self._definitions: List[AnomalyDefinition] = []
        self._listeners: List[Callable[[], None]] = []
        seed = build_default_definitions() if definitions is None else definitions
        for definition in seed:
            self._check_definition(definition)
            if self._index_of(definition.id) != -1:
                raise ValueError(f"Duplicate anomaly definition id: {definition.id!r}")
            self._definitions.append(definition)

    # ── internal helpers ──────────────────────────────────────────────────────

    def _index_of(self, def_id: str) -> int:
        for idx, definition in enumerate(self._definitions):
            if definition.id == def_id:
                return idx
        return -1

    @staticmethod
    def _check_definition(definition: AnomalyDefinition) -> None:
        if not is_valid_severity(definition.severity):
            raise ValueError(f"Invalid severity {definition.severity!r} for {definition.id!r}")
        if definition.scan is not None and not callable(definition.scan):
            raise TypeError(f"scan for {definition.id!r} must be callable")

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception as e:
                logger.error(f"Registry listener failed: {e}")

    # ── registry management ───────────────────────────────────────────────────

    def register_detector(self, definition: AnomalyDefinition) -> AnomalyDefinition:
        """
        Add a definition and return it (with a generated id if it had none).

        Raises:
            ValueError: If the id is already registered or the severity is invalid
            TypeError: If ``scan`` is not callable
        """
        if not definition.id:
            definition = replace(definition, id=generate_definition_id())
        self._check_definition(definition)
        with self._lock:
            if self._index_of(definition.id) != -1:
                raise ValueError(f"Duplicate anomaly definition id: {definition.id!r}")
            self._definitions.append(definition)
        logger.info(f"Registered anomaly definition '{definition.id}' ({definition.name})")
        self._notify()
        return definition

    def remove_detector(self, def_id: str) -> bool:
        """Remove a definition; returns False when the id is unknown."""
        with self._lock:
            idx = self._index_of(def_id)
            if idx == -1:
                return False
            del self._definitions[idx]
        logger.info(f"Removed anomaly definition '{def_id}'")
        self._notify()
        return True

    def set_enabled(self, def_id: str, enabled: bool) -> bool:
        with self._lock:
            idx = self._index_of(def_id)
            if idx == -1:
                logger.warning(f"set_enabled: unknown anomaly definition '{def_id}'")
                return False
            self._definitions[idx].enabled = bool(enabled)
        logger.info(f"Anomaly definition '{def_id}' {'enabled' if enabled else 'disabled'}")
        self._notify()
        return True

    def toggle_enabled(self, def_id: str) -> Optional[bool]:
        """Flip the enabled flag; returns the new value or None for an unknown id."""
        with self._lock:
            idx = self._index_of(def_id)
            if idx == -1:
                return None
            definition = self._definitions[idx]
            definition.enabled = not definition.enabled
            new_value = definition.enabled
        self._notify()
        return new_value

    def update_definition(self, def_id: str, **updates) -> Optional[AnomalyDefinition]:
        """
        Apply field updates to a definition.

        Returns:
            The updated definition, or None if the id is unknown

        Raises:
            ValueError: For an unknown field, an attempt to change ``id`` or an
                invalid severity
        """
        known = {f.name for f in fields(AnomalyDefinition)}
        unknown = set(updates) - known
        if unknown:
            raise ValueError(f"Unknown definition fields: {sorted(unknown)}")
        if 'id' in updates and updates['id'] != def_id:
            raise ValueError("Definition id cannot be changed")
        with self._lock:
            idx = self._index_of(def_id)
            if idx == -1:
                return None
            updated = replace(self._definitions[idx], **updates)
            self._check_definition(updated)
            self._definitions[idx] = updated
        self._notify()
        return updated

    def reset_to_defaults(self) -> None:
        with self._lock:
            self._definitions = build_default_definitions()
        logger.info("Anomaly registry reset to defaults")
        self._notify()

    # ── queries ───────────────────────────────────────────────────────────────

    def get_definition(self, def_id: str) -> Optional[AnomalyDefinition]:
        with self._lock:
            idx = self._index_of(def_id)
            return replace(self._definitions[idx]) if idx != -1 else None

    def get_all_definitions(self) -> List[AnomalyDefinition]:
        with self._lock:
            return [replace(d) for d in self._definitions]

    def list_enabled(self) -> List[AnomalyDefinition]:
        """Snapshot of the currently enabled definitions, in registration order."""
        with self._lock:
            return [replace(d) for d in self._definitions if d.enabled]

    def get_categories(self) -> List[str]:
        """Distinct categories in first-seen order."""
        with self._lock:
            return list(dict.fromkeys(d.category for d in self._definitions))

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, def_id: str) -> bool:
        with self._lock:
            return self._index_of(def_id) != -1

    # ── change notification ───────────────────────────────────────────────────

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Register a no-argument change listener; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ── execution ─────────────────────────────────────────────────────────────

    def execute_detection(self, def_id: str, bits: str) -> List[Dict[str, Any]]:
        """
        Run one enabled definition's scan routine and return its raw hits.

        Unknown or disabled ids, definitions without a scan routine and
        routines that raise all yield ``[]``; failures are logged.
        """
        definition = self.get_definition(def_id)
        if definition is None or not definition.enabled or definition.scan is None:
            return []
        try:
            return list(definition.scan(bits, definition.min_length) or [])
        except Exception as e:
            logger.error(f"Error executing anomaly detection '{definition.name}': {e}")
            return []

    # ── plain-record hand-off ─────────────────────────────────────────────────

    def export_definitions(self) -> List[Dict[str, Any]]:
        """Definitions as plain dicts (scan callables omitted) for persistence by the caller."""
        with self._lock:
            return [d.to_record() for d in self._definitions]

    def import_definitions(self, records: List[Dict[str, Any]],
                           scans: Optional[Dict[str, ScanFn]] = None) -> int:
        """
        Replace the registry contents with plain records.

        Scan callables come from ``scans`` keyed by id; default ids without an
        entry get their built-in routine back. Records with no routine are
        kept but never produce hits.

        Returns:
            Number of definitions loaded
        """
        scans = dict(scans or {})
        builtin = {d.id: d.scan for d in build_default_definitions()}
        loaded: List[AnomalyDefinition] = []
        seen = set()
        for record in records:
            known = {f.name for f in fields(AnomalyDefinition)}
            values = {k: v for k, v in record.items() if k in known and k != 'scan'}
            if not values.get('id'):
                values['id'] = generate_definition_id()
            if values['id'] in seen:
                raise ValueError(f"Duplicate anomaly definition id: {values['id']!r}")
            definition = AnomalyDefinition(scan=scans.get(values['id'], builtin.get(values['id'])), **values)
            self._check_definition(definition)
            if definition.scan is None:
                logger.warning(f"Imported definition '{definition.id}' has no scan routine")
            seen.add(definition.id)
            loaded.append(definition)
        with self._lock:
            self._definitions = loaded
        logger.info(f"Imported {len(loaded)} anomaly definitions")
        self._notify()
        return len(loaded)
