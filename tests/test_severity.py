"""
Tests for the severity classifier and the anomaly taxonomy.
"""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import unittest

from Utilities.severity import classify_severity, classify_density_severity, fixed_severity
from Utilities.anomaly_registry import build_default_definitions
from Utilities.config.analysis import BUILTIN_DETECTOR_ORDER
from Utilities.config.anomaly_taxonomy import ANOMALY_TYPES, VALID_TYPES, is_valid_severity


class TestClassifySeverity(unittest.TestCase):
    """Thresholds are strict 'greater than' comparisons per detector"""

    def test_palindrome_thresholds(self):
        self.assertEqual(classify_severity('palindrome', 10), 'low')
        self.assertEqual(classify_severity('palindrome', 11), 'medium')
        self.assertEqual(classify_severity('palindrome', 20), 'medium')
        self.assertEqual(classify_severity('palindrome', 21), 'high')

    def test_repeat_thresholds(self):
        self.assertEqual(classify_severity('repeating_pattern', 3), 'low')
        self.assertEqual(classify_severity('repeating_pattern', 4), 'medium')
        self.assertEqual(classify_severity('repeating_pattern', 5), 'medium')
        self.assertEqual(classify_severity('repeating_pattern', 6), 'high')

    def test_alternating_thresholds(self):
        self.assertEqual(classify_severity('alternating', 15), 'low')
        self.assertEqual(classify_severity('alternating', 16), 'medium')
        self.assertEqual(classify_severity('alternating', 31), 'high')

    def test_long_run_thresholds(self):
        self.assertEqual(classify_severity('long_run', 25), 'low')
        self.assertEqual(classify_severity('long_run', 26), 'medium')
        self.assertEqual(classify_severity('long_run', 50), 'medium')
        self.assertEqual(classify_severity('long_run', 51), 'high')

    def test_unknown_detector(self):
        with self.assertRaises(KeyError):
            classify_severity('sparse_region', 10)

    def test_density(self):
        self.assertEqual(classify_density_severity(4.9), 'high')
        self.assertEqual(classify_density_severity(5.0), 'medium')
        self.assertEqual(classify_density_severity(14.0), 'medium')
        self.assertEqual(classify_density_severity(95.0), 'medium')
        self.assertEqual(classify_density_severity(95.1), 'high')

    def test_fixed(self):
        self.assertEqual(fixed_severity('byte_misalignment'), 'medium')


class TestAnomalyTaxonomy(unittest.TestCase):

    def test_covers_builtin_detectors(self):
        self.assertEqual(list(ANOMALY_TYPES), BUILTIN_DETECTOR_ORDER)
        self.assertEqual(VALID_TYPES, {
            'Palindrome', 'Repeating Pattern', 'Alternating Sequence',
            'Long Run', 'Sparse Region', 'Byte Alignment',
        })

    def test_entries_complete(self):
        for key, entry in ANOMALY_TYPES.items():
            self.assertEqual(set(entry), {'type', 'name', 'category', 'severity', 'description'}, msg=key)
            self.assertTrue(is_valid_severity(entry['severity']), msg=key)

    def test_registry_defaults_use_taxonomy(self):
        for definition in build_default_definitions():
            entry = ANOMALY_TYPES[definition.id]
            self.assertEqual(definition.name, entry['name'])
            self.assertEqual(definition.description, entry['description'])
            self.assertEqual(definition.category, entry['category'])
            self.assertEqual(definition.severity, entry['severity'])
        self.assertEqual(ANOMALY_TYPES['byte_misalignment']['name'], 'Byte Misalignment')

    def test_validators(self):
        self.assertTrue(is_valid_severity('high'))
        self.assertFalse(is_valid_severity('critical'))


if __name__ == '__main__':
    unittest.main()
