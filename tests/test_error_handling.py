"""
╔══════════════════════════════════════════════════════════════════════════════╗
║            ERROR HANDLING AND SCENARIO TEST SUITE                             ║
║        Edge Cases Across Detectors, Ideality and Boundaries                   ║
╚══════════════════════════════════════════════════════════════════════════════╝

Tests validate:
1. Empty and single-bit payloads return empty results without errors
2. Type and content validation of payloads
3. Invalid ranges and window sizes give descriptive results, not exceptions
4. The worked scenarios for long runs, byte alignment, tandem repeats
   and density windows
"""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import unittest

from Detectors import (
    LongRunDetector,
    ByteAlignmentDetector,
    RepeatingPatternDetector,
    DensityAnomalyDetector,
)
from Utilities.bitscanner import detect_anomalies
from Utilities.boundary import generate_unique_boundary, validate_boundary
from Utilities.config.analysis import ANALYSIS_CONFIG
from Utilities.ideality import calculate_ideality, calculate_all_idealities


class TestEmptyPayloadHandling(unittest.TestCase):
    """Empty or single-character input yields empty results"""

    def test_empty_string_returns_empty_list(self):
        result = detect_anomalies("")
        self.assertIsInstance(result, list)
        self.assertEqual(len(result), 0)

    def test_none_payload_returns_empty_list(self):
        self.assertEqual(detect_anomalies(None), [])

    def test_single_character(self):
        for bits in ('0', '1'):
            self.assertEqual(detect_anomalies(bits), [])
            self.assertEqual(detect_anomalies(bits, mode='registry'), [])
            self.assertEqual(calculate_all_idealities(bits), [])

    def test_invalid_type_raises_error(self):
        with self.assertRaises(TypeError):
            detect_anomalies(12345)

    def test_minimum_analyzable_length(self):
        self.assertEqual(ANALYSIS_CONFIG['min_analyzable_bits'], 2)


class TestDescriptiveResults(unittest.TestCase):
    """Input problems surface as results rather than exceptions"""

    def test_invalid_ranges(self):
        self.assertEqual(calculate_ideality('0101', 2, 1, 1).repeating_count, 0)
        self.assertEqual(calculate_ideality('0101', 0, 3, 0).ideality_percentage, 0)

    def test_malformed_boundary(self):
        for bits in ('', '0000', '1010101010'):
            result = validate_boundary(bits, '10201')
            self.assertFalse(result.valid)
            self.assertEqual(result.occurrences, 0)

    def test_boundary_safety(self):
        bits = '0110' * 50 + '1' * 20 + '0' * 5
        boundary = generate_unique_boundary(bits)
        self.assertEqual(validate_boundary(bits, boundary).occurrences, 0)


class TestScenarios(unittest.TestCase):

    def test_all_ones_byte(self):
        bits = '11111111'
        runs = LongRunDetector(min_length=4).detect_anomalies(bits)
        self.assertEqual([(r.type, r.position, r.length) for r in runs], [('Long Run', 0, 8)])
        self.assertIn(runs[0].severity, ('low', 'medium', 'high'))
        self.assertEqual(ByteAlignmentDetector().detect_anomalies(bits), [])

    def test_seven_bits(self):
        records = ByteAlignmentDetector().detect_anomalies('1011101')
        self.assertEqual([(r.position, r.length) for r in records], [(0, 7)])

    def test_pattern_repeated_three_times(self):
        records = RepeatingPatternDetector(min_length=4, min_repeats=3).detect_anomalies('110011001100')
        self.assertEqual([(r.position, r.length) for r in records], [(0, 12)])

    def test_half_density_windows_clean(self):
        bits = '00001111' * 128
        self.assertEqual(DensityAnomalyDetector(min_length=64).detect_anomalies(bits), [])


if __name__ == '__main__':
    unittest.main()
