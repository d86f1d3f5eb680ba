"""
╔══════════════════════════════════════════════════════════════════════════════╗
║            IDEALITY CALCULATOR TEST SUITE                                     ║
║        Hierarchical Exclusion Across Window Sizes                             ║
╚══════════════════════════════════════════════════════════════════════════════╝

Tests validate:
1. Larger windows claim bits before smaller ones
2. ideal_bit_indices are disjoint across window sizes
3. Percentages stay within [0, 100]
4. Invalid ranges and window sizes give zero results
5. Sub-range results use absolute payload indices
"""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import random
import unittest

from Utilities.detectors_utils import to_bit_array
from Utilities.ideality import (
    IdealityResult,
    calculate_ideality,
    calculate_all_idealities,
    get_top_ideality_windows,
    repeat_coverage,
)


def random_bits(n, seed):
    rng = random.Random(seed)
    return ''.join(rng.choice('01') for _ in range(n))


class TestRepeatCoverage(unittest.TestCase):

    def test_chain(self):
        covered = repeat_coverage(to_bit_array('10101010'), 2)
        self.assertTrue(covered.all())

    def test_two_chains(self):
        covered = repeat_coverage(to_bit_array('01011111'), 2)
        self.assertEqual(covered.tolist(), [True] * 8)

    def test_no_repeat(self):
        covered = repeat_coverage(to_bit_array('0110'), 2)
        self.assertFalse(covered.any())

    def test_partial(self):
        # "0101" repeats at window 2; the trailing "1" is not part of a chain
        covered = repeat_coverage(to_bit_array('01011'), 2)
        self.assertEqual(covered.tolist(), [True, True, True, True, False])


class TestCalculateIdeality(unittest.TestCase):

    def test_largest_window_claims_first(self):
        result = calculate_ideality('10101010', 0, 7, 4)
        self.assertEqual(result.ideality_percentage, 100)
        self.assertEqual(result.repeating_count, 8)
        self.assertEqual(result.ideal_bit_indices, tuple(range(8)))

        smaller = calculate_ideality('10101010', 0, 7, 2)
        self.assertEqual(smaller.repeating_count, 0)
        self.assertEqual(smaller.total_bits, 8)
        self.assertEqual(smaller.ideality_percentage, 0)

    def test_window_two(self):
        result = calculate_ideality('01011111', 0, 7, 2)
        self.assertEqual(result.ideality_percentage, 100)
        self.assertEqual(calculate_ideality('01011111', 0, 7, 1).repeating_count, 0)

    def test_floor_percentage(self):
        # 4 of 7 bits -> 57.1 % floors to 57
        result = calculate_ideality('0101100', 0, 6, 2)
        self.assertEqual(result.repeating_count, 4)
        self.assertEqual(result.ideality_percentage, 57)

    def test_sub_range_absolute_indices(self):
        bits = '111' + '0101' + '000'
        result = calculate_ideality(bits, 3, 6, 2)
        self.assertEqual(result.total_bits, 4)
        self.assertEqual(result.ideal_bit_indices, (3, 4, 5, 6))

    def test_default_end(self):
        self.assertEqual(calculate_ideality('0101', window_size=2).ideality_percentage, 100)

    def test_invalid_inputs_return_zero(self):
        for result in (
            calculate_ideality('0101', 0, 3, 0),
            calculate_ideality('0101', 0, 3, -2),
            calculate_ideality('0101', 3, 3, 1),
            calculate_ideality('0101', 3, 1, 1),
            calculate_ideality('', 0, None, 1),
        ):
            self.assertIsInstance(result, IdealityResult)
            self.assertEqual(result.repeating_count, 0)
            self.assertEqual(result.ideality_percentage, 0)
            self.assertEqual(result.ideal_bit_indices, ())

    def test_missing_window_size(self):
        result = calculate_ideality('0101', 0, 3, None)
        self.assertEqual(result.window_size, 0)
        self.assertEqual(result.ideality_percentage, 0)
        self.assertEqual(calculate_ideality('0101', 0, 3, -2).window_size, 0)

    def test_window_too_large(self):
        result = calculate_ideality('0101', 0, 3, 3)
        self.assertEqual(result.repeating_count, 0)
        self.assertEqual(result.total_bits, 4)


class TestCalculateAllIdealities(unittest.TestCase):

    def test_window_sizes(self):
        results = calculate_all_idealities('10101010')
        self.assertEqual([r.window_size for r in results], [1, 2, 3, 4])

    def test_disjoint_and_bounded(self):
        for seed in range(5):
            bits = random_bits(97, seed) + '0110' * 6
            results = calculate_all_idealities(bits)
            seen = set()
            for result in results:
                indices = set(result.ideal_bit_indices)
                self.assertEqual(len(indices), len(result.ideal_bit_indices))
                self.assertFalse(seen & indices)
                seen |= indices
                self.assertGreaterEqual(result.ideality_percentage, 0)
                self.assertLessEqual(result.ideality_percentage, 100)
                self.assertLessEqual(result.repeating_count, result.total_bits)
                self.assertEqual(list(result.ideal_bit_indices), sorted(result.ideal_bit_indices))
            self.assertLessEqual(len(seen), len(bits))

    def test_matches_single_window(self):
        bits = random_bits(64, 11) + '001' * 8
        for result in calculate_all_idealities(bits, 4, 80):
            self.assertEqual(calculate_ideality(bits, 4, 80, result.window_size), result)

    def test_empty_and_single_bit(self):
        self.assertEqual(calculate_all_idealities(''), [])
        self.assertEqual(calculate_all_idealities('1'), [])
        self.assertEqual(calculate_all_idealities('0101', 2, 2), [])

    def test_determinism(self):
        bits = random_bits(80, 2)
        self.assertEqual(calculate_all_idealities(bits), calculate_all_idealities(bits))


class TestTopIdealityWindows(unittest.TestCase):

    def test_best_first(self):
        top = get_top_ideality_windows('01011111', 1)
        self.assertEqual(len(top), 1)
        self.assertEqual(top[0].window_size, 2)

    def test_fewer_windows_than_requested(self):
        top = get_top_ideality_windows('0110', 5)
        self.assertEqual([r.window_size for r in top], [1, 2])

    def test_default_count(self):
        self.assertLessEqual(len(get_top_ideality_windows(random_bits(100, 5))), 10)


if __name__ == '__main__':
    unittest.main()
