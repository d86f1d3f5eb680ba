"""
╔══════════════════════════════════════════════════════════════════════════════╗
║            ANOMALY REGISTRY TEST SUITE                                        ║
║        Pluggable Detector Definitions                                         ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import re
import unittest

from Utilities.anomaly_registry import AnomalyRegistry, AnomalyDefinition, generate_definition_id


DEFAULT_IDS = ['palindrome', 'repeating_pattern', 'alternating', 'long_run',
               'sparse_region', 'byte_misalignment']


def ones_pair_scan(bits, min_length):
    return [{'position': i, 'length': 2} for i in range(len(bits) - 1) if bits[i:i + 2] == '11']


def failing_scan(bits, min_length):
    raise RuntimeError("scan exploded")


def make_definition(def_id='pairs', scan=ones_pair_scan, **overrides):
    values = dict(id=def_id, name='Ones Pair', description='Two adjacent ones',
                  category='Custom', severity='low', min_length=2, scan=scan)
    values.update(overrides)
    return AnomalyDefinition(**values)


class TestDefaults(unittest.TestCase):

    def test_default_definitions(self):
        registry = AnomalyRegistry()
        definitions = registry.get_all_definitions()
        self.assertEqual([d.id for d in definitions], DEFAULT_IDS)
        self.assertTrue(all(d.enabled for d in definitions))
        self.assertEqual(registry.get_definition('long_run').severity, 'high')
        self.assertEqual(registry.get_definition('sparse_region').min_length, 64)
        self.assertEqual(registry.get_definition('byte_misalignment').name, 'Byte Misalignment')

    def test_categories(self):
        self.assertEqual(AnomalyRegistry().get_categories(), ['Pattern', 'Run', 'Density', 'Structure'])

    def test_default_scan_routines(self):
        registry = AnomalyRegistry()
        hits = registry.execute_detection('long_run', '0' * 12 + '1')
        self.assertEqual([(h['position'], h['length']) for h in hits], [(0, 12)])

    def test_empty_registry(self):
        registry = AnomalyRegistry(definitions=[])
        self.assertEqual(len(registry), 0)
        self.assertEqual(registry.list_enabled(), [])


class TestRegistryManagement(unittest.TestCase):

    def setUp(self):
        self.registry = AnomalyRegistry()

    def test_register_and_remove(self):
        self.registry.register_detector(make_definition())
        self.assertIn('pairs', self.registry)
        self.assertEqual(len(self.registry), 7)
        self.assertTrue(self.registry.remove_detector('pairs'))
        self.assertNotIn('pairs', self.registry)
        self.assertFalse(self.registry.remove_detector('pairs'))

    def test_duplicate_id_rejected(self):
        self.registry.register_detector(make_definition())
        with self.assertRaises(ValueError):
            self.registry.register_detector(make_definition())
        with self.assertRaises(ValueError):
            self.registry.register_detector(make_definition(def_id='palindrome'))

    def test_invalid_definitions(self):
        with self.assertRaises(ValueError):
            self.registry.register_detector(make_definition(severity='critical'))
        with self.assertRaises(TypeError):
            self.registry.register_detector(make_definition(scan="function detect(bits) {}"))

    def test_generated_id(self):
        registered = self.registry.register_detector(make_definition(def_id=''))
        self.assertRegex(registered.id, r'^custom_\d+_[a-z0-9]{9}$')
        self.assertIsNotNone(self.registry.get_definition(registered.id))
        self.assertTrue(re.match(r'^custom_\d+_', generate_definition_id()))

    def test_set_enabled_and_list(self):
        self.assertTrue(self.registry.set_enabled('palindrome', False))
        enabled_ids = [d.id for d in self.registry.list_enabled()]
        self.assertNotIn('palindrome', enabled_ids)
        self.assertEqual(len(enabled_ids), 5)
        self.assertTrue(self.registry.set_enabled('palindrome', True))
        self.assertIn('palindrome', [d.id for d in self.registry.list_enabled()])

    def test_set_enabled_unknown(self):
        with self.assertLogs('Utilities.anomaly_registry', level='WARNING'):
            self.assertFalse(self.registry.set_enabled('missing', True))

    def test_toggle(self):
        self.assertFalse(self.registry.toggle_enabled('alternating'))
        self.assertTrue(self.registry.toggle_enabled('alternating'))
        self.assertIsNone(self.registry.toggle_enabled('missing'))

    def test_list_enabled_is_snapshot(self):
        snapshot = self.registry.list_enabled()
        snapshot[0].enabled = False
        snapshot[0].name = 'Changed'
        self.assertTrue(self.registry.get_definition('palindrome').enabled)
        self.assertEqual(self.registry.get_definition('palindrome').name, 'Palindrome')
        self.registry.set_enabled('long_run', False)
        self.assertIn('long_run', [d.id for d in snapshot])

    def test_update_definition(self):
        updated = self.registry.update_definition('long_run', min_length=4, severity='low')
        self.assertEqual(updated.min_length, 4)
        self.assertEqual(self.registry.get_definition('long_run').severity, 'low')
        self.assertIsNone(self.registry.update_definition('missing', min_length=1))
        with self.assertRaises(ValueError):
            self.registry.update_definition('long_run', id='other')
        with self.assertRaises(ValueError):
            self.registry.update_definition('long_run', colour='red')
        with self.assertRaises(ValueError):
            self.registry.update_definition('long_run', severity='extreme')

    def test_reset_to_defaults(self):
        self.registry.register_detector(make_definition())
        self.registry.set_enabled('palindrome', False)
        self.registry.reset_to_defaults()
        self.assertEqual([d.id for d in self.registry.get_all_definitions()], DEFAULT_IDS)
        self.assertTrue(self.registry.get_definition('palindrome').enabled)


class TestSubscribe(unittest.TestCase):

    def test_listener_notified_until_unsubscribed(self):
        registry = AnomalyRegistry()
        calls = []
        unsubscribe = registry.subscribe(lambda: calls.append(1))
        registry.set_enabled('palindrome', False)
        registry.toggle_enabled('palindrome')
        self.assertEqual(len(calls), 2)
        unsubscribe()
        registry.set_enabled('palindrome', False)
        self.assertEqual(len(calls), 2)

    def test_failing_listener_logged(self):
        registry = AnomalyRegistry()

        def broken():
            raise RuntimeError("listener down")

        registry.subscribe(broken)
        with self.assertLogs('Utilities.anomaly_registry', level='ERROR'):
            registry.remove_detector('palindrome')
        self.assertNotIn('palindrome', registry)


class TestExecuteDetection(unittest.TestCase):

    def setUp(self):
        self.registry = AnomalyRegistry(definitions=[make_definition(), make_definition('broken', failing_scan)])

    def test_runs_scan(self):
        hits = self.registry.execute_detection('pairs', '0110111')
        self.assertEqual([h['position'] for h in hits], [1, 4, 5])

    def test_disabled_or_unknown(self):
        self.registry.set_enabled('pairs', False)
        self.assertEqual(self.registry.execute_detection('pairs', '0110111'), [])
        self.assertEqual(self.registry.execute_detection('missing', '0110111'), [])

    def test_failing_scan_logged(self):
        with self.assertLogs('Utilities.anomaly_registry', level='ERROR') as logs:
            self.assertEqual(self.registry.execute_detection('broken', '0110'), [])
        self.assertIn('scan exploded', logs.output[0])


class TestDefinitionRecords(unittest.TestCase):

    def test_export_import_round_trip(self):
        registry = AnomalyRegistry()
        registry.register_detector(make_definition())
        registry.set_enabled('alternating', False)
        records = registry.export_definitions()
        self.assertTrue(all('scan' not in r for r in records))

        restored = AnomalyRegistry(definitions=[])
        count = restored.import_definitions(records, scans={'pairs': ones_pair_scan})
        self.assertEqual(count, 7)
        self.assertEqual(restored.export_definitions(), records)
        self.assertFalse(restored.get_definition('alternating').enabled)
        self.assertEqual(len(restored.execute_detection('pairs', '0110')), 1)
        self.assertEqual(len(restored.execute_detection('long_run', '0' * 10)), 1)

    def test_import_without_scan(self):
        registry = AnomalyRegistry(definitions=[])
        record = make_definition('orphan').to_record()
        with self.assertLogs('Utilities.anomaly_registry', level='WARNING'):
            registry.import_definitions([record])
        self.assertEqual(registry.execute_detection('orphan', '0110'), [])

    def test_import_duplicate_ids(self):
        record = make_definition().to_record()
        with self.assertRaises(ValueError):
            AnomalyRegistry(definitions=[]).import_definitions([record, dict(record)])


if __name__ == '__main__':
    unittest.main()
