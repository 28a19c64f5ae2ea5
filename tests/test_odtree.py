#!/usr/bin/env python3
"""
High-level tests for the command line interface in odtree.py
"""
import contextlib
import io
import os
import unittest
import tempfile
import shutil

import sympy
from ruamel.yaml import YAML

from odtree import __version__
from odtree import odtree as od
from odtree.intervals import IntervalList, IntervalView


class TestOdtree(unittest.TestCase):
    def setUp(self):
        # Create a temporary directory
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        # Remove the directory after the test
        shutil.rmtree(self.temp_dir)

    @staticmethod
    def _find_file(name):
        testdir = os.path.dirname(__file__)
        name = os.path.join(testdir, 'test_files', name)
        assert os.path.exists(name)
        return name

    def _run(self, *argv):
        parser = od.create_parser()
        args = parser.parse_args(list(argv))
        od.check_arguments(args, parser)
        output = io.StringIO()
        results = od.run(parser, args, output_file=output)
        return results, output.getvalue()

    def test_query_example(self):
        output_file = os.path.join(self.temp_dir, 'chain.yml')
        results, output = self._run(self._find_file('query_example.yml'), '-o', output_file)

        self.assertEqual(len(results), 1)
        self.assertEqual(results[0]['query'], [1, 7])
        self.assertEqual(results[0]['intervals'], [IntervalView(1, 2, 1), IntervalView(3, 5, 2),
                                                   IntervalView(6, 7, 3)])
        self.assertEqual(results[0]['sum'], 14)
        self.assertIn('query [1, 7]', output)
        self.assertIn(' intervals (3) ', output)

        with open(output_file) as f:
            chain = YAML(typ='safe').load(f)
        self.assertEqual(chain, [{'left': 0, 'right': 2, 'value': 1},
                                 {'left': 3, 'right': 5, 'value': 2},
                                 {'left': 6, 'right': 10, 'value': 3}])

    def test_unbounded(self):
        output_file = os.path.join(self.temp_dir, 'chain.yml')
        results, output = self._run(self._find_file('unbounded.yml'), '-vv', '-o', output_file)

        self.assertEqual(len(results), 2)
        self.assertEqual(len(results[0]['intervals']), 7)
        self.assertIsNone(results[0]['sum'])
        self.assertEqual(results[1]['intervals'], [IntervalView(10, 11, 5),
                                                   IntervalView(12, 14, 3),
                                                   IntervalView(15, 17, 3)])
        self.assertEqual(results[1]['sum'], 28)
        self.assertIn('operation 2', output)

        with open(output_file) as f:
            chain = YAML(typ='safe').load(f)
        self.assertEqual(chain[0], {'left': '-oo', 'right': -1, 'value': 0})
        self.assertEqual(chain[-1], {'left': 20, 'right': 'oo', 'value': 0})

    def test_invalid_range(self):
        with self.assertRaises(SystemExit):
            self._run(self._find_file('invalid_range.yml'))

    def test_type_mismatch(self):
        with self.assertRaises(SystemExit):
            self._run(self._find_file('type_mismatch.yml'))

    def test_version(self):
        parser = od.create_parser()
        output = io.StringIO()
        with contextlib.redirect_stdout(output):
            with self.assertRaises(SystemExit) as cm:
                parser.parse_args(['--version'])
        self.assertEqual(cm.exception.code, 0)
        self.assertEqual(output.getvalue().split()[-1], __version__)

    def test_without_output(self):
        parser = od.create_parser()
        args = parser.parse_args([self._find_file('query_example.yml'), '-v'])
        od.check_arguments(args, parser)
        self.assertIsNone(args.output)
        output = io.StringIO()
        results = od.run(parser, args, output_file=output)
        self.assertTrue(args.scenario.closed)
        self.assertEqual(results[0]['sum'], 14)
        self.assertIn(' intervals (3) ', output.getvalue())

    def test_parse_bound(self):
        self.assertEqual(od.parse_bound(5), 5)
        self.assertEqual(od.parse_bound('-3'), -3)
        self.assertEqual(od.parse_bound('oo'), sympy.oo)
        self.assertEqual(od.parse_bound('-inf'), -sympy.oo)
        self.assertEqual(od.parse_bound(float('inf')), sympy.oo)
        self.assertEqual(od.parse_bound(float('-inf')), -sympy.oo)
        for bad in [1.5, '1/2', True, None, [1]]:
            with self.assertRaises(ValueError):
                od.parse_bound(bad)

    def test_apply_operation(self):
        intervals = IntervalList.from_bounds(0, 10, 1)
        self.assertIsNone(od.apply_operation(intervals, {'transform': [0, 4, {'set': 'x'}]}))
        self.assertEqual(list(intervals), [(0, 4, 'x'), (5, 10, 1)])
        result = od.apply_operation(intervals, {'query': [3, 6]})
        self.assertIsNone(result['sum'])
        with self.assertRaises(ValueError):
            od.apply_operation(intervals, {'merge': [0, 1]})
        with self.assertRaises(ValueError):
            od.apply_operation(intervals, {'assign': [0, 1]})
        with self.assertRaises(ValueError):
            od.apply_operation(intervals, {'transform': [0, 1, {'divide': 2}]})

    def test_apply_operation_type_mismatch(self):
        intervals = IntervalList.from_bounds(0, 10, 1)
        od.apply_operation(intervals, {'transform': [0, 4, {'set': 'x'}]})
        with self.assertRaises(ValueError):
            od.apply_operation(intervals, {'transform': [2, 7, {'add': 1}]})
        # chain is neither split nor partially transformed
        self.assertEqual(list(intervals), [(0, 4, 'x'), (5, 10, 1)])

    def test_weighted_sum(self):
        self.assertEqual(od.weighted_sum([IntervalView(0, 1, 2), IntervalView(2, 4, 1)]), 7)
        self.assertIsNone(od.weighted_sum([IntervalView(0, 1, True)]))
        self.assertIsNone(od.weighted_sum([IntervalView(-sympy.oo, 1, 2)]))


if __name__ == '__main__':
    unittest.main(buffer=True)
