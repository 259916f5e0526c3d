import argparse
import unittest

from genemerge.constants import (
    PAIR_OUTCOME,
    STRAND,
    MergeNamespace,
    cast_boolean,
    float_percent,
    parse_strand,
)


class TestMergeNamespace(unittest.TestCase):

    def test_attributes(self):
        nspace = MergeNamespace(thing=1, otherthing=2)
        self.assertEqual(1, nspace.thing)
        self.assertEqual(2, nspace['otherthing'])
        self.assertEqual(['thing', 'otherthing'], nspace.keys())
        self.assertEqual(3, nspace.get('missing', 3))
        with self.assertRaises(AttributeError):
            nspace.missing

    def test_enforce(self):
        self.assertEqual(PAIR_OUTCOME.DROP_FIRST, PAIR_OUTCOME.enforce('drop_first'))
        with self.assertRaises(KeyError):
            PAIR_OUTCOME.enforce('drop_both')
        with self.assertRaises(TypeError):
            PAIR_OUTCOME('drop_both')

    def test_private_attribute(self):
        with self.assertRaises(ValueError):
            MergeNamespace()._thing = 1

    def test_respecify(self):
        with self.assertRaises(AttributeError):
            MergeNamespace('thing', thing=1)

    def test_parse_listable_string(self):
        self.assertEqual(['a', 'b', 'c'], MergeNamespace.parse_listable_string('a, b;c'))
        self.assertEqual([], MergeNamespace.parse_listable_string(' '))
        self.assertEqual([1, None], MergeNamespace.parse_listable_string('1 none', int, nullable=True))

    def test_add_types(self):
        nspace = MergeNamespace()
        nspace.add('flag', False, defn='a flag')
        nspace.add('names', ['a'], cast_type=str, listable=True)
        self.assertEqual(cast_boolean, nspace.type('flag'))
        self.assertEqual('a flag', nspace.define('flag'))
        self.assertIsNone(nspace.define('names', None))
        self.assertTrue(nspace.is_listable('names'))
        self.assertFalse(nspace.is_env_overwritable('names'))


class TestParseStrand(unittest.TestCase):

    def test_forward(self):
        for value in ['+', '1', '+1', 1]:
            self.assertEqual(STRAND.POS, parse_strand(value))

    def test_reverse(self):
        for value in ['-', '-1', -1]:
            self.assertEqual(STRAND.NEG, parse_strand(value))

    def test_bad_strand(self):
        with self.assertRaises(TypeError):
            parse_strand('?')
        with self.assertRaises(TypeError):
            parse_strand(0)


class TestCasting(unittest.TestCase):

    def test_cast_boolean(self):
        self.assertTrue(cast_boolean('T'))
        self.assertFalse(cast_boolean('no'))
        with self.assertRaises(TypeError):
            cast_boolean('2')

    def test_float_percent(self):
        self.assertEqual(10.5, float_percent('10.5'))
        with self.assertRaises(argparse.ArgumentTypeError):
            float_percent('101')
        with self.assertRaises(argparse.ArgumentTypeError):
            float_percent('ten')
