# Copyright 2021 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Unaffected range tests."""

import itertools
import unittest

from . import semver_index
from .bounds import Exclusive, Inclusive, UNBOUNDED
from .errors import (DuplicateBoundError, InvalidRangeError,
                     TooManyPredicatesError, UnsupportedOperatorError)
from .requirement import Op, Predicate
from .unaffected import UnaffectedRange


def _v(version):
  return semver_index.parse(version)


def _inc(version):
  return Inclusive(_v(version))


def _exc(version):
  return Exclusive(_v(version))


def _r(requirement):
  return UnaffectedRange.from_requirement(requirement)


class BoundTest(unittest.TestCase):
  """Bound tests."""

  def test_version(self):
    """Test the version accessor."""
    self.assertIsNone(UNBOUNDED.version)
    self.assertEqual(_v('1.0.0'), _inc('1.0.0').version)
    self.assertEqual(_v('1.0.0'), _exc('1.0.0').version)

  def test_equality(self):
    """Bounds are equal only for the same variant and version."""
    self.assertEqual(_inc('1.0.0'), _inc('1.0.0'))
    self.assertNotEqual(_inc('1.0.0'), _exc('1.0.0'))
    self.assertNotEqual(_inc('1.0.0'), _inc('1.0.1'))
    self.assertNotEqual(UNBOUNDED, _inc('1.0.0'))


class IsValidTest(unittest.TestCase):
  """is_valid tests."""

  def test_default(self):
    """The default range covers everything."""
    self.assertEqual(UnaffectedRange(UNBOUNDED, UNBOUNDED), UnaffectedRange())
    self.assertTrue(UnaffectedRange().is_valid())

  def test_unbounded(self):
    """Ranges with an unbounded side are always valid."""
    self.assertTrue(UnaffectedRange(_exc('2.0.0'), UNBOUNDED).is_valid())
    self.assertTrue(UnaffectedRange(UNBOUNDED, _exc('0.0.0')).is_valid())

  def test_ordered(self):
    """Test ranges with start before end."""
    for start, end in itertools.product((_inc, _exc), repeat=2):
      self.assertTrue(UnaffectedRange(start('1.0.0'), end('2.0.0')).is_valid())
      self.assertFalse(
          UnaffectedRange(start('2.0.0'), end('1.0.0')).is_valid())

  def test_same_version(self):
    """Only an exclusive-exclusive range at one version is empty."""
    self.assertTrue(UnaffectedRange(_inc('1.0.0'), _exc('1.0.0')).is_valid())
    self.assertTrue(UnaffectedRange(_exc('1.0.0'), _inc('1.0.0')).is_valid())
    self.assertTrue(UnaffectedRange(_inc('1.0.0'), _inc('1.0.0')).is_valid())
    self.assertFalse(UnaffectedRange(_exc('1.0.0'), _exc('1.0.0')).is_valid())

  def test_prerelease(self):
    """Pre-releases sort before their release."""
    self.assertTrue(
        UnaffectedRange(_inc('1.0.0-alpha'), _exc('1.0.0')).is_valid())
    self.assertFalse(
        UnaffectedRange(_inc('1.0.0'), _exc('1.0.0-alpha')).is_valid())


class FromPredicatesTest(unittest.TestCase):
  """from_predicates tests."""

  def test_single_bound(self):
    """A single predicate leaves the other side unbounded."""
    cases = {
        Op.GT: UnaffectedRange(start=_exc('1.0.0')),
        Op.GTE: UnaffectedRange(start=_inc('1.0.0')),
        Op.LT: UnaffectedRange(end=_exc('1.0.0')),
        Op.LTE: UnaffectedRange(end=_inc('1.0.0')),
    }
    for op, expected in cases.items():
      with self.subTest(op):
        result = UnaffectedRange.from_predicates([Predicate(op, _v('1.0.0'))])
        self.assertEqual(expected, result)
        self.assertTrue(result.is_valid())

  def test_empty(self):
    """No predicates give the universal range."""
    self.assertEqual(UnaffectedRange(), UnaffectedRange.from_predicates([]))
    self.assertEqual(UnaffectedRange(), _r('*'))

  def test_two_bounds(self):
    """Test a lower and an upper bound, in either order."""
    expected = UnaffectedRange(_inc('1.2.0'), _exc('1.5.0'))
    self.assertEqual(expected, _r('>= 1.2.0, < 1.5.0'))
    self.assertEqual(expected, _r('< 1.5.0, >= 1.2.0'))
    self.assertEqual(UnaffectedRange(_inc('0.3.2'), _exc('0.4.0')),
                     _r('^0.3.2'))

  def test_too_many_predicates(self):
    """Test more than two predicates."""
    with self.assertRaises(TooManyPredicatesError):
      _r('>= 1.0.0, < 2.0.0, < 3.0.0')
    with self.assertRaises(TooManyPredicatesError):
      _r('>= 1.0.0, < 2.0.0, >= 3.0.0, < 4.0.0')
    # Caret requirements already use two predicates.
    with self.assertRaises(TooManyPredicatesError):
      _r('^1.2.0, < 1.5.0')

  def test_duplicate_bounds(self):
    """Test more than one lower or upper bound."""
    with self.assertRaises(DuplicateBoundError) as cm:
      _r('> 1.0.0, >= 2.0.0')
    self.assertEqual('lower', cm.exception.side)

    with self.assertRaises(DuplicateBoundError) as cm:
      _r('< 1.0.0, <= 2.0.0')
    self.assertEqual('upper', cm.exception.side)

  def test_equal_operator(self):
    """Exact version requirements are rejected."""
    with self.assertRaises(UnsupportedOperatorError):
      _r('= 1.0.0')

  def test_invalid_range(self):
    """Test empty and inverted ranges."""
    with self.assertRaises(InvalidRangeError):
      _r('>= 2.0.0, < 1.0.0')
    with self.assertRaises(InvalidRangeError):
      _r('> 1.0.0, < 1.0.0')
    self.assertTrue(_r('>= 1.0.0, <= 1.0.0').is_valid())

  def test_errors_are_value_errors(self):
    """Range errors can be caught as ValueError."""
    with self.assertRaises(ValueError):
      _r('>= 2.0.0, < 1.0.0')

  def test_str(self):
    """Test range rendering."""
    self.assertEqual('[1.2.0, 1.5.0)', str(_r('>= 1.2.0, < 1.5.0')))
    self.assertEqual('(, 1.0.0]', str(_r('<= 1.0.0')))
    self.assertEqual('(1.0.0, )', str(_r('> 1.0.0')))


class OverlapsTest(unittest.TestCase):
  """overlaps tests."""

  def assert_overlaps(self, a, b, expected):
    self.assertEqual(expected, _r(a).overlaps(_r(b)), f'{a} vs {b}')
    self.assertEqual(expected, _r(b).overlaps(_r(a)), f'{b} vs {a}')

  def test_touching(self):
    """Test ranges meeting at the same version."""
    self.assert_overlaps('>= 1.0.0, <= 2.0.0', '>= 2.0.0, <= 3.0.0', True)
    self.assert_overlaps('< 2.0.0', '>= 2.0.0', False)
    self.assert_overlaps('<= 2.0.0', '> 2.0.0', False)
    self.assert_overlaps('< 2.0.0', '> 2.0.0', False)

  def test_unbounded(self):
    """Test ranges with unbounded sides."""
    self.assert_overlaps('< 2.0.0', '>= 5.0.0', False)
    self.assert_overlaps('< 5.0.0', '>= 2.0.0', True)
    self.assert_overlaps('< 1.0.0', '< 2.0.0', True)
    self.assert_overlaps('>= 1.0.0', '>= 2.0.0', True)
    self.assert_overlaps('*', '>= 1.0.0, < 1.0.1', True)

  def test_disjoint(self):
    """Test bounded ranges."""
    self.assert_overlaps('>= 1.0.0, < 2.0.0', '>= 3.0.0, < 4.0.0', False)
    self.assert_overlaps('>= 1.0.0, < 3.0.0', '>= 2.0.0, < 4.0.0', True)
    self.assert_overlaps('>= 1.0.0, < 4.0.0', '>= 2.0.0, < 3.0.0', True)

  def test_single_version(self):
    """Test a range holding exactly one version."""
    self.assert_overlaps('>= 1.0.0, <= 1.0.0', '>= 0.5.0, <= 1.0.0', True)
    self.assert_overlaps('>= 1.0.0, <= 1.0.0', '>= 0.5.0, < 1.0.0', False)

  def test_prerelease(self):
    """Test pre-release precedence."""
    self.assert_overlaps('< 1.0.0', '>= 1.0.0-alpha', True)
    self.assert_overlaps('< 1.0.0-alpha', '>= 1.0.0-alpha', False)
    self.assert_overlaps('< 1.0.0-alpha', '>= 1.0.0', False)

  def test_symmetric(self):
    """Overlap is symmetric for all valid ranges."""
    requirements = [
        '*', '< 1.0.0', '<= 1.0.0', '> 1.0.0', '>= 1.0.0', '>= 1.0.0, < 2.0.0',
        '> 1.0.0, <= 2.0.0', '>= 2.0.0, <= 2.0.0', '> 0.5.0, < 1.0.0-rc.1',
        '^0.3.2', '~1.2'
    ]
    ranges = [_r(r) for r in requirements]
    for a, b in itertools.product(ranges, repeat=2):
      self.assertEqual(a.overlaps(b), b.overlaps(a), f'{a} vs {b}')

  def test_scenario(self):
    """Test a patched range against other statements."""
    patched = _r('>= 1.2.0, < 1.5.0')
    self.assertEqual(UnaffectedRange(_inc('1.2.0'), _exc('1.5.0')), patched)
    self.assertTrue(patched.is_valid())

    old = _r('<= 1.0.0')
    self.assertEqual(UnaffectedRange(UNBOUNDED, _inc('1.0.0')), old)
    self.assertFalse(patched.overlaps(old))

    newer = _r('>= 1.4.0')
    self.assertEqual(UnaffectedRange(_inc('1.4.0'), UNBOUNDED), newer)
    self.assertTrue(patched.overlaps(newer))

  def test_invalid_operand(self):
    """Overlap on an invalid range is a programming error."""
    invalid = UnaffectedRange(_exc('1.0.0'), _exc('1.0.0'))
    with self.assertRaises(AssertionError):
      invalid.overlaps(UnaffectedRange())
    with self.assertRaises(AssertionError):
      UnaffectedRange().overlaps(invalid)


if __name__ == '__main__':
  unittest.main()
