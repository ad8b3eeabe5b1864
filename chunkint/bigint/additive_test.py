"""Tests for addition and subtraction."""

import hypothesis
from chunkint.bigint import additive
from chunkint.bigint import digits
from chunkint.bigint import test_utils

from absl.testing import absltest
from absl.testing import parameterized

big = test_utils.big
small = test_utils.small


class AdditiveTest(parameterized.TestCase):

  @parameterized.parameters(
      (0, 0),
      (5, 0),
      (0, -5),
      (-3, -5),
      (-8, 3),
      (3, -8),
      (7, -7),
      (2**28 - 1, 1),
      (2**280 - 1, 1),
      (-(2**280), 1),
  )
  def test_add_and_subtract(self, a, b):
    self.assertEqual(small(additive.add(big(a), big(b))), a + b)
    self.assertEqual(small(additive.subtract(big(a), big(b))), a - b)

  def test_carry_ripples_into_new_digit(self):
    result = additive.add(big(2**280 - 1), digits.one())
    self.assertEqual(result.length, 11)
    self.assertEqual(result.digit_list(), [0] * 10 + [1])

  def test_cancellation_is_zero(self):
    result = additive.subtract(big(-(2**100)), big(-(2**100)))
    self.assertTrue(result.is_zero())
    self.assertFalse(result.negative)
    self.assertTrue(digits.is_clamped(result))

  def test_unsigned_add_ignores_signs(self):
    self.assertEqual(small(additive.unsigned_add(big(-3), big(-4))), 7)
    self.assertEqual(small(additive.unsigned_add(big(1), big(-(2**60)))),
                     2**60 + 1)

  def test_unsigned_subtract(self):
    self.assertEqual(
        small(additive.unsigned_subtract(big(2**84), big(1))), 2**84 - 1
    )
    self.assertEqual(
        small(additive.unsigned_subtract(big(-10), big(-4))), 6
    )

  def test_unsigned_subtract_requires_larger_minuend(self):
    with self.assertRaises(AssertionError):
      additive.unsigned_subtract(big(4), big(10))

  @hypothesis.settings(deadline=None)
  @hypothesis.given(test_utils.integers, test_utils.integers)
  def test_matches_int(self, a, b):
    self.assertEqual(small(additive.add(big(a), big(b))), a + b)
    self.assertEqual(small(additive.subtract(big(a), big(b))), a - b)

  @hypothesis.settings(deadline=None)
  @hypothesis.given(test_utils.corner_integers, test_utils.corner_integers)
  def test_corner_digits(self, a, b):
    result = additive.add(big(a), big(b))
    self.assertTrue(digits.is_clamped(result))
    self.assertEqual(small(result), a + b)
    self.assertEqual(small(additive.subtract(result, big(b))), a)


if __name__ == "__main__":
  absltest.main()
