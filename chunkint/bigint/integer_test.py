"""Tests for the BigInteger class."""

import hypothesis
from chunkint.bigint import conversions
from chunkint.bigint import errors
from chunkint.bigint import integer
from chunkint.bigint import test_utils
from hypothesis import strategies

from absl.testing import absltest
from absl.testing import parameterized

BigInteger = integer.BigInteger

non_zero_integers = test_utils.integers.filter(lambda x: x != 0)


class ConstructionTest(parameterized.TestCase):

  @parameterized.parameters(
      (42, 42),
      (-(2**100), -(2**100)),
      ("12345678901234567890", 12345678901234567890),
      ("-0x1f", -31),
      (2.75, 2),
      (-1e20, -(10**20)),
  )
  def test_construct(self, value, expected):
    self.assertEqual(int(BigInteger(value)), expected)

  def test_construct_from_bigint_and_biginteger(self):
    value = BigInteger(conversions.from_int(-7))
    self.assertEqual(int(value), -7)
    self.assertEqual(int(BigInteger(value)), -7)

  def test_unsupported_types(self):
    for value in (None, [1], True, 1j):
      with self.assertRaises(TypeError):
        BigInteger(value)

  def test_invalid_inputs(self):
    with self.assertRaises(errors.InvalidFormatError):
      BigInteger("12x")
    with self.assertRaises(ValueError):
      BigInteger(float("nan"))


class ArithmeticTest(parameterized.TestCase):

  @hypothesis.settings(deadline=None)
  @hypothesis.given(test_utils.integers, test_utils.integers)
  def test_ring_operators(self, a, b):
    x = BigInteger(a)
    y = BigInteger(b)
    self.assertEqual(int(x + y), a + b)
    self.assertEqual(int(x - y), a - b)
    self.assertEqual(int(x * y), a * b)

  @hypothesis.settings(deadline=None)
  @hypothesis.given(test_utils.integers, non_zero_integers)
  def test_floor_division(self, a, b):
    x = BigInteger(a)
    y = BigInteger(b)
    self.assertEqual(int(x // y), a // b)
    self.assertEqual(int(x % y), a % b)
    quotient, rest = divmod(x, y)
    self.assertEqual((int(quotient), int(rest)), divmod(a, b))

  @parameterized.parameters((-17, 5), (17, -5), (-17, -5), (17, 5))
  def test_engine_division(self, a, b):
    x = BigInteger(a)
    self.assertEqual(int(x.truncating_divide(b)), int(a / b))
    self.assertEqual(int(x.remainder(b)), a - b * int(a / b))
    self.assertEqual(int(x.modulo(b)), a % abs(b))

  def test_reflected_operators(self):
    x = BigInteger(7)
    self.assertEqual(int(3 + x), 10)
    self.assertEqual(int(3 - x), -4)
    self.assertEqual(int(3 * x), 21)
    self.assertEqual(int(50 // x), 7)
    self.assertEqual(int(50 % x), 1)
    self.assertEqual(tuple(map(int, divmod(-50, x))), divmod(-50, 7))
    self.assertEqual(int(12 & x), 4)
    self.assertEqual(int(8 | x), 15)
    self.assertEqual(int(5 ^ x), 2)

  def test_unsupported_operand(self):
    with self.assertRaises(TypeError):
      BigInteger(1) + "1"
    with self.assertRaises(TypeError):
      BigInteger(1) * 1.5

  def test_division_by_zero(self):
    with self.assertRaises(ZeroDivisionError):
      BigInteger(1) // 0
    with self.assertRaises(ZeroDivisionError):
      BigInteger(1) % BigInteger(0)

  def test_unary(self):
    x = BigInteger(-(2**70))
    self.assertEqual(int(-x), 2**70)
    self.assertIs(+x, x)
    self.assertEqual(int(abs(x)), 2**70)
    self.assertEqual(int(~x), 2**70 - 1)


class BitwiseTest(parameterized.TestCase):

  @hypothesis.settings(deadline=None)
  @hypothesis.given(
      test_utils.integers,
      test_utils.integers,
      strategies.integers(min_value=0, max_value=100),
  )
  def test_matches_int(self, a, b, shift):
    x = BigInteger(a)
    y = BigInteger(b)
    self.assertEqual(int(x & y), a & b)
    self.assertEqual(int(x | y), a | b)
    self.assertEqual(int(x ^ y), a ^ b)
    self.assertEqual(int(x << shift), a << shift)
    self.assertEqual(int(x >> shift), a >> shift)

  def test_shift_amounts(self):
    self.assertEqual(int(BigInteger(1) << BigInteger(65)), 2**65)
    with self.assertRaises(ValueError):
      BigInteger(1) << -1
    with self.assertRaises(ValueError):
      BigInteger(1) >> -1
    with self.assertRaises(TypeError):
      BigInteger(1) << 1.0


class ComparisonAndConversionTest(parameterized.TestCase):

  def test_comparisons(self):
    x = BigInteger(2**80)
    self.assertEqual(x, 2**80)
    self.assertEqual(x, BigInteger("1208925819614629174706176"))
    self.assertNotEqual(x, -(2**80))
    self.assertLess(BigInteger(-1), 0)
    self.assertLessEqual(x, 2**80)
    self.assertGreater(x, 2**79)
    self.assertGreaterEqual(BigInteger(0), -5)
    self.assertNotEqual(x, "1208925819614629174706176")

  def test_hash(self):
    self.assertEqual(hash(BigInteger(2**90)), hash(2**90))
    self.assertEqual(hash(BigInteger(-1)), hash(-1))
    values = {BigInteger(5): "five"}
    self.assertEqual(values[5], "five")

  def test_bool_and_index(self):
    self.assertFalse(BigInteger(0))
    self.assertTrue(BigInteger(-3))
    self.assertEqual([10, 20, 30][BigInteger(1)], 20)
    self.assertEqual(BigInteger(2**70 - 1).bit_length(), 70)

  def test_float(self):
    self.assertEqual(float(BigInteger(2**53 + 1)), float(2**53 + 1))
    self.assertEqual(float(BigInteger(-3)), -3.0)
    with self.assertRaises(OverflowError):
      float(BigInteger(2**1024))

  def test_strings(self):
    x = BigInteger(-123456789012345678901234567890)
    self.assertEqual(str(x), "-123456789012345678901234567890")
    self.assertEqual(repr(x), "BigInteger(-123456789012345678901234567890)")
    self.assertEqual(x.hex_value_str(), hex(-123456789012345678901234567890))
    self.assertEqual(str(BigInteger(0)), "0")


if __name__ == "__main__":
  absltest.main()
