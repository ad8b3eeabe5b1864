"""Tests for the digit width parameters."""

from chunkint.bigint import parameters

from absl.testing import absltest
from absl.testing import parameterized


class DigitParametersTest(parameterized.TestCase):

  def test_default_comba_bound(self):
    # 256 columns of (2^28 - 1)^2 plus a 36-bit carry still fit 64 bits.
    self.assertEqual(parameters.MAX_COMBA_DIGITS, 256)
    square = parameters.DIGIT_MAX_VALUE**2
    carry = parameters.ACCUMULATOR_MASK >> parameters.DIGIT_BIT_SIZE
    self.assertLessEqual(256 * square + carry, parameters.ACCUMULATOR_MASK)
    self.assertGreater(257 * square + carry, parameters.ACCUMULATOR_MASK)

  def test_narrow_accumulator(self):
    params = parameters.DigitParameters(
        digit_bit_size=16, chunk_bit_size=32, accumulator_bit_size=32
    )
    self.assertEqual(params.digit_mask, 0xFFFF)
    self.assertEqual(params.max_comba_digits, 1)

  @parameterized.named_parameters(
      dict(testcase_name="no_carry_room", digit_bit_size=32,
           accumulator_bit_size=64),
      dict(testcase_name="product_too_wide", digit_bit_size=30,
           accumulator_bit_size=48),
  )
  def test_invalid_widths(self, digit_bit_size, accumulator_bit_size):
    with self.assertRaises(ValueError):
      parameters.DigitParameters(
          digit_bit_size=digit_bit_size,
          accumulator_bit_size=accumulator_bit_size,
      )

  def test_decimal_group_fits_a_digit(self):
    self.assertLess(parameters.DECIMAL_GROUP_MULTIPLIER, 2**27)
    self.assertEqual(parameters.DIGIT_BIT_SIZE % 4, 0)
    self.assertEqual(parameters.HEX_CHARS_PER_DIGIT, 7)


class HexCapacityTest(parameterized.TestCase):

  @parameterized.named_parameters(
      dict(testcase_name="zero", digit_count=0, leading_digit=0,
           negative=False, expected=3),
      dict(testcase_name="one_digit", digit_count=1, leading_digit=0xABC,
           negative=False, expected=5),
      dict(testcase_name="full_leading_digit", digit_count=1,
           leading_digit=parameters.DIGIT_MASK, negative=False, expected=9),
      dict(testcase_name="negative_two_digits", digit_count=2,
           leading_digit=1, negative=True, expected=11),
  )
  def test_hex_string_length(
      self, digit_count, leading_digit, negative, expected
  ):
    self.assertEqual(
        parameters.hex_string_length(digit_count, leading_digit, negative),
        expected,
    )

  @parameterized.parameters((0, 0), (1, 1), (7, 1), (8, 2), (14, 2), (15, 3))
  def test_hex_digit_count(self, hex_length, expected):
    self.assertEqual(parameters.hex_digit_count(hex_length), expected)


if __name__ == "__main__":
  absltest.main()
