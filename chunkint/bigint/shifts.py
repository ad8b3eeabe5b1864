"""Left and right shifts of Bigints.

A shift by n bits is decomposed into a whole-digit shift of
n // DIGIT_BIT_SIZE digits and a sub-digit shift of n % DIGIT_BIT_SIZE bits.
Right shifts of negative values round toward negative infinity, like Python's
own `>>`: -5 >> 2 == -2.
"""

from chunkint.bigint import additive
from chunkint.bigint import digits
from chunkint.bigint import parameters

DIGIT_BIT_SIZE = parameters.DIGIT_BIT_SIZE
DIGIT_MASK = parameters.DIGIT_MASK


def digits_shift_left(value: digits.Bigint, amount: int) -> digits.Bigint:
  """Multiplies `value` by (2^DIGIT_BIT_SIZE)^amount."""
  assert amount >= 0
  if value.is_zero() or amount == 0:
    return value
  result = digits.DigitBuffer(value.length + amount)
  result.fill(value.digit_list(), offset=amount)
  return result.finish(value.negative)


def shift_left(value: digits.Bigint, amount: int) -> digits.Bigint:
  assert digits.is_clamped(value)
  assert amount >= 0, "negative shift amount"
  if value.is_zero() or amount == 0:
    return value
  digit_shift, bit_shift = divmod(amount, DIGIT_BIT_SIZE)
  if bit_shift == 0:
    return digits_shift_left(value, digit_shift)

  value_digits = value.digit_list()
  length = len(value_digits)
  result = digits.DigitBuffer(length + digit_shift + 1)
  carry = 0
  for i in range(length):
    digit = value_digits[i]
    result[i + digit_shift] = ((digit << bit_shift) & DIGIT_MASK) + carry
    carry = digit >> (DIGIT_BIT_SIZE - bit_shift)
  result[length + digit_shift] = carry
  return result.finish(value.negative)


def shift_right(value: digits.Bigint, amount: int) -> digits.Bigint:
  assert digits.is_clamped(value)
  assert amount >= 0, "negative shift amount"
  if value.is_zero() or amount == 0:
    return value
  length = value.length
  digit_shift, bit_shift = divmod(amount, DIGIT_BIT_SIZE)
  if digit_shift >= length:
    return digits.minus_one() if value.negative else digits.zero()

  value_digits = value.digit_list()
  result = digits.DigitBuffer(length - digit_shift)
  if bit_shift == 0:
    result.fill(value_digits[digit_shift:])
  else:
    carry = 0
    for i in range(length - 1, digit_shift - 1, -1):
      digit = value_digits[i]
      result[i - digit_shift] = (digit >> bit_shift) + carry
      carry = (digit << (DIGIT_BIT_SIZE - bit_shift)) & DIGIT_MASK
  shifted = result.finish(value.negative)

  if not value.negative:
    return shifted
  # Round toward negative infinity if any of the dropped bits was set.
  needs_rounding = any(value_digits[:digit_shift])
  if not needs_rounding and bit_shift > 0:
    dropped_bits = value_digits[digit_shift] & ((1 << bit_shift) - 1)
    needs_rounding = dropped_bits != 0
  if needs_rounding:
    return additive.subtract(shifted, digits.one())
  return shifted
