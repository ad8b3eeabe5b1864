"""Addition and subtraction of sign-magnitude Bigints."""

from chunkint.bigint import compare
from chunkint.bigint import digits
from chunkint.bigint import parameters

DIGIT_BIT_SIZE = parameters.DIGIT_BIT_SIZE
DIGIT_MASK = parameters.DIGIT_MASK


def unsigned_add(a: digits.Bigint, b: digits.Bigint) -> digits.Bigint:
  """Returns |a| + |b| as a non-negative value."""
  assert digits.is_clamped(a)
  assert digits.is_clamped(b)
  if a.length < b.length:
    return unsigned_add(b, a)
  a_digits = a.digit_list()
  b_digits = b.digit_list()
  a_length = len(a_digits)
  b_length = len(b_digits)

  # One extra digit for the final carry; finish() drops it if unused.
  result = digits.DigitBuffer(a_length + 1)
  carry = 0
  for i in range(b_length):
    total = a_digits[i] + b_digits[i] + carry
    result[i] = total & DIGIT_MASK
    carry = total >> DIGIT_BIT_SIZE
  # Copy over the remaining digits of a, but don't forget the carry.
  for i in range(b_length, a_length):
    total = a_digits[i] + carry
    result[i] = total & DIGIT_MASK
    carry = total >> DIGIT_BIT_SIZE
  result[a_length] = carry
  return result.finish()


def unsigned_subtract(a: digits.Bigint, b: digits.Bigint) -> digits.Bigint:
  """Returns |a| - |b|. The caller guarantees |a| >= |b|."""
  assert compare.unsigned_compare(a, b) >= 0, "unsigned_subtract: |a| < |b|"
  a_digits = a.digit_list()
  b_digits = b.digit_list()
  a_length = len(a_digits)
  b_length = len(b_digits)

  result = digits.DigitBuffer(a_length)
  borrow = 0
  for i in range(b_length):
    difference = a_digits[i] - b_digits[i] - borrow
    result[i] = difference & DIGIT_MASK
    borrow = 1 if difference < 0 else 0
  for i in range(b_length, a_length):
    difference = a_digits[i] - borrow
    result[i] = difference & DIGIT_MASK
    borrow = 1 if difference < 0 else 0
  assert borrow == 0
  return result.finish()


def add_subtract(
    a: digits.Bigint, b: digits.Bigint, negate_b: bool
) -> digits.Bigint:
  """Computes a + b, or a - b when negate_b is set."""
  assert digits.is_clamped(a)
  assert digits.is_clamped(b)
  # Subtraction is an addition with a simulated negation of b.
  b_is_negative = (not b.negative) if negate_b else b.negative

  # Same signs: add the magnitudes and keep the sign.
  # Ex: -3 + -5 -> -(3 + 5)
  if a.negative == b_is_negative:
    return digits.with_sign(unsigned_add(a, b), b_is_negative)

  # Different signs: the result takes the sign of the larger magnitude.
  # Ex:  -8 + 3  -> -(8 - 3)
  #       3 + -8 -> -(8 - 3)
  comparison = compare.unsigned_compare(a, b)
  if comparison < 0:
    return digits.with_sign(unsigned_subtract(b, a), b_is_negative)
  if comparison > 0:
    return digits.with_sign(unsigned_subtract(a, b), a.negative)
  return digits.zero()


def add(a: digits.Bigint, b: digits.Bigint) -> digits.Bigint:
  return add_subtract(a, b, negate_b=False)


def subtract(a: digits.Bigint, b: digits.Bigint) -> digits.Bigint:
  return add_subtract(a, b, negate_b=True)
