"""Bitwise operations on sign-magnitude Bigints.

Bigints store the magnitude and the sign separately. The bitwise operators
are defined on the (conceptually infinite, sign-extended) two's complement
representation, where a negative value -x is encoded as ~(x - 1) and decoded
back with (~n) + 1.

Every operator reads both operands as two's complement digit streams that
are one digit longer than the longer operand. That last digit is pure sign
extension, so combining it gives the sign of the result.
"""

import operator
from typing import Callable

from chunkint.bigint import additive
from chunkint.bigint import digits
from chunkint.bigint import parameters

DIGIT_BIT_SIZE = parameters.DIGIT_BIT_SIZE
DIGIT_MASK = parameters.DIGIT_MASK


def twos_complement_digit(value: digits.Bigint, index: int) -> int:
  """Digit `index` of the sign-extended two's complement of `value`.

  Subtracting 1 from a negative magnitude borrows through its low zero
  digits and stops at the lowest non-zero one, so only that digit is
  decremented before the inversion.

  Args:
    value: A clamped Bigint.
    index: Any non-negative digit position, also beyond value.length.

  Returns:
    The DIGIT_BIT_SIZE-bit two's complement digit.
  """
  assert index >= 0
  digit = value.digit(index) if index < value.length else 0
  if not value.negative:
    return digit
  lowest = 0
  while value.digit(lowest) == 0:
    lowest += 1
  if index < lowest:
    return 0
  if index == lowest:
    digit -= 1
  return ~digit & DIGIT_MASK


def twos_complement_digits(value: digits.Bigint, count: int) -> list[int]:
  """The first `count` two's complement digits of `value`."""
  magnitude = value.digit_list()
  length = len(magnitude)
  if not value.negative:
    return magnitude[:count] + [0] * max(0, count - length)
  result = []
  borrow = 1
  for i in range(count):
    digit = (magnitude[i] if i < length else 0) - borrow
    borrow = 1 if digit < 0 else 0
    result.append(~digit & DIGIT_MASK)
  return result


def from_twos_complement(chunks: list[int], negative: bool) -> digits.Bigint:
  """Converts sign-extended two's complement digits back to a Bigint."""
  result = digits.DigitBuffer(len(chunks))
  if not negative:
    result.fill(chunks)
    return result.finish()
  carry = 1
  for i, chunk in enumerate(chunks):
    total = (~chunk & DIGIT_MASK) + carry
    result[i] = total & DIGIT_MASK
    carry = total >> DIGIT_BIT_SIZE
  assert carry == 0
  return result.finish(negative=True)


def _combine(
    a: digits.Bigint,
    b: digits.Bigint,
    digit_op: Callable[[int, int], int],
) -> digits.Bigint:
  assert digits.is_clamped(a)
  assert digits.is_clamped(b)
  count = max(a.length, b.length) + 1
  a_chunks = twos_complement_digits(a, count)
  b_chunks = twos_complement_digits(b, count)
  chunks = [digit_op(x, y) & DIGIT_MASK for x, y in zip(a_chunks, b_chunks)]
  # The top digit is all sign bits.
  negative = chunks[-1] >> (DIGIT_BIT_SIZE - 1) == 1
  return from_twos_complement(chunks, negative)


def bit_and(a: digits.Bigint, b: digits.Bigint) -> digits.Bigint:
  if a.is_zero() or b.is_zero():
    return digits.zero()
  return _combine(a, b, operator.and_)


def bit_or(a: digits.Bigint, b: digits.Bigint) -> digits.Bigint:
  if a.is_zero():
    return b
  if b.is_zero():
    return a
  return _combine(a, b, operator.or_)


def bit_xor(a: digits.Bigint, b: digits.Bigint) -> digits.Bigint:
  if a.is_zero():
    return b
  if b.is_zero():
    return a
  return _combine(a, b, operator.xor)


def bit_not(value: digits.Bigint) -> digits.Bigint:
  """~v == -(v + 1)."""
  if value.is_zero():
    return digits.minus_one()
  if value.negative:
    return additive.unsigned_subtract(value, digits.one())
  return digits.with_sign(additive.unsigned_add(value, digits.one()), True)
