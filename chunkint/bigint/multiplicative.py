"""Multiplication and long division of Bigints."""

import logging

from chunkint.bigint import additive
from chunkint.bigint import compare
from chunkint.bigint import digits
from chunkint.bigint import errors
from chunkint.bigint import parameters
from chunkint.bigint import shifts

DIGIT_BIT_SIZE = parameters.DIGIT_BIT_SIZE
DIGIT_MASK = parameters.DIGIT_MASK
DIGIT_MAX_VALUE = parameters.DIGIT_MAX_VALUE


def multiply(a: digits.Bigint, b: digits.Bigint) -> digits.Bigint:
  """Comba multiplication: each result column is summed before carrying.

  Example: r = a2a1a0 * b2b1b0.
    r =  1    * a0b0 +
        10    * (a1b0 + a0b1) +
        100   * (a2b0 + a1b1 + a0b2) +
        1000  * (a2b1 + a1b2) +
        10000 * a2b2

  A column holds at most min(len_a, len_b) products plus the carry of the
  previous column, which only fits the accumulator up to MAX_COMBA_DIGITS
  (see parameters.DigitParameters).

  Args:
    a: The first factor.
    b: The second factor.

  Returns:
    The product a * b.

  Raises:
    UnsupportedMagnitudeError: if both operands are longer than
      MAX_COMBA_DIGITS digits.
  """
  assert digits.is_clamped(a)
  assert digits.is_clamped(b)
  a_length = a.length
  b_length = b.length
  if min(a_length, b_length) > parameters.MAX_COMBA_DIGITS:
    logging.debug(
        f"comba bound exceeded: {a_length} x {b_length} digits, max"
        f" {parameters.MAX_COMBA_DIGITS}"
    )
    raise errors.UnsupportedMagnitudeError(
        f"cannot multiply {a_length}-digit by {b_length}-digit operands:"
        f" columns of more than {parameters.MAX_COMBA_DIGITS} products"
        f" overflow the {parameters.ACCUMULATOR_BIT_SIZE}-bit accumulator"
    )
  if a_length == 0 or b_length == 0:
    return digits.zero()

  a_digits = a.digit_list()
  b_digits = b.digit_list()
  result_length = a_length + b_length
  result = digits.DigitBuffer(result_length)
  accumulator = 0
  for i in range(result_length):
    # The indices into a and b always sum up to i.
    a_index = min(a_length - 1, i)
    b_index = i - a_index
    iterations = min(b_length - b_index, a_index + 1)
    for _ in range(iterations):
      accumulator += a_digits[a_index] * b_digits[b_index]
      a_index -= 1
      b_index += 1
    assert accumulator <= parameters.ACCUMULATOR_MASK
    result[i] = accumulator & DIGIT_MASK
    accumulator >>= DIGIT_BIT_SIZE
  assert accumulator == 0
  return result.finish(a.negative != b.negative)


def multiply_with_digit(value: digits.Bigint, digit: int) -> digits.Bigint:
  """Multiplies `value` by a single non-negative digit."""
  assert 0 <= digit <= DIGIT_MAX_VALUE
  if digit == 0 or value.is_zero():
    return digits.zero()
  value_digits = value.digit_list()
  length = len(value_digits)
  result = digits.DigitBuffer(length + 1)
  carry = 0
  for i in range(length):
    product = value_digits[i] * digit + carry
    result[i] = product & DIGIT_MASK
    carry = product >> DIGIT_BIT_SIZE
  result[length] = carry
  return result.finish(value.negative)


def divide_remainder(
    a: digits.Bigint, b: digits.Bigint
) -> tuple[digits.Bigint, digits.Bigint]:
  """Truncating division: returns (q, r) with a == q * b + r.

  The remainder has the sign of the dividend (or is zero) and |r| < |b|.

  This is the division taught in school, in base 2^DIGIT_BIT_SIZE:

    q = 0
    for i = len(a) - len(b) down to 0:
      find the largest digit k with k * b * base^i <= a
      q = q + k * base^i
      a = a - k * b * base^i
    r = a

  Both operands are first shifted left until the top bit of the divisor's
  leading digit is set, which makes the two-digit estimate of k at most one
  too large after the correction against the divisor's two leading digits.

  Args:
    a: The dividend.
    b: The divisor.

  Returns:
    A tuple (quotient, remainder).

  Raises:
    DivisionByZeroError: if b is zero.
  """
  assert digits.is_clamped(a)
  assert digits.is_clamped(b)
  if b.is_zero():
    raise errors.DivisionByZeroError("integer division by zero")

  comparison = compare.unsigned_compare(a, b)
  if comparison < 0:
    return digits.zero(), a
  if comparison == 0:
    return digits.with_sign(digits.one(), a.negative != b.negative), (
        digits.zero()
    )

  divisor_length = b.length
  normalization_shift = DIGIT_BIT_SIZE - digits.count_bits(
      b.digit(divisor_length - 1)
  )
  logging.debug(f"division normalization shift: {normalization_shift}")
  dividend = digits.absolute(shifts.shift_left(a, normalization_shift))
  divisor = digits.absolute(shifts.shift_left(b, normalization_shift))
  assert divisor.length == divisor_length

  dividend_length = dividend.length
  quotient = digits.DigitBuffer(dividend_length - divisor_length + 1)
  quotient_pos = dividend_length - divisor_length

  # The first quotient digit is computed by repeated subtraction since the
  # preconditions of the estimation loop below do not hold yet. After
  # normalization it is at most 1.
  shifted_divisor = shifts.digits_shift_left(
      divisor, dividend_length - divisor_length
  )
  first_quotient_digit = 0
  while compare.unsigned_compare(dividend, shifted_divisor) >= 0:
    first_quotient_digit += 1
    dividend = additive.subtract(dividend, shifted_divisor)
  quotient[quotient_pos] = first_quotient_digit
  quotient_pos -= 1

  first_divisor_digit = divisor.digit(divisor_length - 1)
  # The two leading digits of the divisor; the lower one is zero for a
  # single-digit divisor.
  short_divisor = digits.from_digits([
      divisor.digit(divisor_length - 2) if divisor_length > 1 else 0,
      first_divisor_digit,
  ])
  # The loop bound is the length of the initial dividend.
  for i in range(dividend_length - 1, divisor_length - 1, -1):
    # Invariant: with t = i - divisor_length,
    #   dividend / (divisor << (t * DIGIT_BIT_SIZE)) <= DIGIT_MAX_VALUE.
    current_length = dividend.length
    if i > current_length:
      quotient[quotient_pos] = 0
      quotient_pos -= 1
      continue
    dividend_digits = dividend.digit_list()
    if i == current_length:
      dividend_digit = 0
    else:
      assert i + 1 == current_length
      dividend_digit = dividend_digits[i]

    # Estimate the quotient digit. The estimate is never too small.
    if dividend_digit == first_divisor_digit:
      # Ex: 51235 / 523: 51 / 5 would give 10, but the digit is at most 9.
      quotient_digit = DIGIT_MAX_VALUE
    else:
      # Ex: 32421 / 535: 32 / 5 -> 6.
      two_dividend_digits = (dividend_digit << DIGIT_BIT_SIZE) + (
          dividend_digits[i - 1]
      )
      quotient_digit = min(
          two_dividend_digits // first_divisor_digit, DIGIT_MAX_VALUE
      )

    # Refine the estimate against the three leading digits of the dividend.
    target = [
        dividend_digits[i - 2] if i >= 2 else 0,
        dividend_digits[i - 1],
        dividend_digit,
    ]
    quotient_digit += 1  # The loop starts by decrementing.
    while True:
      quotient_digit = (quotient_digit - 1) & DIGIT_MASK
      estimation_product = multiply_with_digit(short_divisor, quotient_digit)
      if (
          compare.unsigned_compare_non_clamped(
              estimation_product.digit_list(), target
          )
          <= 0
      ):
        break

    # dividend -= (quotient_digit * divisor) << (t * DIGIT_BIT_SIZE)
    # If the estimate is still one too large the dividend turns negative and
    # the divisor is added back once.
    position_shift = i - divisor_length
    product = shifts.digits_shift_left(
        multiply_with_digit(divisor, quotient_digit), position_shift
    )
    dividend = additive.subtract(dividend, product)
    if dividend.negative:
      logging.debug(f"division add-back at digit {i - divisor_length}")
      quotient_digit -= 1
      dividend = additive.add(
          dividend, shifts.digits_shift_left(divisor, position_shift)
      )
    quotient[quotient_pos] = quotient_digit
    quotient_pos -= 1

  assert quotient_pos == -1
  remainder = shifts.shift_right(dividend, normalization_shift)
  return (
      quotient.finish(a.negative != b.negative),
      digits.with_sign(remainder, a.negative),
  )


def divide(a: digits.Bigint, b: digits.Bigint) -> digits.Bigint:
  """Quotient of a / b, truncated toward zero."""
  quotient, _ = divide_remainder(a, b)
  return quotient


def remainder(a: digits.Bigint, b: digits.Bigint) -> digits.Bigint:
  """Remainder of the truncating division; it has the sign of a."""
  _, rest = divide_remainder(a, b)
  return rest


def modulo(a: digits.Bigint, b: digits.Bigint) -> digits.Bigint:
  """Euclidean modulo: the result is always in [0, |b|)."""
  _, rest = divide_remainder(a, b)
  if rest.negative:
    return additive.add(rest, digits.absolute(b))
  return rest
