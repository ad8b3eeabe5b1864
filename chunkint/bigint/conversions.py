"""Conversions between Bigints and machine integers, doubles and strings.

Every narrowing conversion (to_small_int, to_int64, to_uint64, to_double) is
paired with a fits_in_* predicate that the caller must check first: narrowing
a value that does not fit is a caller bug, never a silent truncation.

String formats:
  decimal: -*[0-9]+
  hex:     -*0[xX][0-9a-fA-F]+  (from_string; from_hex_string takes no prefix)

Every leading "-" toggles the sign, so "--5" parses as 5.
"""

import math
import string
from typing import NamedTuple

from chunkint.bigint import additive
from chunkint.bigint import digits
from chunkint.bigint import errors
from chunkint.bigint import multiplicative
from chunkint.bigint import parameters
from chunkint.bigint import shifts
import numpy as np

DIGIT_BIT_SIZE = parameters.DIGIT_BIT_SIZE
DIGIT_MASK = parameters.DIGIT_MASK
HEX_CHARS_PER_DIGIT = parameters.HEX_CHARS_PER_DIGIT

_HEX_CHARS = b"0123456789abcdef"
_HEX_VALUES = {c: int(c, 16) for c in string.hexdigits}


class DoubleParts(NamedTuple):
  """A finite double d == (-1 if negative else 1) * significand * 2**exponent.

  For NaN and infinities is_special is set and the other fields are not
  meaningful.
  """

  significand: int
  exponent: int
  negative: bool
  is_special: bool


####################################
# Machine integers
####################################


def _from_magnitude(magnitude: int, negative: bool) -> digits.Bigint:
  # Count the digits first, a single digit might not hold the value.
  digit_count = 0
  count_value = magnitude
  while count_value > 0:
    digit_count += 1
    count_value >>= DIGIT_BIT_SIZE

  result = digits.DigitBuffer(digit_count)
  for i in range(digit_count):
    result[i] = magnitude & DIGIT_MASK
    magnitude >>= DIGIT_BIT_SIZE
  return result.finish(negative)


def from_int(value: int) -> digits.Bigint:
  """Converts a Python int of any size."""
  if not isinstance(value, int) or isinstance(value, bool):
    raise TypeError(f"Unsupported type for Bigint conversion: {type(value)}")
  return _from_magnitude(abs(value), value < 0)


def from_small_int(value: int) -> digits.Bigint:
  assert parameters.SMALL_INT_MIN <= value <= parameters.SMALL_INT_MAX
  return _from_magnitude(abs(value), value < 0)


def from_int64(value: int) -> digits.Bigint:
  assert parameters.INT64_MIN <= value <= parameters.INT64_MAX
  return _from_magnitude(abs(value), value < 0)


def from_uint64(value: int) -> digits.Bigint:
  assert 0 <= value <= parameters.UINT64_MAX
  return _from_magnitude(value, False)


def _abs_to_int(value: digits.Bigint) -> int:
  result = 0
  for digit in reversed(value.digit_list()):
    result = (result << DIGIT_BIT_SIZE) + digit
  return result


def to_int(value: digits.Bigint) -> int:
  """Converts to a Python int of any size."""
  magnitude = _abs_to_int(value)
  return -magnitude if value.negative else magnitude


def _fits_signed(value: digits.Bigint, min_value: int, max_value: int) -> bool:
  """Compares |value| digit by digit against the limit of the target type."""
  length = value.length
  if length == 0:
    return True
  limit = -min_value if value.negative else max_value
  value_digits = value.digit_list()
  # Set if the processed low part of the value is greater than the
  # corresponding low part of the limit.
  value_is_greater = False
  for i in range(length - 1):
    limit_digit = limit & DIGIT_MASK
    if limit_digit < value_digits[i]:
      value_is_greater = True
    elif limit_digit > value_digits[i]:
      value_is_greater = False
    limit >>= DIGIT_BIT_SIZE
    # The value has more digits than the limit.
    if limit == 0:
      return False
  most_significant_digit = value_digits[length - 1]
  if limit > most_significant_digit:
    return True
  if limit < most_significant_digit:
    return False
  return not value_is_greater


def fits_in_small_int(value: digits.Bigint) -> bool:
  return _fits_signed(value, parameters.SMALL_INT_MIN, parameters.SMALL_INT_MAX)


def to_small_int(value: digits.Bigint) -> int:
  assert fits_in_small_int(value), f"{value} does not fit a small int"
  return to_int(value)


def fits_in_int64(value: digits.Bigint) -> bool:
  return _fits_signed(value, parameters.INT64_MIN, parameters.INT64_MAX)


def to_int64(value: digits.Bigint) -> int:
  assert fits_in_int64(value), f"{value} does not fit an int64"
  return to_int(value)


def fits_in_uint64(value: digits.Bigint) -> bool:
  if value.negative:
    return False
  return digits.bit_length(value) <= 64


def to_uint64(value: digits.Bigint) -> int:
  assert fits_in_uint64(value), f"{value} does not fit a uint64"
  return _abs_to_int(value)


####################################
# Doubles
####################################


def decompose_double(d: float) -> DoubleParts:
  """Splits an IEEE-754 binary64 value into its integer components."""
  bits = int(np.array([d], dtype=np.float64).view(np.uint64)[0])
  negative = (bits >> 63) == 1
  biased_exponent = (bits >> parameters.DOUBLE_SIGNIFICAND_BITS) & (
      parameters.DOUBLE_EXPONENT_MASK
  )
  fraction = bits & ((1 << parameters.DOUBLE_SIGNIFICAND_BITS) - 1)
  if biased_exponent == parameters.DOUBLE_EXPONENT_MASK:
    return DoubleParts(fraction, 0, negative, True)
  if biased_exponent == 0:
    # Subnormal: no hidden bit.
    significand = fraction
    biased_exponent = 1
  else:
    significand = fraction | (1 << parameters.DOUBLE_SIGNIFICAND_BITS)
  exponent = (
      biased_exponent
      - parameters.DOUBLE_EXPONENT_BIAS
      - parameters.DOUBLE_SIGNIFICAND_BITS
  )
  return DoubleParts(significand, exponent, negative, False)


def from_double(d: float) -> digits.Bigint:
  """Converts a finite double, truncating toward zero.

  Args:
    d: The double to convert.

  Returns:
    The integral part of d.

  Raises:
    SpecialDoubleInputError: if d is NaN or an infinity.
  """
  if -1.0 < d < 1.0:
    # Also makes the right shift below well defined.
    return digits.zero()
  parts = decompose_double(d)
  if parts.is_special:
    raise errors.SpecialDoubleInputError(f"cannot convert {d!r} to a Bigint")
  significand = parts.significand
  exponent = parts.exponent
  if exponent <= 0:
    significand >>= -exponent
    exponent = 0
  elif exponent <= parameters.DOUBLE_CHEAP_SHIFT:
    # A significand has at most 53 bits, so this stays below 2^63.
    significand <<= exponent
    exponent = 0
  result = from_int64(-significand if parts.negative else significand)
  if exponent > 0:
    return shifts.shift_left(result, exponent)
  return result


# 53 significand bits plus a guard bit and a sticky bit.
_ROUNDING_BITS = parameters.DOUBLE_SIGNIFICAND_BITS + 3


def _rounded_magnitude(value: digits.Bigint) -> tuple[int, int]:
  """Returns (m, e) such that float(m) * 2**e is |value| correctly rounded."""
  bits = digits.bit_length(value)
  if bits <= _ROUNDING_BITS:
    return _abs_to_int(value), 0
  dropped = bits - _ROUNDING_BITS
  top = _abs_to_int(shifts.shift_right(digits.absolute(value), dropped))
  value_digits = value.digit_list()
  digit_shift, bit_shift = divmod(dropped, DIGIT_BIT_SIZE)
  low_bits = value_digits[digit_shift] & ((1 << bit_shift) - 1)
  sticky = any(value_digits[:digit_shift]) or low_bits != 0
  if sticky:
    top |= 1
  return top, dropped


def fits_in_double(value: digits.Bigint) -> bool:
  """Whether the correctly rounded value is a finite double."""
  mantissa, exponent = _rounded_magnitude(value)
  if mantissa == 0:
    return True
  _, float_exponent = math.frexp(float(mantissa))
  return float_exponent + exponent <= parameters.DOUBLE_MAX_EXPONENT


def to_double(value: digits.Bigint) -> float:
  """Converts to the nearest double, ties to even."""
  assert fits_in_double(value), "value does not fit a double"
  mantissa, exponent = _rounded_magnitude(value)
  result = math.ldexp(float(mantissa), exponent)
  return -result if value.negative else result


####################################
# Strings
####################################


def _strip_signs(text: str, start: int = 0) -> tuple[bool, int]:
  """Returns the sign toggled by the leading "-"s and the index after them."""
  negative = False
  while start < len(text) and text[start] == "-":
    negative = not negative
    start += 1
  return negative, start


def _decimal_value(text: str, position: int) -> int:
  c = text[position]
  if not "0" <= c <= "9":
    raise errors.InvalidFormatError(text, position)
  return ord(c) - ord("0")


def _hex_value(text: str, position: int) -> int:
  value = _HEX_VALUES.get(text[position])
  if value is None:
    raise errors.InvalidFormatError(text, position)
  return value


def _parse_decimal(text: str, start: int) -> digits.Bigint:
  """Parses the decimal magnitude text[start:].

  Decimal characters are read in groups of DECIMAL_DIGITS_PER_GROUP so each
  group fits a single digit; the first group takes the leftover characters.
  Every following group is folded in as result * 10^8 + group.
  """
  text_length = len(text)
  if start == text_length:
    raise errors.InvalidFormatError(text, start)

  first_group_end = start + (text_length - start) % (
      parameters.DECIMAL_DIGITS_PER_GROUP
  )
  digit = 0
  for position in range(start, first_group_end):
    digit = digit * 10 + _decimal_value(text, position)
  result = digits.from_digits([digit])

  for group_start in range(
      first_group_end, text_length, parameters.DECIMAL_DIGITS_PER_GROUP
  ):
    digit = 0
    for position in range(
        group_start, group_start + parameters.DECIMAL_DIGITS_PER_GROUP
    ):
      digit = digit * 10 + _decimal_value(text, position)
    result = multiplicative.multiply_with_digit(
        result, parameters.DECIMAL_GROUP_MULTIPLIER
    )
    if digit != 0:
      result = additive.add(result, digits.from_digits([digit]))
  return result


def _parse_hex(text: str, start: int) -> digits.Bigint:
  """Parses the hexadecimal magnitude text[start:]."""
  hex_length = len(text) - start
  if hex_length == 0:
    raise errors.InvalidFormatError(text, start)

  digit_count = parameters.hex_digit_count(hex_length)
  result = digits.DigitBuffer(digit_count)
  # The least significant digit sits at index 0 of the Bigint but at the end
  # of the string, so the string is read backwards.
  # Ex: "0123456" with 3 characters per digit reads "456", "123", "0".
  hex_i = len(text) - 1
  for i in range(digit_count):
    digit = 0
    shift = 0
    for _ in range(HEX_CHARS_PER_DIGIT):
      if hex_i < start:
        break
      digit += _hex_value(text, hex_i) << shift
      shift += 4
      hex_i -= 1
    result[i] = digit
  assert hex_i == start - 1
  return result.finish()


def from_decimal_string(text: str) -> digits.Bigint:
  """Parses a decimal string.

  Args:
    text: Any number of "-" followed by at least one decimal character.

  Returns:
    The parsed value.

  Raises:
    InvalidFormatError: on an empty magnitude or a non-decimal character.
  """
  negative, start = _strip_signs(text)
  return digits.with_sign(_parse_decimal(text, start), negative)


def from_hex_string(text: str) -> digits.Bigint:
  """Parses hexadecimal characters without a "0x" prefix."""
  negative, start = _strip_signs(text)
  return digits.with_sign(_parse_hex(text, start), negative)


def from_string(text: str) -> digits.Bigint:
  """Parses a decimal string or a "0x"-prefixed hexadecimal string."""
  negative, start = _strip_signs(text)
  if (
      len(text) - start > 2
      and text[start] == "0"
      and text[start + 1] in "xX"
  ):
    hex_negative, hex_start = _strip_signs(text, start + 2)
    magnitude = _parse_hex(text, hex_start)
    negative = negative != hex_negative
  else:
    magnitude = _parse_decimal(text, start)
  return digits.with_sign(magnitude, negative)


def to_hex_string(value: digits.Bigint) -> str:
  """Formats as [-]0x<lowercase hex>, "0x0" for zero."""
  value_digits = value.digit_list()
  length = len(value_digits)
  if length == 0:
    return parameters.HEX_PREFIX + "0"
  leading_digit = value_digits[length - 1]
  required_size = parameters.hex_string_length(
      length, leading_digit, value.negative
  )
  result = bytearray(required_size)
  # Print from the last position backwards.
  pos = required_size - 1
  for digit in value_digits[: length - 1]:
    for _ in range(HEX_CHARS_PER_DIGIT):
      result[pos] = _HEX_CHARS[digit & 0xF]
      digit >>= 4
      pos -= 1
  while leading_digit != 0:
    result[pos] = _HEX_CHARS[leading_digit & 0xF]
    leading_digit >>= 4
    pos -= 1
  for c in reversed(parameters.HEX_PREFIX):
    result[pos] = ord(c)
    pos -= 1
  if value.negative:
    result[pos] = ord("-")
    pos -= 1
  assert pos == -1
  return result.decode("ascii")


def to_decimal_string(value: digits.Bigint) -> str:
  """Formats as [-]<decimal digits>, "0" for zero."""
  if value.is_zero():
    return "0"
  divisor = digits.from_digits([parameters.DECIMAL_GROUP_MULTIPLIER])
  groups = []
  rest = digits.absolute(value)
  while not rest.is_zero():
    rest, group = multiplicative.divide_remainder(rest, divisor)
    groups.append(0 if group.is_zero() else group.digit(0))
  width = parameters.DECIMAL_DIGITS_PER_GROUP
  text = str(groups[-1]) + "".join(
      f"{group:0{width}d}" for group in reversed(groups[:-1])
  )
  return "-" + text if value.negative else text
