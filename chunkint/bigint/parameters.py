"""Global configuration of the chunked big integer representation.

A Bigint stores its magnitude as little-endian digits of DIGIT_BIT_SIZE bits.
Each digit lives in a CHUNK_BIT_SIZE-bit storage cell so that a carry or a
borrow can be observed before it is masked away, and multiplication columns
are accumulated in an ACCUMULATOR_BIT_SIZE-bit accumulator.
"""

import dataclasses

import numpy as np


@dataclasses.dataclass(frozen=True)
class DigitParameters:
  """Width parameters of a digit representation.

  The Comba multiplication accumulates up to k = min(len_a, len_b) products
  per column plus the carry left over from the previous column. Each product
  is at most (2^digit_bit_size - 1)^2, so the column sum is safe iff

    k * (2^digit_bit_size - 1)^2 + (2^(acc - digit_bit_size) - 1) < 2^acc

  where acc = accumulator_bit_size. max_comba_digits is the largest such k.
  """

  digit_bit_size: int = 28
  chunk_bit_size: int = 32
  accumulator_bit_size: int = 64

  digit_mask: int = dataclasses.field(init=False)
  accumulator_mask: int = dataclasses.field(init=False)
  max_comba_digits: int = dataclasses.field(init=False)

  def __post_init__(self) -> None:
    if self.digit_bit_size >= self.chunk_bit_size:
      raise ValueError(
          f"digit_bit_size {self.digit_bit_size} leaves no carry room in a"
          f" {self.chunk_bit_size}-bit chunk"
      )
    if 2 * self.digit_bit_size > self.accumulator_bit_size:
      raise ValueError(
          f"accumulator of {self.accumulator_bit_size} bits cannot hold the"
          f" product of two {self.digit_bit_size}-bit digits"
      )
    digit_mask = (1 << self.digit_bit_size) - 1
    accumulator_mask = (1 << self.accumulator_bit_size) - 1
    square = digit_mask * digit_mask
    left_over_carry = accumulator_mask >> self.digit_bit_size
    object.__setattr__(self, "digit_mask", digit_mask)
    object.__setattr__(self, "accumulator_mask", accumulator_mask)
    object.__setattr__(
        self, "max_comba_digits", (accumulator_mask - left_over_carry) // square
    )


DEFAULT_PARAMETERS = DigitParameters()

####################################
# Digit Configurations
####################################

DIGIT_BIT_SIZE = DEFAULT_PARAMETERS.digit_bit_size
CHUNK_BIT_SIZE = DEFAULT_PARAMETERS.chunk_bit_size
CHUNK_TYPE = np.uint32  # this type must match CHUNK_BIT_SIZE
ACCUMULATOR_BIT_SIZE = DEFAULT_PARAMETERS.accumulator_bit_size
DIGIT_MASK = DEFAULT_PARAMETERS.digit_mask
DIGIT_MAX_VALUE = DIGIT_MASK
ACCUMULATOR_MASK = DEFAULT_PARAMETERS.accumulator_mask
MAX_COMBA_DIGITS = DEFAULT_PARAMETERS.max_comba_digits

####################################
# String Configurations
####################################

HEX_CHARS_PER_DIGIT = DIGIT_BIT_SIZE // 4
HEX_PREFIX = "0x"

# 10^8 < 2^27, so a group always fits in a single digit.
DECIMAL_DIGITS_PER_GROUP = 8
DECIMAL_GROUP_MULTIPLIER = 10**DECIMAL_DIGITS_PER_GROUP

####################################
# Machine Integer Ranges
####################################

# Small integers reserve one bit of a 64-bit word for a tag.
SMALL_INT_BITS = 63
SMALL_INT_MIN = -(1 << (SMALL_INT_BITS - 1))
SMALL_INT_MAX = (1 << (SMALL_INT_BITS - 1)) - 1
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1

# IEEE-754 binary64 layout.
DOUBLE_SIGNIFICAND_BITS = 52
DOUBLE_EXPONENT_BIAS = 1023
DOUBLE_EXPONENT_MASK = 0x7FF
DOUBLE_MAX_EXPONENT = 1024
# Widening the significand by at most this many bits keeps it below 2^63.
DOUBLE_CHEAP_SHIFT = 10


def hex_string_length(
    digit_count: int, leading_digit: int, negative: bool
) -> int:
  """Number of characters needed to print a Bigint in hexadecimal.

  Args:
    digit_count: The number of (clamped) digits of the value.
    leading_digit: The most significant digit. Ignored when digit_count is 0.
    negative: Whether a leading "-" is printed.

  Returns:
    The length of the string produced by conversions.to_hex_string.
  """
  if digit_count == 0:
    return len(HEX_PREFIX) + 1
  leading_hex_digits = 0
  while leading_digit != 0:
    leading_hex_digits += 1
    leading_digit >>= 4
  required_size = 1 if negative else 0
  required_size += len(HEX_PREFIX)
  required_size += leading_hex_digits
  required_size += (digit_count - 1) * HEX_CHARS_PER_DIGIT
  return required_size


def hex_digit_count(hex_length: int) -> int:
  """Number of digits needed to hold hex_length hexadecimal characters."""
  if hex_length <= 0:
    return 0
  return (hex_length - 1) // HEX_CHARS_PER_DIGIT + 1
