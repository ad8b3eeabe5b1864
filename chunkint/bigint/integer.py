"""Arbitrary precision integer class over the chunked Bigint engine."""

from chunkint.bigint import additive
from chunkint.bigint import bitwise
from chunkint.bigint import compare
from chunkint.bigint import conversions
from chunkint.bigint import digits
from chunkint.bigint import multiplicative
from chunkint.bigint import shifts


def _to_bigint(value) -> digits.Bigint | None:
  if isinstance(value, BigInteger):
    return value.value
  if isinstance(value, digits.Bigint):
    return value
  if isinstance(value, int) and not isinstance(value, bool):
    return conversions.from_int(value)
  return None


def _shift_amount(shift) -> int:
  if isinstance(shift, BigInteger):
    shift = int(shift)
  if not isinstance(shift, int) or isinstance(shift, bool):
    raise TypeError(f"Unsupported shift amount type: {type(shift)}")
  if shift < 0:
    raise ValueError("negative shift count")
  return shift


class BigInteger:
  """An integer that supports arbitrary precision arithmetic.

  Accepts a Python int, a decimal or "0x"-prefixed hex string, a float
  (truncated toward zero), a Bigint or another BigInteger.

  `//`, `%` and divmod follow Python's floor semantics. The engine's own
  truncating division is available as truncating_divide and remainder, and
  the always non-negative modulo as modulo.
  """

  __slots__ = ("value",)

  def __init__(self, value) -> None:
    if isinstance(value, str):
      self.value = conversions.from_string(value)
    elif isinstance(value, float):
      self.value = conversions.from_double(value)
    else:
      bigint = _to_bigint(value)
      if bigint is None:
        raise TypeError("Unsupported type for BigInteger initialization")
      self.value = bigint

  def __add__(self, other):
    other = _to_bigint(other)
    if other is None:
      return NotImplemented
    return BigInteger(additive.add(self.value, other))

  def __radd__(self, other):
    return self.__add__(other)

  def __sub__(self, other):
    other = _to_bigint(other)
    if other is None:
      return NotImplemented
    return BigInteger(additive.subtract(self.value, other))

  def __rsub__(self, other):
    other = _to_bigint(other)
    if other is None:
      return NotImplemented
    return BigInteger(additive.subtract(other, self.value))

  def __mul__(self, other):
    other = _to_bigint(other)
    if other is None:
      return NotImplemented
    return BigInteger(multiplicative.multiply(self.value, other))

  def __rmul__(self, other):
    return self.__mul__(other)

  def _floor_divmod(self, dividend, divisor):
    quotient, rest = multiplicative.divide_remainder(dividend, divisor)
    # Python rounds toward negative infinity: the remainder takes the sign
    # of the divisor.
    if not rest.is_zero() and rest.negative != divisor.negative:
      quotient = additive.subtract(quotient, digits.one())
      rest = additive.add(rest, divisor)
    return BigInteger(quotient), BigInteger(rest)

  def __divmod__(self, other):
    other = _to_bigint(other)
    if other is None:
      return NotImplemented
    return self._floor_divmod(self.value, other)

  def __rdivmod__(self, other):
    other = _to_bigint(other)
    if other is None:
      return NotImplemented
    return self._floor_divmod(other, self.value)

  def __floordiv__(self, other):
    result = self.__divmod__(other)
    return result if result is NotImplemented else result[0]

  def __rfloordiv__(self, other):
    result = self.__rdivmod__(other)
    return result if result is NotImplemented else result[0]

  def __mod__(self, other):
    result = self.__divmod__(other)
    return result if result is NotImplemented else result[1]

  def __rmod__(self, other):
    result = self.__rdivmod__(other)
    return result if result is NotImplemented else result[1]

  def truncating_divide(self, other) -> "BigInteger":
    return BigInteger(multiplicative.divide(self.value, BigInteger(other).value))

  def remainder(self, other) -> "BigInteger":
    return BigInteger(
        multiplicative.remainder(self.value, BigInteger(other).value)
    )

  def modulo(self, other) -> "BigInteger":
    return BigInteger(multiplicative.modulo(self.value, BigInteger(other).value))

  def __neg__(self):
    return BigInteger(digits.negate(self.value))

  def __pos__(self):
    return self

  def __abs__(self):
    return BigInteger(digits.absolute(self.value))

  def __invert__(self):
    return BigInteger(bitwise.bit_not(self.value))

  def __and__(self, other):
    other = _to_bigint(other)
    if other is None:
      return NotImplemented
    return BigInteger(bitwise.bit_and(self.value, other))

  def __rand__(self, other):
    return self.__and__(other)

  def __or__(self, other):
    other = _to_bigint(other)
    if other is None:
      return NotImplemented
    return BigInteger(bitwise.bit_or(self.value, other))

  def __ror__(self, other):
    return self.__or__(other)

  def __xor__(self, other):
    other = _to_bigint(other)
    if other is None:
      return NotImplemented
    return BigInteger(bitwise.bit_xor(self.value, other))

  def __rxor__(self, other):
    return self.__xor__(other)

  def __lshift__(self, shift):
    """Left shift operator (<<)."""
    return BigInteger(shifts.shift_left(self.value, _shift_amount(shift)))

  def __rshift__(self, shift):
    """Right shift operator (>>), rounding toward negative infinity."""
    return BigInteger(shifts.shift_right(self.value, _shift_amount(shift)))

  def _compare(self, other) -> int | None:
    other = _to_bigint(other)
    if other is None:
      return None
    return compare.compare(self.value, other)

  def __eq__(self, other):
    result = self._compare(other)
    return NotImplemented if result is None else result == 0

  def __ne__(self, other):
    result = self._compare(other)
    return NotImplemented if result is None else result != 0

  def __lt__(self, other):
    result = self._compare(other)
    return NotImplemented if result is None else result < 0

  def __le__(self, other):
    result = self._compare(other)
    return NotImplemented if result is None else result <= 0

  def __gt__(self, other):
    result = self._compare(other)
    return NotImplemented if result is None else result > 0

  def __ge__(self, other):
    result = self._compare(other)
    return NotImplemented if result is None else result >= 0

  def __hash__(self):
    # Equal to hash(int(self)) so that BigInteger(n) and n share dict slots.
    return hash(conversions.to_int(self.value))

  def __bool__(self):
    return not self.value.is_zero()

  def __int__(self):
    return conversions.to_int(self.value)

  def __index__(self):
    return conversions.to_int(self.value)

  def __float__(self):
    if not conversions.fits_in_double(self.value):
      raise OverflowError("BigInteger too large to convert to float")
    return conversions.to_double(self.value)

  def bit_length(self) -> int:
    return digits.bit_length(self.value)

  def __str__(self):
    return conversions.to_decimal_string(self.value)

  def __repr__(self):
    return f"BigInteger({conversions.to_decimal_string(self.value)})"

  def hex_value_str(self) -> str:
    return conversions.to_hex_string(self.value)
