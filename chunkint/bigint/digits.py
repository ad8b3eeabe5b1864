"""Digit storage and normalization for sign-magnitude big integers.

A Bigint is built exactly once through a DigitBuffer:

  buffer = digits.DigitBuffer(upper_bound)
  for i in ...:
    buffer[i] = digit
  value = buffer.finish(negative)

finish() trims the most significant zero digits (see clamp), freezes the
digit array and hands out the immutable value. The buffer cannot be written
after that, so a half-built value is never observable by another operation.
"""

import dataclasses
from typing import Callable, Iterable, Sequence

from chunkint.bigint import parameters
import numpy as np

Allocator = Callable[[int], np.ndarray]


def allocate(length: int) -> np.ndarray:
  """Returns an owned, zero-filled buffer of `length` digits."""
  return np.zeros(length, dtype=parameters.CHUNK_TYPE)


def clamped_length(chunks: Sequence[int]) -> int:
  """Length of `chunks` once the most significant zero digits are dropped."""
  length = len(chunks)
  while length > 0 and chunks[length - 1] == 0:
    length -= 1
  return length


def _freeze(chunks: np.ndarray) -> np.ndarray:
  chunks.flags.writeable = False
  return chunks


@dataclasses.dataclass(frozen=True, eq=False)
class Bigint:
  """An immutable sign-magnitude integer.

  Attributes:
    digits: read-only little-endian array of DIGIT_BIT_SIZE-bit digits.
    negative: True iff the value is strictly negative.
  """

  digits: np.ndarray
  negative: bool = False

  @property
  def length(self) -> int:
    return len(self.digits)

  def digit(self, index: int) -> int:
    return int(self.digits[index])

  def digit_list(self) -> list[int]:
    return self.digits.tolist()

  def is_zero(self) -> bool:
    return len(self.digits) == 0

  def __eq__(self, other):
    if not isinstance(other, Bigint):
      return NotImplemented
    return self.negative == other.negative and np.array_equal(
        self.digits, other.digits
    )

  def __hash__(self):
    return hash((self.negative, self.digits.tobytes()))

  def __repr__(self):
    sign = "-" if self.negative else ""
    return f"Bigint({sign}{self.digit_list()})"


class DigitBuffer:
  """Single-writer builder for a Bigint."""

  def __init__(self, length: int, allocator: Allocator | None = None):
    assert length >= 0
    self._chunks = (allocator or allocate)(length)
    assert len(self._chunks) == length
    self._finished = False

  def __len__(self) -> int:
    return len(self._chunks)

  def __getitem__(self, index: int) -> int:
    return int(self._chunks[index])

  def __setitem__(self, index: int, digit: int) -> None:
    assert not self._finished, "DigitBuffer already finished"
    assert 0 <= digit <= parameters.DIGIT_MASK, f"digit {digit} out of range"
    self._chunks[index] = digit

  def fill(self, digits: Iterable[int], offset: int = 0) -> None:
    for i, digit in enumerate(digits):
      self[offset + i] = digit

  def finish(self, negative: bool = False) -> Bigint:
    """Clamps the buffer and returns it as an immutable Bigint."""
    assert not self._finished, "DigitBuffer already finished"
    self._finished = True
    length = clamped_length(self._chunks)
    chunks = np.array(self._chunks[:length], dtype=parameters.CHUNK_TYPE)
    return Bigint(_freeze(chunks), negative and length > 0)


def from_digits(digits: Sequence[int], negative: bool = False) -> Bigint:
  buffer = DigitBuffer(len(digits))
  buffer.fill(digits)
  return buffer.finish(negative)


_ZERO = Bigint(_freeze(allocate(0)))
_ONE = from_digits([1])
_MINUS_ONE = from_digits([1], negative=True)


def zero() -> Bigint:
  return _ZERO


def one() -> Bigint:
  return _ONE


def minus_one() -> Bigint:
  return _MINUS_ONE


def is_clamped(value: Bigint) -> bool:
  """Checks the canonical-form invariants of a Bigint."""
  chunks = value.digits
  if len(chunks) == 0:
    return not value.negative
  if chunks[-1] == 0:
    return False
  return bool(np.all(chunks <= parameters.DIGIT_MASK))


def clamp(value: Bigint) -> Bigint:
  """Returns the canonical form of a possibly non-clamped Bigint."""
  if is_clamped(value):
    return value
  chunks = value.digits
  assert np.all(chunks <= parameters.DIGIT_MASK)
  length = clamped_length(chunks)
  trimmed = np.array(chunks[:length], dtype=parameters.CHUNK_TYPE)
  return Bigint(_freeze(trimmed), value.negative and length > 0)


def with_sign(value: Bigint, negative: bool) -> Bigint:
  """Returns `value` with its sign set; zero stays non-negative."""
  negative = negative and not value.is_zero()
  if value.negative == negative:
    return value
  return Bigint(value.digits, negative)


def negate(value: Bigint) -> Bigint:
  return with_sign(value, not value.negative)


def absolute(value: Bigint) -> Bigint:
  return with_sign(value, False)


def copy(value: Bigint) -> Bigint:
  return from_digits(value.digit_list(), value.negative)


def count_bits(digit: int) -> int:
  """Number of significant bits of a single digit."""
  result = 0
  while digit != 0:
    digit >>= 1
    result += 1
  return result


def bit_length(value: Bigint) -> int:
  """Number of significant bits of the magnitude of `value`."""
  if value.is_zero():
    return 0
  return (value.length - 1) * parameters.DIGIT_BIT_SIZE + count_bits(
      value.digit(value.length - 1)
  )
