"""Signed and unsigned comparison of Bigints.

All functions return -1, 0 or 1.
"""

from typing import Sequence

from chunkint.bigint import digits


def unsigned_compare(a: digits.Bigint, b: digits.Bigint) -> int:
  """Compares the magnitudes of two clamped values."""
  assert digits.is_clamped(a)
  assert digits.is_clamped(b)
  a_length = a.length
  b_length = b.length
  if a_length < b_length:
    return -1
  if a_length > b_length:
    return 1
  a_digits = a.digit_list()
  b_digits = b.digit_list()
  for i in range(a_length - 1, -1, -1):
    if a_digits[i] < b_digits[i]:
      return -1
    if a_digits[i] > b_digits[i]:
      return 1
  return 0


def unsigned_compare_non_clamped(
    a_digits: Sequence[int], b_digits: Sequence[int]
) -> int:
  """Compares two little-endian digit sequences that may carry leading zeros.

  Long division compares a product against a raw window of the dividend
  which is not clamped, hence the sequences instead of Bigints.

  Args:
    a_digits: The digits of the first magnitude.
    b_digits: The digits of the second magnitude.

  Returns:
    The sign of |a| - |b|.
  """
  a_length = len(a_digits)
  b_length = len(b_digits)
  while a_length > b_length:
    if a_digits[a_length - 1] != 0:
      return 1
    a_length -= 1
  while b_length > a_length:
    if b_digits[b_length - 1] != 0:
      return -1
    b_length -= 1
  for i in range(a_length - 1, -1, -1):
    if a_digits[i] < b_digits[i]:
      return -1
    if a_digits[i] > b_digits[i]:
      return 1
  return 0


def compare(a: digits.Bigint, b: digits.Bigint) -> int:
  if a.negative != b.negative:
    return -1 if a.negative else 1
  if a.negative:
    return -unsigned_compare(a, b)
  return unsigned_compare(a, b)
