"""Tests for the exchange of Bigints with JAX limb arrays."""

import hypothesis
from chunkint.bigint import chunk_arrays
from chunkint.bigint import test_utils
import jax.numpy as jnp
import numpy as np

from absl.testing import absltest
from absl.testing import parameterized

big = test_utils.big
small = test_utils.small


class RechunkTest(parameterized.TestCase):

  @parameterized.named_parameters(
      dict(testcase_name="split", chunks=[0xABCD, 0x1234], from_bits=16,
           to_bits=8, expected=[0xCD, 0xAB, 0x34, 0x12]),
      dict(testcase_name="merge", chunks=[0xCD, 0xAB, 0x34], from_bits=8,
           to_bits=16, expected=[0xABCD, 0x34]),
      dict(testcase_name="uneven", chunks=[0x7, 0x5], from_bits=3,
           to_bits=4, expected=[0xF, 0x2]),
      dict(testcase_name="zeros", chunks=[0, 0], from_bits=28, to_bits=16,
           expected=[]),
  )
  def test_rechunk(self, chunks, from_bits, to_bits, expected):
    self.assertEqual(
        chunk_arrays.rechunk(chunks, from_bits, to_bits), expected
    )

  def test_chunk_too_wide(self):
    with self.assertRaises(AssertionError):
      chunk_arrays.rechunk([0x100], 8, 16)


class ChunkArrayTest(absltest.TestCase):

  def test_to_chunk_array(self):
    result = chunk_arrays.to_chunk_array(big(0x1234_5678_9ABC))
    self.assertEqual(result.dtype, jnp.uint16)
    np.testing.assert_array_equal(result, [0x9ABC, 0x5678, 0x1234])

  def test_to_chunk_array_padding(self):
    result = chunk_arrays.to_chunk_array(big(0x1_0000), array_size=4)
    np.testing.assert_array_equal(result, [0, 1, 0, 0])

  def test_to_chunk_array_too_small(self):
    with self.assertRaises(AssertionError):
      chunk_arrays.to_chunk_array(big(2**40), array_size=2)

  def test_negative_value(self):
    with self.assertRaises(ValueError):
      chunk_arrays.to_chunk_array(big(-1))

  def test_from_chunk_array(self):
    limbs = jnp.array([0x9ABC, 0x5678, 0x1234, 0], dtype=jnp.uint16)
    self.assertEqual(small(chunk_arrays.from_chunk_array(limbs)),
                     0x1234_5678_9ABC)

  def test_chunk_matrix(self):
    values = [1, 2**64 - 1, 0]
    matrix = chunk_arrays.to_chunk_matrix(
        [big(v) for v in values], base=32, dtype=jnp.uint32
    )
    self.assertEqual(matrix.shape, (3, 2))
    np.testing.assert_array_equal(
        matrix, [[1, 0], [0xFFFFFFFF, 0xFFFFFFFF], [0, 0]]
    )
    result = chunk_arrays.from_chunk_matrix(matrix, base=32)
    self.assertEqual([small(v) for v in result], values)

  def test_empty_chunk_matrix(self):
    self.assertEqual(chunk_arrays.to_chunk_matrix([]).shape, (0, 0))

  @hypothesis.settings(deadline=None)
  @hypothesis.given(test_utils.non_negative_integers)
  def test_limbs_match_int(self, value):
    limbs = chunk_arrays.to_chunk_array(big(value))
    expected = [(value >> (16 * i)) & 0xFFFF for i in range(len(limbs))]
    np.testing.assert_array_equal(limbs, expected)
    self.assertEqual(small(chunk_arrays.from_chunk_array(limbs)), value)


if __name__ == "__main__":
  absltest.main()
