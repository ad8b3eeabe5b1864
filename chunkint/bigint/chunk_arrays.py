"""Exchange of Bigints with fixed-size limb arrays for JAX kernels.

Accelerator kernels work on non-negative integers split into limbs of a
machine-friendly width (e.g. 16-bit limbs in a jnp.uint16 array), while a
Bigint stores DIGIT_BIT_SIZE-bit digits. Both are little-endian, so a
conversion only regroups the bit stream.

Note that: these functions take Python-side values and cannot be jitted.
"""

from typing import List, Sequence

from chunkint.bigint import digits
from chunkint.bigint import parameters
import jax
import jax.numpy as jnp
import numpy as np

jax.config.update("jax_enable_x64", True)

BASE = 16
BASE_TYPE = jnp.uint16  # this type must match the BASE, i.e. jnp.uint<BASE>


def rechunk(chunks: Sequence[int], from_bits: int, to_bits: int) -> List[int]:
  """Regroups little-endian chunks of from_bits bits into to_bits bits.

  Args:
    chunks: The chunks, least significant first.
    from_bits: The bit width of each input chunk.
    to_bits: The bit width of each output chunk.

  Returns:
    The output chunks, least significant first, without most significant
    zero chunks.
  """
  assert from_bits > 0 and to_bits > 0
  mask = (1 << to_bits) - 1
  result = []
  accumulator = 0
  accumulated_bits = 0
  for chunk in chunks:
    assert 0 <= chunk < (1 << from_bits), f"chunk {chunk} exceeds {from_bits}"
    accumulator |= chunk << accumulated_bits
    accumulated_bits += from_bits
    while accumulated_bits >= to_bits:
      result.append(accumulator & mask)
      accumulator >>= to_bits
      accumulated_bits -= to_bits
  if accumulator != 0:
    result.append(accumulator)
  while result and result[-1] == 0:
    result.pop()
  return result


def to_chunk_array(
    value: digits.Bigint, base=BASE, dtype=BASE_TYPE, array_size=None
) -> jax.Array:
  """Chunk decompose a non-negative Bigint into a JAX array.

  Args:
    value: The Bigint to convert.
    base: The bit width of a limb.
    dtype: The data type of the JAX array, wide enough for `base` bits.
    array_size: The size of the JAX array. If None, the array will have the
      minimum size necessary to store the value.

  Returns:
    A JAX array of limbs, least significant first.
  """
  if value.negative:
    raise ValueError("Only non-negative values have a limb representation")
  elements = rechunk(value.digit_list(), parameters.DIGIT_BIT_SIZE, base)
  # we pad the result to match the desired size
  if array_size is not None:
    assert array_size >= len(elements)
    elements = elements + [0] * (array_size - len(elements))
  return jnp.array(elements, dtype=dtype)


def from_chunk_array(jax_array, base=BASE) -> digits.Bigint:
  """Converts a 1D array of limbs back into a Bigint."""
  limbs = np.asarray(jax_array).tolist()
  return digits.from_digits(
      rechunk(limbs, base, parameters.DIGIT_BIT_SIZE)
  )


def to_chunk_matrix(
    values: Sequence[digits.Bigint], base=BASE, dtype=BASE_TYPE, array_size=None
) -> jax.Array:
  """Converts a list of Bigints to a 2D JAX array, one row per value."""
  if array_size is None:
    array_size = max(
        (len(rechunk(v.digit_list(), parameters.DIGIT_BIT_SIZE, base))
         for v in values),
        default=0,
    )
  rows = [to_chunk_array(v, base, dtype, array_size) for v in values]
  if not rows:
    return jnp.zeros((0, array_size), dtype=dtype)
  return jnp.stack(rows)


def from_chunk_matrix(jax_array, base=BASE) -> List[digits.Bigint]:
  """Converts a 2D array of limbs into a list of Bigints."""
  return [from_chunk_array(row, base) for row in jax_array]
