"""Errors raised by the big integer engine.

Each error also derives from the built-in exception a Python caller would
expect, so `except ZeroDivisionError` keeps working.

Contract violations (narrowing a value that does not fit, subtracting a
larger magnitude from a smaller one, ...) are not represented here: they are
caller bugs and are checked with assert statements.
"""


class BigintError(Exception):
  """Base class for all big integer errors."""


class DivisionByZeroError(BigintError, ZeroDivisionError):
  """Division, modulo or remainder with a zero divisor."""


class InvalidFormatError(BigintError, ValueError):
  """A decimal or hexadecimal string could not be parsed."""

  def __init__(self, text: str, position: int, reason: str = "") -> None:
    self.text = text
    self.position = position
    if not reason:
      if 0 <= position < len(text):
        reason = f"unexpected character {text[position]!r}"
      else:
        reason = "missing digits"
    super().__init__(f"{reason} at position {position} in {text!r}")


class UnsupportedMagnitudeError(BigintError, OverflowError):
  """Operands exceed the overflow-safety bound of Comba multiplication."""


class SpecialDoubleInputError(BigintError, ValueError):
  """A NaN or an infinity was given where a finite double is required."""
