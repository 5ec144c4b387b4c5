"""Number normalisation, formatting and range checks.

Hashes are only portable when every implementation renders a number with
exactly the same characters. Floats are therefore formatted with the
shortest round-trip digits, laid out like ECMAScript's
``Number.prototype.toString``, and non-integers are truncated to a fixed
number of decimal digits before hashing.
"""

from __future__ import annotations

import logging
import math
import sys
from decimal import Decimal
from typing import cast

from .config import NumberHashingConfig
from .errors import InvalidNumberError, PrecisionExceededError, RangeExceededError

__all__ = ["NumberNormalizer", "as_double", "format_number", "truncate"]

LOGGER = logging.getLogger(__name__)

_POSITIONAL_MAX_EXPONENT = 21
_POSITIONAL_MIN_EXPONENT = -6
_SAFE_INTEGER_LIMIT = 2**53


def _shortest_digits(value: float) -> tuple[str, int]:
    """Return the significant digits of ``abs(value)`` and its decimal point position.

    ``abs(value) == 0.<digits> * 10 ** point``.
    """

    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = list(digit_tuple)
    exponent = cast(int, exponent)
    while len(digits) > 1 and digits[-1] == 0:
        digits.pop()
        exponent += 1
    text = "".join(str(digit) for digit in digits)
    return text, len(text) + exponent


def as_double(value: int, path: str = "") -> int | float:
    """Return ``value`` as a JSON parser backed by doubles would read it.

    Integers below 2**53 are exact doubles and stay ``int``. Larger ones are
    converted to the nearest ``float``, so equal numbers render identically
    whether they arrive as ``int`` or ``float``.

    Raises:
        InvalidNumberError: If ``value`` does not fit into a double.
    """

    if abs(value) < _SAFE_INTEGER_LIMIT:
        return value
    try:
        return float(value)
    except OverflowError:
        raise InvalidNumberError(value, path=path) from None


def format_number(value: int | float) -> str:
    """Render ``value`` the same way on every platform.

    Integers of 2**53 and beyond are first converted to the nearest double.
    Integral numbers below ``1e21`` have no decimal point. Other floats use
    positional notation for decimal exponents between -6 and 21 and
    scientific notation (``1.5e-7``, ``1e+21``) otherwise.

    Raises:
        InvalidNumberError: If ``value`` is NaN, infinite or an integer
            too large for a double.
    """

    if isinstance(value, int):
        value = as_double(value)
        if isinstance(value, int):
            return str(value)
    if not math.isfinite(value):
        raise InvalidNumberError(value)
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    digits, point = _shortest_digits(value)
    count = len(digits)

    if count <= point <= _POSITIONAL_MAX_EXPONENT:
        return sign + digits + "0" * (point - count)
    if 0 < point <= _POSITIONAL_MAX_EXPONENT:
        return f"{sign}{digits[:point]}.{digits[point:]}"
    if _POSITIONAL_MIN_EXPONENT < point <= 0:
        return f"{sign}0.{'0' * -point}{digits}"

    exponent = point - 1
    exponent_text = f"e+{exponent}" if exponent >= 0 else f"e-{-exponent}"
    mantissa = digits if count == 1 else f"{digits[0]}.{digits[1:]}"
    return sign + mantissa + exponent_text


def truncate(value: int | float, precision: int) -> int | float:
    """Drop decimal digits beyond ``precision`` without rounding.

    Integers are returned unchanged. Trailing zeros are removed and an
    ``int`` is returned when no decimal digit is left.

    >>> truncate(1.23456789, 2)
    1.23
    >>> truncate(3.0001, 3)
    3
    """

    if isinstance(value, int) or value.is_integer():
        return value

    positional = format(Decimal(repr(value)), "f")
    integer_part, _, fraction = positional.partition(".")
    fraction = fraction[:precision].rstrip("0")
    if not fraction:
        return int(integer_part)
    return float(f"{integer_part}.{fraction}")


class NumberNormalizer:
    """Apply a :class:`NumberHashingConfig` to individual numbers."""

    def __init__(self, config: NumberHashingConfig | None = None) -> None:
        self.config = config or NumberHashingConfig.default()

    def normalize(self, value: int | float, path: str = "") -> int | float:
        """Return the representation of ``value`` that enters the hash.

        Raises:
            InvalidNumberError: For NaN and infinite values.
            PrecisionExceededError: When the strict profile rejects ``value``.
            RangeExceededError: When ``value`` is outside the configured range.
        """

        if isinstance(value, int):
            return as_double(value, path)
        if not math.isfinite(value):
            raise InvalidNumberError(value, path=path)
        if value.is_integer():
            return value

        config = self.config
        if config.truncates:
            result = truncate(value, config.precision)
        else:
            self._check_step(value, path)
            result = value

        self._check_range(value, path)
        return result

    def _check_step(self, value: float, path: str) -> None:
        step = cast(float, self.config.precision_step)
        rounded = math.floor(value / step + 0.5) * step
        if abs(value - rounded) > sys.float_info.epsilon:
            raise PrecisionExceededError(value, step, path=path)

    def _check_range(self, value: float, path: str) -> None:
        config = self.config
        if value > config.max_num:
            if config.throw_on_range_error:
                raise RangeExceededError(value, "max_num", path=path)
            LOGGER.debug("Number %s above max_num hashed unchanged", value)
        elif value < config.min_num:
            if config.throw_on_range_error:
                raise RangeExceededError(value, "min_num", path=path)
            LOGGER.debug("Number %s below min_num hashed unchanged", value)
