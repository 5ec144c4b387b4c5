"""Error hierarchy raised by :mod:`json_hash`.

Every error aborts the running apply/validate pass. Errors that relate to a
position inside the document carry the structural ``path`` from the root
(for example ``/parent/0/child``); the root itself has the empty path.
"""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "CyclicStructureError",
    "HashMismatchError",
    "HashMissingError",
    "InvalidNumberError",
    "JsonHashError",
    "PrecisionExceededError",
    "RangeExceededError",
    "UnsupportedTypeError",
]


def _path_hint(path: str) -> str:
    return f" at {path}" if path else ""


class JsonHashError(ValueError):
    """Base class for all hashing, validation and configuration failures."""

    def __init__(self, message: str, *, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class ConfigurationError(JsonHashError):
    """Raised when a configuration value is out of its accepted domain."""


class UnsupportedTypeError(JsonHashError, TypeError):
    """Raised for values outside the six supported JSON kinds."""

    def __init__(self, value: object, *, path: str = "") -> None:
        self.type_name = type(value).__name__
        super().__init__(f"Unsupported type: {self.type_name}", path=path)


class InvalidNumberError(JsonHashError):
    """Raised for NaN, infinite numbers and integers beyond the double range."""

    def __init__(self, value: int | float, *, path: str = "") -> None:
        self.value = value
        if isinstance(value, int):
            bits = value.bit_length()
            message = f"Integer of {bits} bits does not fit into a double."
        elif value != value:
            message = "NaN is not supported."
        else:
            message = f"Number {value} is not finite."
        super().__init__(message, path=path)


class PrecisionExceededError(JsonHashError):
    """Raised when a number is not a multiple of the configured precision step."""

    def __init__(self, value: float, step: float, *, path: str = "") -> None:
        self.value = value
        self.step = step
        super().__init__(
            f"Number {value} has a higher precision than {step}.", path=path
        )


class RangeExceededError(JsonHashError):
    """Raised when a number leaves the configured ``[min_num, max_num]`` range."""

    def __init__(self, value: float, bound: str, *, path: str = "") -> None:
        self.value = value
        self.bound = bound
        if bound == "max_num":
            message = f"Number {value} exceeds NumberHashingConfig.max_num."
        else:
            message = f"Number {value} is smaller than NumberHashingConfig.min_num."
        super().__init__(message, path=path)


class HashMissingError(JsonHashError):
    """Raised by validation when a map carries no ``_hash`` field."""

    def __init__(self, *, path: str = "") -> None:
        super().__init__(f"Hash{_path_hint(path)} is missing.", path=path)


class HashMismatchError(JsonHashError):
    """Raised when a stored hash differs from the freshly computed one.

    Attributes:
        expected: The freshly computed hash.
        actual: The hash found in the document.
    """

    def __init__(
        self,
        *,
        expected: str,
        actual: str,
        path: str = "",
        message: str | None = None,
    ) -> None:
        self.expected = expected
        self.actual = actual
        if message is None:
            message = (
                f'Hash{_path_hint(path)} "{actual}" is wrong. '
                f'Should be "{expected}".'
            )
        super().__init__(message, path=path)

    @classmethod
    def while_applying(
        cls, *, expected: str, actual: str, path: str = ""
    ) -> HashMismatchError:
        """Build the error raised when apply meets an outdated stored hash."""

        return cls(
            expected=expected,
            actual=actual,
            path=path,
            message=(
                f'Hash "{actual}" does not match the newly calculated one '
                f'"{expected}". Please make sure that all systems are '
                "producing the same hashes."
            ),
        )


class CyclicStructureError(JsonHashError):
    """Raised when a container is reachable from itself."""

    def __init__(self, *, path: str = "") -> None:
        super().__init__(
            f"Cyclic structure detected{_path_hint(path) or ' at root'}.", path=path
        )
