"""Pydantic models describing machine-readable json-hash results."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .errors import HashMismatchError, JsonHashError


class HashReport(BaseModel):
    """Outcome of a single apply, validate or hash operation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    operation: Literal["apply", "validate", "hash"] = Field(
        ..., description="Operation that produced the report."
    )
    valid: bool = Field(..., description="Whether the operation succeeded.")
    hash_value: str | None = Field(
        default=None,
        description="Root hash of the document or hash of the raw value.",
        min_length=1,
    )
    error: str | None = Field(
        default=None, description="Error message when the operation failed."
    )
    error_type: str | None = Field(
        default=None, description="Class name of the raised error."
    )
    path: str | None = Field(
        default=None,
        description="Structural path of the failing node ('' for the root).",
    )
    expected: str | None = Field(
        default=None, description="Freshly computed hash on mismatch."
    )
    actual: str | None = Field(
        default=None, description="Stored hash on mismatch."
    )

    @classmethod
    def from_error(
        cls, operation: Literal["apply", "validate", "hash"], exc: JsonHashError
    ) -> HashReport:
        """Build a failed report from a :class:`JsonHashError`."""

        mismatch = exc if isinstance(exc, HashMismatchError) else None
        return cls(
            operation=operation,
            valid=False,
            error=str(exc),
            error_type=type(exc).__name__,
            path=exc.path,
            expected=mismatch.expected if mismatch else None,
            actual=mismatch.actual if mismatch else None,
        )

    def model_dump_json_ready(self) -> dict[str, object]:
        """Return a JSON-serialisable payload with ``None`` values removed."""

        return self.model_dump(mode="json", exclude_none=True)
