"""Uniform success/failure result returned by every public CPE operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from napalm_cpe.client.errors import CPEError

T = TypeVar("T")


@dataclass(frozen=True)
class CPEResult(Generic[T]):
    """Tagged result: either ``ok`` with *data*, or not ``ok`` with *error*.

    Attributes:
        ok: ``True`` when the operation succeeded.
        data: Payload of a successful operation (may be ``None`` for
            operations that return nothing).
        error: Human-readable failure message; ``None`` on success.
    """

    ok: bool
    data: T | None = None
    error: str | None = None

    @classmethod
    def success(cls, data: T | None = None) -> CPEResult[T]:
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: str) -> CPEResult[T]:
        return cls(ok=False, error=error)

    def unwrap(self) -> T:
        """Return :attr:`data`, or raise :exc:`.CPEError` carrying :attr:`error`."""
        if not self.ok:
            raise CPEError(self.error or "operation failed")
        return self.data  # type: ignore[return-value]
