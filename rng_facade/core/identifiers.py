"""
128-bit identifier value type.

Responsibility boundaries:
- Fixed-width pair of unsigned 64-bit halves, high then low.
- Equality and hashing only; no arithmetic is defined on it.
"""

from dataclasses import dataclass

from rng_facade.core.errors import InvalidParameterError

UINT64_MAX = (1 << 64) - 1


@dataclass(frozen=True)
class Identifier128:
    """Two independently drawn 64-bit halves forming one identifier."""

    high: int
    low: int

    def __post_init__(self) -> None:
        for name in ("high", "low"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= UINT64_MAX:
                raise InvalidParameterError(f"{name} must be an unsigned 64-bit int, got {value!r}.")

    def __int__(self) -> int:
        return (self.high << 64) | self.low

    @property
    def hex(self) -> str:
        return f"{self.high:016x}{self.low:016x}"

    @classmethod
    def from_int(cls, value: int) -> "Identifier128":
        if not 0 <= value < (1 << 128):
            raise InvalidParameterError(f"value does not fit in 128 bits: {value!r}.")
        return cls(value >> 64, value & UINT64_MAX)

    def __str__(self) -> str:
        return self.hex
