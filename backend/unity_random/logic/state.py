"""Generator state model (four 32-bit words, persisted in order s0..s3)."""
from typing import Sequence

from pydantic import BaseModel, Field

MASK32 = 0xFFFFFFFF
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# Multiplier of the seed expansion recurrence (MT19937 initializer constant)
SEED_MULTIPLIER = 0x6C078965


def to_uint32(value: int) -> int:
    """Wrap an integer to an unsigned 32-bit word."""
    return value & MASK32


def to_int32(value: int) -> int:
    """Wrap an integer to a signed 32-bit value (two's complement)."""
    value &= MASK32
    return value - 2**32 if value > INT32_MAX else value


class State(BaseModel):
    """
    Full internal state of the Xorshift128 generator.

    Words are mutated in place by every raw draw, so assignment is not
    validated. Copy with copy_state() to get an independent value.
    """

    s0: int = Field(..., ge=0, le=MASK32)
    s1: int = Field(..., ge=0, le=MASK32)
    s2: int = Field(..., ge=0, le=MASK32)
    s3: int = Field(..., ge=0, le=MASK32)

    def words(self) -> tuple[int, int, int, int]:
        return (self.s0, self.s1, self.s2, self.s3)

    def copy_state(self) -> "State":
        return State(s0=self.s0, s1=self.s1, s2=self.s2, s3=self.s3)

    @classmethod
    def from_words(cls, words: Sequence[int]) -> "State":
        """
        Build a state from exactly four words in s0..s3 order.

        Raises ValueError on a wrong word count; pydantic rejects words
        outside the unsigned 32-bit range.
        """
        if len(words) != 4:
            raise ValueError(f"State requires exactly 4 words, got {len(words)}")
        s0, s1, s2, s3 = words
        return cls(s0=s0, s1=s1, s2=s2, s3=s3)
