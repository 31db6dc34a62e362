"""Raw Xorshift128 stream: seeding and 32-bit / normalized float draws."""
import numpy as np

from unity_random.logic.state import MASK32, SEED_MULTIPLIER, State, to_uint32

# Low 23 bits of a raw draw, also the float divisor (inclusive upper bound)
MANTISSA_MASK = 0x7FFFFF
_MANTISSA_DIVISOR = np.float32(MANTISSA_MASK)


def init_state(seed: int) -> State:
    """
    Expand a 32-bit seed into four state words.

    Each word is the previous one times 0x6C078965 plus one, modulo 2^32.
    Negative seeds are reinterpreted as unsigned.
    """
    s0 = to_uint32(seed)
    s1 = (s0 * SEED_MULTIPLIER + 1) & MASK32
    s2 = (s1 * SEED_MULTIPLIER + 1) & MASK32
    s3 = (s2 * SEED_MULTIPLIER + 1) & MASK32
    return State(s0=s0, s1=s1, s2=s2, s3=s3)


def next_u32(state: State) -> int:
    """Advance the state by one Xorshift128 step and return the new s3."""
    t = state.s0 ^ ((state.s0 << 11) & MASK32)
    s = state.s3 ^ (state.s3 >> 19)

    state.s0 = state.s1
    state.s1 = state.s2
    state.s2 = state.s3

    state.s3 = s ^ (t ^ (t >> 8))
    return state.s3


def next_f32(state: State) -> np.float32:
    """Draw one raw word and map its low 23 bits onto [0, 1] (both inclusive)."""
    return np.float32(next_u32(state) & MANTISSA_MASK) / _MANTISSA_DIVISOR
