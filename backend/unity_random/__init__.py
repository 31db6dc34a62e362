"""Bit-exact reimplementation of Unity's seeded Xorshift128 PRNG."""

from unity_random.logic.color import hsv_to_rgb, lerp
from unity_random.logic.generator import Random
from unity_random.logic.precision import precision_f32
from unity_random.logic.state import State
from unity_random.logic.stream import init_state, next_f32, next_u32

__all__ = [
    "Random",
    "State",
    "hsv_to_rgb",
    "init_state",
    "lerp",
    "next_f32",
    "next_u32",
    "precision_f32",
]
