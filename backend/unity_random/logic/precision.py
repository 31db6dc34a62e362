"""Significant-digit rounding applied to every float a distribution returns."""
import math

import numpy as np

# Significant digits kept on every distribution output
OUTPUT_DIGITS = 7


def _round_half_away(value: float) -> float:
    floor = math.floor(abs(value))
    if abs(value) - floor >= 0.5:
        floor += 1
    return math.copysign(floor, value)


def precision_f32(x: float, decimals: int = OUTPUT_DIGITS) -> np.float32:
    """
    Round x to `decimals` significant digits (not digits after the point).

    The exponent is found in single precision, while the scale factor and
    the rounding step run in double precision before narrowing back; doing
    it all in single precision gives results like 11999.999 for 12300.0 at
    two digits.

    Returns 0 for x == 0 or decimals == 0, NaN for non-finite x.
    """
    x32 = np.float32(x)
    if x32 == 0 or decimals == 0:
        return np.float32(0.0)
    if not math.isfinite(x32):
        return np.float32(math.nan)

    shift = decimals - int(np.ceil(np.log10(np.abs(x32))))
    shift_factor = 10.0**shift

    return np.float32(_round_half_away(float(x32) * shift_factor) / shift_factor)
