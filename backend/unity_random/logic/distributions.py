"""
Derived distributions over the raw stream.

Each function consumes a fixed number of raw draws, in a fixed order, and
rounds every returned float to seven significant digits. Arithmetic stays in
single precision throughout. sin and cos are evaluated in double precision and
narrowed once. That can differ by one ulp from a platform sinf/cosf, so
after rounding about one in a hundred results of the draws that go through
sin and cos (unit circle, unit sphere, uniform rotation) may differ in the
last digit from an engine built on that libm.

Raw draws per call:
    range_int            1 (0 when min == max)
    range_float, value   1
    inside_unit_circle   2
    on_unit_sphere       2
    inside_unit_sphere   3
    rotation             4
    rotation_uniform     3
    color_hsva           4
"""
import math

import numpy as np

from unity_random.logic import stream
from unity_random.logic.color import hsv_to_rgb, lerp
from unity_random.logic.precision import precision_f32
from unity_random.logic.state import MASK32, State, to_int32

TAU = np.float32(2.0 * np.pi)

_ZERO = np.float32(0.0)
_ONE = np.float32(1.0)
_THIRD = np.float32(1.0) / np.float32(3.0)


# Transcendentals run in double precision, narrowed once to single
def _sin(x: np.float32) -> np.float32:
    return np.float32(math.sin(x))


def _cos(x: np.float32) -> np.float32:
    return np.float32(math.cos(x))


def _pow(x: np.float32, y: np.float32) -> np.float32:
    return np.float32(math.pow(x, y))


def _range_float_raw(state: State, min_value: float, max_value: float) -> np.float32:
    # max is weighted by (1 - f) and min by f, as the engine does it
    f = stream.next_f32(state)
    return (_ONE - f) * np.float32(max_value) + f * np.float32(min_value)


def _on_unit_sphere_raw(state: State) -> tuple[np.float32, np.float32, np.float32]:
    dist = _range_float_raw(state, -1.0, 1.0)
    rad = _range_float_raw(state, 0.0, TAU)
    radius_xy = np.sqrt(_ONE - dist * dist)

    return (_cos(rad) * radius_xy, _sin(rad) * radius_xy, dist)


def range_int(state: State, min_value: int, max_value: int) -> int:
    """
    Random integer in [min, max), bounds swapped if reversed.

    Bounds are signed 32-bit values; equal bounds return min without a draw.
    """
    min_value = to_int32(min_value)
    max_value = to_int32(max_value)
    if min_value > max_value:
        min_value, max_value = max_value, min_value

    diff = (max_value - min_value) & MASK32
    if diff == 0:
        return min_value

    offset = to_int32(stream.next_u32(state) % diff)
    return to_int32(min_value + offset)


def range_float(state: State, min_value: float, max_value: float) -> float:
    """Random float in [min, max], both inclusive."""
    return float(precision_f32(_range_float_raw(state, min_value, max_value)))


def value(state: State) -> float:
    """Random float in [0, 1], both inclusive."""
    return float(precision_f32(stream.next_f32(state)))


def inside_unit_circle(state: State) -> tuple[float, float]:
    """
    Random point inside or on the unit circle.

    The perimeter is reachable because the radius draw includes 1.0.
    """
    theta = _range_float_raw(state, 0.0, TAU)
    radius = np.sqrt(_range_float_raw(state, 0.0, 1.0))

    x = precision_f32(radius * _cos(theta))
    y = precision_f32(radius * _sin(theta))
    return (float(x), float(y))


def on_unit_sphere(state: State) -> tuple[float, float, float]:
    """Random point on the surface of the unit sphere."""
    x, y, z = _on_unit_sphere_raw(state)
    return (float(precision_f32(x)), float(precision_f32(y)), float(precision_f32(z)))


def inside_unit_sphere(state: State) -> tuple[float, float, float]:
    """Random point inside or on the unit sphere (surface reachable)."""
    x, y, z = _on_unit_sphere_raw(state)
    dist = _pow(stream.next_f32(state), _THIRD)

    return (
        float(precision_f32(x * dist)),
        float(precision_f32(y * dist)),
        float(precision_f32(z * dist)),
    )


def rotation(state: State) -> tuple[float, float, float, float]:
    """
    Random quaternion (x, y, z, w) with w >= 0.

    Components are drawn in [-1, 1] and normalized, so the distribution is
    not uniform. The magnitude, not the components, is negated when w < 0.
    All-zero draws divide by zero and yield NaN.
    """
    x = _range_float_raw(state, -1.0, 1.0)
    y = _range_float_raw(state, -1.0, 1.0)
    z = _range_float_raw(state, -1.0, 1.0)
    w = _range_float_raw(state, -1.0, 1.0)

    mag = np.sqrt(x * x + y * y + z * z + w * w)
    if w < 0:
        mag = -mag

    with np.errstate(divide="ignore", invalid="ignore"):
        return (
            float(precision_f32(x / mag)),
            float(precision_f32(y / mag)),
            float(precision_f32(z / mag)),
            float(precision_f32(w / mag)),
        )


def rotation_uniform(state: State) -> tuple[float, float, float, float]:
    """
    Uniformly distributed random quaternion (x, y, z, w) with w >= 0.

    Uses the Hopf fibration; slower than rotation() but uniform.
    """
    u1 = _range_float_raw(state, 0.0, 1.0)
    u2 = _range_float_raw(state, 0.0, TAU)
    u3 = _range_float_raw(state, 0.0, TAU)

    sqrt1 = np.sqrt(u1)
    inv = np.sqrt(_ONE - u1)

    x = inv * _sin(u2)
    y = inv * _cos(u2)
    z = sqrt1 * _sin(u3)
    w = sqrt1 * _cos(u3)

    if w < 0:
        x, y, z, w = -x, -y, -z, -w

    return (
        float(precision_f32(x)),
        float(precision_f32(y)),
        float(precision_f32(z)),
        float(precision_f32(w)),
    )


def color_hsva(
    state: State,
    hue_min: float = 0.0,
    hue_max: float = 1.0,
    saturation_min: float = 0.0,
    saturation_max: float = 1.0,
    value_min: float = 0.0,
    value_max: float = 1.0,
    alpha_min: float = 1.0,
    alpha_max: float = 1.0,
) -> tuple[float, float, float, float]:
    """
    Random RGBA color from hue, saturation, value and alpha ranges.

    Hue, saturation and value are drawn first, then converted without
    clamping; alpha is drawn last.
    """
    hue = lerp(hue_min, hue_max, stream.next_f32(state))
    sat = lerp(saturation_min, saturation_max, stream.next_f32(state))
    val = lerp(value_min, value_max, stream.next_f32(state))

    r, g, b, _ = hsv_to_rgb(hue, sat, val, extended=True)
    a = lerp(alpha_min, alpha_max, stream.next_f32(state))

    return (
        float(precision_f32(r)),
        float(precision_f32(g)),
        float(precision_f32(b)),
        float(precision_f32(a)),
    )


def color(state: State) -> tuple[float, float, float, float]:
    return color_hsva(state)


def color_h(state: State, hue_min: float, hue_max: float) -> tuple[float, float, float, float]:
    return color_hsva(state, hue_min, hue_max)


def color_hs(
    state: State,
    hue_min: float,
    hue_max: float,
    saturation_min: float,
    saturation_max: float,
) -> tuple[float, float, float, float]:
    return color_hsva(state, hue_min, hue_max, saturation_min, saturation_max)


def color_hsv(
    state: State,
    hue_min: float,
    hue_max: float,
    saturation_min: float,
    saturation_max: float,
    value_min: float,
    value_max: float,
) -> tuple[float, float, float, float]:
    return color_hsva(
        state, hue_min, hue_max, saturation_min, saturation_max, value_min, value_max
    )
