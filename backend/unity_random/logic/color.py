"""Single-precision lerp and HSV to RGB conversion."""
import numpy as np

_ZERO = np.float32(0.0)
_ONE = np.float32(1.0)
_SIX = np.float32(6.0)

Color = tuple[np.float32, np.float32, np.float32, np.float32]


def lerp(a: float, b: float, t: float) -> np.float32:
    """Interpolate from a to b by t, with t clamped to [0, 1]."""
    a = np.float32(a)
    b = np.float32(b)
    t = np.float32(min(max(np.float32(t), _ZERO), _ONE))
    return a + (b - a) * t


def hsv_to_rgb(h: float, s: float, v: float, extended: bool = False) -> Color:
    """
    Convert hue, saturation and value to an RGBA color with alpha 1.

    The sector selector is floor(h * 6) + 1 matched against 0..7; selectors
    0/6 and 1/7 share formulas and anything else falls back to black. This
    mirrors the engine's switch exactly, boundaries included.

    Unless extended is set, R, G and B are clamped to [0, 1].
    """
    h = np.float32(h)
    s = np.float32(s)
    v = np.float32(v)

    if s == 0:
        return (v, v, v, _ONE)
    if v == 0:
        return (_ZERO, _ZERO, _ZERO, _ONE)

    num = h * _SIX
    sector = np.floor(num)
    frac = num - sector
    p = v * (_ONE - s)
    q = v * (_ONE - s * frac)
    t = v * (_ONE - s * (_ONE - frac))

    selector = sector + _ONE
    if selector == 0:
        color = (v, p, q)
    elif selector == 1:
        color = (v, t, p)
    elif selector == 2:
        color = (q, v, p)
    elif selector == 3:
        color = (p, v, t)
    elif selector == 4:
        color = (p, q, v)
    elif selector == 5:
        color = (t, p, v)
    elif selector == 6:
        color = (v, p, q)
    elif selector == 7:
        color = (v, t, p)
    else:
        color = (_ZERO, _ZERO, _ZERO)

    r, g, b = color
    if not extended:
        r = np.clip(r, _ZERO, _ONE)
        g = np.clip(g, _ZERO, _ONE)
        b = np.clip(b, _ZERO, _ONE)

    return (r, g, b, _ONE)
