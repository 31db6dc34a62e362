"""Generator handle owning one Xorshift128 state."""
import time

from unity_random.logic import distributions, stream
from unity_random.logic.state import MASK32, State


def time_seed() -> int:
    """Current UNIX time in whole seconds, truncated to 32 bits."""
    return int(time.time()) & MASK32


class Random:
    """
    Seeded PRNG reproducing Unity's UnityEngine.Random sequence.

    Construct with an explicit seed, with a previously saved State, or with
    neither to seed from the wall clock (not reproducible). There is no
    shared global instance: each handle owns its own state.
    """

    def __init__(self, seed: int | None = None, state: State | None = None):
        if seed is not None and state is not None:
            raise ValueError("Pass either seed or state, not both")
        if state is not None:
            self._state = state.copy_state()
        else:
            self._state = stream.init_state(time_seed() if seed is None else seed)

    @classmethod
    def from_state(cls, state: State) -> "Random":
        return cls(state=state)

    @property
    def state(self) -> State:
        """Copy of the full internal state."""
        return self._state.copy_state()

    @state.setter
    def state(self, value: State) -> None:
        self._state = value.copy_state()

    def init_state(self, seed: int) -> None:
        """(Re-)initialize the generator with a seed."""
        self._state = stream.init_state(seed)

    def range_int(self, min_value: int, max_value: int) -> int:
        """Random int in [min, max); min inclusive, max exclusive."""
        return distributions.range_int(self._state, min_value, max_value)

    def range_float(self, min_value: float, max_value: float) -> float:
        """Random float in [min, max], both inclusive."""
        return distributions.range_float(self._state, min_value, max_value)

    def value(self) -> float:
        """Random float in [0, 1], both inclusive."""
        return distributions.value(self._state)

    def inside_unit_circle(self) -> tuple[float, float]:
        return distributions.inside_unit_circle(self._state)

    def on_unit_sphere(self) -> tuple[float, float, float]:
        return distributions.on_unit_sphere(self._state)

    def inside_unit_sphere(self) -> tuple[float, float, float]:
        return distributions.inside_unit_sphere(self._state)

    def rotation(self) -> tuple[float, float, float, float]:
        """Random quaternion (x, y, z, w); fast but not uniform."""
        return distributions.rotation(self._state)

    def rotation_uniform(self) -> tuple[float, float, float, float]:
        """Uniformly distributed random quaternion (x, y, z, w)."""
        return distributions.rotation_uniform(self._state)

    def color(self) -> tuple[float, float, float, float]:
        """Random opaque RGBA color."""
        return distributions.color(self._state)

    def color_h(self, hue_min: float, hue_max: float) -> tuple[float, float, float, float]:
        return distributions.color_h(self._state, hue_min, hue_max)

    def color_hs(
        self,
        hue_min: float,
        hue_max: float,
        saturation_min: float,
        saturation_max: float,
    ) -> tuple[float, float, float, float]:
        return distributions.color_hs(
            self._state, hue_min, hue_max, saturation_min, saturation_max
        )

    def color_hsv(
        self,
        hue_min: float,
        hue_max: float,
        saturation_min: float,
        saturation_max: float,
        value_min: float,
        value_max: float,
    ) -> tuple[float, float, float, float]:
        return distributions.color_hsv(
            self._state,
            hue_min,
            hue_max,
            saturation_min,
            saturation_max,
            value_min,
            value_max,
        )

    def color_hsva(
        self,
        hue_min: float,
        hue_max: float,
        saturation_min: float,
        saturation_max: float,
        value_min: float,
        value_max: float,
        alpha_min: float,
        alpha_max: float,
    ) -> tuple[float, float, float, float]:
        """Random RGBA color from hue, saturation, value and alpha ranges."""
        return distributions.color_hsva(
            self._state,
            hue_min,
            hue_max,
            saturation_min,
            saturation_max,
            value_min,
            value_max,
            alpha_min,
            alpha_max,
        )
