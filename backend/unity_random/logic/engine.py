"""Sampling engine: runs batches of named distributions over a state."""
import logging
from dataclasses import dataclass, field
from typing import Callable

from unity_random.logic import distributions
from unity_random.logic.state import State
from unity_random.protocol import DrawParams, DrawValue, Distribution

logger = logging.getLogger(__name__)


@dataclass
class SampleResult:
    """Values drawn in call order plus the state after the last draw."""

    values: list[DrawValue] = field(default_factory=list)
    next_state: State | None = None


def _draw_range_int(state: State, params: DrawParams) -> int:
    return distributions.range_int(state, int(params.min), int(params.max))


def _draw_range_float(state: State, params: DrawParams) -> float:
    return distributions.range_float(state, params.min, params.max)


def _draw_color(state: State, params: DrawParams) -> list[float]:
    return list(
        distributions.color_hsva(
            state,
            params.hueMin,
            params.hueMax,
            params.saturationMin,
            params.saturationMax,
            params.valueMin,
            params.valueMax,
            params.alphaMin,
            params.alphaMax,
        )
    )


DRAWERS: dict[Distribution, Callable[[State, DrawParams], DrawValue]] = {
    Distribution.VALUE: lambda state, params: distributions.value(state),
    Distribution.RANGE_INT: _draw_range_int,
    Distribution.RANGE_FLOAT: _draw_range_float,
    Distribution.INSIDE_UNIT_CIRCLE: lambda state, params: list(
        distributions.inside_unit_circle(state)
    ),
    Distribution.ON_UNIT_SPHERE: lambda state, params: list(
        distributions.on_unit_sphere(state)
    ),
    Distribution.INSIDE_UNIT_SPHERE: lambda state, params: list(
        distributions.inside_unit_sphere(state)
    ),
    Distribution.ROTATION: lambda state, params: list(distributions.rotation(state)),
    Distribution.ROTATION_UNIFORM: lambda state, params: list(
        distributions.rotation_uniform(state)
    ),
    Distribution.COLOR: _draw_color,
}


class SamplingEngine:
    """
    Batch sampler over a generator state.

    Works on a copy: the caller's state is never mutated, and the advanced
    state comes back in the result for the caller to persist.
    """

    def sample(
        self,
        state: State,
        distribution: Distribution,
        params: DrawParams | None = None,
        count: int = 1,
    ) -> SampleResult:
        params = params or DrawParams()
        drawer = DRAWERS[distribution]

        working = state.copy_state()
        values = [drawer(working, params) for _ in range(count)]

        logger.debug(
            "Sampled %d x %s, state %08x:%08x:%08x:%08x",
            count,
            distribution.value,
            *working.words(),
        )
        return SampleResult(values=values, next_state=working)
