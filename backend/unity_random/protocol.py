"""Wire models for the sampling service."""
from enum import Enum

from pydantic import BaseModel, Field

from unity_random.config import settings
from unity_random.logic.state import MASK32, State


class Distribution(str, Enum):
    """Distribution names accepted on the wire."""

    VALUE = "value"
    RANGE_INT = "rangeInt"
    RANGE_FLOAT = "rangeFloat"
    INSIDE_UNIT_CIRCLE = "insideUnitCircle"
    ON_UNIT_SPHERE = "onUnitSphere"
    INSIDE_UNIT_SPHERE = "insideUnitSphere"
    ROTATION = "rotation"
    ROTATION_UNIFORM = "rotationUniform"
    COLOR = "color"


# Distributions that need min/max params
RANGE_DISTRIBUTIONS = {Distribution.RANGE_INT, Distribution.RANGE_FLOAT}

DrawValue = int | float | list[float]


# === Shared ===


class StateModel(BaseModel):
    """Generator state as four unsigned 32-bit words, order s0..s3."""

    s0: int = Field(..., ge=0, le=MASK32)
    s1: int = Field(..., ge=0, le=MASK32)
    s2: int = Field(..., ge=0, le=MASK32)
    s3: int = Field(..., ge=0, le=MASK32)

    @classmethod
    def from_state(cls, state: State) -> "StateModel":
        return cls(s0=state.s0, s1=state.s1, s2=state.s2, s3=state.s3)

    def to_state(self) -> State:
        return State(s0=self.s0, s1=self.s1, s2=self.s2, s3=self.s3)


class DrawParams(BaseModel):
    """Distribution parameters; color ranges default to those of color()."""

    min: float | None = None
    max: float | None = None
    hueMin: float = 0.0
    hueMax: float = 1.0
    saturationMin: float = 0.0
    saturationMax: float = 1.0
    valueMin: float = 0.0
    valueMax: float = 1.0
    alphaMin: float = 1.0
    alphaMax: float = 1.0


# === Request Models ===


class SampleRequest(BaseModel):
    """POST /sample request body (stateless; one of seed/state required)."""

    seed: int | None = Field(default=None, description="Signed or unsigned 32-bit seed")
    state: StateModel | None = None
    distribution: Distribution
    count: int = Field(default=1)
    params: DrawParams = Field(default_factory=DrawParams)


class CreateStreamRequest(BaseModel):
    """POST /streams request body; neither seed nor state seeds from time."""

    seed: int | None = None
    state: StateModel | None = None


class DrawRequest(BaseModel):
    """POST /streams/{id}/draw request body."""

    clientRequestId: str = Field(..., description="Idempotency key, unique per stream")
    distribution: Distribution
    count: int = Field(default=1)
    params: DrawParams = Field(default_factory=DrawParams)


# === Response Models ===


class SampleResponse(BaseModel):
    """POST /sample response: drawn values and the advanced state."""

    protocolVersion: str = settings.protocol_version
    distribution: Distribution
    values: list[DrawValue] = Field(default_factory=list)
    state: StateModel


class StreamResponse(BaseModel):
    """Stream id and its current state."""

    protocolVersion: str = settings.protocol_version
    streamId: str
    state: StateModel


class DrawResponse(BaseModel):
    """POST /streams/{id}/draw response."""

    protocolVersion: str = settings.protocol_version
    streamId: str
    drawId: str
    distribution: Distribution
    values: list[DrawValue] = Field(default_factory=list)
    state: StateModel
