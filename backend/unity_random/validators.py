"""Request validators raising RandomError."""
from unity_random.config import settings
from unity_random.errors import ErrorCode, RandomError
from unity_random.logic.state import INT32_MAX, INT32_MIN, MASK32
from unity_random.protocol import (
    CreateStreamRequest,
    DrawParams,
    DrawRequest,
    Distribution,
    RANGE_DISTRIBUTIONS,
    SampleRequest,
)


def validate_seed(seed: int) -> None:
    """
    Validate a seed is a signed or unsigned 32-bit integer.

    Raises INVALID_SEED outside [-2^31, 2^32 - 1].
    """
    if not INT32_MIN <= seed <= MASK32:
        raise RandomError(
            ErrorCode.INVALID_SEED,
            f"Seed {seed} is outside the 32-bit range [{INT32_MIN}, {MASK32}].",
        )


def validate_count(count: int) -> None:
    """Raises INVALID_REQUEST unless 1 <= count <= max_draws_per_request."""
    if not 1 <= count <= settings.max_draws_per_request:
        raise RandomError(
            ErrorCode.INVALID_REQUEST,
            f"count must be between 1 and {settings.max_draws_per_request}, got {count}.",
        )


def validate_params(distribution: Distribution, params: DrawParams) -> None:
    """
    Validate distribution params.

    Range distributions need min and max; rangeInt bounds must be integral
    signed 32-bit values. Raises INVALID_PARAMS.
    """
    if distribution not in RANGE_DISTRIBUTIONS:
        return

    if params.min is None or params.max is None:
        raise RandomError(
            ErrorCode.INVALID_PARAMS,
            f"{distribution.value} requires params.min and params.max.",
        )

    if distribution == Distribution.RANGE_INT:
        for name, bound in (("min", params.min), ("max", params.max)):
            if not float(bound).is_integer() or not INT32_MIN <= bound <= INT32_MAX:
                raise RandomError(
                    ErrorCode.INVALID_PARAMS,
                    f"rangeInt params.{name} must be a 32-bit integer, got {bound}.",
                )


def validate_sample_request(request: SampleRequest) -> None:
    """Run all validations on a stateless sample request."""
    if (request.seed is None) == (request.state is None):
        raise RandomError(
            ErrorCode.INVALID_REQUEST,
            "Exactly one of seed or state is required.",
        )
    if request.seed is not None:
        validate_seed(request.seed)
    validate_count(request.count)
    validate_params(request.distribution, request.params)


def validate_create_stream_request(request: CreateStreamRequest) -> None:
    """At most one of seed/state; seed must be 32-bit."""
    if request.seed is not None and request.state is not None:
        raise RandomError(
            ErrorCode.INVALID_REQUEST,
            "Pass either seed or state, not both.",
        )
    if request.seed is not None:
        validate_seed(request.seed)


def validate_draw_request(request: DrawRequest) -> None:
    """Run all validations on a stream draw request."""
    if not request.clientRequestId:
        raise RandomError(
            ErrorCode.INVALID_REQUEST,
            "clientRequestId must not be empty.",
        )
    validate_count(request.count)
    validate_params(request.distribution, request.params)
