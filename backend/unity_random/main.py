"""Unity Random sampling service."""
import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI

from unity_random.config import settings
from unity_random.errors import ErrorCode, RandomError
from unity_random.logic.engine import SamplingEngine
from unity_random.logic.generator import time_seed
from unity_random.logic.state import State
from unity_random.logic.stream import init_state
from unity_random.middleware import ErrorHandlerMiddleware
from unity_random.protocol import (
    CreateStreamRequest,
    DrawRequest,
    DrawResponse,
    SampleRequest,
    SampleResponse,
    StateModel,
    StreamResponse,
)
from unity_random.redis_service import redis_service
from unity_random.telemetry import (
    DrawRejectedEvent,
    DrawServedEvent,
    StreamCreatedEvent,
    telemetry_service,
)
from unity_random.validators import (
    validate_create_stream_request,
    validate_draw_request,
    validate_sample_request,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and manage Redis connection lifecycle."""
    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
    await redis_service.connect()
    yield
    await redis_service.close()


app = FastAPI(
    title="Unity Random",
    version="0.1.0",
    description="Reproduces UnityEngine.Random sequences from a seed or saved state",
    lifespan=lifespan,
)

app.add_middleware(ErrorHandlerMiddleware)

engine = SamplingEngine()


async def _require_stream_state(stream_id: str) -> State:
    state = await redis_service.get_stream_state(stream_id)
    if state is None:
        raise RandomError(ErrorCode.STREAM_NOT_FOUND, f"Unknown stream {stream_id}.")
    return state


@app.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/sample")
async def sample(body: SampleRequest) -> dict:
    """
    POST /sample: stateless batch draw.

    Starts from the given seed or state and returns the values together
    with the advanced state, so callers can continue the sequence later.
    """
    validate_sample_request(body)

    state = init_state(body.seed) if body.seed is not None else body.state.to_state()
    result = engine.sample(state, body.distribution, body.params, body.count)

    response = SampleResponse(
        distribution=body.distribution,
        values=result.values,
        state=StateModel.from_state(result.next_state),
    )
    return response.model_dump(mode="json")


@app.post("/streams")
async def create_stream(body: CreateStreamRequest) -> dict:
    """POST /streams: register a new server-held stream."""
    validate_create_stream_request(body)

    if body.state is not None:
        state = body.state.to_state()
        seeded_from = "state"
    elif body.seed is not None:
        state = init_state(body.seed)
        seeded_from = "seed"
    else:
        state = init_state(time_seed())
        seeded_from = "time"

    stream_id = str(uuid.uuid4())
    await redis_service.save_stream_state(stream_id, state)

    telemetry_service.emit_stream_created(
        StreamCreatedEvent(stream_id=stream_id, seeded_from=seeded_from)
    )

    return StreamResponse(
        streamId=stream_id, state=StateModel.from_state(state)
    ).model_dump(mode="json")


@app.get("/streams/{stream_id}")
async def get_stream(stream_id: str) -> dict:
    """GET /streams/{id}: current state of a stream."""
    state = await _require_stream_state(stream_id)
    return StreamResponse(
        streamId=stream_id, state=StateModel.from_state(state)
    ).model_dump(mode="json")


@app.put("/streams/{stream_id}/state")
async def put_stream_state(stream_id: str, body: StateModel) -> dict:
    """PUT /streams/{id}/state: override a stream's state."""
    async with redis_service.stream_lock(stream_id):
        await _require_stream_state(stream_id)
        await redis_service.save_stream_state(stream_id, body.to_state())

    return StreamResponse(streamId=stream_id, state=body).model_dump(mode="json")


@app.delete("/streams/{stream_id}")
async def delete_stream(stream_id: str) -> dict:
    """DELETE /streams/{id}."""
    async with redis_service.stream_lock(stream_id):
        if not await redis_service.delete_stream_state(stream_id):
            raise RandomError(ErrorCode.STREAM_NOT_FOUND, f"Unknown stream {stream_id}.")
    return {"streamId": stream_id, "deleted": True}


@app.post("/streams/{stream_id}/draw")
async def draw(stream_id: str, body: DrawRequest) -> dict:
    """
    POST /streams/{id}/draw.

    Implements:
    - Request validation
    - Idempotency (same clientRequestId replays the cached response
      without advancing the stream)
    - Per-stream locking (STREAM_BUSY on concurrent draw)
    - Sampling and state persistence
    """
    # 1) Validate request
    validate_draw_request(body)

    # 2) Payload for idempotency check
    payload = {
        "distribution": body.distribution.value,
        "count": body.count,
        "params": body.params.model_dump(),
    }

    lock_start = time.monotonic()
    try:
        # 3) Fast path: replay without telemetry, only while the stream exists
        await _require_stream_state(stream_id)
        cached = await redis_service.check_idempotency(
            stream_id, body.clientRequestId, payload
        )
        if cached is not None:
            return cached

        async with redis_service.stream_lock(stream_id) as lock_metrics:
            # 4) Re-check inside lock; a DELETE may have landed in between
            state = await _require_stream_state(stream_id)
            cached = await redis_service.check_idempotency(
                stream_id, body.clientRequestId, payload
            )
            if cached is not None:
                return cached

            # 5) Sample, persist
            result = engine.sample(state, body.distribution, body.params, body.count)

            draw_id = str(uuid.uuid4())
            response_dict = DrawResponse(
                streamId=stream_id,
                drawId=draw_id,
                distribution=body.distribution,
                values=result.values,
                state=StateModel.from_state(result.next_state),
            ).model_dump(mode="json")

            await redis_service.store_idempotency(
                stream_id, body.clientRequestId, payload, response_dict
            )
            await redis_service.save_stream_state(stream_id, result.next_state)

            telemetry_service.emit_draw_served(
                DrawServedEvent(
                    stream_id=stream_id,
                    client_request_id=body.clientRequestId,
                    draw_id=draw_id,
                    distribution=body.distribution.value,
                    count=body.count,
                    lock_acquire_ms=lock_metrics.acquire_ms,
                )
            )

            return response_dict

    except RandomError as e:
        if e.code in (ErrorCode.STREAM_BUSY, ErrorCode.STREAM_NOT_FOUND):
            telemetry_service.emit_draw_rejected(
                DrawRejectedEvent(
                    stream_id=stream_id,
                    client_request_id=body.clientRequestId,
                    reason=e.code.value,
                    lock_acquire_ms=(time.monotonic() - lock_start) * 1000,
                )
            )
        raise
