"""Error codes and exceptions for the sampling service."""
from enum import Enum

from fastapi.responses import JSONResponse
from pydantic import BaseModel

from unity_random.config import settings


class ErrorCode(str, Enum):
    """Service error codes."""

    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_SEED = "INVALID_SEED"
    INVALID_PARAMS = "INVALID_PARAMS"
    STREAM_NOT_FOUND = "STREAM_NOT_FOUND"
    STREAM_BUSY = "STREAM_BUSY"
    IDEMPOTENCY_CONFLICT = "IDEMPOTENCY_CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


ERROR_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.INVALID_REQUEST: 400,
    ErrorCode.INVALID_SEED: 400,
    ErrorCode.INVALID_PARAMS: 400,
    ErrorCode.STREAM_NOT_FOUND: 404,
    ErrorCode.STREAM_BUSY: 409,
    ErrorCode.IDEMPOTENCY_CONFLICT: 409,
    ErrorCode.INTERNAL_ERROR: 500,
}

# Whether retrying the same request can succeed
ERROR_RECOVERABLE: dict[ErrorCode, bool] = {
    ErrorCode.INVALID_REQUEST: False,
    ErrorCode.INVALID_SEED: False,
    ErrorCode.INVALID_PARAMS: False,
    ErrorCode.STREAM_NOT_FOUND: False,
    ErrorCode.STREAM_BUSY: True,
    ErrorCode.IDEMPOTENCY_CONFLICT: False,
    ErrorCode.INTERNAL_ERROR: True,
}


class ErrorBody(BaseModel):
    """Error body shape."""

    code: str
    message: str
    recoverable: bool


class ErrorResponse(BaseModel):
    """Full error response."""

    protocolVersion: str = settings.protocol_version
    error: ErrorBody


class RandomError(Exception):
    """Service error that maps to a protocol error response."""

    def __init__(self, code: ErrorCode, message: str | None = None):
        self.code = code
        self.message = message or f"Error: {code.value}"
        self.status_code = ERROR_HTTP_STATUS[code]
        self.recoverable = ERROR_RECOVERABLE[code]
        super().__init__(self.message)

    def to_response(self) -> JSONResponse:
        """Convert to JSONResponse."""
        return JSONResponse(
            status_code=self.status_code,
            content=ErrorResponse(
                error=ErrorBody(
                    code=self.code.value,
                    message=self.message,
                    recoverable=self.recoverable,
                )
            ).model_dump(),
        )
