"""Server-side telemetry for stream lifecycle and draws."""
import logging
from dataclasses import dataclass
from typing import Any, Protocol


logger = logging.getLogger(__name__)


class TelemetrySink(Protocol):
    """Protocol for telemetry sinks."""

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        """Emit a telemetry event."""
        ...


class LoggingTelemetrySink:
    """Default sink that logs telemetry events."""

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        logger.info("TELEMETRY %s: %s", event_name, data)


@dataclass
class StreamCreatedEvent:
    """stream_created telemetry event."""

    stream_id: str
    seeded_from: str  # "seed" | "state" | "time"

    def to_dict(self) -> dict[str, Any]:
        return {
            "stream_id": self.stream_id,
            "seeded_from": self.seeded_from,
        }


@dataclass
class DrawServedEvent:
    """draw_served telemetry event (fresh draws only, not replays)."""

    stream_id: str
    client_request_id: str
    draw_id: str
    distribution: str
    count: int
    lock_acquire_ms: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "stream_id": self.stream_id,
            "client_request_id": self.client_request_id,
            "draw_id": self.draw_id,
            "distribution": self.distribution,
            "count": self.count,
            "lock_acquire_ms": self.lock_acquire_ms,
        }


@dataclass
class DrawRejectedEvent:
    """draw_rejected telemetry event."""

    stream_id: str
    client_request_id: str | None
    reason: str  # "STREAM_BUSY" | "STREAM_NOT_FOUND" | ...
    lock_acquire_ms: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "stream_id": self.stream_id,
            "client_request_id": self.client_request_id,
            "reason": self.reason,
            "lock_acquire_ms": self.lock_acquire_ms,
        }


class TelemetryService:
    """Service for emitting server telemetry events."""

    def __init__(self, sink: TelemetrySink | None = None):
        self._sink = sink or LoggingTelemetrySink()
        self._sink_errors = 0

    @property
    def sink_errors(self) -> int:
        return self._sink_errors

    def set_sink(self, sink: TelemetrySink) -> None:
        """Set the telemetry sink (useful for testing)."""
        self._sink = sink

    def _safe_emit(self, event_name: str, data: dict[str, Any]) -> None:
        """
        Emit event with exception safety.

        Sink failures MUST NOT break HTTP requests.
        """
        try:
            self._sink.emit(event_name, data)
        except Exception as e:
            self._sink_errors += 1
            logger.warning(
                "Telemetry sink error (count=%d): %s - %s",
                self._sink_errors,
                event_name,
                str(e),
            )

    def emit_stream_created(self, event: StreamCreatedEvent) -> None:
        self._safe_emit("stream_created", event.to_dict())

    def emit_draw_served(self, event: DrawServedEvent) -> None:
        self._safe_emit("draw_served", event.to_dict())

    def emit_draw_rejected(self, event: DrawRejectedEvent) -> None:
        self._safe_emit("draw_rejected", event.to_dict())


# Global instance
telemetry_service = TelemetryService()
