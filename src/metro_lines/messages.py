"""Message envelopes exchanged with the renderer worker.

Inbound messages are validated into one variant per ``type``; anything
else raises MessageError before reaching the pipeline.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from metro_lines.parser.schema import Topology


class MessageError(ValueError):
    """Raised for inbound payloads that match no known message variant."""


# ---------------------------------------------------------------------------
# Inbound
# ---------------------------------------------------------------------------


class RenderRequest(BaseModel):
    width: float = Field(..., description="Requested line width in pixels")
    zoom: float = Field(..., description="Web-map zoom level")
    viewbox: list[tuple[float, float]] = Field(
        ..., description="Closed (lon, lat) ring of the visible area", min_length=4
    )

    @field_validator("viewbox")
    @classmethod
    def _ring_is_closed(cls, ring):
        if tuple(ring[0]) != tuple(ring[-1]):
            raise ValueError("viewbox ring must start and end on the same point")
        return ring


class InitMessage(BaseModel):
    type: Literal["init"]
    data: Topology


class RequestRenderMessage(BaseModel):
    type: Literal["request_render"]
    data: RenderRequest


InboundMessage = Annotated[
    Union[InitMessage, RequestRenderMessage], Field(discriminator="type")
]

_inbound_adapter: TypeAdapter[InboundMessage] = TypeAdapter(InboundMessage)


def parse_inbound(payload: Any) -> InitMessage | RequestRenderMessage:
    """Validate a decoded inbound message."""
    if isinstance(payload, (InitMessage, RequestRenderMessage)):
        return payload
    try:
        return _inbound_adapter.validate_python(payload)
    except ValidationError as e:
        kind = payload.get("type") if isinstance(payload, dict) else None
        first = e.errors()[0]
        where = ".".join(str(p) for p in first["loc"])
        raise MessageError(
            f"Invalid {kind or 'unknown'} message at {where or '<root>'}: {first['msg']}"
        ) from e


# ---------------------------------------------------------------------------
# Outbound
# ---------------------------------------------------------------------------


class AddLoadingItem(BaseModel):
    type: Literal["add_loading_item"] = "add_loading_item"


class RemoveLoadingItem(BaseModel):
    type: Literal["remove_loading_item"] = "remove_loading_item"


class FinishedInit(BaseModel):
    type: Literal["finished_init"] = "finished_init"


class Rendered(BaseModel):
    type: Literal["rendered"] = "rendered"
    data: dict[str, Any]


class ErrorDetail(BaseModel):
    message: str


class WorkerError(BaseModel):
    type: Literal["error"] = "error"
    data: ErrorDetail


OutboundMessage = Union[AddLoadingItem, RemoveLoadingItem, FinishedInit, Rendered, WorkerError]
