"""
Bridge envelopes: the only bit-exact contract between host and UI.

Every message crossing the transport is one variant of `Envelope`, discriminated
by its `kind` field. Wire names are camelCase.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class CallEnvelope(_WireModel):
    """UI -> host: perform a network call on my behalf."""
    kind: Literal["call"] = "call"
    correlation_id: str = Field(alias="correlationId")
    endpoint: str
    payload: Any = None


class ResultEnvelope(_WireModel):
    """host -> UI: the call succeeded, `body` is the parsed JSON response."""
    kind: Literal["result"] = "result"
    correlation_id: str = Field(alias="correlationId")
    body: Any = None


class ErrorEnvelope(_WireModel):
    """host -> UI: the call failed. `code` is one of the errors module classifications."""
    kind: Literal["error"] = "error"
    correlation_id: str = Field(alias="correlationId")
    message: str
    code: Optional[str] = None


class PushEnvelope(_WireModel):
    """host -> UI: unacknowledged data push (selection text)."""
    kind: Literal["push"] = "push"
    payload: str


class NotifyEnvelope(_WireModel):
    """UI -> host: surface a message to the user through the host."""
    kind: Literal["notify"] = "notify"
    level: Literal["info", "error"] = "info"
    text: str


class OpenLinkEnvelope(_WireModel):
    """UI -> host: open an external URL (the UI cannot)."""
    kind: Literal["openLink"] = "openLink"
    url: str


Envelope = Annotated[
    Union[CallEnvelope, ResultEnvelope, ErrorEnvelope, PushEnvelope, NotifyEnvelope, OpenLinkEnvelope],
    Field(discriminator="kind"),
]

ResponseEnvelope = Union[ResultEnvelope, ErrorEnvelope]

ENVELOPE_ADAPTER: TypeAdapter[Envelope] = TypeAdapter(Envelope)
