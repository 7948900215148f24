"""Event request and response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, TypeAdapter

# Topic that closes a long-polled stream (see GET /events/stream)
EOF_TOPIC = "eof"


class EventCreate(BaseModel):
    """Body of POST /events."""

    topic: str = Field(min_length=1, max_length=100)
    payload: str = ""


class EventResponse(BaseModel):
    """Single event as returned by every events endpoint."""

    model_config = {"from_attributes": True}

    id: int
    topic: str
    payload: str
    created_at: datetime


EventList = TypeAdapter(list[EventResponse])
