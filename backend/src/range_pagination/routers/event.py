"""Event endpoints.

Every listing serves the same feed; they differ only in pagination policy.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from range_pagination.dependencies import (
    DB,
    RequestedRange,
    feed_policy,
    limited_policy,
    listing_policy,
    stream_policy,
)
from range_pagination.models import Event
from range_pagination.repositories.event import add_event, event_source
from range_pagination.routers.rendering import render
from range_pagination.schemas.error import ErrorResponse
from range_pagination.schemas.event import EventCreate, EventList, EventResponse
from range_pagination.services.pagination import respond_async
from range_pagination.services.policy import PaginationPolicy

router = APIRouter(prefix="/events", tags=["events"])

Policy = PaginationPolicy[Event]

RANGE_RESPONSES: dict[int | str, dict[str, object]] = {
    200: {"model": list[EventResponse], "description": "Full listing"},
    206: {"model": list[EventResponse], "description": "Requested range"},
    400: {"model": ErrorResponse, "description": "Range has no bounds"},
    413: {"model": ErrorResponse, "description": "Range exceeds the endpoint's cap"},
    416: {"model": ErrorResponse, "description": "No elements in range"},
}


@router.post("", response_model=EventResponse, status_code=201)
async def create_event(db: DB, body: EventCreate) -> EventResponse:
    """Append an event to the feed."""
    event = await add_event(db, body.topic, body.payload)
    return EventResponse.model_validate(event)


@router.get("", responses=RANGE_RESPONSES)
async def list_events(
    db: DB,
    range_spec: RequestedRange,
    policy: Annotated[Policy, Depends(listing_policy)],
) -> JSONResponse:
    """List events, honouring a ``Range: elements=a-b`` header."""
    return render(await respond_async(event_source(db), range_spec, policy), EventList)


@router.get("/limited", responses=RANGE_RESPONSES)
async def list_events_limited(
    db: DB,
    range_spec: RequestedRange,
    policy: Annotated[Policy, Depends(limited_policy)],
) -> JSONResponse:
    """Like GET /events, but requests must name a bounded range within the cap."""
    return render(await respond_async(event_source(db), range_spec, policy), EventList)


@router.get("/feed", responses=RANGE_RESPONSES)
async def poll_events(
    db: DB,
    range_spec: RequestedRange,
    policy: Annotated[Policy, Depends(feed_policy)],
) -> JSONResponse:
    """Long poll: ``Range: elements=n-`` waits for events from index n onward."""
    return render(await respond_async(event_source(db), range_spec, policy), EventList)


@router.get("/stream", responses=RANGE_RESPONSES)
async def poll_event_stream(
    db: DB,
    range_spec: RequestedRange,
    policy: Annotated[Policy, Depends(stream_policy)],
) -> JSONResponse:
    """Long poll whose range is closed once an ``eof`` event is delivered."""
    return render(await respond_async(event_source(db), range_spec, policy), EventList)
