"""
===============================================================================
TARJETA CRC — noteboard/interfaces/api/http/routers/events.py
===============================================================================

Class/Module:
    Events Router

Responsibilities:
    - Exponer endpoints HTTP de Eventos de calendario.
    - Convertir requests HTTP -> inputs de casos de uso.
    - Traducir BoardError -> RFC7807.

Collaborators:
    - application.usecases.events
    - container (factories DI)
    - dependencies / error_mapping
    - schemas.events
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from .....application.usecases import (
    CreateEventInput,
    CreateEventUseCase,
    DeleteEventUseCase,
    GetEventUseCase,
    ListEventsUseCase,
    ListFilters,
    UpdateEventInput,
    UpdateEventUseCase,
)
from .....container import (
    get_create_event_use_case,
    get_delete_event_use_case,
    get_get_event_use_case,
    get_list_events_use_case,
    get_update_event_use_case,
)
from .....crosscutting.error_responses import internal_error
from .....domain.entities import Event
from .....domain.visibility_policy import BoardActor
from ..dependencies import get_current_actor, parse_resource_id
from ..error_mapping import raise_board_error
from ..schemas.common import DeleteRes
from ..schemas.events import CreateEventReq, EventRes, EventsListRes, UpdateEventReq

router = APIRouter()

_RESOURCE = "Event"


def _to_event_res(event: Event) -> EventRes:
    return EventRes(
        id=event.id,
        title=event.title,
        description=event.description,
        event_date=event.event_date,
        event_time=event.event_time,
        notification_type=event.notification_type.value,
        event_type=event.event_type.value,
        author=event.author_id,
        author_name=event.author_name,
        team=event.team.value,
        created_at=event.created_at,
        updated_at=event.updated_at,
    )


@router.get("/events", response_model=EventsListRes, tags=["events"])
def list_events(
    team_view: str | None = Query(None, alias="teamView"),
    search: str | None = Query(None),
    tag: str | None = Query(None),
    month: int | None = Query(None),
    year: int | None = Query(None),
    use_case: ListEventsUseCase = Depends(get_list_events_use_case),
    actor: BoardActor = Depends(get_current_actor),
):
    result = use_case.execute(
        actor,
        ListFilters(
            team_view=team_view,
            search=search,
            tag=tag,
            month=month,
            year=year,
        ),
    )
    if result.error is not None:
        raise_board_error(result.error)
    return EventsListRes(events=[_to_event_res(e) for e in result.events])


@router.post("/events", response_model=EventRes, status_code=201, tags=["events"])
def create_event(
    req: CreateEventReq,
    use_case: CreateEventUseCase = Depends(get_create_event_use_case),
    actor: BoardActor = Depends(get_current_actor),
):
    result = use_case.execute(
        CreateEventInput(
            title=req.title,
            event_date=req.event_date,
            team=req.team,
            description=req.description,
            event_time=req.event_time,
            notification_type=req.notification_type,
            event_type=req.event_type,
            actor=actor,
        )
    )
    if result.error is not None:
        raise_board_error(result.error)
    if result.event is None:
        raise internal_error("Event creation returned no result.")
    return _to_event_res(result.event)


@router.get("/events/{event_id}", response_model=EventRes, tags=["events"])
def get_event(
    event_id: str,
    use_case: GetEventUseCase = Depends(get_get_event_use_case),
    actor: BoardActor = Depends(get_current_actor),
):
    parsed_id = parse_resource_id(event_id, _RESOURCE)
    result = use_case.execute(parsed_id, actor)
    if result.error is not None:
        raise_board_error(result.error, resource_id=parsed_id)
    return _to_event_res(result.event)


@router.put("/events/{event_id}", response_model=EventRes, tags=["events"])
def update_event(
    event_id: str,
    req: UpdateEventReq,
    use_case: UpdateEventUseCase = Depends(get_update_event_use_case),
    actor: BoardActor = Depends(get_current_actor),
):
    parsed_id = parse_resource_id(event_id, _RESOURCE)
    result = use_case.execute(
        parsed_id,
        actor,
        UpdateEventInput(
            title=req.title,
            description=req.description,
            event_date=req.event_date,
            event_time=req.event_time,
            notification_type=req.notification_type,
            event_type=req.event_type,
            team=req.team,
        ),
    )
    if result.error is not None:
        raise_board_error(result.error, resource_id=parsed_id)
    return _to_event_res(result.event)


@router.delete("/events/{event_id}", response_model=DeleteRes, tags=["events"])
def delete_event(
    event_id: str,
    use_case: DeleteEventUseCase = Depends(get_delete_event_use_case),
    actor: BoardActor = Depends(get_current_actor),
):
    parsed_id = parse_resource_id(event_id, _RESOURCE)
    result = use_case.execute(parsed_id, actor)
    if result.error is not None:
        raise_board_error(result.error, resource_id=parsed_id)
    return DeleteRes(id=parsed_id, deleted=result.deleted)
