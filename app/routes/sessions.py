from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response

from app.contracts import api
from app.controllers import session_controller
from app.core.dependencies import PathId, get_storage
from app.schemas.session import SessionCreate, SessionFilters, SessionUpdate
from app.services.storage import DatabaseStorage

router = APIRouter(tags=["Sessions"])


@router.get(api.sessions.list.route_path, response_model=api.sessions.list.response_model)
async def list_sessions(
    filters: Annotated[SessionFilters, Query()],
    storage: DatabaseStorage = Depends(get_storage),
):
    return await session_controller.list_sessions(filters, storage)


@router.get(api.sessions.get.route_path, response_model=api.sessions.get.response_model)
async def get_session(session_id: PathId, storage: DatabaseStorage = Depends(get_storage)):
    return await session_controller.get_session(session_id, storage)


@router.post(
    api.sessions.create.route_path,
    response_model=api.sessions.create.response_model,
    status_code=api.sessions.create.success_status,
)
async def create_session(payload: SessionCreate, storage: DatabaseStorage = Depends(get_storage)):
    return await session_controller.create_session(payload, storage)


@router.put(api.sessions.update.route_path, response_model=api.sessions.update.response_model)
async def update_session(
    session_id: PathId,
    payload: SessionUpdate,
    storage: DatabaseStorage = Depends(get_storage),
):
    return await session_controller.update_session(session_id, payload, storage)


@router.delete(
    api.sessions.delete.route_path,
    status_code=api.sessions.delete.success_status,
    response_class=Response,
)
async def delete_session(session_id: PathId, storage: DatabaseStorage = Depends(get_storage)):
    await session_controller.delete_session(session_id, storage)


@router.post(
    api.sessions.increment_play.route_path,
    response_model=api.sessions.increment_play.response_model,
    summary="Count a play",
    description="Called once when playback first starts, not per progress report.",
)
async def play_session(session_id: PathId, storage: DatabaseStorage = Depends(get_storage)):
    return await session_controller.play_session(session_id, storage)
