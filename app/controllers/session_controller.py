from fastapi import HTTPException, status

from app.models.session import Session
from app.schemas.session import SessionCreate, SessionFilters, SessionUpdate
from app.services.storage import DatabaseStorage


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")


async def _ensure_teacher(storage: DatabaseStorage, teacher_id: int | None) -> None:
    if teacher_id is not None and await storage.get_teacher(teacher_id) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "Teacher not found", "field": "teacherId"},
        )


async def list_sessions(filters: SessionFilters, storage: DatabaseStorage) -> list[Session]:
    return await storage.get_sessions(
        category=filters.category,
        duration=filters.duration,
        search=filters.search,
        featured=filters.featured,
    )


async def get_session(session_id: int, storage: DatabaseStorage) -> Session:
    row = await storage.get_session(session_id)
    if row is None:
        raise _not_found()
    return row


async def create_session(payload: SessionCreate, storage: DatabaseStorage) -> Session:
    await _ensure_teacher(storage, payload.teacher_id)
    return await storage.create_session(payload.model_dump())


async def update_session(session_id: int, payload: SessionUpdate, storage: DatabaseStorage) -> Session:
    data = payload.model_dump(exclude_unset=True)
    if "teacher_id" in data:
        await _ensure_teacher(storage, data["teacher_id"])

    row = await storage.update_session(session_id, data)
    if row is None:
        raise _not_found()
    return row


async def delete_session(session_id: int, storage: DatabaseStorage) -> None:
    if not await storage.delete_session(session_id):
        raise _not_found()


async def play_session(session_id: int, storage: DatabaseStorage) -> Session:
    row = await storage.increment_play_count(session_id)
    if row is None:
        raise _not_found()
    return row
