from fastapi import HTTPException, status

from app.models.teacher import Teacher
from app.schemas.session import SessionOut, TeacherWithSessionsOut
from app.schemas.teacher import TeacherCreate, TeacherUpdate
from app.services.storage import DatabaseStorage


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Teacher not found")


async def get_teacher_detail(teacher_id: int, storage: DatabaseStorage) -> TeacherWithSessionsOut:
    found = await storage.get_teacher_with_sessions(teacher_id)
    if found is None:
        raise _not_found()

    teacher, sessions = found
    return TeacherWithSessionsOut(
        id=teacher.id,
        name=teacher.name,
        bio=teacher.bio,
        avatar_url=teacher.avatar_url,
        specialty=teacher.specialty,
        sessions=[SessionOut.model_validate(s) for s in sessions],
    )


async def create_teacher(payload: TeacherCreate, storage: DatabaseStorage) -> Teacher:
    return await storage.create_teacher(payload.model_dump())


async def update_teacher(teacher_id: int, payload: TeacherUpdate, storage: DatabaseStorage) -> Teacher:
    teacher = await storage.update_teacher(teacher_id, payload.model_dump(exclude_unset=True))
    if teacher is None:
        raise _not_found()
    return teacher


async def delete_teacher(teacher_id: int, storage: DatabaseStorage) -> None:
    if not await storage.delete_teacher(teacher_id):
        raise _not_found()
