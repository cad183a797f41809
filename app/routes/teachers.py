from fastapi import APIRouter, Depends, Response

from app.contracts import api
from app.controllers import teacher_controller
from app.core.dependencies import PathId, get_storage
from app.schemas.teacher import TeacherCreate, TeacherUpdate
from app.services.storage import DatabaseStorage

router = APIRouter(tags=["Teachers"])


@router.get(api.teachers.list.route_path, response_model=api.teachers.list.response_model)
async def list_teachers(storage: DatabaseStorage = Depends(get_storage)):
    return await storage.get_teachers()


@router.get(api.teachers.get.route_path, response_model=api.teachers.get.response_model)
async def get_teacher(teacher_id: PathId, storage: DatabaseStorage = Depends(get_storage)):
    return await teacher_controller.get_teacher_detail(teacher_id, storage)


@router.post(
    api.teachers.create.route_path,
    response_model=api.teachers.create.response_model,
    status_code=api.teachers.create.success_status,
)
async def create_teacher(payload: TeacherCreate, storage: DatabaseStorage = Depends(get_storage)):
    return await teacher_controller.create_teacher(payload, storage)


@router.put(api.teachers.update.route_path, response_model=api.teachers.update.response_model)
async def update_teacher(
    teacher_id: PathId,
    payload: TeacherUpdate,
    storage: DatabaseStorage = Depends(get_storage),
):
    return await teacher_controller.update_teacher(teacher_id, payload, storage)


@router.delete(
    api.teachers.delete.route_path,
    status_code=api.teachers.delete.success_status,
    response_class=Response,
    description="Sessions of the teacher are kept; their teacherId becomes null.",
)
async def delete_teacher(teacher_id: PathId, storage: DatabaseStorage = Depends(get_storage)):
    await teacher_controller.delete_teacher(teacher_id, storage)
