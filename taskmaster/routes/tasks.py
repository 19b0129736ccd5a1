# taskmaster/routes/tasks.py
from typing import List

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from taskmaster.models.requests import (
    OperationResult,
    TaskCreate,
    TaskDelete,
    TaskEdit,
    TaskRead,
    TaskStatusUpdate,
)
from taskmaster.models.task import Task
from taskmaster.services.task_service import TaskService, task_service

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])

TASK_NOT_FOUND = {"success": False, "message": "Task not found"}


def get_task_service() -> TaskService:
    return task_service


def _not_found() -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=TASK_NOT_FOUND)


# -------------------------------------------------
# Fetch all tasks
# -------------------------------------------------
@router.get("", response_model=List[TaskRead])
def list_tasks(service: TaskService = Depends(get_task_service)):
    return service.get_all_tasks()


# -------------------------------------------------
# Save a new task
# -------------------------------------------------
@router.post("/save", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def save_task(payload: TaskCreate, service: TaskService = Depends(get_task_service)):
    return service.save_task(Task(**payload.to_columns()))


# -------------------------------------------------
# Update completion status
# -------------------------------------------------
@router.post("/update", response_model=OperationResult)
def update_task_status(payload: TaskStatusUpdate, service: TaskService = Depends(get_task_service)):
    if not service.update_task_status(payload.id, payload.is_completed):
        return _not_found()
    return {"success": True, "message": "Task updated successfully"}


# -------------------------------------------------
# Full update (title / description / date / completion)
# -------------------------------------------------
@router.post("/edit", response_model=TaskRead)
def edit_task(payload: TaskEdit, service: TaskService = Depends(get_task_service)):
    task = service.update_task(payload.id, payload.changes())
    if task is None:
        return _not_found()
    return task


# -------------------------------------------------
# Delete a task
# -------------------------------------------------
@router.post("/delete", response_model=OperationResult)
def delete_task(payload: TaskDelete, service: TaskService = Depends(get_task_service)):
    if not service.delete_task(payload.id):
        return _not_found()
    return {"success": True, "message": "Task deleted successfully"}
