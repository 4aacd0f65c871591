from fastapi import APIRouter, Depends

from todo_api.api.deps import get_task_service
from todo_api.api.schemas import InfoResponse
from todo_api.core.auth import current_user_id
from todo_api.domains.tasks.schemas import (
    TaskCreate, TaskEdit, TaskStatusUpdate, ToggleAll,
    TaskResponse, TaskListResponse
)
from todo_api.domains.tasks.services import TaskService

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=TaskListResponse, name="list_tasks")
async def list_tasks(
    user_id: str = Depends(current_user_id),
    task_service: TaskService = Depends(get_task_service),
):
    """The caller's tasks, oldest first"""
    tasks = await task_service.list_tasks(user_id)
    return TaskListResponse(tasks=[TaskResponse.model_validate(task) for task in tasks])


@router.post("/create", response_model=InfoResponse, name="create_task")
async def create_task(
    data: TaskCreate,
    user_id: str = Depends(current_user_id),
    task_service: TaskService = Depends(get_task_service),
):
    await task_service.create_task(data.id, data.content, user_id)
    return InfoResponse(info=f"Task has been successfully created with content: {data.content.strip()}")


@router.post("/edit", response_model=InfoResponse, name="edit_task")
async def edit_task(
    data: TaskEdit,
    user_id: str = Depends(current_user_id),
    task_service: TaskService = Depends(get_task_service),
):
    await task_service.edit_task(data.id, data.content, user_id)
    return InfoResponse(info=f"Task has been updated to content: {data.content.strip()}")


@router.post("/toggle", response_model=InfoResponse, name="toggle_task")
async def toggle_task(
    data: TaskStatusUpdate,
    user_id: str = Depends(current_user_id),
    task_service: TaskService = Depends(get_task_service),
):
    await task_service.edit_task_status(data.id, data.val, user_id)
    return InfoResponse(info=f"Task status has been set to {str(data.val).lower()}")


@router.post("/toggleAll", response_model=InfoResponse, name="toggle_all")
async def toggle_all(
    data: ToggleAll,
    user_id: str = Depends(current_user_id),
    task_service: TaskService = Depends(get_task_service),
):
    await task_service.toggle_all(data.val, user_id)
    return InfoResponse(info="Tasks have all been toggled.")


@router.delete("/delete/{task_id}", response_model=InfoResponse, name="delete_task")
async def delete_task(
    task_id: str,
    user_id: str = Depends(current_user_id),
    task_service: TaskService = Depends(get_task_service),
):
    await task_service.delete_task(task_id, user_id)
    return InfoResponse(info="Task has been successfully deleted")


@router.delete("/clearCompleted", response_model=InfoResponse, name="clear_completed")
async def clear_completed(
    user_id: str = Depends(current_user_id),
    task_service: TaskService = Depends(get_task_service),
):
    await task_service.clear_completed(user_id)
    return InfoResponse(info="Completed tasks have been successfully deleted")
