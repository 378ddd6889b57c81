from typing import List
from fastapi import APIRouter, Depends, Request
from tasklist import lifecycle
from tasklist.models import TaskCreate, TaskResponse, TaskUpsert
from tasklist.store import RedisTaskStore

router = APIRouter(prefix="/tasks")


def get_store(request: Request) -> RedisTaskStore:
    return request.app.state.store


@router.get("", response_model=List[TaskResponse])
def list_tasks(store: RedisTaskStore = Depends(get_store)):
    return lifecycle.list_active_tasks(store)


@router.post("", status_code=201, response_model=TaskResponse)
def create_task(task: TaskCreate, store: RedisTaskStore = Depends(get_store)):
    return lifecycle.create_task(store, task)


@router.put("/{task_id}", response_model=TaskResponse)
def upsert_task(task_id: str, task: TaskUpsert, store: RedisTaskStore = Depends(get_store)):
    return lifecycle.upsert_task(store, task_id, task)


@router.delete("/{task_id}", status_code=204)
def delete_task(task_id: str, store: RedisTaskStore = Depends(get_store)):
    lifecycle.soft_delete_task(store, task_id)
    return
