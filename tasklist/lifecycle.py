"""Validation and state rules for tasks.

A task is ACTIVE while ``deleted`` is null and DELETED once it is set.
Soft-delete moves ACTIVE to DELETED; any upsert on the id moves it back.
Every function takes the store it operates on as its first argument.
"""
import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from tasklist.errors import ValidationError
from tasklist.models import Color, TaskCreate, TaskResponse, TaskUpsert
from tasklist.store import RedisTaskStore

logger = logging.getLogger(__name__)

VALID_COLORS = frozenset(c.value for c in Color)


def require_title(title: Optional[str]) -> str:
    if not title:
        raise ValidationError("Title is required")
    return title


def parse_color(value: Optional[Any]) -> Optional[Color]:
    """Map a requested color to the enum; empty means no color."""
    if value is None or value == "":
        return None
    if not isinstance(value, str) or value not in VALID_COLORS:
        raise ValidationError("Invalid color value")
    return Color(value)


def list_active_tasks(store: RedisTaskStore) -> List[TaskResponse]:
    return [TaskResponse(**record) for record in store.find_many(deleted=None)]


def create_task(store: RedisTaskStore, payload: TaskCreate) -> TaskResponse:
    title = require_title(payload.title)
    color = parse_color(payload.color)
    record = store.create(
        {
            "title": title,
            "color": color,
            "completed": payload.completed,
            "deleted": None,
        }
    )
    logger.info("Created task %s", record["id"])
    return TaskResponse(**record)


def upsert_task(store: RedisTaskStore, task_id: str, payload: TaskUpsert) -> TaskResponse:
    title = require_title(payload.title)
    color = parse_color(payload.color)
    supplied = payload.model_fields_set

    update = {"title": title, "deleted": None}
    if "color" in supplied:
        update["color"] = color
    if "completed" in supplied:
        update["completed"] = payload.completed

    create = {
        "id": task_id,
        "title": title,
        "color": color,
        "completed": payload.completed,
        "deleted": None,
    }
    record = store.upsert(task_id, update=update, create=create)
    logger.info("Upserted task %s", task_id)
    return TaskResponse(**record)


def soft_delete_task(
    store: RedisTaskStore, task_id: str, now: Optional[datetime] = None
) -> None:
    # missing and already-deleted tasks both surface as NotFoundError
    store.update(
        task_id,
        {"deleted": now or datetime.now(timezone.utc)},
        where={"deleted": None},
    )
    logger.info("Soft-deleted task %s", task_id)
