from datetime import datetime
from typing import Optional
from pydantic import BaseModel
from .Color import Color


class TaskResponse(BaseModel):
    id: str
    title: str
    color: Optional[Color] = None
    completed: Optional[datetime] = None
    deleted: Optional[datetime] = None
