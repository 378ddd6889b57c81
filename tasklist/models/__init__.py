from .Color import Color
from .TaskCreate import TaskCreate
from .TaskUpsert import TaskUpsert
from .TaskResponse import TaskResponse

__all__ = ["Color", "TaskCreate", "TaskUpsert", "TaskResponse"]
