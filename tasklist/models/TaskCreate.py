from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel

# title and color stay loose here so the lifecycle handler can reject them
# with its own messages instead of a generic schema error.
class TaskCreate(BaseModel):
    title: Optional[str] = None
    color: Optional[Any] = None
    completed: Optional[datetime] = None
