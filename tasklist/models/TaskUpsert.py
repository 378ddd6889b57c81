from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel


class TaskUpsert(BaseModel):
    """Body of PUT /tasks/{id}.

    Whether ``color`` and ``completed`` were sent at all is read from
    ``model_fields_set``: a missing field keeps the stored value, an explicit
    null clears it.
    """
    title: Optional[str] = None
    color: Optional[Any] = None
    completed: Optional[datetime] = None
