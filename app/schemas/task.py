from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


# Field constraints (length, blank title) are checked by app.utils.validation
# so that every violation is reported together; these models only fix shape.
class TaskCreate(BaseModel):
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None


class TaskUpdate(BaseModel):
    """Partial update: only fields present in the request body are applied.

    Read it with ``model_dump(exclude_unset=True)``; ``"due_date": null``
    clears the due date while omitting it leaves the date alone.
    """

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    description: Optional[str] = None
    is_completed: Optional[bool] = None
    due_date: Optional[datetime] = None


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    title: str
    description: Optional[str] = None
    is_completed: bool
    created_at: datetime
    due_date: Optional[datetime] = None
