"""Task operations, always scoped to the requesting owner.

Every statement that reads or writes a task carries ``owner_id`` in its
WHERE clause. A task that belongs to someone else is therefore simply not
found, and callers get the same ``NotFound`` they would for an id that
never existed.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from app.errors import NotFound, ValidationError
from app.models.task import Task
from app.utils.validation import validate_new_task, validate_task_changes

logger = logging.getLogger(__name__)

# owner_id, id and created_at are deliberately absent: they never change
MUTABLE_FIELDS = ("title", "description", "is_completed", "due_date")


def _owned(db: Session, owner_id: str):
    return db.query(Task).filter(Task.owner_id == owner_id)


def find_task(db: Session, task_id: str, owner_id: str) -> Optional[Task]:
    return _owned(db, owner_id).filter(Task.id == task_id).first()


def list_tasks(db: Session, owner_id: str) -> List[Task]:
    return _owned(db, owner_id).order_by(Task.created_at, Task.id).all()


def get_task(db: Session, task_id: str, owner_id: str) -> Task:
    task = find_task(db, task_id, owner_id)
    if task is None:
        raise NotFound()
    return task


def create_task(
    db: Session,
    owner_id: str,
    title: str,
    description: Optional[str] = None,
    due_date: Optional[datetime] = None,
) -> Task:
    errors = validate_new_task(title, description)
    if errors:
        raise ValidationError(errors)

    task = Task(
        owner_id=owner_id,
        title=title.strip(),
        description=description,
        is_completed=False,
        due_date=due_date,
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    logger.info("Created task %s for user %s", task.id, owner_id)
    return task


def update_task(db: Session, task_id: str, owner_id: str, changes: dict) -> None:
    """Apply the fields present in ``changes``; absent fields keep their value.

    ``changes`` must only contain keys the client actually sent, so that an
    explicit ``None`` (clear the field) is distinguishable from an omission.
    """
    changes = {k: v for k, v in changes.items() if k in MUTABLE_FIELDS}
    errors = validate_task_changes(changes)
    if errors:
        raise ValidationError(errors)

    task = find_task(db, task_id, owner_id)
    if task is None:
        raise NotFound()

    values = {field: getattr(task, field) for field in MUTABLE_FIELDS}
    values.update(changes)
    if "title" in changes:
        values["title"] = changes["title"].strip()

    updated = (
        _owned(db, owner_id)
        .filter(Task.id == task_id)
        .update(values, synchronize_session=False)
    )
    if not updated:
        # deleted between the read and the write
        db.rollback()
        raise NotFound()
    db.commit()
    logger.info("Updated task %s (%s)", task_id, ", ".join(sorted(changes)) or "no fields")


def delete_task(db: Session, task_id: str, owner_id: str) -> None:
    deleted = _owned(db, owner_id).filter(Task.id == task_id).delete(synchronize_session=False)
    if not deleted:
        db.rollback()
        raise NotFound()
    db.commit()
    logger.info("Deleted task %s", task_id)
