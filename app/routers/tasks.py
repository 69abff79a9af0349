from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from app.schemas.task import TaskCreate, TaskUpdate, TaskOut
from app.services import tasks as task_service
from app.utils.tokens import TokenIdentity
from app.dependencies import get_current_identity
from app.database import get_db

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("/", response_model=List[TaskOut])
def list_tasks(db: Session = Depends(get_db), identity: TokenIdentity = Depends(get_current_identity)):
    return task_service.list_tasks(db, identity.user_id)


@router.get("/{task_id}", response_model=TaskOut)
def get_task(task_id: str, db: Session = Depends(get_db), identity: TokenIdentity = Depends(get_current_identity)):
    return task_service.get_task(db, task_id, identity.user_id)


@router.post("/", response_model=TaskOut, status_code=201)
def create_task(task: TaskCreate, response: Response, db: Session = Depends(get_db), identity: TokenIdentity = Depends(get_current_identity)):
    new = task_service.create_task(
        db,
        identity.user_id,
        title=task.title,
        description=task.description,
        due_date=task.due_date,
    )
    response.headers["Location"] = router.url_path_for("get_task", task_id=new.id)
    return new


@router.put("/{task_id}", status_code=204)
def update_task(task_id: str, task: TaskUpdate, db: Session = Depends(get_db), identity: TokenIdentity = Depends(get_current_identity)):
    task_service.update_task(db, task_id, identity.user_id, task.model_dump(exclude_unset=True))
    return Response(status_code=204)


@router.delete("/{task_id}", status_code=204)
def delete_task(task_id: str, db: Session = Depends(get_db), identity: TokenIdentity = Depends(get_current_identity)):
    task_service.delete_task(db, task_id, identity.user_id)
    return Response(status_code=204)
