import uuid

from sqlalchemy import Column, String
from app.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    # unique constraint is the source of truth for username uniqueness
    username = Column(String(50), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    def __repr__(self):
        return f"<User id={self.id!r} username={self.username!r}>"
