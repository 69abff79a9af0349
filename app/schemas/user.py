from datetime import datetime

from pydantic import BaseModel


class UserCreate(BaseModel):
    username: str
    password: str


class UserLogin(BaseModel):
    username: str
    password: str


class RegisterOut(BaseModel):
    message: str


class LoginOut(BaseModel):
    token: str
    username: str
    expiration: datetime


class IdentityOut(BaseModel):
    id: str
    username: str
