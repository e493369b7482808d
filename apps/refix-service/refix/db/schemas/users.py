from pydantic import Field

from refix.utils.collections import UserRoleEnum
from .base import DocumentSchema


class UserBase(DocumentSchema):
    username: str = Field(min_length=1)
    email: str | None = None
    role: UserRoleEnum = UserRoleEnum.creator


class UserCreate(UserBase):
    id: str | None = None
    password_hash: str | None = None
    created_at: str | None = None


class User(UserBase):
    id: str
    password_hash: str | None = None
    created_at: str | None = None
