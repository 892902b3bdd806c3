"""
User Entity

A person who can sign in. Owned by the wider application; the login
service only reads it.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - read-only from the login service's perspective.

    Business Rules:
    - Email must be unique across all users
    - Role decides the dashboard a user lands on after login
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    name: str = Field(default="", max_length=255)
    role: UserRole = Field(default=UserRole.client)

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
