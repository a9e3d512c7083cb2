"""
Database Models for the Layered Backend.

Only the repository layer touches these models directly; services and
controllers receive model instances back from repository calls and
serialise them with ``to_dict``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from shared.timestamps import to_utc_iso, utc_now

from . import db


class User(db.Model):
    """User that owns tasks.  Provisioned outside the application."""

    __tablename__ = "users"

    id: int = db.Column(db.Integer, primary_key=True)
    name: str = db.Column(db.String(120), nullable=False)
    email: str = db.Column(db.String(120), unique=True, nullable=False)
    created_at: datetime = db.Column(db.DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at: datetime = db.Column(
        db.DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "createdAt": to_utc_iso(self.created_at),
            "updatedAt": to_utc_iso(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<User {self.id}: {self.email}>"


class Task(db.Model):
    """
    Todo item owned by a single user.

    Attributes:
        id: Auto-incrementing primary key.
        title: Short summary of the task (max 200 characters).
        description: Free text details.
        completed: Completion flag.
        user_id: Owning user.  Indexed for per-user listing.
        created_at: Timestamp of task creation (UTC).
        updated_at: Timestamp of last modification (UTC, auto-updated).
    """

    __tablename__ = "todos"

    id: int = db.Column(db.Integer, primary_key=True)
    title: str = db.Column(db.String(200), nullable=False)
    description: str = db.Column(db.Text, nullable=False, default="")
    completed: bool = db.Column(db.Boolean, nullable=False, default=False)
    user_id: int = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    created_at: datetime = db.Column(db.DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at: datetime = db.Column(
        db.DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "userId": self.user_id,
            "createdAt": to_utc_iso(self.created_at),
            "updatedAt": to_utc_iso(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<Task {self.id}: {self.title}>"
