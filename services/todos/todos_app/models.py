"""
Database Models for the Todos Service.

Defines the :class:`Task` model.  Users live in a separate service and a
separate database, so ``user_id`` is a plain indexed integer rather than a
foreign key; referential integrity is checked over HTTP at write time.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from shared.timestamps import to_utc_iso, utc_now

from . import db


class Task(db.Model):
    """
    Todo item owned by a single user.

    Attributes:
        id: Auto-incrementing primary key.
        title: Short summary of the task (max 200 characters).
        description: Free text details.
        completed: Completion flag.
        user_id: Identifier of the owning user in the users service.
        created_at: Timestamp of task creation (UTC).
        updated_at: Timestamp of last modification (UTC, auto-updated).
    """

    __tablename__ = "todos"

    __table_args__ = (
        db.Index("ix_todos_user_created", "user_id", "created_at"),
    )

    id: int = db.Column(db.Integer, primary_key=True)
    title: str = db.Column(db.String(200), nullable=False)
    description: str = db.Column(db.Text, nullable=False, default="")
    completed: bool = db.Column(db.Boolean, nullable=False, default=False)
    user_id: int = db.Column(db.Integer, nullable=False, index=True)
    created_at: datetime = db.Column(db.DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at: datetime = db.Column(
        db.DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now
    )

    def to_dict(self) -> dict[str, Any]:
        """
        Serialise the task to its camelCase wire representation.

        Returns:
            A JSON-serialisable dictionary with timestamps as ISO-8601 UTC
            strings.
        """
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
