"""
Database models for the monolith backend.

This module defines SQLAlchemy models representing the data structure
of the application. Each model maps to a database table.
"""

from datetime import datetime
from typing import Any

from app import db
from shared.timestamps import to_utc_iso, utc_now


class User(db.Model):
    """
    User owning todo items.

    Users are provisioned outside the application; the backend only
    looks them up by id.
    """

    __tablename__ = "users"

    id: int = db.Column(db.Integer, primary_key=True)
    name: str = db.Column(db.String(120), nullable=False)
    email: str = db.Column(db.String(120), unique=True, nullable=False)
    created_at: datetime = db.Column(db.DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at: datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert the user to its wire representation."""
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
    Task model representing a to-do item.

    Attributes:
        id: Unique identifier for the task.
        title: Short title describing the task.
        description: Detailed description of the task.
        completed: Whether the task is done.
        user_id: Owner of the task.
        created_at: Timestamp when the task was created.
        updated_at: Timestamp when the task was last modified.
    """

    __tablename__ = "todos"

    id: int = db.Column(db.Integer, primary_key=True)
    title: str = db.Column(db.String(200), nullable=False)
    description: str = db.Column(db.Text, nullable=False, default="")
    completed: bool = db.Column(db.Boolean, nullable=False, default=False)
    user_id: int = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    created_at: datetime = db.Column(db.DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at: datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now
    )

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the task to its wire representation.

        Returns:
            Dictionary containing all task fields with camelCase keys.
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
        """Return string representation of the task."""
        return f"<Task {self.id}: {self.title}>"
