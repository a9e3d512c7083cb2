"""
Repository layer for the layered backend.

Repositories are the only code that issues SQL.  Each method performs a
single atomic operation and reports "not found" as ``None`` rather than
raising, leaving the decision of what that means to the service layer.
"""

from __future__ import annotations

import logging
from typing import Any

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select

from .models import Task, User

UPDATABLE_FIELDS = ("title", "description", "completed")


class UserRepository:
    """Read access to the users table."""

    def __init__(self, db: SQLAlchemy, logger: logging.Logger) -> None:
        self.db = db
        self.logger = logger

    def get_user_by_id(self, user_id: int) -> User | None:
        return self.db.session.get(User, user_id)


class TaskRepository:
    """CRUD access to the todos table."""

    def __init__(self, db: SQLAlchemy, logger: logging.Logger) -> None:
        self.db = db
        self.logger = logger

    def create_task(self, fields: dict[str, Any], user_id: int) -> Task | None:
        """Insert a task owned by *user_id* and return it."""
        task = Task(
            title=fields["title"],
            description=fields.get("description", ""),
            user_id=user_id,
        )
        self.db.session.add(task)
        self.db.session.commit()
        self.logger.debug("Inserted task %s for user %s", task.id, user_id)
        return task

    def get_tasks(self, user_id: int) -> list[Task]:
        """Return every task of *user_id*, newest first."""
        stmt = (
            select(Task)
            .where(Task.user_id == user_id)
            .order_by(Task.created_at.desc(), Task.id.desc())
        )
        return list(self.db.session.scalars(stmt).all())

    def get_task_by_id(self, task_id: int) -> Task | None:
        return self.db.session.get(Task, task_id)

    def update_task(self, fields: dict[str, Any], task_id: int) -> Task | None:
        """Apply *fields* to the task and return it, or ``None`` if it is gone."""
        task = self.db.session.get(Task, task_id)
        if task is None:
            return None
        for name in UPDATABLE_FIELDS:
            if name in fields:
                setattr(task, name, fields[name])
        self.db.session.commit()
        return task

    def delete_task(self, task_id: int) -> bool:
        """Delete the task; ``False`` if there was nothing to delete."""
        task = self.db.session.get(Task, task_id)
        if task is None:
            return False
        self.db.session.delete(task)
        self.db.session.commit()
        return True
