"""
Task repository for the todos service.

The only code in the service that issues SQL.  "Not found" is reported as
``None`` (or ``False`` for deletes); deciding what that means is left to
the service layer.
"""

from __future__ import annotations

import logging
from typing import Any

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select

from .models import Task

UPDATABLE_FIELDS = ("title", "description", "completed")


class TaskRepository:
    """CRUD access to the todos table."""

    def __init__(self, db: SQLAlchemy, logger: logging.Logger) -> None:
        self.db = db
        self.logger = logger

    def create_task(self, fields: dict[str, Any], user_id: int) -> Task | None:
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
        task = self.db.session.get(Task, task_id)
        if task is None:
            return None
        for name in UPDATABLE_FIELDS:
            if name in fields:
                setattr(task, name, fields[name])
        self.db.session.commit()
        return task

    def delete_task(self, task_id: int) -> bool:
        task = self.db.session.get(Task, task_id)
        if task is None:
            return False
        self.db.session.delete(task)
        self.db.session.commit()
        return True
