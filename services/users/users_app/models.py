"""
Database models for the users service.

Defines the :class:`User` model.  Accounts are provisioned outside the
application (registration and credentials are not part of this demo), so
the service only ever reads these rows.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from shared.timestamps import to_utc_iso, utc_now

from . import db


class User(db.Model):
    """
    User record owned by the users service.

    Attributes:
        id: Auto-incrementing integer primary key.
        name: Display name.
        email: Unique email address.  Indexed for lookups.
        created_at: Timestamp of account creation, stored as UTC.
        updated_at: Timestamp of last modification, stored as UTC.
    """

    __tablename__ = "users"

    __table_args__ = (
        db.CheckConstraint("length(email) <= 120", name="ck_users_email_len"),
    )

    id: int = db.Column(db.Integer, primary_key=True)
    name: str = db.Column(db.String(120), nullable=False)
    email: str = db.Column(db.String(120), unique=True, nullable=False, index=True)
    created_at: datetime = db.Column(db.DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at: datetime = db.Column(
        db.DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now
    )

    def to_dict(self) -> dict[str, Any]:
        """
        Return the wire representation of the user.

        Returns:
            A dict with ``id``, ``name``, ``email``, ``createdAt`` and
            ``updatedAt`` (ISO-8601 UTC strings).
        """
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "createdAt": to_utc_iso(self.created_at),
            "updatedAt": to_utc_iso(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<User {self.id}: {self.email}>"
