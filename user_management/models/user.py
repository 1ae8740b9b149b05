"""User ORM — persists user rows (name, date of birth, timestamps).

Invariants:
    - id is a 64-bit integer primary key assigned by the database
    - name is non-nullable, at most 100 chars (already trimmed by the validator)
    - dob is a DATE column: no time-of-day component
    - created_at/updated_at are set here, never by domain logic

Design Decisions:
    - BigInteger with an Integer variant on SQLite: SQLite only autoincrements INTEGER PRIMARY KEY
    - Age is NOT a column: it is computed at response time
"""

from datetime import date, datetime, timezone

from sqlalchemy import BigInteger, Date, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from user_management.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """User row."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    dob: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
