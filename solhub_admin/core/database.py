# solhub_admin/core/database.py

from contextlib import contextmanager
from typing import Generator

from sqlalchemy.orm import Session

from ..extensions import db
from .utils import utcnow, format_datetime


@contextmanager
def transaction(session: Session) -> Generator[Session, None, None]:
    """
    Run a unit of work on the given session.
    Commits on success, rolls back and re-raises on any error, so a
    multi-row write either lands completely or not at all.
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise


class BaseModel(db.Model):
    __abstract__ = True

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    @classmethod
    def get_by_id(cls, id, session=None):
        return (session or db.session).get(cls, id)

    def timestamps(self):
        return {
            "created_at": format_datetime(self.created_at),
            "updated_at": format_datetime(self.updated_at),
        }
