# solhub_admin/services/base.py
import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from solhub_admin.core.database import transaction
from solhub_admin.core.exceptions import BackendError, ValidationFailed

logger = logging.getLogger(__name__)


class BaseService:
    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def unit_of_work(self, conflict_message="Record already exists"):
        """
        One transaction on ``self.session``. Unique-constraint violations
        become a 400, any other database failure a 500 with the driver's
        message; API errors raised inside pass through after rollback.
        """
        try:
            with transaction(self.session):
                yield self.session
        except IntegrityError as e:
            logger.warning(f"Integrity error: {e.orig}")
            raise ValidationFailed(conflict_message)
        except SQLAlchemyError as e:
            logger.exception("Database error")
            raise BackendError(str(e))
