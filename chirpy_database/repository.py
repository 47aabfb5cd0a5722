"""
Storage collaborator for the Chirpy API.

Wraps a SQLAlchemy session and reports failures as typed errors instead of
leaking driver exceptions to the HTTP layer.
"""
import logging
import uuid
from datetime import datetime

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from chirpy_database.models import Chirp, User, utcnow

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Any storage failure not otherwise classified."""


class DuplicateEmailError(StorageError):
    """A user with the same email already exists."""

    def __init__(self, email: str):
        super().__init__(f"user with email {email!r} already exists")
        self.email = email


# PUBLIC_INTERFACE
class ChirpyRepository:
    """Creates users and chirps and clears the store."""

    def __init__(self, db: Session):
        self.db = db

    def create_user(self, email: str) -> User:
        now = utcnow()
        user = User(id=uuid.uuid4(), created_at=now, updated_at=now, email=email)
        self.db.add(user)
        try:
            self.db.commit()
            self.db.refresh(user)
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateEmailError(email) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError("could not create user") from exc
        return user

    def create_chirp(
        self,
        id: uuid.UUID,
        created_at: datetime,
        updated_at: datetime,
        body: str,
        user_id: uuid.UUID,
    ) -> Chirp:
        chirp = Chirp(
            id=id,
            created_at=created_at,
            updated_at=updated_at,
            body=body,
            user_id=user_id,
        )
        self.db.add(chirp)
        try:
            self.db.commit()
            self.db.refresh(chirp)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError("could not create chirp") from exc
        return chirp

    def delete_all_users(self) -> None:
        try:
            chirps = self.db.query(Chirp).delete()
            users = self.db.query(User).delete()
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError("could not delete users") from exc
        logger.info("Deleted %d users and %d chirps", users, chirps)
