"""Data access helpers for the users table, backed by SQLAlchemy."""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select, update, delete
from sqlalchemy.engine import Engine

from cadastro.db.models import User
from cadastro.db.session import Base, build_engine, build_sessionmaker, session_scope
from cadastro.domain.records import UserRecord

logger = logging.getLogger(__name__)


def _entity_to_record(entity: User) -> UserRecord:
    return UserRecord(id=int(entity.id), name=entity.name, email=entity.email)


class UserRepository:
    """CRUD helpers wrapping one engine on the local store."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._sessions = build_sessionmaker(engine)

    @classmethod
    def from_url(cls, url: str) -> "UserRepository":
        return cls(build_engine(url))

    def initialize(self) -> None:
        """Create the users table when missing. Safe to call repeatedly."""
        Base.metadata.create_all(bind=self.engine, tables=[User.__table__])

    def dispose(self) -> None:
        self.engine.dispose()

    def insert_user(self, name: str, email: str) -> int:
        entity = User(name=name, email=email)
        with session_scope(self._sessions) as session:
            session.add(entity)
            session.commit()
            user_id = int(entity.id)
        logger.info("Inserted user id=%d", user_id)
        return user_id

    def list_users(self) -> list[UserRecord]:
        with session_scope(self._sessions) as session:
            rows = session.execute(select(User).order_by(User.id)).scalars().all()
            return [_entity_to_record(row) for row in rows]

    def get_user(self, user_id: int) -> Optional[UserRecord]:
        with session_scope(self._sessions) as session:
            entity = session.get(User, user_id)
            return _entity_to_record(entity) if entity else None

    def update_user(self, name: str, email: str, user_id: int) -> bool:
        """Replace name/email of the row with user_id; False when no row matched."""
        with session_scope(self._sessions) as session:
            stmt = update(User).where(User.id == user_id).values(name=name, email=email)
            result = session.execute(stmt)
            session.commit()
            matched = bool(result.rowcount)
        logger.info("Updated user id=%d matched=%s", user_id, matched)
        return matched

    def delete_user(self, user_id: int) -> bool:
        with session_scope(self._sessions) as session:
            result = session.execute(delete(User).where(User.id == user_id))
            session.commit()
            matched = bool(result.rowcount)
        logger.info("Deleted user id=%d matched=%s", user_id, matched)
        return matched
