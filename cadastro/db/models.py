"""SQLAlchemy mapping for the single users table."""
from __future__ import annotations

from sqlalchemy import Column, Integer, Text

from .session import Base


class User(Base):
    __tablename__ = "usuarios"

    id = Column("ID_US", Integer, primary_key=True, autoincrement=True)
    name = Column("NOME_US", Text, nullable=False)
    email = Column("EMAIL_US", Text, nullable=False)
